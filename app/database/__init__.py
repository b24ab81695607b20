from .database import Base, engine, SessionLocal, get_db, init_db, redis_client
