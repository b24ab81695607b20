# app/database/database.py

from app.core import settings
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session, declarative_base
import redis
from app.core import logger

# --- Configuración de la base relacional ---
Base = declarative_base()

IS_SQLITE = settings.URL_DATABASE_SQL.startswith("sqlite")

if IS_SQLITE:
    engine = create_engine(
        settings.URL_DATABASE_SQL,
        connect_args={"check_same_thread": False},
        echo=False
    )
else:
    engine = create_engine(
        settings.URL_DATABASE_SQL,
        pool_size=8,
        max_overflow=4,
        pool_timeout=20,
        pool_recycle=1800,      # Reutilizar conexiones
        pool_pre_ping=True,     # Verifica que la conexión esté viva antes de usarla
        pool_use_lifo=True,
        echo=False,
        echo_pool=False
    )


if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite no aplica ON DELETE CASCADE sin este pragma
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """Crea las tablas que falten. Los modelos deben estar importados antes."""
    import app.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("Base de datos conectada y modelos sincronizados.")

# --- Configuración de Redis ---
redis_client = None
if settings.URL_DATABASE_REDIS:
    try:
        redis_client = redis.from_url(
            settings.URL_DATABASE_REDIS,
            decode_responses=True,
            socket_connect_timeout=2
        )
        redis_client.ping()
        logger.info("Conexión con Redis establecida exitosamente.")
    except redis.exceptions.RedisError as e:
        logger.error(f"Error al conectar con Redis: {e}")
        redis_client = None
