# app/models/user.py

from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base

class User(Base):
    __tablename__ = "tbusers"

    user_id =       Column(Integer, primary_key=True, index=True)
    user_email =    Column(String(255), nullable=False, unique=True)
    user_password = Column(String(255), nullable=False)
    user_role =     Column(String(10), nullable=False, default="USER")
    user_created =  Column(TIMESTAMP(timezone=True), server_default=func.now())
    user_updated =  Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())


    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    vehicles = relationship("Vehicle", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
