# app/models/vehicle.py

from app.database import Base
from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

class Vehicle(Base):
    __tablename__="tbvehicles"

    veh_id =            Column(Integer, primary_key=True, index=True)
    veh_user_id =       Column(Integer, ForeignKey("tbusers.user_id", ondelete="CASCADE"), nullable=False, index=True)
    veh_name =          Column(String(100), nullable=False)
    veh_license_plate = Column(String(20), nullable=False, unique=True)
    veh_model =         Column(String(100), nullable=True)
    veh_status =        Column(String(15), nullable=False, default="INACTIVE")
    veh_created_at =    Column(TIMESTAMP(timezone=True), server_default=func.now())
    veh_updated_at =    Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
    veh_deleted_at =    Column(TIMESTAMP(timezone=True), nullable=True)   # borrado lógico

    user = relationship("User", back_populates="vehicles")
    telemetry_logs = relationship("TelemetryLog", back_populates="vehicle", cascade="all, delete-orphan", passive_deletes=True)
