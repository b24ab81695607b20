from datetime import datetime, timezone

from app.database import Base
from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, JSON
from sqlalchemy.orm import relationship

class TelemetryLog(Base):
    __tablename__="tbtelemetrylogs"

    tel_id =         Column(Integer, primary_key=True, index=True)
    tel_vehicle_id = Column(Integer, ForeignKey("tbvehicles.veh_id", ondelete="CASCADE"), nullable=False, index=True)
    tel_timestamp =  Column(TIMESTAMP(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    tel_data =       Column(JSON, nullable=False)

    vehicle = relationship("Vehicle", back_populates="telemetry_logs")
