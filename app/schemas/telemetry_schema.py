# app/schemas/telemetry_schema.py

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .response_schema import UTCDateTime

# Contenido del campo "data" de cada log
class TelemetryData(BaseModel):
    odometer: float = Field(ge=0)
    fuel_level: float = Field(ge=0, le=100)   # porcentaje
    speed: float = Field(ge=0)
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

class TelemetryLogCreate(BaseModel):
    timestamp: datetime | None = None   # si no llega se usa "ahora"
    data: TelemetryData

class TelemetryLogUpdate(BaseModel):
    timestamp: datetime | None = None
    data: TelemetryData | None = None

class TelemetryLogResponse(BaseModel):
    id: int = Field(validation_alias="tel_id")
    vehicle_id: int = Field(validation_alias="tel_vehicle_id")
    timestamp: UTCDateTime = Field(validation_alias="tel_timestamp")
    data: dict[str, Any] = Field(validation_alias="tel_data")

    model_config = ConfigDict(from_attributes=True)

class LatestLogEntry(BaseModel):
    vehicle_id: int
    log: TelemetryLogResponse | None = None

class VehicleStats(BaseModel):
    total: int
    parked: int
    moving: int
    maintenance: int
