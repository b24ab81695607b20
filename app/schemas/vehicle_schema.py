# app/schemas/vehicle_schema.py

from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from .response_schema import UTCDateTime
from .telemetry_schema import TelemetryLogResponse

class VehicleStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"

class VehicleCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    license_plate: str = Field(min_length=1, max_length=20)
    model: str | None = Field(default=None, max_length=100)
    status: VehicleStatus | None = None
    user_id: int | None = Field(default=None, gt=0)   # solo lo respeta un ADMIN

class VehicleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=3, max_length=100)
    license_plate: str | None = Field(default=None, min_length=1, max_length=20)
    model: str | None = Field(default=None, max_length=100)
    status: VehicleStatus | None = None
    user_id: int | None = Field(default=None, gt=0)

class VehicleResponse(BaseModel):
    id: int = Field(validation_alias="veh_id")
    name: str = Field(validation_alias="veh_name")
    license_plate: str = Field(validation_alias="veh_license_plate")
    model: str | None = Field(default=None, validation_alias="veh_model")
    status: VehicleStatus = Field(validation_alias="veh_status")
    user_id: int = Field(validation_alias="veh_user_id")
    created_at: UTCDateTime | None = Field(default=None, validation_alias="veh_created_at")
    updated_at: UTCDateTime | None = Field(default=None, validation_alias="veh_updated_at")
    deleted_at: UTCDateTime | None = Field(default=None, validation_alias="veh_deleted_at")

    model_config = ConfigDict(from_attributes=True)

class VehicleDetail(VehicleResponse):
    latest_telemetry: TelemetryLogResponse | None = Field(default=None, serialization_alias="latestTelemetry")

class VehicleSummary(BaseModel):
    id: int
    name: str
    status: VehicleStatus
    speed: float | None = None
    updated_at: UTCDateTime | None = None

class VehicleLatestTelemetry(BaseModel):
    vehicle_id: int = Field(serialization_alias="vehicleId")
    odometer: float | None = None
    fuel_level: float | None = None
    timestamp: UTCDateTime | None = None
    latitude: float | None = None
    longitude: float | None = None
    speed: float | None = None
