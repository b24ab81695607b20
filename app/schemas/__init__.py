
# Response envelope
from .response_schema import ServiceResponse, Pagination, PaginatedResponse, UTCDateTime

# User Schemas
from .user_schema import UserRole, UserCreate, UserUpdate, UserResponse

# Auth Schemas
from .auth_schema import AccessClaims, RegisterRequest, LoginRequest, TokenPair, LoginResponse, MeProfile, MeTokenRefresh

# Telemetry Schemas
from .telemetry_schema import TelemetryData, TelemetryLogCreate, TelemetryLogUpdate, TelemetryLogResponse, LatestLogEntry, VehicleStats

# Vehicle Schemas
from .vehicle_schema import VehicleStatus, VehicleCreate, VehicleUpdate, VehicleResponse, VehicleDetail, VehicleSummary, VehicleLatestTelemetry
