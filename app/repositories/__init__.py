from .user_repository import UserRepository
from .refresh_token_repository import RefreshTokenRepository
from .vehicle_repository import VehicleRepository
from .telemetry_repository import TelemetryRepository
