from .user import User
from .refresh_token import RefreshToken
from .vehicle import Vehicle
from .telemetry_log import TelemetryLog
