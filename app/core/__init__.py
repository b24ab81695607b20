from .settings import settings
from .logger import logger
from .security import (
    InvalidTokenError,
    ExpiredTokenError,
    hash_password,
    verify_password,
    issue_access_token,
    verify_access_token,
    issue_refresh_token,
    decode_optional_token,
    get_access_token,
    get_refresh_token_header,
    get_current_user,
)
from .permissions import is_allowed, require_role
from .rate_limiter import RateLimiter
