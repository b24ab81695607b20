from datetime import datetime, timedelta, timezone
import secrets

from jose import ExpiredSignatureError, JWTError, jwt
from fastapi import HTTPException, Depends, Header, status
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from pydantic import ValidationError

from app.schemas import AccessClaims
from .settings import settings

# auto_error=False: los servicios deciden la respuesta cuando falta el token
oauth2_schema = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login", auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REFRESH_TOKEN_BYTES = 48


class InvalidTokenError(Exception):
    """Firma inválida, token mal formado o claims con forma incorrecta."""


class ExpiredTokenError(Exception):
    """El token es válido pero ya pasó su fecha de expiración."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def issue_access_token(claims: AccessClaims, expires_delta: timedelta | None = None) -> str:
    if not settings.KEY_SECRET:
        raise RuntimeError("KEY_SECRET está vacía, no se pueden firmar tokens")

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = claims.model_dump(mode="json")
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.KEY_SECRET, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> AccessClaims:
    """
    Decodifica el access token y valida la forma de sus claims.

    Lanza ExpiredTokenError si el token expiró (el llamador puede intentar
    un refresh) e InvalidTokenError en cualquier otro caso.
    """
    try:
        payload = jwt.decode(token, settings.KEY_SECRET, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as e:
        raise ExpiredTokenError("El access token expiró") from e
    except JWTError as e:
        raise InvalidTokenError("Access token inválido") from e

    try:
        return AccessClaims.model_validate(payload)
    except ValidationError as e:
        raise InvalidTokenError("Claims del access token inválidos") from e


def issue_refresh_token() -> str:
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def decode_optional_token(token: str | None) -> AccessClaims | None:
    """Devuelve los claims o None si no hay token o no se pudo verificar."""
    if not token:
        return None
    try:
        return verify_access_token(token)
    except (InvalidTokenError, ExpiredTokenError):
        return None


async def get_access_token(token: str | None = Depends(oauth2_schema)) -> str | None:
    return token


async def get_refresh_token_header(
    x_refresh_token: str | None = Header(default=None, alias="x-refresh-token"),
) -> str | None:
    return x_refresh_token


async def get_current_user(token: str | None = Depends(oauth2_schema)) -> AccessClaims:
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No se proporcionó token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = decode_optional_token(token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido o expirado.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims
