from sqlalchemy.orm import Session
from fastapi import status
from datetime import datetime, timedelta, timezone

from app.models import User
from app.repositories import UserRepository, RefreshTokenRepository
from app.schemas import (
    AccessClaims,
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    TokenPair,
    MeProfile,
    MeTokenRefresh,
    ServiceResponse,
    UserResponse,
    UserRole,
)
from app.core import (
    logger,
    settings,
    hash_password,
    verify_password,
    issue_access_token,
    issue_refresh_token,
    verify_access_token,
    InvalidTokenError,
    ExpiredTokenError,
)

# Mismo mensaje para email desconocido y contraseña incorrecta
INVALID_CREDENTIALS = "Credenciales inválidas."


def _refresh_expiration() -> datetime:
    return datetime.now(timezone.utc) + timedelta(seconds=settings.REFRESH_TOKEN_EXPIRE_SECONDS)


def _access_token_for(user: User) -> str:
    return issue_access_token(AccessClaims(id=user.user_id, role=user.user_role))


def register_service(db: Session, data: RegisterRequest) -> ServiceResponse:
    try:
        user_repo = UserRepository(db)
        if user_repo.get_user_by_email_repository(data.email):
            logger.warning(f"Intento de registro con email duplicado: {data.email}")
            return ServiceResponse.fail("El email ya está registrado.", status_code=status.HTTP_409_CONFLICT)

        new_user = User(
            user_email=data.email,
            user_password=hash_password(data.password),
            user_role=UserRole.USER.value,
        )
        if not user_repo.create_user_repository(new_user):
            return ServiceResponse.fail("No se pudo completar el registro.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Usuario registrado: {data.email}")
        return ServiceResponse.ok("Registro exitoso.", status_code=status.HTTP_201_CREATED)
    except Exception as e:
        logger.error(f"Error en registro: {e}")
        return ServiceResponse.fail("No se pudo completar el registro.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def login_service(db: Session, data: LoginRequest) -> ServiceResponse:
    try:
        user_repo = UserRepository(db)
        user = user_repo.get_user_by_email_repository(data.email)

        if not user or not verify_password(data.password, user.user_password):
            logger.warning(f"Fallo de autenticación para el email: {data.email}")
            return ServiceResponse.fail(INVALID_CREDENTIALS, status_code=status.HTTP_401_UNAUTHORIZED)

        access_token = _access_token_for(user)
        refresh_token = issue_refresh_token()
        expires_at = _refresh_expiration()

        # Una sola sesión activa: se borran los tokens previos en la misma transacción
        token_repo = RefreshTokenRepository(db)
        if not token_repo.replace_user_tokens(user.user_id, refresh_token, expires_at):
            return ServiceResponse.fail("No se pudo iniciar sesión.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Usuario {user.user_email} ha iniciado sesión exitosamente.")
        return ServiceResponse.ok(
            "Inicio de sesión exitoso.",
            LoginResponse(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_at=expires_at,
                user=UserResponse.model_validate(user),
            ),
        )
    except Exception as e:
        logger.error(f"Error en login: {e}")
        return ServiceResponse.fail("No se pudo iniciar sesión.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def refresh_token_service(db: Session, refresh_token: str | None) -> ServiceResponse:
    """
    Rota el refresh token: el token recibido se consume y se emite un par nuevo.
    Un token consumido o expirado ya no sirve.
    """
    try:
        token_repo = RefreshTokenRepository(db)
        old_token = token_repo.get_valid_token(refresh_token) if refresh_token else None

        if not old_token:
            logger.warning("Intento de uso de refresh token inválido o expirado")
            return ServiceResponse.fail("Refresh token inválido o expirado.", status_code=status.HTTP_401_UNAUTHORIZED)

        user = UserRepository(db).get_user_id_repository(old_token.ref_user_id)
        if not user:
            token_repo.delete_token(old_token)
            logger.warning(f"Refresh token huérfano eliminado (usuario {old_token.ref_user_id})")
            return ServiceResponse.fail("Usuario no encontrado para este refresh token.", status_code=status.HTTP_401_UNAUTHORIZED)

        new_refresh_token = issue_refresh_token()
        expires_at = _refresh_expiration()
        if not token_repo.rotate_token(old_token, new_refresh_token, expires_at):
            return ServiceResponse.fail("No se pudo refrescar el token.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Refresh token rotado exitosamente para usuario {user.user_id}")
        return ServiceResponse.ok(
            "Token refrescado.",
            TokenPair(
                access_token=_access_token_for(user),
                refresh_token=new_refresh_token,
                expires_at=expires_at,
            ),
        )
    except Exception as e:
        logger.error(f"Error al refrescar token: {e}")
        return ServiceResponse.fail("No se pudo refrescar el token.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def logout_service(db: Session, access_token: str | None) -> ServiceResponse:
    if not access_token:
        return ServiceResponse.fail("No se proporcionó access token.", status_code=status.HTTP_401_UNAUTHORIZED)

    # Con un access token expirado no se puede cerrar sesión; la sesión caduca sola
    try:
        claims = verify_access_token(access_token)
    except (InvalidTokenError, ExpiredTokenError):
        return ServiceResponse.fail("Access token inválido o expirado.", status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        count = RefreshTokenRepository(db).delete_tokens_by_user(claims.id)
        if count == 0:
            return ServiceResponse.ok("Sesión cerrada (no había sesión activa).")

        logger.info(f"Usuario {claims.id} ha cerrado sesión")
        return ServiceResponse.ok("Sesión cerrada.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error en logout: {e}")
        return ServiceResponse.fail("No se pudo cerrar sesión.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def get_me_service(db: Session, access_token: str | None, refresh_token: str | None = None) -> ServiceResponse:
    """
    Perfil del usuario autenticado.

    Si el access token expiró y llega `x-refresh-token`, se intenta rotar la
    sesión y se devuelve la variante `token_refresh` en lugar del perfil.
    Cualquier otro fallo del access token responde 401 sin intentar refresh.
    """
    try:
        if not access_token:
            return ServiceResponse.fail("No se proporcionó access token.", status_code=status.HTTP_401_UNAUTHORIZED)

        try:
            claims = verify_access_token(access_token)
        except ExpiredTokenError:
            if not refresh_token:
                return ServiceResponse.fail("Access token inválido o expirado.", status_code=status.HTTP_401_UNAUTHORIZED)

            refreshed = refresh_token_service(db, refresh_token)
            if not refreshed.success:
                return ServiceResponse.fail("Sesión expirada. Inicia sesión de nuevo.", status_code=status.HTTP_401_UNAUTHORIZED)

            pair: TokenPair = refreshed.response_object
            return ServiceResponse.ok(
                "Token refrescado. Usa el nuevo accessToken.",
                MeTokenRefresh(**pair.model_dump()),
            )
        except InvalidTokenError:
            return ServiceResponse.fail("Access token inválido o expirado.", status_code=status.HTTP_401_UNAUTHORIZED)

        user = UserRepository(db).get_user_id_repository(claims.id)
        if not user:
            return ServiceResponse.fail("Usuario no encontrado.", status_code=status.HTTP_404_NOT_FOUND)

        return ServiceResponse.ok("Autenticado.", MeProfile.model_validate(user))
    except Exception as e:
        logger.error(f"Error al obtener el usuario autenticado: {e}")
        return ServiceResponse.fail("No se pudo obtener el usuario.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
