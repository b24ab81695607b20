from sqlalchemy.orm import Session
from fastapi import status

from app.models import User
from app.repositories import UserRepository
from app.schemas import AccessClaims, ServiceResponse, UserCreate, UserUpdate, UserResponse, UserRole
from app.core import logger, hash_password, is_allowed


def _internal_error(action: str, e: Exception) -> ServiceResponse:
    logger.error(f"Error al {action}: {e}")
    return ServiceResponse.fail(f"No se pudo {action}.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def get_all_users_service(db: Session) -> ServiceResponse:
    try:
        users = UserRepository(db).get_all_users_repository()
        return ServiceResponse.ok("Usuarios encontrados.", [UserResponse.model_validate(u) for u in users])
    except Exception as e:
        return _internal_error("listar usuarios", e)


def get_user_by_id_service(db: Session, user_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        user = UserRepository(db).get_user_id_repository(user_id)
        if not user:
            return ServiceResponse.fail("Usuario no encontrado.", status_code=status.HTTP_404_NOT_FOUND)

        if not is_allowed(requester, user.user_id):
            logger.warning(f"Usuario {requester.id} intentó acceder al usuario {user_id} sin permiso.")
            return ServiceResponse.fail("Prohibido.", status_code=status.HTTP_403_FORBIDDEN)

        return ServiceResponse.ok("Usuario encontrado.", UserResponse.model_validate(user))
    except Exception as e:
        return _internal_error("obtener el usuario", e)


def create_user_service(db: Session, user_data: UserCreate) -> ServiceResponse:
    try:
        user_repo = UserRepository(db)
        if user_repo.get_user_by_email_repository(user_data.email):
            logger.warning(f"Intento de crear usuario con email duplicado: {user_data.email}")
            return ServiceResponse.fail("El email ya está registrado.", status_code=status.HTTP_409_CONFLICT)

        new_user = User(
            user_email=user_data.email,
            user_password=hash_password(user_data.password),
            user_role=(user_data.role or UserRole.USER).value,
        )

        user = user_repo.create_user_repository(new_user)
        if not user:
            logger.error("Usuario no creado en servicio")
            return ServiceResponse.fail("No se pudo crear el usuario.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Usuario creado.", UserResponse.model_validate(user), status.HTTP_201_CREATED)
    except Exception as e:
        return _internal_error("crear el usuario", e)


def update_user_service(db: Session, user_id: int, user_data: UserUpdate, requester: AccessClaims) -> ServiceResponse:
    try:
        user_repo = UserRepository(db)
        user = user_repo.get_user_id_repository(user_id)
        if not user:
            return ServiceResponse.fail("Usuario no encontrado.", status_code=status.HTTP_404_NOT_FOUND)

        if not is_allowed(requester, user.user_id):
            return ServiceResponse.fail("Prohibido.", status_code=status.HTTP_403_FORBIDDEN)

        changes = user_data.model_dump(exclude_unset=True, exclude_none=True)

        if "role" in changes and requester.role != UserRole.ADMIN:
            logger.warning(f"Usuario {requester.id} intentó cambiar su rol")
            return ServiceResponse.fail("Solo un ADMIN puede cambiar el rol.", status_code=status.HTTP_403_FORBIDDEN)

        if "email" in changes:
            existing_user = user_repo.get_user_by_email_repository(changes["email"])
            if existing_user and existing_user.user_id != user_id:
                logger.warning(f"Intento de actualizar a un email duplicado: {changes['email']}")
                return ServiceResponse.fail("El email ya está registrado.", status_code=status.HTTP_409_CONFLICT)

        update_data = {}
        if "email" in changes:
            update_data["user_email"] = changes["email"]
        if "password" in changes:
            update_data["user_password"] = hash_password(changes["password"])
        if "role" in changes:
            update_data["user_role"] = changes["role"].value

        if not update_data:
            return ServiceResponse.ok("Sin cambios.", UserResponse.model_validate(user))

        updated = user_repo.update_user_repository(user_id, update_data)
        if not updated:
            return ServiceResponse.fail("No se pudo actualizar el usuario.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Usuario actualizado.", UserResponse.model_validate(updated))
    except Exception as e:
        return _internal_error("actualizar el usuario", e)


def delete_user_service(db: Session, user_id: int) -> ServiceResponse:
    try:
        user_repo = UserRepository(db)
        if not user_repo.get_user_id_repository(user_id):
            return ServiceResponse.fail("Usuario no encontrado.", status_code=status.HTTP_404_NOT_FOUND)

        if not user_repo.delete_user_repository(user_id):
            return ServiceResponse.fail("No se pudo eliminar el usuario.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Usuario eliminado.")
    except Exception as e:
        return _internal_error("eliminar el usuario", e)
