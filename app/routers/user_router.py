# app/routers/user_router.py

from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, Path

from app.database import get_db
from app.core import get_current_user, require_role
from app.schemas import AccessClaims, UserCreate, UserUpdate, UserRole
from app.services import (
    get_all_users_service,
    get_user_by_id_service,
    create_user_service,
    update_user_service,
    delete_user_service,
)

router = APIRouter(prefix="/users", tags=["Users"])

admin_only = require_role(UserRole.ADMIN)

@router.get("")
def get_all_users_route(db: Session = Depends(get_db), current_user: AccessClaims = Depends(admin_only)):
    return get_all_users_service(db).to_response()

@router.get("/{user_id}")
def get_user_route(
    user_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return get_user_by_id_service(db, user_id, current_user).to_response()

@router.post("")
def create_user_route(user_data: UserCreate, db: Session = Depends(get_db), current_user: AccessClaims = Depends(admin_only)):
    """
    Alta de usuarios por un ADMIN. El rol por defecto es USER.
    """
    return create_user_service(db, user_data).to_response()

@router.patch("/{user_id}")
def update_user_route(
    user_data: UserUpdate,
    user_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return update_user_service(db, user_id, user_data, current_user).to_response()

@router.delete("/{user_id}")
def delete_user_route(
    user_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(admin_only),
):
    return delete_user_service(db, user_id).to_response()
