from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends

from app.database import get_db
from app.core import get_access_token, get_refresh_token_header
from app.schemas import RegisterRequest, LoginRequest

from app.services import (
    register_service,
    login_service,
    refresh_token_service,
    logout_service,
    get_me_service,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register")
def register_route(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Registra una cuenta con rol USER. No inicia sesión.
    """
    return register_service(db, user_data).to_response()

@router.post("/login")
def login_route(user_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Inicia sesión y devuelve un token de acceso y uno de refresco.
    Cualquier sesión anterior del usuario queda invalidada.
    """
    return login_service(db, user_data).to_response()

@router.post("/refresh")
def refresh_token_route(
    refresh_token: str | None = Depends(get_refresh_token_header),
    db: Session = Depends(get_db),
):
    """
    Recibe el refresh token en `x-refresh-token` y devuelve un par nuevo.
    """
    return refresh_token_service(db, refresh_token).to_response()

@router.post("/logout")
def logout_route(access_token: str | None = Depends(get_access_token), db: Session = Depends(get_db)):
    return logout_service(db, access_token).to_response()

@router.get("/me")
def me_route(
    access_token: str | None = Depends(get_access_token),
    refresh_token: str | None = Depends(get_refresh_token_header),
    db: Session = Depends(get_db),
):
    """
    Devuelve el perfil (`kind: profile`) o, si el access token expiró y se
    envió `x-refresh-token`, un par de tokens nuevo (`kind: token_refresh`).
    """
    return get_me_service(db, access_token, refresh_token).to_response()
