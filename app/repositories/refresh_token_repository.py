from sqlalchemy.orm import Session
from app.models import RefreshToken
from app.core import logger
from datetime import datetime, timezone

class RefreshTokenRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_valid_token(self, token: str) -> RefreshToken | None:
        """Solo devuelve el token si existe y no ha expirado. Los expirados no se purgan."""
        return (
            self.db.query(RefreshToken)
            .filter(
                RefreshToken.ref_token == token,
                RefreshToken.ref_expires_at > datetime.now(timezone.utc),
            )
            .first()
        )

    def delete_token(self, db_token: RefreshToken):
        self.db.delete(db_token)
        self.db.commit()

    def delete_tokens_by_user(self, user_id: int) -> int:
        count = (
            self.db.query(RefreshToken)
            .filter(RefreshToken.ref_user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count

    def replace_user_tokens(self, user_id: int, token: str, expires_at: datetime) -> RefreshToken | None:
        """
        Borra todos los refresh tokens del usuario y guarda uno nuevo en la
        misma transacción. Si algo falla, los tokens anteriores siguen vigentes.
        """
        try:
            (
                self.db.query(RefreshToken)
                .filter(RefreshToken.ref_user_id == user_id)
                .delete(synchronize_session=False)
            )
            db_token = RefreshToken(ref_user_id=user_id, ref_token=token, ref_expires_at=expires_at)
            self.db.add(db_token)
            self.db.commit()
            self.db.refresh(db_token)
            return db_token
        except Exception as e:
            logger.error(f"No se pudo reemplazar la sesión del usuario {user_id}: {e}")
            self.db.rollback()
            return None

    def rotate_token(self, old_token: RefreshToken, token: str, expires_at: datetime) -> RefreshToken | None:
        """Consume el token anterior y emite el nuevo en una sola transacción."""
        user_id = old_token.ref_user_id
        try:
            self.db.delete(old_token)
            db_token = RefreshToken(ref_user_id=user_id, ref_token=token, ref_expires_at=expires_at)
            self.db.add(db_token)
            self.db.commit()
            self.db.refresh(db_token)
            return db_token
        except Exception as e:
            logger.error(f"No se pudo rotar el refresh token del usuario {user_id}: {e}")
            self.db.rollback()
            return None
