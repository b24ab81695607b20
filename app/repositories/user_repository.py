from app.models import User
from sqlalchemy.orm import Session

from app.core import logger

class UserRepository:

    def __init__(self,db:Session):
        self.db = db

    def get_user_id_repository(self,user_id:int)-> User | None:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_user_by_email_repository(self,user_email:str) -> User | None:
        # Coincidencia exacta, sensible a mayúsculas
        return self.db.query(User).filter(User.user_email == user_email).first()

    def get_all_users_repository(self) -> list[User]:
        return self.db.query(User).order_by(User.user_id).all()

    def create_user_repository(self,new_user:User)-> User|None:
        try:
            self.db.add(new_user)
            self.db.commit()
            self.db.refresh(new_user)
            logger.info("Usuario creado exitosamente")
            return new_user
        except Exception as e:
            logger.error(f"Usuario no creado en repository : {e}")
            self.db.rollback()
            return None

    def update_user_repository(self,user_id:int, update_data:dict) -> User | None:

        try:
            user = self.get_user_id_repository(user_id)

            if not user:
                logger.debug(f"No se encontro usuario con el id {user_id}")
                return None

            for key, value in update_data.items():
                setattr(user, key, value)

            self.db.commit()
            self.db.refresh(user)
            logger.info("Usuario actualizado exitosamente")
            return user
        except Exception as e:
            logger.error(f"Usuario no actualizado con id {user_id}: {e}")
            self.db.rollback()
            return None

    def delete_user_repository(self,user_id:int) -> bool:

        try:
            user = self.get_user_id_repository(user_id)

            if not user:
                logger.debug(f"No se encontro usuario con el id {user_id}")
                return False

            # Los refresh tokens y vehículos caen en cascada
            self.db.delete(user)
            self.db.commit()
            logger.info(f"Se elimino al usuario con id {user_id}")
            return True
        except Exception as e:
            logger.error(f"No se pudo eliminar el usuario con id {user_id}: {e}")
            self.db.rollback()
            return False
