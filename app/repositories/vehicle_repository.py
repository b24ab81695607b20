from datetime import datetime, timezone

from app.models import Vehicle
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core import logger

class VehicleRepository:

    def __init__(self, db:Session):
        self.db = db

    def _active(self):
        return self.db.query(Vehicle).filter(Vehicle.veh_deleted_at.is_(None))

    def get_vehicle_by_id_repository(self,veh_id:int) -> Vehicle | None:
        return self._active().filter(Vehicle.veh_id == veh_id).first()

    def get_vehicle_by_license_plate_repository(self,license_plate:str) -> Vehicle | None:
        # Incluye los borrados lógicamente: la placa sigue ocupada en la tabla
        return self.db.query(Vehicle).filter(Vehicle.veh_license_plate == license_plate).first()

    def get_all_vehicles_by_user_repository(self,user_id:int | None) -> list[Vehicle]:
        query = self._active()
        if user_id is not None:
            query = query.filter(Vehicle.veh_user_id == user_id)
        return query.order_by(Vehicle.veh_id).all()

    def find_vehicles_repository(
        self,
        search:str | None = None,
        status:str | None = None,
        user_id:int | None = None,
        page:int = 1,
        limit:int = 10,
    ) -> tuple[list[Vehicle], int]:
        """
        Listado paginado con filtros opcionales.

        `search` compara por subcadena contra nombre, placa y modelo.
        Orden: más recientes primero, desempate por id descendente.
        """
        query = self._active()

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Vehicle.veh_name.ilike(pattern),
                    Vehicle.veh_license_plate.ilike(pattern),
                    Vehicle.veh_model.ilike(pattern),
                )
            )
        if status:
            query = query.filter(Vehicle.veh_status == status)
        if user_id is not None:
            query = query.filter(Vehicle.veh_user_id == user_id)

        total = query.count()
        rows = (
            query.order_by(Vehicle.veh_created_at.desc(), Vehicle.veh_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return rows, total

    def create_vehicle_repository(self,new_vehicle:Vehicle) -> Vehicle | None:

        try:
            self.db.add(new_vehicle)
            self.db.commit()
            self.db.refresh(new_vehicle)
            logger.info("Vehículo creado exitosamente")
            return new_vehicle
        except Exception as e:
            logger.error(f"No se pudo agregar el vehículo: {e}")
            self.db.rollback()
            return None

    def update_vehicle_repository(self, veh_id:int, update_data:dict) -> Vehicle | None:

        try:
            vehicle = self.get_vehicle_by_id_repository(veh_id)

            if not vehicle:
                logger.info(f"No se encontro vehículo con id {veh_id}")
                return None

            for key, value in update_data.items():
                setattr(vehicle, key, value)

            self.db.commit()
            self.db.refresh(vehicle)
            return vehicle
        except Exception as e:
            logger.error(f"No se pudo actualizar el vehículo con id {veh_id}: {e}")
            self.db.rollback()
            return None

    def soft_delete_vehicle_repository(self, veh_id:int) -> bool:

        try:
            vehicle = self.get_vehicle_by_id_repository(veh_id)

            if not vehicle:
                logger.info(f"No se encontro vehículo con id {veh_id}")
                return False

            vehicle.veh_deleted_at = datetime.now(timezone.utc)
            self.db.commit()
            logger.info(f"Vehículo {veh_id} marcado como eliminado")
            return True
        except Exception as e:
            logger.error(f"No se pudo eliminar el vehículo con id {veh_id}: {e}")
            self.db.rollback()
            return False
