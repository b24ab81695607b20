from datetime import datetime

from app.models import TelemetryLog
from sqlalchemy.orm import Session

from app.core import logger

class TelemetryRepository:

    def __init__(self, db:Session):
        self.db = db

    def get_log_by_id_repository(self, tel_id:int) -> TelemetryLog | None:
        return self.db.query(TelemetryLog).filter(TelemetryLog.tel_id == tel_id).first()

    def create_log_repository(self, new_log:TelemetryLog) -> TelemetryLog | None:
        try:
            self.db.add(new_log)
            self.db.commit()
            self.db.refresh(new_log)
            logger.debug(f"Telemetría registrada para vehículo {new_log.tel_vehicle_id}")
            return new_log
        except Exception as e:
            logger.error(f"No se pudo guardar la telemetría: {e}")
            self.db.rollback()
            return None

    def update_log_repository(self, tel_id:int, update_data:dict) -> TelemetryLog | None:
        try:
            log = self.get_log_by_id_repository(tel_id)

            if not log:
                return None

            for key, value in update_data.items():
                setattr(log, key, value)

            self.db.commit()
            self.db.refresh(log)
            return log
        except Exception as e:
            logger.error(f"No se pudo actualizar la telemetría {tel_id}: {e}")
            self.db.rollback()
            return None

    def delete_log_repository(self, tel_id:int) -> bool:
        try:
            log = self.get_log_by_id_repository(tel_id)

            if not log:
                return False

            self.db.delete(log)
            self.db.commit()
            return True
        except Exception as e:
            logger.error(f"No se pudo eliminar la telemetría {tel_id}: {e}")
            self.db.rollback()
            return False

    def _for_vehicle(self, vehicle_id:int, date_from:datetime | None = None, date_to:datetime | None = None):
        query = self.db.query(TelemetryLog).filter(TelemetryLog.tel_vehicle_id == vehicle_id)
        if date_from is not None:
            query = query.filter(TelemetryLog.tel_timestamp >= date_from)
        if date_to is not None:
            query = query.filter(TelemetryLog.tel_timestamp <= date_to)
        return query

    def get_logs_for_vehicle_repository(
        self,
        vehicle_id:int,
        date_from:datetime | None = None,
        date_to:datetime | None = None,
        page:int = 1,
        limit:int = 50,
    ) -> tuple[list[TelemetryLog], int]:
        query = self._for_vehicle(vehicle_id, date_from, date_to)
        total = query.count()
        rows = (
            query.order_by(TelemetryLog.tel_timestamp.desc(), TelemetryLog.tel_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return rows, total

    def get_all_logs_for_vehicle_repository(self, vehicle_id:int) -> list[TelemetryLog]:
        return (
            self._for_vehicle(vehicle_id)
            .order_by(TelemetryLog.tel_timestamp.desc(), TelemetryLog.tel_id.desc())
            .all()
        )

    def get_latest_log_repository(self, vehicle_id:int) -> TelemetryLog | None:
        return (
            self._for_vehicle(vehicle_id)
            .order_by(TelemetryLog.tel_timestamp.desc(), TelemetryLog.tel_id.desc())
            .first()
        )

    def get_latest_logs_repository(self, vehicle_ids:list[int]) -> dict[int, TelemetryLog | None]:
        # Una consulta por vehículo
        return {vehicle_id: self.get_latest_log_repository(vehicle_id) for vehicle_id in vehicle_ids}
