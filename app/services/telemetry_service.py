# app/services/telemetry_service.py

from datetime import datetime, timezone

from sqlalchemy.orm import Session
from fastapi import status

from app.models import TelemetryLog, Vehicle
from app.repositories import VehicleRepository, TelemetryRepository
from app.schemas import (
    AccessClaims,
    ServiceResponse,
    Pagination,
    PaginatedResponse,
    TelemetryLogCreate,
    TelemetryLogUpdate,
    TelemetryLogResponse,
    LatestLogEntry,
    UserRole,
    VehicleStats,
    VehicleStatus,
)
from app.core import logger, is_allowed

LOG_NOT_FOUND = "Log de telemetría no encontrado."


def to_utc(value: datetime | None) -> datetime | None:
    """Las fechas se guardan en UTC; una fecha sin zona se toma como UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _internal_error(action: str, e: Exception) -> ServiceResponse:
    logger.error(f"Error al {action}: {e}")
    return ServiceResponse.fail(f"No se pudo {action}.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _load_vehicle(db: Session, vehicle_id: int, requester: AccessClaims) -> tuple[Vehicle | None, ServiceResponse | None]:
    # El acceso a la telemetría se decide por el dueño del vehículo
    vehicle = VehicleRepository(db).get_vehicle_by_id_repository(vehicle_id)
    if not vehicle:
        return None, ServiceResponse.fail("Vehículo no encontrado.", status_code=status.HTTP_404_NOT_FOUND)
    if not is_allowed(requester, vehicle.veh_user_id):
        logger.warning(f"Usuario {requester.id} intentó acceder a la telemetría del vehículo {vehicle_id}")
        return None, ServiceResponse.fail("No autorizado para este vehículo.", status_code=status.HTTP_403_FORBIDDEN)
    return vehicle, None


def _load_log(db: Session, tel_id: int, requester: AccessClaims) -> tuple[TelemetryLog | None, ServiceResponse | None]:
    log = TelemetryRepository(db).get_log_by_id_repository(tel_id)
    if not log:
        return None, ServiceResponse.fail(LOG_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)
    _, error = _load_vehicle(db, log.tel_vehicle_id, requester)
    if error:
        return None, error
    return log, None


def create_telemetry_log_service(db: Session, vehicle_id: int, log_data: TelemetryLogCreate, requester: AccessClaims) -> ServiceResponse:
    try:
        _, error = _load_vehicle(db, vehicle_id, requester)
        if error:
            return error

        new_log = TelemetryLog(
            tel_vehicle_id=vehicle_id,
            tel_timestamp=to_utc(log_data.timestamp) or datetime.now(timezone.utc),
            tel_data=log_data.data.model_dump(),
        )
        log = TelemetryRepository(db).create_log_repository(new_log)
        if not log:
            return ServiceResponse.fail("No se pudo crear el log de telemetría.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Log de telemetría creado.", TelemetryLogResponse.model_validate(log), status.HTTP_201_CREATED)
    except Exception as e:
        return _internal_error("crear el log de telemetría", e)


def get_telemetry_logs_service(
    db: Session,
    vehicle_id: int,
    requester: AccessClaims,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    page: int = 1,
    limit: int = 50,
) -> ServiceResponse:
    try:
        _, error = _load_vehicle(db, vehicle_id, requester)
        if error:
            return error

        rows, total = TelemetryRepository(db).get_logs_for_vehicle_repository(
            vehicle_id, to_utc(date_from), to_utc(date_to), page, limit
        )
        return ServiceResponse.ok(
            "Logs de telemetría encontrados.",
            PaginatedResponse(
                data=[TelemetryLogResponse.model_validate(row) for row in rows],
                pagination=Pagination.build(total, page, limit),
            ),
        )
    except Exception as e:
        return _internal_error("obtener los logs de telemetría", e)


def get_all_telemetry_logs_service(db: Session, vehicle_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        _, error = _load_vehicle(db, vehicle_id, requester)
        if error:
            return error

        logs = TelemetryRepository(db).get_all_logs_for_vehicle_repository(vehicle_id)
        return ServiceResponse.ok("Todos los logs de telemetría.", [TelemetryLogResponse.model_validate(log) for log in logs])
    except Exception as e:
        return _internal_error("obtener los logs de telemetría", e)


def get_telemetry_log_by_id_service(db: Session, tel_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        log, error = _load_log(db, tel_id, requester)
        if error:
            return error
        return ServiceResponse.ok("Log de telemetría encontrado.", TelemetryLogResponse.model_validate(log))
    except Exception as e:
        return _internal_error("obtener el log de telemetría", e)


def update_telemetry_log_service(db: Session, tel_id: int, log_data: TelemetryLogUpdate, requester: AccessClaims) -> ServiceResponse:
    try:
        log, error = _load_log(db, tel_id, requester)
        if error:
            return error

        # El vehículo de un log no se puede cambiar
        update_data = {}
        if log_data.timestamp is not None:
            update_data["tel_timestamp"] = to_utc(log_data.timestamp)
        if log_data.data is not None:
            update_data["tel_data"] = log_data.data.model_dump()

        if not update_data:
            return ServiceResponse.ok("Log de telemetría actualizado.", TelemetryLogResponse.model_validate(log))

        updated = TelemetryRepository(db).update_log_repository(tel_id, update_data)
        if not updated:
            return ServiceResponse.fail("No se pudo actualizar el log de telemetría.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Log de telemetría actualizado.", TelemetryLogResponse.model_validate(updated))
    except Exception as e:
        return _internal_error("actualizar el log de telemetría", e)


def delete_telemetry_log_service(db: Session, tel_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        _, error = _load_log(db, tel_id, requester)
        if error:
            return error

        if not TelemetryRepository(db).delete_log_repository(tel_id):
            return ServiceResponse.fail("No se pudo eliminar el log de telemetría.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Log de telemetría eliminado.")
    except Exception as e:
        return _internal_error("eliminar el log de telemetría", e)


def get_latest_telemetry_log_service(db: Session, vehicle_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        _, error = _load_vehicle(db, vehicle_id, requester)
        if error:
            return error

        log = TelemetryRepository(db).get_latest_log_repository(vehicle_id)
        return ServiceResponse.ok(
            "Último log de telemetría.",
            TelemetryLogResponse.model_validate(log) if log else None,
        )
    except Exception as e:
        return _internal_error("obtener el último log de telemetría", e)


def get_latest_logs_for_owned_vehicles_service(db: Session, requester: AccessClaims) -> ServiceResponse:
    try:
        owner_id = None if requester.role == UserRole.ADMIN else requester.id
        vehicles = VehicleRepository(db).get_all_vehicles_by_user_repository(owner_id)
        vehicle_ids = [vehicle.veh_id for vehicle in vehicles]

        latest = TelemetryRepository(db).get_latest_logs_repository(vehicle_ids)
        data = [
            LatestLogEntry(
                vehicle_id=vehicle_id,
                log=TelemetryLogResponse.model_validate(latest[vehicle_id]) if latest[vehicle_id] else None,
            )
            for vehicle_id in vehicle_ids
        ]
        return ServiceResponse.ok("Últimos logs de telemetría por vehículo.", data)
    except Exception as e:
        return _internal_error("obtener los últimos logs de telemetría", e)


def get_vehicle_stats_service(db: Session, requester: AccessClaims) -> ServiceResponse:
    try:
        owner_id = None if requester.role == UserRole.ADMIN else requester.id
        vehicles = VehicleRepository(db).get_all_vehicles_by_user_repository(owner_id)

        moving = sum(1 for v in vehicles if v.veh_status == VehicleStatus.ACTIVE.value)
        maintenance = sum(1 for v in vehicles if v.veh_status == VehicleStatus.MAINTENANCE.value)
        stats = VehicleStats(
            total=len(vehicles),
            moving=moving,
            maintenance=maintenance,
            parked=len(vehicles) - moving - maintenance,
        )
        return ServiceResponse.ok("Estadísticas de vehículos.", stats)
    except Exception as e:
        return _internal_error("obtener las estadísticas", e)
