# app/services/vehicle_service.py

from sqlalchemy.orm import Session
from fastapi import status

from app.models import Vehicle
from app.repositories import VehicleRepository, TelemetryRepository, UserRepository
from app.schemas import (
    AccessClaims,
    ServiceResponse,
    Pagination,
    PaginatedResponse,
    TelemetryLogResponse,
    UserRole,
    VehicleCreate,
    VehicleUpdate,
    VehicleResponse,
    VehicleDetail,
    VehicleSummary,
    VehicleLatestTelemetry,
    VehicleStatus,
)
from app.core import logger, is_allowed

VEHICLE_NOT_FOUND = "Vehículo no encontrado."

# Nombres de campo del schema -> columnas del modelo
_COLUMNS = {
    "name": "veh_name",
    "license_plate": "veh_license_plate",
    "model": "veh_model",
    "status": "veh_status",
    "user_id": "veh_user_id",
}


def _to_columns(data: dict) -> dict:
    columns = {}
    for key, value in data.items():
        if isinstance(value, VehicleStatus):
            value = value.value
        columns[_COLUMNS[key]] = value
    return columns


def _scope_user_id(requester: AccessClaims) -> int | None:
    # Un USER solo ve sus vehículos; un ADMIN ve todos
    return None if requester.role == UserRole.ADMIN else requester.id


def _with_latest(telemetry_repo: TelemetryRepository, vehicle: Vehicle) -> VehicleDetail:
    detail = VehicleDetail.model_validate(vehicle)
    latest = telemetry_repo.get_latest_log_repository(vehicle.veh_id)
    detail.latest_telemetry = TelemetryLogResponse.model_validate(latest) if latest else None
    return detail


def create_vehicle_service(db: Session, vehicle_data: VehicleCreate, requester: AccessClaims) -> ServiceResponse:
    try:
        vehicle_repo = VehicleRepository(db)

        if vehicle_repo.get_vehicle_by_license_plate_repository(vehicle_data.license_plate):
            logger.warning(f"Intento de registrar placa duplicada: {vehicle_data.license_plate}")
            return ServiceResponse.fail("La placa ya existe.", status_code=status.HTTP_409_CONFLICT)

        data = vehicle_data.model_dump(exclude_none=True)

        # Solo un ADMIN puede asignar el vehículo a otro usuario
        owner_id = requester.id
        if requester.role == UserRole.ADMIN and vehicle_data.user_id:
            owner_id = vehicle_data.user_id
            if not UserRepository(db).get_user_id_repository(owner_id):
                return ServiceResponse.fail("Usuario dueño no encontrado.", status_code=status.HTTP_404_NOT_FOUND)
        data["user_id"] = owner_id

        vehicle = vehicle_repo.create_vehicle_repository(Vehicle(**_to_columns(data)))
        if not vehicle:
            return ServiceResponse.fail("No se pudo crear el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Vehículo {vehicle.veh_id} creado para el usuario {owner_id}")
        return ServiceResponse.ok("Vehículo creado.", VehicleResponse.model_validate(vehicle), status.HTTP_201_CREATED)
    except Exception as e:
        logger.error(f"Error al crear vehículo: {e}")
        return ServiceResponse.fail("Ocurrió un error al crear el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def find_all_vehicles_service(
    db: Session,
    requester: AccessClaims,
    search: str | None = None,
    vehicle_status: VehicleStatus | None = None,
    page: int = 1,
    limit: int = 10,
) -> ServiceResponse:
    """Listado paginado; cada vehículo lleva su última telemetría."""
    try:
        vehicle_repo = VehicleRepository(db)
        telemetry_repo = TelemetryRepository(db)

        rows, total = vehicle_repo.find_vehicles_repository(
            search=search,
            status=vehicle_status.value if vehicle_status else None,
            user_id=_scope_user_id(requester),
            page=page,
            limit=limit,
        )
        data = [_with_latest(telemetry_repo, vehicle) for vehicle in rows]

        return ServiceResponse.ok(
            "Vehículos encontrados.",
            PaginatedResponse(data=data, pagination=Pagination.build(total, page, limit)),
        )
    except Exception as e:
        logger.error(f"Error al listar vehículos: {e}")
        return ServiceResponse.fail("Ocurrió un error al obtener los vehículos.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def find_all_latest_summary_service(
    db: Session,
    requester: AccessClaims,
    search: str | None = None,
    vehicle_status: VehicleStatus | None = None,
    page: int = 1,
    limit: int = 10,
) -> ServiceResponse:
    try:
        vehicle_repo = VehicleRepository(db)
        telemetry_repo = TelemetryRepository(db)

        rows, _ = vehicle_repo.find_vehicles_repository(
            search=search,
            status=vehicle_status.value if vehicle_status else None,
            user_id=_scope_user_id(requester),
            page=page,
            limit=limit,
        )

        summary = []
        for vehicle in rows:
            latest = telemetry_repo.get_latest_log_repository(vehicle.veh_id)
            speed = (latest.tel_data or {}).get("speed") if latest else None
            summary.append(
                VehicleSummary(
                    id=vehicle.veh_id,
                    name=vehicle.veh_name,
                    status=vehicle.veh_status,
                    speed=speed,
                    updated_at=vehicle.veh_updated_at,
                )
            )

        return ServiceResponse.ok("Vehículos encontrados.", summary)
    except Exception as e:
        logger.error(f"Error en resumen de vehículos: {e}")
        return ServiceResponse.fail("Ocurrió un error al obtener los vehículos.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _load_owned_vehicle(db: Session, veh_id: int, requester: AccessClaims, action: str) -> tuple[Vehicle | None, ServiceResponse | None]:
    vehicle = VehicleRepository(db).get_vehicle_by_id_repository(veh_id)
    if not vehicle:
        return None, ServiceResponse.fail(VEHICLE_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)

    if not is_allowed(requester, vehicle.veh_user_id):
        logger.warning(f"Usuario {requester.id} intentó {action} el vehículo {veh_id} sin permiso.")
        return None, ServiceResponse.fail(f"No autorizado para {action} este vehículo.", status_code=status.HTTP_403_FORBIDDEN)

    return vehicle, None


def find_vehicle_by_id_service(db: Session, veh_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        vehicle, error = _load_owned_vehicle(db, veh_id, requester, "acceder a")
        if error:
            return error

        return ServiceResponse.ok("Vehículo encontrado.", _with_latest(TelemetryRepository(db), vehicle))
    except Exception as e:
        logger.error(f"Error al buscar vehículo {veh_id}: {e}")
        return ServiceResponse.fail("Ocurrió un error al buscar el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def get_latest_telemetry_flattened_service(db: Session, veh_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        vehicle, error = _load_owned_vehicle(db, veh_id, requester, "acceder a")
        if error:
            return error

        latest = TelemetryRepository(db).get_latest_log_repository(vehicle.veh_id)
        if not latest or not latest.tel_data:
            return ServiceResponse.fail("No hay datos de telemetría.", status_code=status.HTTP_404_NOT_FOUND)

        data = latest.tel_data
        return ServiceResponse.ok(
            "Telemetría encontrada.",
            VehicleLatestTelemetry(
                vehicle_id=vehicle.veh_id,
                odometer=data.get("odometer"),
                fuel_level=data.get("fuel_level"),
                timestamp=latest.tel_timestamp,
                latitude=data.get("lat"),
                longitude=data.get("lon"),
                speed=data.get("speed"),
            ),
        )
    except Exception as e:
        logger.error(f"Error al obtener telemetría del vehículo {veh_id}: {e}")
        return ServiceResponse.fail("Ocurrió un error al obtener la telemetría.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def update_vehicle_service(db: Session, veh_id: int, vehicle_data: VehicleUpdate, requester: AccessClaims) -> ServiceResponse:
    try:
        vehicle, error = _load_owned_vehicle(db, veh_id, requester, "actualizar")
        if error:
            return error

        update_data = vehicle_data.model_dump(exclude_unset=True, exclude_none=True)

        # Solo un ADMIN puede reasignar el dueño; para un USER se ignora
        if requester.role != UserRole.ADMIN:
            update_data.pop("user_id", None)
        elif "user_id" in update_data and not UserRepository(db).get_user_id_repository(update_data["user_id"]):
            return ServiceResponse.fail("Usuario dueño no encontrado.", status_code=status.HTTP_404_NOT_FOUND)

        vehicle_repo = VehicleRepository(db)
        new_plate = update_data.get("license_plate")
        if new_plate and new_plate != vehicle.veh_license_plate:
            existing = vehicle_repo.get_vehicle_by_license_plate_repository(new_plate)
            if existing and existing.veh_id != veh_id:
                return ServiceResponse.fail("La placa ya está en uso.", status_code=status.HTTP_409_CONFLICT)

        if not update_data:
            return ServiceResponse.ok("Vehículo actualizado.", VehicleResponse.model_validate(vehicle))

        updated = vehicle_repo.update_vehicle_repository(veh_id, _to_columns(update_data))
        if not updated:
            return ServiceResponse.fail("No se pudo actualizar el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Vehículo actualizado.", VehicleResponse.model_validate(updated))
    except Exception as e:
        logger.error(f"Error al actualizar vehículo {veh_id}: {e}")
        return ServiceResponse.fail("Ocurrió un error al actualizar el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def delete_vehicle_service(db: Session, veh_id: int, requester: AccessClaims) -> ServiceResponse:
    try:
        _, error = _load_owned_vehicle(db, veh_id, requester, "eliminar")
        if error:
            return error

        if not VehicleRepository(db).soft_delete_vehicle_repository(veh_id):
            return ServiceResponse.fail("No se pudo eliminar el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return ServiceResponse.ok("Vehículo eliminado.")
    except Exception as e:
        logger.error(f"Error al eliminar vehículo {veh_id}: {e}")
        return ServiceResponse.fail("Ocurrió un error al eliminar el vehículo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
