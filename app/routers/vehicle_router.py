# app/routers/vehicle_router.py

from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, Path, Query

from app.database import get_db
from app.core import get_current_user
from app.schemas import AccessClaims, VehicleCreate, VehicleUpdate, VehicleStatus
from app.services import (
    create_vehicle_service,
    find_all_vehicles_service,
    find_all_latest_summary_service,
    find_vehicle_by_id_service,
    get_latest_telemetry_flattened_service,
    update_vehicle_service,
    delete_vehicle_service,
)

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])

@router.post("")
def create_vehicle_route(vehicle_data: VehicleCreate, db: Session = Depends(get_db), current_user: AccessClaims = Depends(get_current_user)):
    return create_vehicle_service(db, vehicle_data, current_user).to_response()

@router.get("")
def get_vehicles_summary_route(
    search: str | None = Query(default=None, max_length=100),
    vehicle_status: VehicleStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    """
    Resumen de vehículos: estado y última velocidad reportada.
    """
    return find_all_latest_summary_service(db, current_user, search, vehicle_status, page, limit).to_response()

# /all y /detail/{id} van antes de /{veh_id}
@router.get("/all")
def get_all_vehicles_route(
    search: str | None = Query(default=None, max_length=100),
    vehicle_status: VehicleStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return find_all_vehicles_service(db, current_user, search, vehicle_status, page, limit).to_response()

@router.get("/detail/{veh_id}")
def get_vehicle_detail_route(
    veh_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return find_vehicle_by_id_service(db, veh_id, current_user).to_response()

@router.get("/{veh_id}")
def get_vehicle_latest_telemetry_route(
    veh_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    """
    Última telemetría del vehículo, aplanada.
    """
    return get_latest_telemetry_flattened_service(db, veh_id, current_user).to_response()

@router.patch("/{veh_id}")
def update_vehicle_route(
    vehicle_data: VehicleUpdate,
    veh_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return update_vehicle_service(db, veh_id, vehicle_data, current_user).to_response()

@router.delete("/{veh_id}")
def delete_vehicle_route(
    veh_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return delete_vehicle_service(db, veh_id, current_user).to_response()
