# app/routers/telemetry_router.py

from datetime import datetime

from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, Path, Query

from app.database import get_db
from app.core import get_current_user
from app.schemas import AccessClaims, TelemetryLogCreate, TelemetryLogUpdate
from app.services import (
    create_telemetry_log_service,
    get_telemetry_logs_service,
    get_all_telemetry_logs_service,
    get_telemetry_log_by_id_service,
    update_telemetry_log_service,
    delete_telemetry_log_service,
    get_latest_telemetry_log_service,
    get_latest_logs_for_owned_vehicles_service,
    get_vehicle_stats_service,
)

router = APIRouter(prefix="/telemetry-logs", tags=["Telemetry Logs"])

@router.get("/latest/vehicles")
def get_latest_logs_route(db: Session = Depends(get_db), current_user: AccessClaims = Depends(get_current_user)):
    """
    Último log de cada vehículo visible para el usuario.
    """
    return get_latest_logs_for_owned_vehicles_service(db, current_user).to_response()

@router.get("/stats")
def get_vehicle_stats_route(db: Session = Depends(get_db), current_user: AccessClaims = Depends(get_current_user)):
    return get_vehicle_stats_service(db, current_user).to_response()

@router.post("/{vehicle_id}/vehicles")
def create_telemetry_log_route(
    log_data: TelemetryLogCreate,
    vehicle_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return create_telemetry_log_service(db, vehicle_id, log_data, current_user).to_response()

@router.get("/{vehicle_id}/vehicles/latest")
def get_latest_log_route(
    vehicle_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return get_latest_telemetry_log_service(db, vehicle_id, current_user).to_response()

@router.get("/{vehicle_id}/vehicles/all")
def get_all_logs_route(
    vehicle_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return get_all_telemetry_logs_service(db, vehicle_id, current_user).to_response()

@router.get("/{vehicle_id}/vehicles")
def get_logs_route(
    vehicle_id: int = Path(gt=0),
    date_from: datetime | None = Query(default=None, alias="from"),
    date_to: datetime | None = Query(default=None, alias="to"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    """
    Logs del vehículo paginados, más recientes primero. `from` y `to` son inclusivos.
    """
    return get_telemetry_logs_service(db, vehicle_id, current_user, date_from, date_to, page, limit).to_response()

@router.get("/{log_id}")
def get_log_route(
    log_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return get_telemetry_log_by_id_service(db, log_id, current_user).to_response()

@router.patch("/{log_id}")
def update_log_route(
    log_data: TelemetryLogUpdate,
    log_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return update_telemetry_log_service(db, log_id, log_data, current_user).to_response()

@router.delete("/{log_id}")
def delete_log_route(
    log_id: int = Path(gt=0),
    db: Session = Depends(get_db),
    current_user: AccessClaims = Depends(get_current_user),
):
    return delete_telemetry_log_service(db, log_id, current_user).to_response()
