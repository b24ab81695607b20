# app/services/__init__.py

# Auth Service
from .auth_service import register_service, login_service, refresh_token_service, logout_service, get_me_service

# User Service
from .user_service import (
    get_all_users_service,
    get_user_by_id_service,
    create_user_service,
    update_user_service,
    delete_user_service,
)

# Vehicle Service
from .vehicle_service import (
    create_vehicle_service,
    find_all_vehicles_service,
    find_all_latest_summary_service,
    find_vehicle_by_id_service,
    get_latest_telemetry_flattened_service,
    update_vehicle_service,
    delete_vehicle_service,
)

# Telemetry Service
from .telemetry_service import (
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
