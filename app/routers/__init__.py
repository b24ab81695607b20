# app/routers/__init__.py

from fastapi import APIRouter

# 1. Importar todos los routers
from . import auth_router, user_router, vehicle_router, telemetry_router, health_router

# 2. Crear el router para la API REST con el prefijo v1
api_router = APIRouter(prefix="/api/v1")

# 3. Incluir los routers de la API REST
api_router.include_router(auth_router.router)
api_router.include_router(user_router.router)
api_router.include_router(vehicle_router.router)
api_router.include_router(telemetry_router.router)
api_router.include_router(health_router.router)
