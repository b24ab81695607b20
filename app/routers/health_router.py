from fastapi import APIRouter

from app.schemas import ServiceResponse

router = APIRouter(prefix="/health-check", tags=["Health Check"])

@router.get("")
def health_check_route():
    return ServiceResponse.ok("El servicio está en funcionamiento.").to_response()
