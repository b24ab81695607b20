from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from app.core import settings, logger, RateLimiter
from app.core.logger import log_critical_error
from app.core.discord_logger import send_discord_alert
from app.database import init_db, redis_client
from app.routers import api_router
from app.schemas import ServiceResponse


# --- Configuración de FastAPI ---
api_description = """
API REST para la gestión de flotas.

Usuarios con roles USER y ADMIN, autenticación con access token y refresh
token rotativo, vehículos y logs de telemetría por vehículo.

Todas las respuestas usan el mismo sobre:
`{success, message, responseObject, statusCode}`.
"""

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- CÓDIGO DE ARRANQUE (Startup) ---
    logger.info("🚀 Iniciando Fleet API...")
    init_db()
    send_discord_alert("Fleet API iniciada correctamente.", level="INFO")

    yield

    # --- CÓDIGO DE CIERRE (Shutdown) ---
    logger.info("🛑 Deteniendo Fleet API...")


app = FastAPI(
    title="Fleet API",
    description=api_description,
    version="1.0.0",
    lifespan=lifespan
)


# --- Middleware CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Rate limit por IP ---
rate_limiter = RateLimiter(
    redis_client if settings.RATE_LIMIT_ENABLED else None,
    limit=settings.RATE_LIMIT_MAX_REQUESTS,
    window_ms=settings.RATE_LIMIT_WINDOW_MS,
)

@app.middleware("http")
async def rate_limit_middleware(request: Request, call_next):
    client_ip = request.client.host if request.client else "anonymous"
    # El cliente de redis es síncrono, no debe bloquear el event loop
    allowed = await run_in_threadpool(rate_limiter.hit, client_ip)
    if not allowed:
        logger.warning(f"Rate limit excedido para {client_ip}")
        return ServiceResponse.fail(
            "Demasiadas peticiones, intenta más tarde.",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        ).to_response()
    return await call_next(request)


# --- Routers ---
app.include_router(api_router)


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Bienvenido a la Fleet API v1"}


# --- Manejo global de errores ---
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return ServiceResponse.fail(f"Entrada inválida: {details}", status_code=status.HTTP_400_BAD_REQUEST).to_response()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    response = ServiceResponse.fail(str(exc.detail), status_code=exc.status_code).to_response()
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log_critical_error(f"Error 500 en {request.url.path}: {exc}")
    return ServiceResponse.fail(
        "Error interno del servidor.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    ).to_response()
