import math
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    """SQLite devuelve las fechas sin zona; se guardan en UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Fecha de salida siempre con offset explícito
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class ServiceResponse(BaseModel):
    """Sobre uniforme para todas las respuestas: {success, message, responseObject, statusCode}."""

    success: bool
    message: str
    response_object: Any = None
    status_code: int = status.HTTP_200_OK

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def ok(cls, message: str, response_object: Any = None, status_code: int = status.HTTP_200_OK) -> "ServiceResponse":
        return cls(success=True, message=message, response_object=response_object, status_code=status_code)

    @classmethod
    def fail(cls, message: str, response_object: Any = None, status_code: int = status.HTTP_400_BAD_REQUEST) -> "ServiceResponse":
        return cls(success=False, message=message, response_object=response_object, status_code=status_code)

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=jsonable_encoder(self, by_alias=True))


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit) if limit else 0)


class PaginatedResponse(BaseModel):
    data: list[Any]
    pagination: Pagination
