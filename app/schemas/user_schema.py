# app/schemas/user_schema.py

from enum import Enum

from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator

from .response_schema import UTCDateTime

class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


def check_password_strength(value: str) -> str:
    # Minimo 8 caracteres, al menos una letra y un numero
    if not any(c.isalpha() for c in value):
        raise ValueError("La contraseña debe contener letras")
    if not any(c.isdigit() for c in value):
        raise ValueError("La contraseña debe contener números")
    return value


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    role: UserRole | None = None

    @field_validator("password")
    def check_password(cls, v):
        return check_password_strength(v)

class UserUpdate(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8, max_length=72)
    role: UserRole | None = None

    @field_validator("password")
    def check_password(cls, v):
        if v is None:
            return v
        return check_password_strength(v)

class UserResponse(BaseModel):
    id: int = Field(validation_alias="user_id")
    email: str = Field(validation_alias="user_email")
    role: UserRole = Field(validation_alias="user_role")
    created_at: UTCDateTime | None = Field(default=None, validation_alias="user_created")
    updated_at: UTCDateTime | None = Field(default=None, validation_alias="user_updated")

    model_config = ConfigDict(from_attributes=True)
