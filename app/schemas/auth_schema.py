from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .user_schema import UserRole, UserResponse, check_password_strength


class AccessClaims(BaseModel):
    """Claims firmados dentro del access token. Cualquier otra forma se rechaza."""
    id: int = Field(gt=0, strict=True)
    role: UserRole


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)

    @field_validator("password")
    def check_password(cls, v):
        return check_password_strength(v)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class LoginResponse(TokenPair):
    user: UserResponse


# /me devuelve una de dos variantes, distinguibles por "kind"
class MeProfile(BaseModel):
    kind: Literal["profile"] = "profile"
    id: int = Field(validation_alias="user_id")
    email: str = Field(validation_alias="user_email")
    role: UserRole = Field(validation_alias="user_role")

    model_config = ConfigDict(from_attributes=True)

class MeTokenRefresh(TokenPair):
    kind: Literal["token_refresh"] = "token_refresh"
