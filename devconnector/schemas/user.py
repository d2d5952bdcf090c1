from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, ValidationError, field_validator


def _check_email(value: Any, handler) -> str:
    try:
        return handler(value)
    except ValidationError:
        raise ValueError("Please include a valid email")


# Pydantic models for request
class RegisterRequest(BaseModel):
    model_config = ConfigDict(validate_default=True)

    name: Optional[str] = None
    email: EmailStr = None
    password: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email", mode="wrap")
    @classmethod
    def email_valid(cls, v: Any, handler) -> str:
        return _check_email(v, handler)

    @field_validator("password", mode="before")
    @classmethod
    def password_length(cls, v: Any) -> str:
        if not isinstance(v, str) or len(v) < 6:
            raise ValueError("A password should be at least 6 characters long")
        return v


class LoginRequest(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: EmailStr = None
    password: Optional[str] = None

    @field_validator("email", mode="wrap")
    @classmethod
    def email_valid(cls, v: Any, handler) -> str:
        return _check_email(v, handler)

    @field_validator("password", mode="before")
    @classmethod
    def password_present(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("Please provide a password")
        return v


# Plain records returned by the credential repository
class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None


class UserInDB(User):
    hashed_password: str
