"""DTOs for Identity app."""
from typing import Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from ninja import Schema
from pydantic import Field, field_validator


def _check_email(value: str) -> str:
    value = value.strip()
    try:
        validate_email(value)
    except DjangoValidationError:
        raise ValueError("Enter a valid email address.")
    return value


class RegisterRequest(Schema):
    email: str = Field(..., max_length=256)
    password: str = Field(..., min_length=6, max_length=100)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator('email')
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        return _check_email(value)


class LoginRequest(Schema):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator('email')
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        return _check_email(value)


class UserInfo(Schema):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class AuthResponse(Schema):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo
