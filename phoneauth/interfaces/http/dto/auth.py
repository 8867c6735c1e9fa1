from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from phoneauth.domain.users.repositories import UserRepository
from phoneauth.shared.errors.validation_types import ValidationErrorType

PHONE_PATTERN = re.compile(r"[35679][0-9]{8}")
PASSWORD_MIN_LENGTH = 6
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255

# Validation context key holding the UserRepository for uniqueness checks.
USERS_CONTEXT_KEY = "users"


def _users_from(info: ValidationInfo) -> UserRepository | None:
    if not info.context:
        return None
    return info.context.get(USERS_CONTEXT_KEY)


def _check_phone(value: str) -> str:
    value = value.strip()
    if not PHONE_PATTERN.fullmatch(value):
        raise PydanticCustomError(
            ValidationErrorType.PHONE_INVALID,
            "Phone must be 9 digits starting with 3, 5, 6, 7 or 9",
            {"pattern": "^[35679][0-9]{8}$"},
        )
    return value


def _phone_as_text(value: Any) -> Any:
    # JSON clients may send the number itself.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _check_password_length(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_SHORT,
            "Password must be at least {min_length} characters long",
            {"min_length": PASSWORD_MIN_LENGTH},
        )
    return value


class LoginRequestDTO(BaseModel):
    phone: str
    password: str  # No strength check on login

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, value: Any) -> Any:
        return _phone_as_text(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        return _check_phone(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password_length(value)


class RegisterRequestDTO(BaseModel):
    first_name: str
    last_name: str
    phone: str
    email: EmailStr | None = None
    password: str
    password_confirmation: str | None = Field(default=None, validate_default=True)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.MISSING,
                "{field} cannot be empty",
                {"field": info.field_name},
            )
        if len(value) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.STRING_TOO_LONG,
                "{field} must be at most {max_length} characters",
                {"field": info.field_name, "max_length": NAME_MAX_LENGTH},
            )
        return value

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, value: Any) -> Any:
        return _phone_as_text(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str, info: ValidationInfo) -> str:
        value = _check_phone(value)
        users = _users_from(info)
        if users is not None and users.find_by_phone(value) is not None:
            raise PydanticCustomError(
                ValidationErrorType.UNIQUE,
                "Phone has already been taken",
                {},
            )
        return value

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return None
        if len(value) > EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.STRING_TOO_LONG,
                "Email must be at most {max_length} characters",
                {"max_length": EMAIL_MAX_LENGTH},
            )
        users = _users_from(info)
        if users is not None and users.find_by_email(value) is not None:
            raise PydanticCustomError(
                ValidationErrorType.UNIQUE,
                "Email has already been taken",
                {},
            )
        return value

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        _check_password_length(value)

        if not re.search(r"[A-Za-z]", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_LETTER,
                "Password must contain at least one letter",
                {},
            )

        if not re.search(r"[0-9]", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_DIGIT,
                "Password must contain at least one digit",
                {},
            )

        if not re.search(r"[\W_]", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_SPECIAL,
                "Password must contain at least one special character",
                {},
            )

        return value

    @field_validator("password_confirmation")
    @classmethod
    def validate_confirmation(cls, value: str | None, info: ValidationInfo) -> str | None:
        password = info.data.get("password")
        # A password that already failed has its own error.
        if password is not None and value != password:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_MISMATCH,
                "Password confirmation does not match",
                {},
            )
        return value


class UserDTO(BaseModel):
    id: int
    first_name: str
    last_name: str
    phone: str
    email: str | None = None
    created_at: str


class TokenResponseDTO(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserDTO


class RegisterResponseDTO(BaseModel):
    message: str = "User created successfully"
    token: str
    status: int = 201


class LogoutResponseDTO(BaseModel):
    message: str = "Successfully logged out"
    status: int = 200


class CurrentUserResponseDTO(BaseModel):
    user: UserDTO
