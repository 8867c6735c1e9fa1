# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request validation for the auth endpoints.

Both entry points validate the whole payload and report every failing
field at once. Registration additionally checks phone and email against
the user store; a payload whose only problems are such clashes is a
conflict (409) rather than a validation error (422).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from phoneauth.domain.users.exceptions import UserAlreadyExistsError
from phoneauth.domain.users.repositories import UserRepository
from phoneauth.interfaces.http.dto.auth import (USERS_CONTEXT_KEY,
                                                LoginRequestDTO,
                                                RegisterRequestDTO)
from phoneauth.shared.errors.base import ValidationError
from phoneauth.shared.errors.validation import (build_validation_context,
                                                field_error,
                                                pydantic_field_errors,
                                                raise_validation_error)
from phoneauth.shared.errors.validation_types import ValidationErrorType


def _confirmation_errors(
    payload: Mapping[str, Any] | None, errors: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    # A rejected password never reaches the DTO confirmation check.
    failed = {error["field"] for error in errors}
    if not isinstance(payload, Mapping) or "password" not in failed:
        return []
    if "password_confirmation" in failed:
        return []
    password = payload.get("password")
    if not isinstance(password, str) or payload.get("password_confirmation") == password:
        return []
    return [
        field_error(
            "password_confirmation",
            ValidationErrorType.PASSWORD_MISMATCH,
            "Password confirmation does not match",
        )
    ]


class CredentialValidator:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def validate_login(self, payload: Mapping[str, Any] | None) -> LoginRequestDTO:
        try:
            return LoginRequestDTO.model_validate(payload or {})
        except PydanticValidationError as exc:
            raise_validation_error(exc)

    def validate_registration(self, payload: Mapping[str, Any] | None) -> RegisterRequestDTO:
        try:
            return RegisterRequestDTO.model_validate(
                payload or {}, context={USERS_CONTEXT_KEY: self._users}
            )
        except PydanticValidationError as exc:
            errors = pydantic_field_errors(exc)

        errors.extend(_confirmation_errors(payload, errors))

        context = build_validation_context(errors)
        if all(error["type"] == ValidationErrorType.UNIQUE for error in errors):
            raise UserAlreadyExistsError(context={"fields": context["fields"]})
        raise ValidationError(context=context)
