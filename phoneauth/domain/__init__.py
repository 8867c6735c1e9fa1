# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for the phone auth service."""

from phoneauth.shared.errors import DomainError

from .users import (
    InvalidCredentialsError,
    SessionToken,
    TokenInvalidError,
    UnauthorizedError,
    User,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "DomainError",
    "InvalidCredentialsError",
    "SessionToken",
    "TokenInvalidError",
    "UnauthorizedError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
