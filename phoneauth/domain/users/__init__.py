# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import SessionToken, User
from .exceptions import (
    InvalidCredentialsError,
    TokenInvalidError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .repositories import PasswordHasher, SessionTokenRepository, UserRepository

__all__ = [
    "InvalidCredentialsError",
    "PasswordHasher",
    "SessionToken",
    "SessionTokenRepository",
    "TokenInvalidError",
    "UnauthorizedError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
]
