# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services import WerkzeugPasswordHasher
from .use_cases.users import (
    GetCurrentUserUseCase,
    LoginUserUseCase,
    LogoutUserUseCase,
    RefreshTokenUseCase,
    RegisterUserUseCase,
    RegistrationInput,
    RegistrationResult,
    TokenEnvelope,
)

__all__ = [
    "GetCurrentUserUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RefreshTokenUseCase",
    "RegisterUserUseCase",
    "RegistrationInput",
    "RegistrationResult",
    "TokenEnvelope",
    "WerkzeugPasswordHasher",
]
