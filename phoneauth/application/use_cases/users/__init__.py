# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .get_current_user import GetCurrentUserUseCase
from .login_user import LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .refresh_token import RefreshTokenUseCase
from .register_user import RegisterUserUseCase, RegistrationInput, RegistrationResult
from .token_envelope import TokenEnvelope, build_token_envelope

__all__ = [
    "GetCurrentUserUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RefreshTokenUseCase",
    "RegisterUserUseCase",
    "RegistrationInput",
    "RegistrationResult",
    "TokenEnvelope",
    "build_token_envelope",
]
