# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from phoneauth.application.services.password_hashing import WerkzeugPasswordHasher
from phoneauth.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from phoneauth.application.use_cases.users.login_user import LoginUserUseCase
from phoneauth.application.use_cases.users.logout_user import LogoutUserUseCase
from phoneauth.application.use_cases.users.refresh_token import RefreshTokenUseCase
from phoneauth.application.use_cases.users.register_user import RegisterUserUseCase
from phoneauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository, SqlAlchemyUserRepository)
from phoneauth.interfaces.http.controllers.auth_controller import AuthController
from phoneauth.interfaces.http.controllers.misc_controller import MiscController
from phoneauth.interfaces.http.validation import CredentialValidator
from phoneauth.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self._config.tokens.password_hash_method)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(ttl_minutes=self._config.tokens.ttl_minutes)

    @cached_property
    def credential_validator(self) -> CredentialValidator:
        return CredentialValidator(users=self.user_repository)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(tokens=self.session_token_repository)

    @cached_property
    def refresh_token_use_case(self) -> RefreshTokenUseCase:
        return RefreshTokenUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
        )

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(
            users=self.user_repository,
            tokens=self.session_token_repository,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            validator=self.credential_validator,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            refresh_use_case=self.refresh_token_use_case,
            current_user_use_case=self.get_current_user_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
