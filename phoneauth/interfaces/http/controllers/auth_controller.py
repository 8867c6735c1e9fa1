# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from phoneauth.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from phoneauth.application.use_cases.users.login_user import LoginUserUseCase
from phoneauth.application.use_cases.users.logout_user import LogoutUserUseCase
from phoneauth.application.use_cases.users.refresh_token import RefreshTokenUseCase
from phoneauth.application.use_cases.users.register_user import (
    RegisterUserUseCase, RegistrationInput)
from phoneauth.interfaces.http.dto.auth import (CurrentUserResponseDTO,
                                                LogoutResponseDTO,
                                                RegisterResponseDTO,
                                                TokenResponseDTO)
from phoneauth.interfaces.http.validation import CredentialValidator
from phoneauth.shared.logging import logger


def bearer_token() -> str | None:
    """Token from ``Authorization: Bearer <token>``, or None."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthController:
    def __init__(
        self,
        *,
        validator: CredentialValidator,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        refresh_use_case: RefreshTokenUseCase,
        current_user_use_case: GetCurrentUserUseCase,
    ) -> None:
        self._validator = validator
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._refresh_use_case = refresh_use_case
        self._current_user_use_case = current_user_use_case

    def register(self) -> tuple[Response, int]:
        dto = self._validator.validate_registration(request.get_json(silent=True))

        result = self._register_use_case.execute(
            RegistrationInput(
                first_name=dto.first_name,
                last_name=dto.last_name,
                phone=dto.phone,
                email=dto.email,
                password=dto.password,
            )
        )

        payload = RegisterResponseDTO(token=result.token)
        return jsonify(payload.model_dump()), payload.status

    def login(self) -> tuple[Response, int]:
        dto = self._validator.validate_login(request.get_json(silent=True))

        envelope = self._login_use_case.execute(dto.phone, dto.password)

        payload = TokenResponseDTO.model_validate(envelope.to_dict())
        return jsonify(payload.model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(bearer_token())

        payload = LogoutResponseDTO()
        return jsonify(payload.model_dump()), payload.status

    def refresh(self) -> tuple[Response, int]:
        envelope = self._refresh_use_case.execute(bearer_token())

        payload = TokenResponseDTO.model_validate(envelope.to_dict())
        return jsonify(payload.model_dump()), 200

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(bearer_token())
        logger.debug(f"auth.me: resolved user_id={user.id}")

        payload = CurrentUserResponseDTO.model_validate({"user": user.to_public_dict()})
        return jsonify(payload.model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
