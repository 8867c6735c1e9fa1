# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from phoneauth.application.use_cases.users.token_envelope import (
    TokenEnvelope,
    build_token_envelope,
)
from phoneauth.domain.users.exceptions import InvalidCredentialsError
from phoneauth.domain.users.repositories import PasswordHasher, SessionTokenRepository, UserRepository
from phoneauth.shared.logging import logger

_DUMMY_PASSWORD = "phoneauth-unknown-phone"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        # Checked against for unknown phones so both failures cost one hash.
        self._dummy_hash = password_hasher.hash(_DUMMY_PASSWORD)

    def execute(self, phone: str, password: str) -> TokenEnvelope:
        user = self._users.find_by_phone(phone)
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            password_valid = False
        else:
            password_valid = self._password_hasher.verify(password, user.password_hash)

        # Unknown phone and wrong password share one error.
        if not password_valid:
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()

        token = self._tokens.issue_for_user(user.id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return build_token_envelope(token, user)
