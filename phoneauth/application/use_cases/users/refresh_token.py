# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for exchanging a live token for a fresh one."""

from __future__ import annotations

from phoneauth.application.use_cases.users.token_envelope import (
    TokenEnvelope,
    build_token_envelope,
)
from phoneauth.domain.users.exceptions import UnauthorizedError
from phoneauth.domain.users.repositories import SessionTokenRepository, UserRepository
from phoneauth.shared.logging import logger


class RefreshTokenUseCase:
    def __init__(self, *, users: UserRepository, tokens: SessionTokenRepository) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str | None) -> TokenEnvelope:
        if not token:
            raise UnauthorizedError()

        fresh = self._tokens.rotate(token)
        if fresh is None:
            logger.info("auth.refresh: rejected invalid or expired token")
            raise UnauthorizedError()

        user = self._users.find_by_id(fresh.user_id)
        if user is None:
            self._tokens.revoke(fresh.token)
            logger.warning(f"auth.refresh: owner gone user_id={fresh.user_id}")
            raise UnauthorizedError()

        logger.info(f"auth.refresh: ok user_id={user.id}")
        return build_token_envelope(fresh, user)
