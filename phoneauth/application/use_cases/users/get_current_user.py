# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from phoneauth.domain.users.entities import User
from phoneauth.domain.users.exceptions import TokenInvalidError, UserNotFoundError
from phoneauth.domain.users.repositories import SessionTokenRepository, UserRepository


class GetCurrentUserUseCase:
    """Resolve a bearer token to its owner.

    A bad token and a missing owner are reported separately: the first is
    a 401, the second a 404.
    """

    def __init__(self, *, users: UserRepository, tokens: SessionTokenRepository) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str | None) -> User:
        session = self._tokens.resolve(token) if token else None
        if session is None:
            raise TokenInvalidError()

        user = self._users.find_by_id(session.user_id)
        if user is None:
            raise UserNotFoundError()
        return user
