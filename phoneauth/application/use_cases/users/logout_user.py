"""Use-case for revoking access tokens."""

from __future__ import annotations

from phoneauth.domain.users.exceptions import UnauthorizedError
from phoneauth.domain.users.repositories import SessionTokenRepository
from phoneauth.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, tokens: SessionTokenRepository) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> None:
        if not token:
            raise UnauthorizedError()
        # Revoking an unknown or expired token is still a successful logout.
        self._tokens.revoke(token)
        logger.info("auth.logout: ok")
