# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from phoneauth.domain.users.entities import User
from phoneauth.domain.users.repositories import PasswordHasher, SessionTokenRepository, UserRepository
from phoneauth.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RegistrationInput:
    first_name: str
    last_name: str
    phone: str
    password: str
    email: str | None = None


@dataclass(slots=True, frozen=True)
class RegistrationResult:
    user: User
    token: str


class RegisterUserUseCase:
    """Create the account, then log it in exactly as a login would."""

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

    def execute(self, data: RegistrationInput) -> RegistrationResult:
        user = User(
            id=0,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            email=data.email,
            password_hash=self._password_hasher.hash(data.password),
            created_at=datetime.now(UTC),
        )
        # The store raises UserAlreadyExistsError on a unique-index clash.
        persisted = self._users.add(user)
        try:
            token = self._tokens.issue_for_user(persisted.id)
        except Exception:
            # Undo the insert so a retry is not rejected as a duplicate.
            self._users.remove(persisted.id)
            logger.error(f"auth.register: token issue failed, removed user_id={persisted.id}")
            raise
        logger.info(f"auth.register: ok user_id={persisted.id}")
        return RegistrationResult(user=persisted, token=token.token)
