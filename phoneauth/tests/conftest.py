from __future__ import annotations

import os
import tempfile
from datetime import UTC, datetime, timedelta

_TMP_DIR = tempfile.mkdtemp(prefix="phoneauth-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP_DIR, "test.log"))
os.environ.setdefault("TOKEN_TTL_MINUTES", "60")
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")

import pytest  # noqa: E402

from phoneauth.domain.users.entities import SessionToken, User  # noqa: E402
from phoneauth.domain.users.exceptions import UserAlreadyExistsError  # noqa: E402
from phoneauth.domain.users.repositories import (  # noqa: E402
    PasswordHasher, SessionTokenRepository, UserRepository)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_phone(self, phone: str) -> User | None:
        return next((u for u in self._users.values() if u.phone == phone), None)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        if self.find_by_phone(user.phone) or (user.email and self.find_by_email(user.email)):
            raise UserAlreadyExistsError()
        new_user = User(
            id=self._seq,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def remove(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemoryTokenRepository(SessionTokenRepository):
    def __init__(self, ttl_minutes: int = 60) -> None:
        self._tokens: dict[str, SessionToken] = {}
        self._seq = 1
        self.ttl_minutes = ttl_minutes

    def issue_for_user(self, user_id: int) -> SessionToken:
        token = SessionToken(
            user_id=user_id,
            token=f"token-{self._seq}",
            expires_at=datetime.now(UTC) + timedelta(minutes=self.ttl_minutes),
            ttl_seconds=self.ttl_minutes * 60,
        )
        self._seq += 1
        self._tokens[token.token] = token
        return token

    def resolve(self, token: str) -> SessionToken | None:
        found = self._tokens.get(token)
        if found is None or found.expires_at <= datetime.now(UTC):
            return None
        return found

    def rotate(self, token: str) -> SessionToken | None:
        current = self.resolve(token)
        if current is None:
            return None
        self._tokens.pop(token)
        return self.issue_for_user(current.user_id)

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def expire(self, token: str) -> None:
        current = self._tokens[token]
        self._tokens[token] = SessionToken(
            user_id=current.user_id,
            token=current.token,
            expires_at=datetime.now(UTC) - timedelta(seconds=1),
            ttl_seconds=current.ttl_seconds,
        )


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def registration_payload() -> dict[str, str]:
    return {
        "first_name": "A",
        "last_name": "B",
        "phone": "312345678",
        "password": "abc123!",
        "password_confirmation": "abc123!",
    }
