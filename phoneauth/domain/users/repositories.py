# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def find_by_phone(self, phone: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def remove(self, user_id: int) -> None: ...


class SessionTokenRepository(Protocol):
    def issue_for_user(self, user_id: int) -> SessionToken: ...
    def resolve(self, token: str) -> SessionToken | None: ...
    def rotate(self, token: str) -> SessionToken | None: ...
    def revoke(self, token: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
