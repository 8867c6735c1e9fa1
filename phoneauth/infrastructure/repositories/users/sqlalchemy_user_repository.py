# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError

from phoneauth.domain.users.entities import SessionToken as DomainSessionToken
from phoneauth.domain.users.entities import User as DomainUser
from phoneauth.domain.users.exceptions import UserAlreadyExistsError
from phoneauth.domain.users.repositories import SessionTokenRepository, UserRepository
from phoneauth.infrastructure.db.models import SessionToken, User
from phoneauth.infrastructure.db.session import session_scope
from phoneauth.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_phone(self, phone: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.phone == phone).first()
            return _to_domain(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope() as session:
                row = User(
                    first_name=user.first_name,
                    last_name=user.last_name,
                    phone=user.phone,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.warning("users.add: unique constraint rejected insert")
            raise UserAlreadyExistsError() from exc

    def remove(self, user_id: int) -> None:
        with session_scope() as session:
            session.query(User).filter(User.id == user_id).delete()


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, ttl_minutes: int = 60) -> None:
        self._ttl = timedelta(minutes=ttl_minutes)

    def _new_row(self, user_id: int) -> SessionToken:
        return SessionToken(
            user_id=user_id,
            token=secrets.token_urlsafe(48),
            expires_at=datetime.now(UTC) + self._ttl,
        )

    def _to_domain(self, row: SessionToken) -> DomainSessionToken:
        return DomainSessionToken(
            user_id=row.user_id,
            token=row.token,
            expires_at=_as_utc(row.expires_at),
            ttl_seconds=int(self._ttl.total_seconds()),
        )

    def issue_for_user(self, user_id: int) -> DomainSessionToken:
        with session_scope() as session:
            purged = (
                session.query(SessionToken)
                .filter(
                    SessionToken.user_id == user_id,
                    SessionToken.expires_at <= datetime.now(UTC),
                )
                .delete()
            )
            if purged:
                logger.debug(f"tokens.issue: purged {purged} expired for user={user_id}")
            row = self._new_row(user_id)
            session.add(row)
            return self._to_domain(row)

    def resolve(self, token: str) -> DomainSessionToken | None:
        with session_scope() as session:
            row = (
                session.query(SessionToken)
                .filter(
                    SessionToken.token == token,
                    SessionToken.expires_at > datetime.now(UTC),
                )
                .first()
            )
            return self._to_domain(row) if row else None

    def rotate(self, token: str) -> DomainSessionToken | None:
        with session_scope() as session:
            current = (
                session.query(SessionToken)
                .filter(
                    SessionToken.token == token,
                    SessionToken.expires_at > datetime.now(UTC),
                )
                .with_for_update()
                .first()
            )
            if current is None:
                return None
            user_id = current.user_id
            session.delete(current)
            row = self._new_row(user_id)
            session.add(row)
            return self._to_domain(row)

    def revoke(self, token: str) -> None:
        with session_scope() as session:
            session.query(SessionToken).filter(SessionToken.token == token).delete()
