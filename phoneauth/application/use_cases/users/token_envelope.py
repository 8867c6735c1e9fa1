# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Uniform response envelope for freshly issued session tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from phoneauth.domain.users.entities import SessionToken, User


@dataclass(slots=True, frozen=True)
class TokenEnvelope:
    access_token: str
    token_type: str
    expires_in: int
    user: User

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "user": self.user.to_public_dict(),
        }


def build_token_envelope(token: SessionToken, user: User) -> TokenEnvelope:
    """Pair a token with its owner.

    ``expires_in`` is the configured lifetime in seconds, not the time
    remaining until ``expires_at``.
    """
    return TokenEnvelope(
        access_token=token.token,
        token_type=token.token_type,
        expires_in=token.ttl_seconds,
        user=user,
    )
