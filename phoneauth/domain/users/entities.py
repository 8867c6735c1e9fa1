# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class User:

    id: int
    first_name: str
    last_name: str
    phone: str
    email: str | None
    password_hash: str
    created_at: datetime

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    expires_at: datetime
    ttl_seconds: int
    token_type: str = "bearer"
