# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    STRING_TOO_LONG = "string_too_long"
    PHONE_INVALID = "phone_invalid"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_NO_LETTER = "password_no_letter"
    PASSWORD_NO_DIGIT = "password_no_digit"
    PASSWORD_NO_SPECIAL = "password_no_special"
    PASSWORD_MISMATCH = "password_mismatch"
    UNIQUE = "unique"
