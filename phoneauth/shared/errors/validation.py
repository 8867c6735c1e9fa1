# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

_JSON_SCALARS = (str, int, float, bool, type(None))


def _json_safe_ctx(ctx: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: value if isinstance(value, _JSON_SCALARS) else str(value)
        for key, value in ctx.items()
    }


def field_error(
    field: str, error_type: str, message: str, ctx: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    entry: dict[str, Any] = {"field": field, "type": error_type, "message": message}
    if ctx:
        entry["ctx"] = _json_safe_ctx(ctx)
    return entry


def pydantic_field_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    errors_list = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)
        errors_list.append(
            field_error(
                field_path or "body",
                error.get("type", "value_error"),
                error.get("msg", ""),
                error.get("ctx"),
            )
        )
    return errors_list


def build_validation_context(errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    errors_list = [dict(error) for error in errors]
    messages: dict[str, list[str]] = {}
    for error in errors_list:
        messages.setdefault(error["field"], []).append(error["message"])
    return {
        "fields": sorted(messages),
        "messages": messages,
        "errors": errors_list,
    }


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    return build_validation_context(pydantic_field_errors(exc))


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    raise ValidationError(context=context) from exc


__all__ = [
    "build_validation_context",
    "field_error",
    "format_pydantic_errors",
    "pydantic_field_errors",
    "raise_validation_error",
]
