# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request correlation ids and access logging."""

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from phoneauth.shared.config import load_config
from phoneauth.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_MAX_REQUEST_ID = 64
_HASHED_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _loggable_headers() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _HASHED_HEADERS else value
        for key, value in request.headers.items()
    }


def _incoming_request_id() -> str:
    supplied = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if supplied and len(supplied) <= _MAX_REQUEST_ID and supplied.isprintable():
        return supplied
    return secrets.token_urlsafe(8)


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(_incoming_request_id())
        g.request_started = time.perf_counter()

        line = f"--> {request.method} {request.path} from {client_ip()}"
        if verbose:
            line += f" headers={_loggable_headers()} body_size={request.content_length or 0}"
        logger.info(line)

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        logger.info(
            f"<-- {request.method} {request.path} "
            f"status={response.status_code} duration={elapsed * 1000:.1f}ms"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "client_ip", "configure_request_logging"]
