# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from phoneauth.shared.config import load_config
from phoneauth.shared.logging import logger

from .base import AppError

INTERNAL_ERROR_BODY = {"error": "internal_error"}


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(app: Flask) -> None:
    debug_mode = load_config().debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.info(f"{request.method} {request.path} -> {int(exc.status)} {exc.code}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"unhandled error on {request.method} {request.path}")
        else:
            logger.error(f"unhandled {type(exc).__name__} on {request.method} {request.path}")
        return jsonify(INTERNAL_ERROR_BODY), HTTPStatus.INTERNAL_SERVER_ERROR
