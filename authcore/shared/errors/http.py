# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from authcore.shared.config import load_config
from authcore.shared.logging import logger
from authcore.shared.middleware.request_logger import loggable_path

from .base import AppError, InfrastructureError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    debug_mode = load_config().debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if isinstance(exc, InfrastructureError):
            cause = exc.__cause__
            logger.error(
                f"{exc.code} on {request.method} {loggable_path()}: "
                f"{type(cause).__name__ if cause else 'no cause'}"
            )
        else:
            logger.warning(
                f"Handled application error {exc.code} on {request.method} {loggable_path()}"
            )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"Unhandled exception: {request.method} {loggable_path()}")
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {loggable_path()}")

        response = jsonify({"error": "internal_error"})
        return response, default_status
