# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from bareddit.shared.logging import logger

from .base import AppError


def _describe_request() -> str:
    return f"{request.method} {request.path}"


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    """Map raised errors to JSON bodies; nothing but the error code leaves the server."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError) -> tuple[Response, HTTPStatus]:
        if exc.is_server_error:
            logger.error(f"{exc.code} on {_describe_request()} context={exc.context}")
        else:
            logger.warning(f"{exc.code} on {_describe_request()}")
        return jsonify(exc.to_dict()), exc.status

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException) -> HTTPException:
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception) -> tuple[Response, HTTPStatus]:
        if debug_mode:
            logger.exception(f"Unhandled exception on {_describe_request()}")
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {_describe_request()}")
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR
