# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from typing import Any

from flask import Flask, Response, g, request

from inkwell.shared.config import load_config
from inkwell.shared.logging import clear_correlation_id, logger, set_correlation_id

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_SENSITIVE_PARAMS = ("password", "token", "secret", "key")


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    sanitized = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        else:
            sanitized[key] = value
    return sanitized


def _sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    return {
        key: "<redacted>" if any(s in key.lower() for s in _SENSITIVE_PARAMS) else value
        for key, value in params.items()
    }


def configure_request_logging(app: Flask) -> None:
    debug_mode = load_config().debug_logging

    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get("X-Request-ID") or secrets.token_urlsafe(8))
        g.request_start_time = time.perf_counter()

        if debug_mode:
            logger.info(
                f"Request started: {request.method} {request.path} from {client_ip()}, "
                f"query={_sanitize_query_params(dict(request.args))}, "
                f"headers={_sanitize_headers(dict(request.headers))}, "
                f"content_length={request.content_length or 0}"
            )
        else:
            logger.info(f"Request: {request.method} {request.path} from {client_ip()}")

    @app.after_request
    def _after_request(response: Response) -> Response:
        start = getattr(g, "request_start_time", time.perf_counter())
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            f"Response: {request.method} {request.path} "
            f"status={response.status_code} dt_ms={duration_ms:.1f} "
            f"user={getattr(g, 'user_id', None)}"
        )
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on {request.method} {request.path}"
            )
        clear_correlation_id()


__all__ = ["client_ip", "configure_request_logging"]
