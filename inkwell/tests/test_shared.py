from __future__ import annotations

from http import HTTPStatus

import pytest
from flask import Flask, jsonify, request
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from inkwell.infrastructure.resilience import CircuitBreaker
from inkwell.shared.errors import AppError, ValidationError
from inkwell.shared.errors.validation import raise_validation_error
from inkwell.shared.config import load_config
from inkwell.shared.logging import sanitize_message
from inkwell.shared.middleware.error_handler import configure_error_handling
from inkwell.shared.middleware.rate_limit import InMemoryRateLimiter


class _Form(BaseModel):
    title: str = Field(min_length=3)


def test_app_error_to_dict_omits_empty_parts() -> None:
    error = AppError(code="boom", status=HTTPStatus.BAD_REQUEST)

    assert error.to_dict() == {"error": "boom"}
    assert str(error) == "boom"


def test_validation_error_lists_fields() -> None:
    with pytest.raises(PydanticValidationError) as caught:
        _Form.model_validate({"title": "x"})

    with pytest.raises(ValidationError) as exc_info:
        raise_validation_error(caught.value)

    error = exc_info.value
    assert error.status == HTTPStatus.BAD_REQUEST
    assert error.context["fields"] == ["title"]
    assert error.message


@pytest.mark.parametrize(
    "raw",
    [
        "Authorization: Bearer abc.def.ghi",
        "password=hunter22",
        "token=eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiIxIn0.c2ln",
    ],
)
def test_sanitize_message_masks_secrets(raw: str) -> None:
    masked = sanitize_message(raw)

    assert masked != raw
    assert "hunter22" not in masked
    assert "eyJhbGciOiJIUzI1NiJ9" not in masked


def test_rate_limiter_refuses_after_limit() -> None:
    limiter = InMemoryRateLimiter(limit=2, window_seconds=60.0)

    assert limiter.allow("k")
    assert limiter.allow("k")
    assert not limiter.allow("k")
    assert limiter.allow("other")


def test_circuit_breaker_opens_and_recovers() -> None:
    breaker = CircuitBreaker(failure_threshold=2, reset_timeout=0.0)
    breaker.on_failure()
    assert breaker.allow()
    breaker.on_failure()

    # reset_timeout of zero moves straight to half-open.
    assert breaker.allow()
    breaker.on_success()
    assert breaker.allow()


def test_oversized_body_reports_image_limit() -> None:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 16
    configure_error_handling(app)

    @app.post("/echo")
    def echo():
        return jsonify(request.form.to_dict())

    with app.test_client() as client:
        response = client.post("/echo", data={"text": "x" * 64})

    assert response.status_code == 413
    payload = response.get_json()
    assert payload["error"] == "image_too_large"
    assert payload["context"]["max_bytes"] == load_config().media.max_image_bytes
