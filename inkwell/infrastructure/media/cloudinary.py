# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable
from pathlib import Path

import httpx

from inkwell.domain.posts.exceptions import MediaUploadError
from inkwell.domain.posts.repositories import MediaUploader
from inkwell.infrastructure.resilience import CircuitBreaker, CircuitOpenError, resilient_call
from inkwell.shared.logging import logger

API_BASE = "https://api.cloudinary.com/v1_1"


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary signature: sha1 over sorted ``k=v`` pairs joined by ``&`` plus the secret."""
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
    return hashlib.sha1(f"{payload}{api_secret}".encode()).hexdigest()


class CloudinaryMediaUploader(MediaUploader):
    """Signed image uploads through Cloudinary's REST upload endpoint."""

    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "posts",
        timeout: float = 15.0,
        breaker: CircuitBreaker | None = None,
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not (cloud_name and api_key and api_secret):
            raise ValueError("Cloudinary credentials are incomplete")
        self._endpoint = f"{API_BASE}/{cloud_name}/image/upload"
        self._api_key = api_key
        self._api_secret = api_secret
        self._folder = folder
        self._timeout = timeout
        self._breaker = breaker
        self._transport = transport
        self._clock = clock

    def _form(self) -> dict[str, str]:
        params = {
            "folder": self._folder,
            "timestamp": str(int(self._clock())),
            "use_filename": "true",
        }
        return {
            **params,
            "api_key": self._api_key,
            "signature": sign_params(params, self._api_secret),
        }

    def _post(self, http: httpx.Client, path: Path, filename: str) -> httpx.Response:
        with open(path, "rb") as fh:
            response = http.post(
                self._endpoint,
                data=self._form(),
                files={"file": (filename, fh)},
            )
        # 4xx is the caller's fault and is not worth retrying.
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    def upload(self, path: Path, *, filename: str) -> str:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as http:
                response = resilient_call(
                    self._post,
                    http,
                    path,
                    filename,
                    breaker=self._breaker,
                    retry_on=(httpx.TransportError, httpx.HTTPStatusError),
                )
        except CircuitOpenError as exc:
            raise MediaUploadError("circuit_open") from exc
        except httpx.HTTPError as exc:
            logger.warning(f"media.cloudinary: request failed ({type(exc).__name__})")
            raise MediaUploadError(type(exc).__name__) from exc

        if response.status_code != 200:
            logger.warning(
                f"media.cloudinary: upload rejected code={response.status_code} "
                f"body={response.text[:200]}"
            )
            raise MediaUploadError(f"status_{response.status_code}")

        url = response.json().get("secure_url")
        if not url:
            raise MediaUploadError("missing_secure_url")
        logger.info(f"media.cloudinary: uploaded {filename}")
        return str(url)


__all__ = ["API_BASE", "CloudinaryMediaUploader", "sign_params"]
