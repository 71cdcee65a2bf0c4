# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP client for the Inkwell API.

Authentication state is an explicit :class:`AuthContext` value: ``signup``
and ``login`` return one, and calls that need a token take it as an
argument. Logging out means dropping the context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO

import httpx

from inkwell.shared.logging import logger

DEFAULT_BASE_URL = "http://localhost:5000/api"


@dataclass(slots=True, frozen=True)
class AuthContext:
    token: str
    user: dict[str, Any]

    @property
    def user_id(self) -> str:
        return str(self.user.get("_id", ""))

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@dataclass(slots=True)
class ApiError(Exception):
    status: int
    code: str
    message: str

    def __post_init__(self) -> None:
        Exception.__init__(self, f"{self.status} {self.code}: {self.message}")


@dataclass(slots=True, frozen=True)
class ImageFile:
    filename: str
    content: bytes | BinaryIO
    content_type: str = "application/octet-stream"


class InkwellClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> InkwellClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, path, **kwargs)
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = ApiError(
            status=response.status_code,
            code=str(body.get("error") or "http_error"),
            message=str(body.get("message") or "Something went wrong"),
        )
        logger.warning(f"client: {method} {path} failed ({error})")
        raise error

    @staticmethod
    def _post_form(title: str, content: str, image: ImageFile | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"data": {"title": title, "content": content}}
        if image is not None:
            kwargs["files"] = {"image": (image.filename, image.content, image.content_type)}
        return kwargs

    # Auth

    def signup(self, username: str, email: str, password: str) -> AuthContext:
        data = self._request(
            "POST", "/signup", json={"username": username, "email": email, "password": password}
        )
        return AuthContext(token=data["token"], user=data["user"])

    def login(self, email: str, password: str) -> AuthContext:
        data = self._request("POST", "/login", json={"email": email, "password": password})
        return AuthContext(token=data["token"], user=data["user"])

    # Posts

    def list_posts(
        self, *, page: int = 1, limit: int = 6, author: str | None = None
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if author:
            params["author"] = author
        return self._request("GET", "/posts", params=params)

    def get_post(self, post_id: str) -> dict[str, Any]:
        return self._request("GET", f"/posts/{post_id}")

    def create_post(
        self, auth: AuthContext, title: str, content: str, image: ImageFile | None = None
    ) -> dict[str, Any]:
        return self._request(
            "POST", "/posts", headers=auth.headers(), **self._post_form(title, content, image)
        )

    def update_post(
        self,
        auth: AuthContext,
        post_id: str,
        title: str,
        content: str,
        image: ImageFile | None = None,
    ) -> dict[str, Any]:
        return self._request(
            "PUT",
            f"/posts/{post_id}",
            headers=auth.headers(),
            **self._post_form(title, content, image),
        )

    def delete_post(self, auth: AuthContext, post_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/posts/{post_id}", headers=auth.headers())


__all__ = ["ApiError", "AuthContext", "ImageFile", "InkwellClient"]
