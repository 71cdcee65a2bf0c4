from __future__ import annotations

import json

import httpx
import pytest

from inkwell.client import ApiError, AuthContext, ImageFile, InkwellClient

USER = {"_id": "a" * 32, "username": "alice", "email": "alice@example.com"}


class RecordingTransport(httpx.MockTransport):
    def __init__(self, responses: list[httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)


def _client(*responses: httpx.Response) -> tuple[InkwellClient, RecordingTransport]:
    transport = RecordingTransport(list(responses))
    return InkwellClient("http://api.test/api", transport=transport), transport


def test_signup_returns_auth_context() -> None:
    client, transport = _client(httpx.Response(201, json={"token": "t0k", "user": USER}))

    auth = client.signup("alice", "alice@example.com", "secret1")

    assert auth == AuthContext(token="t0k", user=USER)
    assert auth.user_id == USER["_id"]
    (request,) = transport.requests
    assert request.method == "POST"
    assert str(request.url) == "http://api.test/api/signup"
    assert json.loads(request.content) == {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret1",
    }


def test_error_response_raises_api_error() -> None:
    client, _ = _client(
        httpx.Response(401, json={"error": "invalid_credentials", "message": "Invalid credentials"})
    )

    with pytest.raises(ApiError) as exc_info:
        client.login("alice@example.com", "wrong")

    assert exc_info.value.status == 401
    assert exc_info.value.code == "invalid_credentials"
    assert exc_info.value.message == "Invalid credentials"


def test_non_json_error_body_still_raises() -> None:
    client, _ = _client(httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(ApiError) as exc_info:
        client.get_post("b" * 32)

    assert exc_info.value.status == 502
    assert exc_info.value.code == "http_error"


def test_list_posts_sends_paging_and_author() -> None:
    page = {"posts": [], "totalPages": 0, "currentPage": 3, "totalPosts": 0}
    client, transport = _client(httpx.Response(200, json=page))

    result = client.list_posts(page=3, limit=6, author=USER["_id"])

    assert result == page
    params = transport.requests[0].url.params
    assert (params["page"], params["limit"], params["author"]) == ("3", "6", USER["_id"])


def test_mutations_carry_bearer_token() -> None:
    auth = AuthContext(token="t0k", user=USER)
    client, transport = _client(
        httpx.Response(201, json={"_id": "c" * 32}),
        httpx.Response(200, json={"_id": "c" * 32}),
        httpx.Response(200, json={"success": True}),
    )

    client.create_post(
        auth, "Title", "Some content", ImageFile("pic.png", b"png-bytes", "image/png")
    )
    client.update_post(auth, "c" * 32, "Title 2", "Other content")
    client.delete_post(auth, "c" * 32)

    create, update, delete = transport.requests
    assert all(r.headers["Authorization"] == "Bearer t0k" for r in transport.requests)
    assert create.headers["content-type"].startswith("multipart/form-data")
    assert b"png-bytes" in create.content
    assert update.method == "PUT"
    assert str(update.url) == f"http://api.test/api/posts/{'c' * 32}"
    assert b"title=Title+2" in update.content
    assert delete.method == "DELETE"


def test_client_as_context_manager() -> None:
    with InkwellClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={}))) as c:
        assert c.get_post("d" * 32) == {}
