from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Settings are read once and cached, so the environment must be in place
# before anything under ``inkwell`` is imported.
_TMP_ROOT = Path(tempfile.mkdtemp(prefix="inkwell-tests-"))
os.environ.update(
    {
        "APP_ENV": "test",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret-with-enough-entropy-0123456789",
        "ENABLE_RATE_LIMIT": "0",
        "MEDIA_BACKEND": "local",
        "UPLOAD_DIR": str(_TMP_ROOT / "uploads"),
        "UPLOAD_TMP_DIR": str(_TMP_ROOT / "uploads_tmp"),
        "LOG_FILE": str(_TMP_ROOT / "inkwell.log"),
        "RESILIENCE_RETRIES": "1",
        "RESILIENCE_BACKOFF_BASE": "0.1",
        "RESILIENCE_BACKOFF_CAP": "0.2",
    }
)

from inkwell.domain.identifiers import new_id  # noqa: E402
from inkwell.domain.posts.entities import AuthorReference, Post, PostDraft  # noqa: E402
from inkwell.domain.users.entities import IssuedToken, User  # noqa: E402
from inkwell.domain.users.exceptions import InvalidTokenError  # noqa: E402


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def find_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        return {uid: self._users[uid] for uid in user_ids if uid in self._users}

    def add(self, user: User) -> User:
        self._users[user.id] = user
        return user

    def remove(self, user_id: str) -> None:
        self._users.pop(user_id, None)


class SteppingClock:
    """Returns a strictly increasing time unless frozen."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.now = start or datetime(2025, 1, 1, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class InMemoryPostRepository:
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._rows: dict[str, tuple[int, Post]] = {}
        self._seq = 0
        self._clock = clock or SteppingClock()
        self.page_calls: list[dict[str, object]] = []

    def get(self, post_id: str) -> Post | None:
        row = self._rows.get(post_id)
        return row[1] if row else None

    def page(
        self, *, author_id: str | None, offset: int, limit: int
    ) -> tuple[Sequence[Post], int]:
        self.page_calls.append({"author_id": author_id, "offset": offset, "limit": limit})
        rows = [
            row
            for row in self._rows.values()
            if author_id is None or row[1].author_id == author_id
        ]
        rows.sort(key=lambda row: (-row[1].created_at.timestamp(), row[0]))
        return [post for _, post in rows[offset : offset + limit]], len(rows)

    def add(self, author_id: str, draft: PostDraft) -> Post:
        now = self._clock()
        self._seq += 1
        post = Post(
            id=new_id(),
            title=draft.title,
            content=draft.content,
            image_url=draft.image_url,
            author=AuthorReference(author_id),
            created_at=now,
            updated_at=now,
        )
        self._rows[post.id] = (self._seq, post)
        return post

    def update(self, post_id: str, draft: PostDraft) -> Post | None:
        row = self._rows.get(post_id)
        if row is None:
            return None
        seq, post = row
        updated = replace(
            post,
            title=draft.title,
            content=draft.content,
            image_url=draft.image_url,
            updated_at=self._clock(),
        )
        self._rows[post_id] = (seq, updated)
        return updated

    def delete(self, post_id: str) -> bool:
        return self._rows.pop(post_id, None) is not None

    def __len__(self) -> int:
        return len(self._rows)


class FakeTokenService:
    def issue(self, user_id: str) -> IssuedToken:
        return IssuedToken(
            user_id=user_id,
            token=f"token-{user_id}",
            expires_at=datetime.now(UTC) + timedelta(days=30),
        )

    def verify(self, token: str) -> str:
        if not token.startswith("token-"):
            raise InvalidTokenError()
        return token.removeprefix("token-")


class PlainPasswordHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def make_user(username: str = "alice", email: str | None = None) -> User:
    return User(
        id=new_id(),
        username=username,
        email=email or f"{username}@example.com",
        password_hash="hashed:secret1",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def posts() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.add(make_user("alice"))


@pytest.fixture()
def bob(users: InMemoryUserRepository) -> User:
    return users.add(make_user("bob"))
