# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Post records and the paginated views computed over them."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from typing import BinaryIO, Union


@dataclass(slots=True, frozen=True)
class AuthorReference:
    """Author known only by identifier (unresolved, or the user is gone)."""

    id: str


@dataclass(slots=True, frozen=True)
class ExpandedAuthor:
    """Author summary resolved at query time; never stored on the post."""

    id: str
    username: str
    email: str


Author = Union[AuthorReference, ExpandedAuthor]


@dataclass(slots=True, frozen=True)
class Post:

    id: str
    title: str
    content: str
    image_url: str | None
    author: Author
    created_at: datetime
    updated_at: datetime

    @property
    def author_id(self) -> str:
        return self.author.id

    def with_author(self, author: Author) -> Post:
        if author.id != self.author.id:
            raise ValueError("author summary does not belong to this post")
        return replace(self, author=author)


@dataclass(slots=True, frozen=True)
class PostDraft:
    """Fields a requester may set on a post. Authorship is never part of it."""

    title: str
    content: str
    image_url: str | None = None


@dataclass(slots=True, frozen=True)
class ImageUpload:
    """Image attachment as received from the client, not yet stored anywhere."""

    filename: str
    content_type: str | None
    stream: BinaryIO


@dataclass(slots=True, frozen=True)
class PageRequest:
    page: int
    page_size: int

    @classmethod
    def normalize(
        cls,
        page: object,
        page_size: object,
        *,
        default_size: int,
    ) -> PageRequest:
        """Build a request, falling back to page 1 / default size on bad input."""

        resolved_page = _positive_int(page) or 1
        resolved_size = _positive_int(page_size) or default_size
        return cls(page=resolved_page, page_size=resolved_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(slots=True, frozen=True)
class PostPage:
    items: Sequence[Post]
    total_count: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)


def _positive_int(value: object) -> int | None:
    # Whole numbers only: "1.5" is rejected rather than truncated to 1.
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


__all__ = [
    "Author",
    "AuthorReference",
    "ExpandedAuthor",
    "ImageUpload",
    "PageRequest",
    "Post",
    "PostDraft",
    "PostPage",
]
