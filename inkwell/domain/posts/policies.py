# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from .entities import Post
from .exceptions import NotPostAuthorError


def is_author(post: Post, requester_id: str) -> bool:
    return bool(requester_id) and post.author_id == requester_id


def authorize_mutation(post: Post, requester_id: str, *, action: str = "modify") -> None:
    """Raise unless ``requester_id`` owns ``post``.

    ``post`` must be the stored record, loaded by the caller just before the
    write. Anything the client claims about authorship is irrelevant here.
    """

    if not is_author(post, requester_id):
        raise NotPostAuthorError(action)


__all__ = ["authorize_mutation", "is_author"]
