# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from inkwell.domain.posts.entities import AuthorReference, ExpandedAuthor, Post
from inkwell.domain.users.repositories import UserRepository


class AuthorResolver:
    """Expands author references into summaries in one lookup per batch."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def expand(self, posts: Sequence[Post]) -> list[Post]:
        if not posts:
            return []
        ids = {post.author_id for post in posts}
        found = self._users.find_many(ids)
        expanded = []
        for post in posts:
            user = found.get(post.author_id)
            if user is None:
                expanded.append(post.with_author(AuthorReference(post.author_id)))
                continue
            expanded.append(
                post.with_author(
                    ExpandedAuthor(id=user.id, username=user.username, email=user.email)
                )
            )
        return expanded

    def expand_one(self, post: Post) -> Post:
        return self.expand([post])[0]
