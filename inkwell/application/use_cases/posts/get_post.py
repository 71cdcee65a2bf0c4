# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.domain.identifiers import is_well_formed_id
from inkwell.domain.posts.entities import Post
from inkwell.domain.posts.exceptions import PostNotFoundError
from inkwell.domain.posts.repositories import PostRepository

from .authors import AuthorResolver


def load_post(posts: PostRepository, post_id: str) -> Post:
    """Fetch the stored record or raise ``PostNotFoundError``."""

    if not is_well_formed_id(post_id):
        raise PostNotFoundError()
    post = posts.get(post_id)
    if post is None:
        raise PostNotFoundError()
    return post


class GetPostUseCase:
    def __init__(self, *, posts: PostRepository, authors: AuthorResolver) -> None:
        self._posts = posts
        self._authors = authors

    def execute(self, post_id: str) -> Post:
        return self._authors.expand_one(load_post(self._posts, post_id))
