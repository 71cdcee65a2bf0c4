# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.domain.posts.exceptions import PostNotFoundError
from inkwell.domain.posts.policies import authorize_mutation
from inkwell.domain.posts.repositories import PostRepository
from inkwell.domain.users.entities import User
from inkwell.shared.logging import logger

from .get_post import load_post


class DeletePostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, post_id: str, requester: User) -> None:
        existing = load_post(self._posts, post_id)
        authorize_mutation(existing, requester.id, action="delete")

        if not self._posts.delete(existing.id):
            raise PostNotFoundError()
        logger.info(f"posts.delete: ok post_id={existing.id} user_id={requester.id}")
