# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.domain.posts.entities import ImageUpload, Post, PostDraft
from inkwell.domain.posts.exceptions import PostNotFoundError
from inkwell.domain.posts.policies import authorize_mutation
from inkwell.domain.posts.repositories import PostRepository
from inkwell.domain.users.entities import User
from inkwell.shared.logging import logger

from .attachments import AttachmentStore
from .authors import AuthorResolver
from .get_post import load_post


class UpdatePostUseCase:
    def __init__(
        self,
        *,
        posts: PostRepository,
        attachments: AttachmentStore,
        authors: AuthorResolver,
    ) -> None:
        self._posts = posts
        self._attachments = attachments
        self._authors = authors

    def authorize(self, post_id: str, requester: User) -> Post:
        """Load the stored post and fail unless ``requester`` wrote it."""

        existing = load_post(self._posts, post_id)
        authorize_mutation(existing, requester.id, action="update")
        return existing

    def execute(
        self,
        post_id: str,
        requester: User,
        title: str,
        content: str,
        image: ImageUpload | None = None,
    ) -> Post:
        existing = self.authorize(post_id, requester)

        # The previous image is left where it is; only the reference changes.
        image_url = existing.image_url
        if image is not None:
            image_url = self._attachments.store(image)

        updated = self._posts.update(
            existing.id,
            PostDraft(title=title, content=content, image_url=image_url),
        )
        if updated is None:
            # Deleted between the ownership check and the write.
            raise PostNotFoundError()
        logger.info(f"posts.update: ok post_id={updated.id} user_id={requester.id}")
        return self._authors.expand_one(updated)
