# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.domain.posts.entities import ImageUpload, Post, PostDraft
from inkwell.domain.posts.repositories import PostRepository
from inkwell.domain.users.entities import User
from inkwell.shared.logging import logger

from .attachments import AttachmentStore
from .authors import AuthorResolver


class CreatePostUseCase:
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

    def execute(
        self,
        requester: User,
        title: str,
        content: str,
        image: ImageUpload | None = None,
    ) -> Post:
        # The upload happens before anything is persisted; a failure leaves no post.
        image_url = self._attachments.store(image) if image is not None else None
        post = self._posts.add(
            requester.id,
            PostDraft(title=title, content=content, image_url=image_url),
        )
        logger.info(
            f"posts.create: ok post_id={post.id} user_id={requester.id} "
            f"image={image_url is not None}"
        )
        return self._authors.expand_one(post)
