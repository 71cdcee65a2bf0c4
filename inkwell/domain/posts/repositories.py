# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol

from .entities import ImageUpload, Post, PostDraft


class PostRepository(Protocol):
    def get(self, post_id: str) -> Post | None: ...

    def page(
        self, *, author_id: str | None, offset: int, limit: int
    ) -> tuple[Sequence[Post], int]: ...

    def add(self, author_id: str, draft: PostDraft) -> Post: ...

    def update(self, post_id: str, draft: PostDraft) -> Post | None: ...

    def delete(self, post_id: str) -> bool: ...


class ImageStaging(Protocol):
    def stage(self, upload: ImageUpload) -> AbstractContextManager[Path]: ...


class MediaUploader(Protocol):
    def upload(self, path: Path, *, filename: str) -> str: ...
