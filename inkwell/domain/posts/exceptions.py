# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.shared.errors import ForbiddenError, NotFoundError, UpstreamFailureError


class PostNotFoundError(NotFoundError):
    code = "post_not_found"
    message = "Post not found"


class NotPostAuthorError(ForbiddenError):
    code = "not_post_author"

    def __init__(self, action: str = "modify") -> None:
        super().__init__(message=f"Not authorized to {action} this post")


class MediaUploadError(UpstreamFailureError):
    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            "media_upload_failed",
            message="Image upload failed",
            context={"reason": reason} if reason else None,
        )
