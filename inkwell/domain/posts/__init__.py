# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    Author,
    AuthorReference,
    ExpandedAuthor,
    ImageUpload,
    PageRequest,
    Post,
    PostDraft,
    PostPage,
)
from .exceptions import MediaUploadError, NotPostAuthorError, PostNotFoundError
from .policies import authorize_mutation, is_author

__all__ = [
    "Author",
    "AuthorReference",
    "ExpandedAuthor",
    "ImageUpload",
    "MediaUploadError",
    "NotPostAuthorError",
    "PageRequest",
    "Post",
    "PostDraft",
    "PostNotFoundError",
    "PostPage",
    "authorize_mutation",
    "is_author",
]
