# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.posts import (
    AttachmentStore,
    AuthorResolver,
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsQuery,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from .use_cases.users import (
    AuthenticateUserUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
)

__all__ = [
    "AttachmentStore",
    "AuthenticateUserUseCase",
    "AuthorResolver",
    "CreatePostUseCase",
    "DeletePostUseCase",
    "GetPostUseCase",
    "ListPostsQuery",
    "ListPostsUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "UpdatePostUseCase",
]
