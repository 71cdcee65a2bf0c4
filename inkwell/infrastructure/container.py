# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from inkwell.application.services.password_hashing import WerkzeugPasswordHasher
from inkwell.application.use_cases.posts.attachments import AttachmentStore
from inkwell.application.use_cases.posts.authors import AuthorResolver
from inkwell.application.use_cases.posts.create_post import CreatePostUseCase
from inkwell.application.use_cases.posts.delete_post import DeletePostUseCase
from inkwell.application.use_cases.posts.get_post import GetPostUseCase
from inkwell.application.use_cases.posts.list_posts import ListPostsUseCase
from inkwell.application.use_cases.posts.update_post import UpdatePostUseCase
from inkwell.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from inkwell.application.use_cases.users.login_user import LoginUserUseCase
from inkwell.application.use_cases.users.register_user import RegisterUserUseCase
from inkwell.domain.posts.repositories import MediaUploader
from inkwell.infrastructure.auth.jwt_tokens import JwtTokenService
from inkwell.infrastructure.media import TemporaryImageStaging, build_media_uploader
from inkwell.infrastructure.repositories.posts.sqlalchemy_post_repository import (
    SqlAlchemyPostRepository,
)
from inkwell.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from inkwell.interfaces.http.auth import BearerAuth
from inkwell.interfaces.http.controllers.auth_controller import AuthController
from inkwell.interfaces.http.controllers.misc_controller import MiscController
from inkwell.interfaces.http.controllers.posts_controller import PostsController
from inkwell.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self.config.jwt_secret,
            algorithm=self.config.auth.jwt_algorithm,
            ttl=timedelta(days=self.config.auth.token_ttl_days),
        )

    @cached_property
    def media_uploader(self) -> MediaUploader:
        return build_media_uploader(self.config)

    @cached_property
    def image_staging(self) -> TemporaryImageStaging:
        return TemporaryImageStaging(
            self.config.media.tmp_dir, max_bytes=self.config.media.max_image_bytes
        )

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def post_repository(self) -> SqlAlchemyPostRepository:
        return SqlAlchemyPostRepository()

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(users=self.user_repository, tokens=self.token_service)

    # Post use cases

    @cached_property
    def author_resolver(self) -> AuthorResolver:
        return AuthorResolver(self.user_repository)

    @cached_property
    def attachment_store(self) -> AttachmentStore:
        return AttachmentStore(staging=self.image_staging, uploader=self.media_uploader)

    @cached_property
    def list_posts_use_case(self) -> ListPostsUseCase:
        return ListPostsUseCase(
            posts=self.post_repository,
            authors=self.author_resolver,
            default_page_size=self.config.posts.page_size,
        )

    @cached_property
    def get_post_use_case(self) -> GetPostUseCase:
        return GetPostUseCase(posts=self.post_repository, authors=self.author_resolver)

    @cached_property
    def create_post_use_case(self) -> CreatePostUseCase:
        return CreatePostUseCase(
            posts=self.post_repository,
            attachments=self.attachment_store,
            authors=self.author_resolver,
        )

    @cached_property
    def update_post_use_case(self) -> UpdatePostUseCase:
        return UpdatePostUseCase(
            posts=self.post_repository,
            attachments=self.attachment_store,
            authors=self.author_resolver,
        )

    @cached_property
    def delete_post_use_case(self) -> DeletePostUseCase:
        return DeletePostUseCase(posts=self.post_repository)

    # Controllers

    @cached_property
    def bearer_auth(self) -> BearerAuth:
        return BearerAuth(self.authenticate_user_use_case)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def posts_controller(self) -> PostsController:
        return PostsController(
            auth=self.bearer_auth,
            list_posts=self.list_posts_use_case,
            get_post=self.get_post_use_case,
            create_post=self.create_post_use_case,
            update_post=self.update_post_use_case,
            delete_post=self.delete_post_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        upload_dir = self.config.media.upload_dir if self.config.media.backend == "local" else None
        return MiscController(upload_dir=upload_dir)
