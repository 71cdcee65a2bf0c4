# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for post listing and post CRUD endpoints."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from inkwell.application.use_cases.posts.create_post import CreatePostUseCase
from inkwell.application.use_cases.posts.delete_post import DeletePostUseCase
from inkwell.application.use_cases.posts.get_post import GetPostUseCase
from inkwell.application.use_cases.posts.list_posts import ListPostsQuery, ListPostsUseCase
from inkwell.application.use_cases.posts.update_post import UpdatePostUseCase
from inkwell.domain.posts.entities import ImageUpload
from inkwell.domain.users.entities import User
from inkwell.interfaces.http.auth import BearerAuth
from inkwell.interfaces.http.dto.posts import PostDTO, PostFormDTO, PostPageDTO
from inkwell.shared.errors.validation import raise_validation_error
from inkwell.shared.logging import logger


def _read_form() -> PostFormDTO:
    if request.form:
        raw = request.form.to_dict()
    else:
        raw = request.get_json(silent=True) or {}
    try:
        return PostFormDTO.model_validate(raw)
    except ValidationError as exc:
        raise_validation_error(exc)


def _read_image() -> ImageUpload | None:
    file = request.files.get("image")
    if file is None or not file.filename:
        return None
    return ImageUpload(filename=file.filename, content_type=file.mimetype, stream=file.stream)


class PostsController:
    """Controller exposing the post endpoints under ``/api/posts``."""

    def __init__(
        self,
        *,
        auth: BearerAuth,
        list_posts: ListPostsUseCase,
        get_post: GetPostUseCase,
        create_post: CreatePostUseCase,
        update_post: UpdatePostUseCase,
        delete_post: DeletePostUseCase,
    ) -> None:
        self._auth = auth
        self._list_posts = list_posts
        self._get_post = get_post
        self._create_post = create_post
        self._update_post = update_post
        self._delete_post = delete_post

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("posts", __name__, url_prefix="/api/posts")

        bp.add_url_rule("", view_func=self.list_posts, methods=["GET"], endpoint="posts_list")
        bp.add_url_rule(
            "",
            view_func=self._auth.required(self.create_post),
            methods=["POST"],
            endpoint="post_create",
        )
        bp.add_url_rule(
            "/<post_id>", view_func=self.get_post, methods=["GET"], endpoint="post_get"
        )
        bp.add_url_rule(
            "/<post_id>",
            view_func=self._auth.required(self.update_post),
            methods=["PUT"],
            endpoint="post_update",
        )
        bp.add_url_rule(
            "/<post_id>",
            view_func=self._auth.required(self.delete_post),
            methods=["DELETE"],
            endpoint="post_delete",
        )
        return bp

    def list_posts(self) -> Response:
        query = ListPostsQuery(
            page=request.args.get("page"),
            page_size=request.args.get("limit"),
            author_id=request.args.get("author") or None,
        )
        page = self._list_posts.execute(query)
        return jsonify(PostPageDTO.from_domain(page).to_json())

    def get_post(self, post_id: str) -> Response:
        post = self._get_post.execute(post_id)
        return jsonify(PostDTO.from_domain(post).to_json())

    def create_post(self, user: User) -> tuple[Response, int]:
        form = _read_form()
        image = _read_image()
        logger.info(f"posts.create: start (user_id={user.id}, image={image is not None})")
        post = self._create_post.execute(user, form.title, form.content, image)
        return jsonify(PostDTO.from_domain(post).to_json()), 201

    def update_post(self, post_id: str, user: User) -> Response:
        # Ownership is settled before the body is looked at.
        self._update_post.authorize(post_id, user)
        form = _read_form()
        image = _read_image()
        logger.info(
            f"posts.update: start (post_id={post_id}, user_id={user.id}, "
            f"image={image is not None})"
        )
        post = self._update_post.execute(post_id, user, form.title, form.content, image)
        return jsonify(PostDTO.from_domain(post).to_json())

    def delete_post(self, post_id: str, user: User) -> Response:
        self._delete_post.execute(post_id, user)
        return jsonify({"success": True, "message": "Post deleted"})


__all__ = ["PostsController"]
