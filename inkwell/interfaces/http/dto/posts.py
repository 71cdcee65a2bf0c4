# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from inkwell.domain.posts.entities import Author, ExpandedAuthor, Post, PostPage


class PostFormDTO(BaseModel):
    """Text fields of a create/update form; the image travels separately."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(min_length=3, max_length=100)
    content: str = Field(min_length=10)


class AuthorDTO(BaseModel):
    id: str = Field(serialization_alias="_id")
    username: str
    email: str


class PostDTO(BaseModel):
    id: str = Field(serialization_alias="_id")
    title: str
    content: str
    image_url: str | None = Field(None, serialization_alias="imageUrl")
    # Unresolved authors serialize as the bare id.
    author: Union[AuthorDTO, str]
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @staticmethod
    def _author(author: Author) -> AuthorDTO | str:
        if isinstance(author, ExpandedAuthor):
            return AuthorDTO(id=author.id, username=author.username, email=author.email)
        return author.id

    @classmethod
    def from_domain(cls, post: Post) -> PostDTO:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            image_url=post.image_url,
            author=cls._author(post.author),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PostPageDTO(BaseModel):
    posts: list[PostDTO]
    total_pages: int = Field(serialization_alias="totalPages")
    current_page: int = Field(serialization_alias="currentPage")
    total_posts: int = Field(serialization_alias="totalPosts")

    @classmethod
    def from_domain(cls, page: PostPage) -> PostPageDTO:
        return cls(
            posts=[PostDTO.from_domain(post) for post in page.items],
            total_pages=page.total_pages,
            current_page=page.current_page,
            total_posts=page.total_count,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["AuthorDTO", "PostDTO", "PostFormDTO", "PostPageDTO"]
