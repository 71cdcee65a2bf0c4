# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from inkwell.domain.identifiers import is_well_formed_id
from inkwell.domain.posts.entities import PageRequest, PostPage
from inkwell.domain.posts.repositories import PostRepository
from inkwell.shared.logging import logger

from .authors import AuthorResolver


@dataclass(slots=True, frozen=True)
class ListPostsQuery:
    page: object = None
    page_size: object = None
    author_id: str | None = None


class ListPostsUseCase:
    """Newest-first listing with optional author filter.

    Pages are 1-based. A page past the end comes back empty with the real
    totals, never as an error.
    """

    def __init__(
        self,
        *,
        posts: PostRepository,
        authors: AuthorResolver,
        default_page_size: int = 6,
    ) -> None:
        self._posts = posts
        self._authors = authors
        self._default_page_size = default_page_size

    def execute(self, query: ListPostsQuery) -> PostPage:
        request = PageRequest.normalize(
            query.page,
            query.page_size,
            default_size=self._default_page_size,
        )
        author_id = query.author_id or None
        if author_id is not None and not is_well_formed_id(author_id):
            logger.debug("posts.list: malformed author filter, empty result")
            return PostPage(
                items=[],
                total_count=0,
                current_page=request.page,
                page_size=request.page_size,
            )

        items, total = self._posts.page(
            author_id=author_id, offset=request.offset, limit=request.limit
        )
        page = PostPage(
            items=self._authors.expand(items),
            total_count=total,
            current_page=request.page,
            page_size=request.page_size,
        )
        logger.debug(
            f"posts.list: ok page={page.current_page} size={page.page_size} "
            f"n={len(page.items)} total={page.total_count} author={author_id}"
        )
        return page
