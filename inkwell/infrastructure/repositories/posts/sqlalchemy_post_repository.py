# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select

from inkwell.domain.posts.entities import AuthorReference
from inkwell.domain.posts.entities import Post as DomainPost
from inkwell.domain.posts.entities import PostDraft
from inkwell.domain.posts.repositories import PostRepository
from inkwell.infrastructure.db.models import Post
from inkwell.infrastructure.db.session import session_scope
from inkwell.infrastructure.repositories.users.sqlalchemy_user_repository import as_utc


def _to_domain(row: Post) -> DomainPost:
    return DomainPost(
        id=row.id,
        title=row.title,
        content=row.content,
        image_url=row.image_url,
        author=AuthorReference(row.author_id),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyPostRepository(PostRepository):
    def get(self, post_id: str) -> DomainPost | None:
        with session_scope() as session:
            row = session.scalars(select(Post).where(Post.id == post_id)).first()
            return _to_domain(row) if row else None

    def page(
        self, *, author_id: str | None, offset: int, limit: int
    ) -> tuple[Sequence[DomainPost], int]:
        items_stmt = select(Post)
        count_stmt = select(func.count()).select_from(Post)
        if author_id is not None:
            items_stmt = items_stmt.where(Post.author_id == author_id)
            count_stmt = count_stmt.where(Post.author_id == author_id)
        items_stmt = (
            items_stmt.order_by(Post.created_at.desc(), Post.seq.asc())
            .offset(offset)
            .limit(limit)
        )

        with session_scope() as session:
            total = int(session.scalar(count_stmt) or 0)
            rows = session.scalars(items_stmt).all() if offset < total else []
            return [_to_domain(row) for row in rows], total

    def add(self, author_id: str, draft: PostDraft) -> DomainPost:
        with session_scope() as session:
            row = Post(
                title=draft.title,
                content=draft.content,
                image_url=draft.image_url,
                author_id=author_id,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def update(self, post_id: str, draft: PostDraft) -> DomainPost | None:
        with session_scope() as session:
            row = session.scalars(select(Post).where(Post.id == post_id)).first()
            if row is None:
                return None
            row.title = draft.title
            row.content = draft.content
            row.image_url = draft.image_url
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def delete(self, post_id: str) -> bool:
        with session_scope() as session:
            result = session.execute(delete(Post).where(Post.id == post_id))
            return bool(result.rowcount)
