# services/query_builder.py
"""
List queries for posts and comments.

Each query object turns optional filters into two SQLAlchemy statements:
a paginated ``select`` and a ``COUNT`` mirroring the same joins and WHERE
clauses. User input only ever reaches the database as bound parameters.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from blog_api.models import Category, Comment, CommentStatus, Post, PostStatus
from blog_api.settings import settings


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    limit: int = 10

    @classmethod
    def clamped(cls, page: int, limit: int, max_limit: Optional[int] = None) -> "Pagination":
        max_limit = max_limit or settings.MAX_PAGE_SIZE
        return cls(page=max(page, 1), limit=max(1, min(limit, max_limit)))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pages(self, total: int) -> int:
        return math.ceil(total / self.limit) if total else 0

    def to_dict(self, total: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "pages": self.pages(total),
        }


@dataclass
class PostListQuery:
    status: Optional[PostStatus] = PostStatus.published
    category: Optional[str] = None
    search: Optional[str] = None
    pagination: Pagination = field(default_factory=Pagination)

    def where_clauses(self) -> List[Any]:
        # 순서 고정: status -> category -> search
        clauses: List[Any] = []
        if self.status is not None:
            clauses.append(Post.status == self.status)
        if self.category:
            clauses.append(Category.slug == self.category)
        if self.search:
            clauses.append(
                or_(
                    Post.title.icontains(self.search, autoescape=True),
                    Post.content.icontains(self.search, autoescape=True),
                )
            )
        return clauses

    def select_stmt(self) -> Select:
        return (
            select(
                Post,
                Category.name.label("category_name"),
                Category.slug.label("category_slug"),
            )
            .select_from(Post)
            .outerjoin(Category, Post.category_id == Category.id)
            .where(*self.where_clauses())
            .order_by(Post.published_at.desc(), Post.created_at.desc(), Post.id.desc())
            .limit(self.pagination.limit)
            .offset(self.pagination.offset)
        )

    def count_stmt(self) -> Select:
        return (
            select(func.count(Post.id))
            .select_from(Post)
            .outerjoin(Category, Post.category_id == Category.id)
            .where(*self.where_clauses())
        )


@dataclass
class CommentListQuery:
    status: Optional[CommentStatus] = CommentStatus.approved
    post_id: Optional[int] = None
    pagination: Pagination = field(default_factory=lambda: Pagination(limit=20))

    def where_clauses(self) -> List[Any]:
        clauses: List[Any] = []
        if self.status is not None:
            clauses.append(Comment.status == self.status)
        if self.post_id is not None:
            clauses.append(Comment.post_id == self.post_id)
        return clauses

    def select_stmt(self) -> Select:
        return (
            select(
                Comment,
                Post.title.label("post_title"),
                Post.slug.label("post_slug"),
            )
            .select_from(Comment)
            .join(Post, Comment.post_id == Post.id)
            .where(*self.where_clauses())
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .limit(self.pagination.limit)
            .offset(self.pagination.offset)
        )

    def count_stmt(self) -> Select:
        return (
            select(func.count(Comment.id))
            .select_from(Comment)
            .join(Post, Comment.post_id == Post.id)
            .where(*self.where_clauses())
        )


def fetch_page(db: Session, query) -> Tuple[Sequence[Row], int]:
    """Run the page query, then the count query as a second round-trip."""
    rows = db.execute(query.select_stmt()).all()
    total = db.scalar(query.count_stmt()) or 0
    return rows, int(total)
