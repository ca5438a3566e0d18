from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, Text, DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from blog_api.db import Base
from blog_api.models.enums import PostStatus


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[Optional[str]] = mapped_column(Text)
    author: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, name="post_status", native_enum=False, create_constraint=True, length=16),
        default=PostStatus.draft,
        server_default=PostStatus.draft.value,
        nullable=False,
    )
    featured_image: Mapped[Optional[str]] = mapped_column(String(2048))
    tags: Mapped[Optional[str]] = mapped_column(Text)
    # 카테고리 삭제 시 글은 남기고 연결만 끊음
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_posts_slug", "slug"),
        Index("idx_posts_status", "status"),
        Index("idx_posts_published_at", "published_at"),
        Index("idx_posts_category", "category_id"),
    )

    def __repr__(self) -> str:
        return f"<Post id={self.id} slug={self.slug} status={self.status.value}>"
