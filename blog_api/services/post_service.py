# services/post_service.py
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from blog_api.common.text import make_excerpt, slugify
from blog_api.errors import NotFoundError, ValidationError, field_error
from blog_api.models import Category, Post, PostStatus
from blog_api.schemas.post_schema import PostCreate, PostOut, PostUpdate
from blog_api.services.db_service import storage_errors
from blog_api.services.query_builder import PostListQuery, fetch_page
from blog_api.settings import settings

POST_CONFLICT = "A post with this title already exists"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_post_out(post: Post, category_name: Optional[str] = None, category_slug: Optional[str] = None) -> PostOut:
    out = PostOut.model_validate(post)
    return out.model_copy(update={"category_name": category_name, "category_slug": category_slug})


def _slug_or_error(title: str) -> str:
    slug = slugify(title)
    if not slug:
        raise ValidationError(details=[field_error("title", "title must contain at least one letter or digit")])
    return slug


class PostService:

    # 목록 조회 (필터 + 페이지네이션)
    def list_posts(self, db: Session, query: PostListQuery) -> Tuple[List[PostOut], int]:
        logger.info(f"[PostService] Method : list_posts")
        with storage_errors(db, "fetch posts"):
            rows, total = fetch_page(db, query)
        return [to_post_out(r.Post, r.category_name, r.category_slug) for r in rows], total

    def _fetch_one(self, db: Session, *where) -> Optional[PostOut]:
        stmt = (
            select(Post, Category.name.label("category_name"), Category.slug.label("category_slug"))
            .select_from(Post)
            .outerjoin(Category, Post.category_id == Category.id)
            .where(*where)
            .execution_options(populate_existing=True)
        )
        row = db.execute(stmt).first()
        if row is None:
            return None
        return to_post_out(row.Post, row.category_name, row.category_slug)

    # 공개 단건 조회 (slug 기준, published 만)
    def get_published_post(self, db: Session, slug: str) -> PostOut:
        logger.info(f"[PostService] Method : get_published_post")
        with storage_errors(db, "fetch post"):
            post = self._fetch_one(db, Post.slug == slug, Post.status == PostStatus.published)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    # 관리자 단건 조회 (id 기준, 상태 무관)
    def get_post(self, db: Session, post_id: int) -> PostOut:
        logger.info(f"[PostService] Method : get_post")
        with storage_errors(db, "fetch post"):
            post = self._fetch_one(db, Post.id == post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    # POST 생성
    def create_post(self, db: Session, payload: PostCreate) -> PostOut:
        logger.info(f"[PostService] Method : create_post")
        slug = _slug_or_error(payload.title)
        now = utcnow()
        post = Post(
            title=payload.title,
            slug=slug,
            content=payload.content,
            excerpt=payload.excerpt or make_excerpt(payload.content, settings.EXCERPT_LENGTH),
            author=payload.author,
            status=payload.status,
            featured_image=payload.featured_image,
            tags=payload.tags or "",
            category_id=payload.category_id,
            created_at=now,
            updated_at=now,
            published_at=now if payload.status == PostStatus.published else None,
        )
        with storage_errors(db, "create post", POST_CONFLICT, fk_field="category_id"):
            db.add(post)
            db.commit()
        return self.get_post(db, post.id)

    # POST 수정 (부분 업데이트)
    def update_post(self, db: Session, post_id: int, payload: PostUpdate) -> PostOut:
        logger.info(f"[PostService] Method : update_post")
        now = utcnow()
        values = {}
        for name, value in payload.supplied().items():
            if name == "title":
                values["title"] = value
                values["slug"] = _slug_or_error(value)
            else:
                values[name] = value
        values["updated_at"] = now
        # published 로 저장될 때마다 published_at 재설정 (기존 동작 유지)
        if payload.status == PostStatus.published:
            values["published_at"] = now

        with storage_errors(db, "update post", POST_CONFLICT, fk_field="category_id"):
            result = db.execute(update(Post).where(Post.id == post_id).values(**values))
            db.commit()
        if result.rowcount == 0:
            raise NotFoundError("Post not found")
        return self.get_post(db, post_id)

    # POST 삭제 (comments 는 FK ON DELETE CASCADE)
    def delete_post(self, db: Session, post_id: int) -> int:
        logger.info(f"[PostService] Method : delete_post")
        with storage_errors(db, "delete post"):
            result = db.execute(delete(Post).where(Post.id == post_id))
            db.commit()
        if result.rowcount == 0:
            raise NotFoundError("Post not found")
        return post_id
