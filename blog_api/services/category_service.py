# services/category_service.py
from datetime import datetime, timezone
from typing import List

from loguru import logger
from sqlalchemy import and_, delete, func, select
from sqlalchemy.orm import Session

from blog_api.common.text import slugify
from blog_api.errors import NotFoundError, ValidationError, field_error
from blog_api.models import Category, Post, PostStatus
from blog_api.schemas.category_schema import CategoryCreate, CategoryOut, CategoryWithCountOut
from blog_api.services.db_service import storage_errors

CATEGORY_CONFLICT = "A category with this name already exists"


class CategoryService:

    # CATEGORY 목록 (published 글 수 포함, 이름순)
    def list_categories(self, db: Session) -> List[CategoryWithCountOut]:
        logger.info(f"[CategoryService] Method : list_categories")
        stmt = (
            select(Category, func.count(Post.id).label("post_count"))
            .outerjoin(
                Post,
                and_(Post.category_id == Category.id, Post.status == PostStatus.published),
            )
            .group_by(Category.id)
            .order_by(Category.name)
        )
        with storage_errors(db, "fetch categories"):
            rows = db.execute(stmt).all()
        return [
            CategoryWithCountOut.model_validate(row.Category).model_copy(update={"post_count": row.post_count})
            for row in rows
        ]

    # CATEGORY 생성
    def create_category(self, db: Session, payload: CategoryCreate) -> CategoryOut:
        logger.info(f"[CategoryService] Method : create_category")
        slug = slugify(payload.name)
        if not slug:
            raise ValidationError(details=[field_error("name", "name must contain at least one letter or digit")])

        category = Category(
            name=payload.name,
            slug=slug,
            description=payload.description,
            created_at=datetime.now(timezone.utc),
        )
        with storage_errors(db, "create category", CATEGORY_CONFLICT):
            db.add(category)
            db.commit()
            db.refresh(category)
        return CategoryOut.model_validate(category)

    # CATEGORY 삭제 (글은 남고 category_id 만 NULL)
    def delete_category(self, db: Session, category_id: int) -> int:
        logger.info(f"[CategoryService] Method : delete_category")
        with storage_errors(db, "delete category"):
            result = db.execute(delete(Category).where(Category.id == category_id))
            db.commit()
        if result.rowcount == 0:
            raise NotFoundError("Category not found")
        return category_id
