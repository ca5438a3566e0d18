# services/comment_service.py
from datetime import datetime, timezone
from typing import List, Tuple

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from blog_api.errors import NotFoundError
from blog_api.models import Comment, CommentStatus, Post, PostStatus
from blog_api.schemas.comment_schema import (
    CommentCreate,
    CommentOut,
    CommentStatusUpdate,
    ModerationCommentOut,
)
from blog_api.services.db_service import storage_errors
from blog_api.services.query_builder import CommentListQuery, Pagination, fetch_page


class CommentService:

    # 공개 댓글 목록 (approved 만, 작성순)
    def list_post_comments(self, db: Session, post_id: int, pagination: Pagination) -> Tuple[List[CommentOut], int]:
        logger.info(f"[CommentService] Method : list_post_comments")
        query = CommentListQuery(status=CommentStatus.approved, post_id=post_id, pagination=pagination)
        with storage_errors(db, "fetch comments"):
            rows, total = fetch_page(db, query)
        return [CommentOut.model_validate(r.Comment) for r in rows], total

    # 글 상세에 붙는 approved 댓글 전체
    def approved_for_post(self, db: Session, post_id: int) -> List[CommentOut]:
        logger.info(f"[CommentService] Method : approved_for_post")
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id, Comment.status == CommentStatus.approved)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        with storage_errors(db, "fetch comments"):
            comments = db.scalars(stmt).all()
        return [CommentOut.model_validate(c) for c in comments]

    # 댓글 작성 (published 글에만, 항상 pending)
    def create_comment(self, db: Session, post_id: int, payload: CommentCreate) -> CommentOut:
        logger.info(f"[CommentService] Method : create_comment")
        with storage_errors(db, "create comment"):
            exists = db.scalar(
                select(Post.id).where(Post.id == post_id, Post.status == PostStatus.published)
            )
        if exists is None:
            raise NotFoundError("Post not found")

        comment = Comment(
            post_id=post_id,
            author_name=payload.author_name,
            author_email=str(payload.author_email),
            content=payload.content,
            status=CommentStatus.pending,
            created_at=datetime.now(timezone.utc),
        )
        with storage_errors(db, "create comment"):
            db.add(comment)
            db.commit()
            db.refresh(comment)
        return CommentOut.model_validate(comment)

    # 관리자 모더레이션 큐
    def list_comments(self, db: Session, query: CommentListQuery) -> Tuple[List[ModerationCommentOut], int]:
        logger.info(f"[CommentService] Method : list_comments")
        with storage_errors(db, "fetch comments"):
            rows, total = fetch_page(db, query)
        return [
            ModerationCommentOut.model_validate(r.Comment).model_copy(
                update={"post_title": r.post_title, "post_slug": r.post_slug}
            )
            for r in rows
        ], total

    # 모더레이션 결정
    def update_comment_status(self, db: Session, comment_id: int, payload: CommentStatusUpdate) -> CommentOut:
        logger.info(f"[CommentService] Method : update_comment_status")
        with storage_errors(db, "update comment status"):
            result = db.execute(
                update(Comment).where(Comment.id == comment_id).values(status=payload.status)
            )
            db.commit()
        if result.rowcount == 0:
            raise NotFoundError("Comment not found")

        with storage_errors(db, "fetch comment"):
            comment = db.scalar(
                select(Comment).where(Comment.id == comment_id).execution_options(populate_existing=True)
            )
        return CommentOut.model_validate(comment)
