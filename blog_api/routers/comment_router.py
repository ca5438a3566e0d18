# routers/comment_router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blog_api.auth import require_admin
from blog_api.models import CommentStatus
from blog_api.routers.params import IdPath, PageQuery
from blog_api.schemas.comment_schema import (
    CommentCreate,
    CommentEnvelope,
    CommentListEnvelope,
    CommentStatusEnvelope,
    CommentStatusUpdate,
    ModerationQueueEnvelope,
)
from blog_api.services.comment_service import CommentService
from blog_api.services.db_service import get_db
from blog_api.services.query_builder import CommentListQuery, Pagination
from blog_api.settings import settings

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])
comment_service = CommentService()


def _pagination(page: int, limit: Optional[int]) -> Pagination:
    return Pagination.clamped(page, limit or settings.DEFAULT_COMMENT_PAGE_SIZE)


# 공개 댓글 목록 (approved)
@router.get("/{post_id}/comments", response_model=CommentListEnvelope)
def list_post_comments(
    post_id: IdPath,
    page: PageQuery = 1,
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    pagination = _pagination(page, limit)
    comments, total = comment_service.list_post_comments(db, post_id, pagination)
    return {"comments": comments, "pagination": pagination.to_dict(total)}


# 댓글 작성 (pending 으로 저장)
@router.post("/{post_id}/comments", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
def create_comment(post_id: IdPath, payload: CommentCreate, db: Session = Depends(get_db)):
    return {"comment": comment_service.create_comment(db, post_id, payload)}


# 모더레이션 큐
@admin_router.get("", response_model=ModerationQueueEnvelope)
def list_comments(
    status_filter: CommentStatus = Query(CommentStatus.pending, alias="status"),
    page: PageQuery = 1,
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    pagination = _pagination(page, limit)
    query = CommentListQuery(status=status_filter, pagination=pagination)
    comments, total = comment_service.list_comments(db, query)
    return {"comments": comments, "pagination": pagination.to_dict(total)}


# 모더레이션 결정
@admin_router.put("/{comment_id}/status", response_model=CommentStatusEnvelope)
def update_comment_status(comment_id: IdPath, payload: CommentStatusUpdate, db: Session = Depends(get_db)):
    comment = comment_service.update_comment_status(db, comment_id, payload)
    return {"message": "Comment status updated successfully", "comment": comment}
