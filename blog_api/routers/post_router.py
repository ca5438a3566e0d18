# routers/post_router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blog_api.auth import require_admin
from blog_api.models import PostStatus
from blog_api.routers.params import IdPath, PageQuery
from blog_api.schemas.common_schema import MessageOut
from blog_api.schemas.post_schema import PostCreate, PostEnvelope, PostListEnvelope, PostUpdate
from blog_api.services.comment_service import CommentService
from blog_api.services.db_service import get_db
from blog_api.services.post_service import PostService
from blog_api.services.query_builder import Pagination, PostListQuery
from blog_api.settings import settings

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])
post_service = PostService()
comment_service = CommentService()


def _pagination(page: int, limit: Optional[int]) -> Pagination:
    return Pagination.clamped(page, limit or settings.DEFAULT_POST_PAGE_SIZE)


# 공개 목록 (published 만)
@router.get("", response_model=PostListEnvelope)
def list_posts(
    page: PageQuery = 1,
    limit: Optional[int] = Query(None, ge=1),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    pagination = _pagination(page, limit)
    query = PostListQuery(
        status=PostStatus.published,
        category=category,
        search=search,
        pagination=pagination,
    )
    posts, total = post_service.list_posts(db, query)
    return {"posts": posts, "pagination": pagination.to_dict(total)}


# 공개 단건 (slug), ?comments=true 면 approved 댓글 포함
@router.get("/{slug}")
def get_post_by_slug(
    slug: str,
    comments: bool = Query(False),
    db: Session = Depends(get_db),
):
    post = post_service.get_published_post(db, slug)
    if comments:
        return {"post": post, "comments": comment_service.approved_for_post(db, post.id)}
    return {"post": post}


# 관리자 목록 (status 필터, 없으면 전체)
@admin_router.get("", response_model=PostListEnvelope)
def admin_list_posts(
    status_filter: Optional[PostStatus] = Query(None, alias="status"),
    page: PageQuery = 1,
    limit: Optional[int] = Query(None, ge=1),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    pagination = _pagination(page, limit)
    query = PostListQuery(
        status=status_filter,
        category=category,
        search=search,
        pagination=pagination,
    )
    posts, total = post_service.list_posts(db, query)
    return {"posts": posts, "pagination": pagination.to_dict(total)}


@admin_router.get("/{post_id}", response_model=PostEnvelope)
def admin_get_post(post_id: IdPath, db: Session = Depends(get_db)):
    return {"post": post_service.get_post(db, post_id)}


# POST 생성
@admin_router.post("", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
def create_post(payload: PostCreate, db: Session = Depends(get_db)):
    return {"post": post_service.create_post(db, payload)}


# POST 수정
@admin_router.put("/{post_id}", response_model=PostEnvelope)
def update_post(post_id: IdPath, payload: PostUpdate, db: Session = Depends(get_db)):
    return {"post": post_service.update_post(db, post_id, payload)}


# POST 삭제
@admin_router.delete("/{post_id}", response_model=MessageOut)
def delete_post(post_id: IdPath, db: Session = Depends(get_db)):
    post_service.delete_post(db, post_id)
    return {"message": "Post deleted successfully"}
