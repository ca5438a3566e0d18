from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from blog_api.models.enums import CommentStatus
from blog_api.schemas.common_schema import MAX_SQL_INT, PaginationOut, UTCDateTime


class CommentCreate(BaseModel):
    post_id: int = Field(..., ge=1, le=MAX_SQL_INT)
    author_name: str = Field(..., min_length=1, max_length=100)
    author_email: EmailStr
    content: str = Field(..., min_length=1, max_length=1000)


class CommentStatusUpdate(BaseModel):
    status: CommentStatus


class CommentOut(BaseModel):
    id: int
    post_id: int
    author_name: str
    author_email: str
    content: str
    status: CommentStatus
    created_at: UTCDateTime

    model_config = {"from_attributes": True}


class ModerationCommentOut(CommentOut):
    post_title: Optional[str] = None
    post_slug: Optional[str] = None


class CommentEnvelope(BaseModel):
    comment: CommentOut


class CommentStatusEnvelope(BaseModel):
    message: str
    comment: CommentOut


class CommentListEnvelope(BaseModel):
    comments: List[CommentOut]
    pagination: PaginationOut


class ModerationQueueEnvelope(BaseModel):
    comments: List[ModerationCommentOut]
    pagination: PaginationOut
