# schemas/post_schema.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from blog_api.models.enums import PostStatus
from blog_api.schemas.common_schema import MAX_SQL_INT, PaginationOut, UTCDateTime

_http_url = TypeAdapter(HttpUrl)

# UPDATE 시 SET 절에 들어가는 순서 (고정)
PATCH_FIELDS = (
    "title",
    "content",
    "excerpt",
    "author",
    "status",
    "featured_image",
    "tags",
    "category_id",
)


def _check_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    try:
        _http_url.validate_python(v)
    except PydanticValidationError:
        raise ValueError("featured_image must be a valid URL") from None
    return v


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    author: str = Field(..., min_length=1, max_length=100)
    status: PostStatus = PostStatus.draft
    featured_image: Optional[str] = None
    tags: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1, le=MAX_SQL_INT)

    @field_validator("featured_image")
    @classmethod
    def validate_featured_image(cls, v):
        return _check_url(v)


class PostUpdate(BaseModel):
    """Partial patch: only fields present in the request body are written."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[PostStatus] = None
    featured_image: Optional[str] = None
    tags: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1, le=MAX_SQL_INT)

    @field_validator("title", "content", "author", "status", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    @field_validator("featured_image")
    @classmethod
    def validate_featured_image(cls, v):
        return _check_url(v)

    def supplied(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in PATCH_FIELDS if name in self.model_fields_set}


class PostOut(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    author: str
    status: PostStatus
    featured_image: Optional[str] = None
    tags: str = ""
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime
    published_at: Optional[UTCDateTime] = None

    model_config = {"from_attributes": True}

    @field_validator("tags", mode="before")
    @classmethod
    def tags_default(cls, v):
        return v or ""


class PostEnvelope(BaseModel):
    post: PostOut


class PostListEnvelope(BaseModel):
    posts: List[PostOut]
    pagination: PaginationOut
