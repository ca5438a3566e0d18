from typing import List, Optional

from pydantic import BaseModel, Field

from blog_api.schemas.common_schema import UTCDateTime


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    created_at: UTCDateTime

    model_config = {"from_attributes": True}


class CategoryWithCountOut(CategoryOut):
    post_count: int = 0


class CategoryEnvelope(BaseModel):
    category: CategoryOut


class CategoryListEnvelope(BaseModel):
    categories: List[CategoryWithCountOut]
