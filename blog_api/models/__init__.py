from blog_api.db import Base  # 같은 Base 공유

# 등록용 임포트 (누락되면 create_all 에서 테이블이 빠짐)
from .enums import PostStatus, CommentStatus
from .category import Category
from .post import Post
from .comment import Comment

__all__ = [
    "Base",
    "PostStatus", "CommentStatus",
    "Category", "Post", "Comment",
]
