import enum

class PostStatus(str, enum.Enum):
    draft     = "draft"
    published = "published"

class CommentStatus(str, enum.Enum):
    pending  = "pending"
    approved = "approved"
    rejected = "rejected"
