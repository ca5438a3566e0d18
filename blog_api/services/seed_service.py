# services/seed_service.py
from datetime import datetime, timezone
from typing import Dict

from sqlalchemy import select
from sqlalchemy.orm import Session

from blog_api.common.text import slugify
from blog_api.models import Category, Comment, CommentStatus, Post, PostStatus

SAMPLE_CATEGORIES = [
    ("Technology", "Articles about technology and programming"),
    ("Design", "UI/UX design and creative content"),
    ("Business", "Entrepreneurship and business insights"),
]

SAMPLE_POSTS = [
    {
        "title": "Getting Started with Serverless APIs",
        "content": (
            "Serverless platforms let you ship entirely new applications or augment existing ones "
            "without configuring or maintaining infrastructure. This guide walks through everything "
            "you need to know to get a small JSON API running."
        ),
        "excerpt": "Learn how to build serverless applications step by step",
        "author": "John Doe",
        "tags": "serverless,python,api",
        "category": "technology",
        "comments": [
            ("Alice Johnson", "alice@example.com", "Great introduction! Very helpful for beginners."),
            ("Bob Wilson", "bob@example.com", "Thanks for the detailed explanation. Looking forward to more tutorials."),
        ],
    },
    {
        "title": "Modern API Design Principles",
        "content": (
            "APIs are the backbone of modern applications. In this article, we explore the fundamental "
            "principles of designing robust, scalable, and developer-friendly APIs that stand the test of time."
        ),
        "excerpt": "Essential principles for designing modern, scalable APIs",
        "author": "Jane Smith",
        "tags": "api,design,rest,graphql",
        "category": "technology",
        "comments": [
            ("Charlie Brown", "charlie@example.com", "Excellent coverage of API design principles. The examples are very clear."),
        ],
    },
]


def seed_sample_data(db: Session) -> Dict[str, int]:
    """
    샘플 카테고리/글/댓글 삽입. slug 기준으로 이미 있으면 건너뜀.
    return: 새로 들어간 행 수
    """
    stats = {"categories": 0, "posts": 0, "comments": 0}
    now = datetime.now(timezone.utc)

    categories: Dict[str, Category] = {}
    for name, description in SAMPLE_CATEGORIES:
        slug = slugify(name)
        category = db.scalar(select(Category).where(Category.slug == slug))
        if category is None:
            category = Category(name=name, slug=slug, description=description, created_at=now)
            db.add(category)
            stats["categories"] += 1
        categories[slug] = category
    db.flush()

    for sample in SAMPLE_POSTS:
        slug = slugify(sample["title"])
        if db.scalar(select(Post.id).where(Post.slug == slug)) is not None:
            continue
        post = Post(
            title=sample["title"],
            slug=slug,
            content=sample["content"],
            excerpt=sample["excerpt"],
            author=sample["author"],
            status=PostStatus.published,
            tags=sample["tags"],
            category_id=categories[sample["category"]].id,
            created_at=now,
            updated_at=now,
            published_at=now,
        )
        db.add(post)
        db.flush()
        stats["posts"] += 1
        for author_name, author_email, content in sample["comments"]:
            db.add(Comment(
                post_id=post.id,
                author_name=author_name,
                author_email=author_email,
                content=content,
                status=CommentStatus.approved,
                created_at=now,
            ))
            stats["comments"] += 1

    db.commit()
    return stats
