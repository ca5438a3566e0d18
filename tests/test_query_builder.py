from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.dialects import sqlite

from blog_api.models import Category, Comment, CommentStatus, Post, PostStatus
from blog_api.services.query_builder import CommentListQuery, Pagination, PostListQuery, fetch_page


def _compile(stmt):
    return stmt.compile(dialect=sqlite.dialect())


class TestPagination:

    def test_offset(self):
        assert Pagination(page=2, limit=10).offset == 10
        assert Pagination(page=1, limit=10).offset == 0
        assert Pagination(page=5, limit=20).offset == 80

    @pytest.mark.parametrize("total, limit, pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (45, 20, 3)])
    def test_pages_is_ceil(self, total, limit, pages):
        assert Pagination(page=1, limit=limit).pages(total) == pages

    def test_clamped_limit(self):
        p = Pagination.clamped(1, 10_000, max_limit=100)
        assert p.limit == 100

    def test_clamped_floor(self):
        p = Pagination.clamped(0, 0, max_limit=100)
        assert p.page == 1
        assert p.limit == 1

    def test_to_dict(self):
        assert Pagination(page=2, limit=10).to_dict(25) == {"page": 2, "limit": 10, "total": 25, "pages": 3}


class TestPostListQuery:

    def test_no_filters_except_status(self):
        q = PostListQuery()
        assert len(q.where_clauses()) == 1

    def test_filters_are_additive(self):
        q = PostListQuery(category="tech", search="api")
        assert len(q.where_clauses()) == 3

    def test_status_none_drops_clause(self):
        q = PostListQuery(status=None)
        assert q.where_clauses() == []

    def test_user_input_is_bound_not_inlined(self):
        q = PostListQuery(category="tech'; DROP TABLE posts; --", search="needle")
        compiled = _compile(q.select_stmt())
        sql = str(compiled)
        assert "DROP TABLE" not in sql
        assert "needle" not in sql
        assert "tech'; DROP TABLE posts; --" in compiled.params.values()

    def test_ordering(self):
        sql = str(_compile(PostListQuery().select_stmt()))
        assert "ORDER BY posts.published_at DESC, posts.created_at DESC, posts.id DESC" in sql

    def test_count_mirrors_filters_without_paging(self):
        q = PostListQuery(category="tech", search="api")
        count_sql = str(_compile(q.count_stmt()))
        assert "count(posts.id)" in count_sql
        assert "categories.slug" in count_sql
        assert "ORDER BY" not in count_sql
        assert "LIMIT" not in count_sql
        assert "OFFSET" not in count_sql


class TestCommentListQuery:

    def test_default_limit(self):
        assert CommentListQuery().pagination.limit == 20

    def test_ordering_is_chronological(self):
        sql = str(_compile(CommentListQuery().select_stmt()))
        assert "ORDER BY comments.created_at ASC, comments.id ASC" in sql


def _post(db, title, status=PostStatus.published, category=None, published_at=None, created_at=None, content="body"):
    now = datetime.now(timezone.utc)
    post = Post(
        title=title,
        slug=title.lower().replace(" ", "-").replace("%", "pct"),
        content=content,
        author="a",
        status=status,
        category_id=category.id if category else None,
        created_at=created_at or now,
        updated_at=now,
        published_at=published_at if status == PostStatus.published else None,
    )
    db.add(post)
    db.commit()
    return post


class TestFetchPage:

    def test_pagination_against_data(self, db_session):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(25):
            _post(db_session, f"Post {i}", published_at=base + timedelta(hours=i))

        rows, total = fetch_page(db_session, PostListQuery(pagination=Pagination(page=2, limit=10)))
        assert total == 25
        assert len(rows) == 10
        # newest first: page 2 starts at the 11th newest
        assert rows[0].Post.title == "Post 14"

    def test_drafts_excluded_by_default(self, db_session):
        _post(db_session, "Visible")
        _post(db_session, "Hidden", status=PostStatus.draft)
        rows, total = fetch_page(db_session, PostListQuery())
        assert total == 1
        assert [r.Post.title for r in rows] == ["Visible"]

    def test_unknown_category_is_empty_not_error(self, db_session):
        _post(db_session, "Anything")
        rows, total = fetch_page(db_session, PostListQuery(category="no-such-category"))
        assert rows == []
        assert total == 0

    def test_category_filter(self, db_session):
        tech = Category(name="Tech", slug="tech", created_at=datetime.now(timezone.utc))
        db_session.add(tech)
        db_session.commit()
        _post(db_session, "In Tech", category=tech)
        _post(db_session, "Uncategorized")
        rows, total = fetch_page(db_session, PostListQuery(category="tech"))
        assert total == 1
        assert rows[0].Post.title == "In Tech"
        assert rows[0].category_slug == "tech"

    def test_search_is_case_insensitive_on_title_or_content(self, db_session):
        _post(db_session, "Python Tips")
        _post(db_session, "Other", content="all about PYTHON internals")
        _post(db_session, "Unrelated")
        rows, total = fetch_page(db_session, PostListQuery(search="python"))
        assert total == 2
        assert {r.Post.title for r in rows} == {"Python Tips", "Other"}

    def test_search_escapes_like_wildcards(self, db_session):
        _post(db_session, "Save 100% today")
        _post(db_session, "Save 1000 today")
        rows, total = fetch_page(db_session, PostListQuery(search="100%"))
        assert total == 1
        assert rows[0].Post.title == "Save 100% today"

    def test_drafts_order_by_created_at(self, db_session):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        _post(db_session, "Older", status=PostStatus.draft, created_at=base)
        _post(db_session, "Newer", status=PostStatus.draft, created_at=base + timedelta(days=1))
        rows, _ = fetch_page(db_session, PostListQuery(status=PostStatus.draft))
        assert [r.Post.title for r in rows] == ["Newer", "Older"]

    def test_comment_query_filters_status_and_post(self, db_session):
        post = _post(db_session, "With comments")
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i, status in enumerate([CommentStatus.approved, CommentStatus.pending, CommentStatus.approved]):
            db_session.add(Comment(
                post_id=post.id,
                author_name=f"c{i}",
                author_email="c@example.com",
                content="hi",
                status=status,
                created_at=base + timedelta(minutes=i),
            ))
        db_session.commit()

        rows, total = fetch_page(db_session, CommentListQuery(status=CommentStatus.approved, post_id=post.id))
        assert total == 2
        assert [r.Comment.author_name for r in rows] == ["c0", "c2"]
        assert rows[0].post_slug == post.slug
