from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from blog_api.models import CommentStatus, PostStatus
from blog_api.schemas.category_schema import CategoryCreate, CategoryOut
from blog_api.schemas.comment_schema import CommentCreate, CommentStatusUpdate
from blog_api.schemas.common_schema import MAX_SQL_INT
from blog_api.schemas.post_schema import PostCreate, PostOut, PostUpdate


def _post(**overrides):
    data = {"title": "T", "content": "C", "author": "A"}
    data.update(overrides)
    return data


def test_post_create_defaults_to_draft():
    post = PostCreate(**_post())
    assert post.status == PostStatus.draft
    assert post.excerpt is None
    assert post.category_id is None


@pytest.mark.parametrize("overrides", [
    {"title": ""},
    {"title": "x" * 201},
    {"content": ""},
    {"author": ""},
    {"author": "x" * 101},
    {"excerpt": "x" * 501},
    {"status": "archived"},
    {"featured_image": "not a url"},
    {"category_id": "abc"},
])
def test_post_create_rejects(overrides):
    with pytest.raises(ValidationError):
        PostCreate(**_post(**overrides))


def test_post_create_missing_required():
    with pytest.raises(ValidationError) as exc:
        PostCreate(content="C")
    fields = {err["loc"][0] for err in exc.value.errors()}
    assert fields == {"title", "author"}


def test_post_create_keeps_featured_image_as_given():
    post = PostCreate(**_post(featured_image="https://cdn.example.com/a.png"))
    assert post.featured_image == "https://cdn.example.com/a.png"


def test_post_update_supplied_in_fixed_order():
    patch = PostUpdate.model_validate({"category_id": 3, "title": "New", "status": "published"})
    assert list(patch.supplied()) == ["title", "status", "category_id"]


def test_post_update_empty_patch():
    assert PostUpdate().supplied() == {}


def test_post_update_ignores_unknown_keys():
    patch = PostUpdate.model_validate({"id": 99, "slug": "hack", "title": "Ok"})
    assert patch.supplied() == {"title": "Ok"}


@pytest.mark.parametrize("field", ["title", "content", "author", "status"])
def test_post_update_rejects_null_for_required_columns(field):
    with pytest.raises(ValidationError):
        PostUpdate.model_validate({field: None})


def test_post_update_allows_clearing_optional_columns():
    patch = PostUpdate.model_validate({"category_id": None, "featured_image": None})
    assert patch.supplied() == {"featured_image": None, "category_id": None}


def test_post_out_tags_default():
    class Row:
        id = 1
        title = "T"
        slug = "t"
        content = "C"
        excerpt = None
        author = "A"
        status = PostStatus.draft
        featured_image = None
        tags = None
        category_id = None
        created_at = "2024-01-01T00:00:00"
        updated_at = "2024-01-01T00:00:00"
        published_at = None

    assert PostOut.model_validate(Row()).tags == ""


def test_category_create_limits():
    assert CategoryCreate(name="Tech").description is None
    with pytest.raises(ValidationError):
        CategoryCreate(name="")
    with pytest.raises(ValidationError):
        CategoryCreate(name="x", description="d" * 501)


def test_comment_create_validation():
    ok = CommentCreate(post_id=1, author_name="Al", author_email="al@example.com", content="hi")
    assert ok.post_id == 1
    with pytest.raises(ValidationError):
        CommentCreate(post_id=1, author_name="Al", author_email="not-an-email", content="hi")
    with pytest.raises(ValidationError):
        CommentCreate(post_id=1, author_name="Al", author_email="al@example.com", content="x" * 1001)
    with pytest.raises(ValidationError):
        CommentCreate(author_name="Al", author_email="al@example.com", content="hi")


def test_comment_status_update():
    assert CommentStatusUpdate(status="approved").status == CommentStatus.approved
    with pytest.raises(ValidationError):
        CommentStatusUpdate(status="spam")
    with pytest.raises(ValidationError):
        CommentStatusUpdate()


def test_invalid_featured_image_error_is_not_chained():
    with pytest.raises(ValidationError) as exc_info:
        PostCreate(**_post(featured_image="not a url"))
    err = exc_info.value.errors()[0]
    assert err["loc"] == ("featured_image",)
    assert "featured_image must be a valid URL" in err["msg"]
    cause = err["ctx"]["error"]
    assert cause.__cause__ is None
    assert cause.__suppress_context__ is True


@pytest.mark.parametrize("category_id", [0, -1, MAX_SQL_INT + 1])
def test_post_category_id_out_of_range(category_id):
    with pytest.raises(ValidationError):
        PostCreate(**_post(category_id=category_id))
    with pytest.raises(ValidationError):
        PostUpdate(category_id=category_id)


def test_comment_create_post_id_out_of_range():
    with pytest.raises(ValidationError):
        CommentCreate(post_id=MAX_SQL_INT + 1, author_name="Al", author_email="al@example.com", content="hi")


def test_naive_timestamps_serialize_as_utc():
    category = CategoryOut.model_validate(
        {"id": 1, "name": "Tech", "slug": "tech", "created_at": datetime(2024, 1, 1, 9, 30)}
    )
    assert category.created_at.tzinfo is timezone.utc
    assert category.model_dump(mode="json")["created_at"] == "2024-01-01T09:30:00Z"


def test_offset_timestamps_are_converted_to_utc():
    kst = timezone(timedelta(hours=9))
    category = CategoryOut.model_validate(
        {"id": 1, "name": "Tech", "slug": "tech", "created_at": datetime(2024, 1, 1, 18, 30, tzinfo=kst)}
    )
    assert category.model_dump(mode="json")["created_at"] == "2024-01-01T09:30:00Z"
