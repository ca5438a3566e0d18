import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blog_api.auth import StaticTokenVerifier, get_token_verifier
from blog_api.db import build_engine, create_tables
from blog_api.main import create_app
from blog_api.services.db_service import get_db

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def engine():
    engine = build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    app = create_app(auto_create_tables=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_verifier] = lambda: StaticTokenVerifier(ADMIN_TOKEN)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def make_post(client, admin_headers):
    def _make(**fields):
        payload = {
            "title": "Hello World",
            "content": "Some content for the post.",
            "author": "Jane Doe",
            "status": "published",
        }
        payload.update(fields)
        res = client.post("/api/admin/posts", json=payload, headers=admin_headers)
        assert res.status_code == 201, res.text
        return res.json()["post"]
    return _make


@pytest.fixture
def make_category(client, admin_headers):
    def _make(name="Technology", **fields):
        res = client.post("/api/admin/categories", json={"name": name, **fields}, headers=admin_headers)
        assert res.status_code == 201, res.text
        return res.json()["category"]
    return _make


@pytest.fixture
def make_comment(client):
    def _make(post_id, **fields):
        payload = {
            "post_id": post_id,
            "author_name": "Alice",
            "author_email": "alice@example.com",
            "content": "Nice post!",
        }
        payload.update(fields)
        res = client.post(f"/api/posts/{post_id}/comments", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["comment"]
    return _make
