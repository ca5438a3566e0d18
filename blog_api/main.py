from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.auth import require_admin
from blog_api.errors import BlogAPIError, UpstreamError
from blog_api.log_config import setup_logging
from blog_api.routers import category_router, comment_router, post_router
from blog_api.services.db_service import create_tables, get_db
from blog_api.settings import settings


def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(BlogAPIError)
    async def blog_error_handler(request: Request, exc: BlogAPIError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"error": "Invalid input", "details": details})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(auto_create_tables: Optional[bool] = None) -> FastAPI:
    if auto_create_tables is None:
        auto_create_tables = settings.AUTO_CREATE_TABLES

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if auto_create_tables:
            create_tables()
            logger.info("Database tables ensured")
        yield

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    _register_exception_handlers(app)

    app.include_router(post_router.router, prefix="/api/posts", tags=["Post API"])
    app.include_router(comment_router.router, prefix="/api/posts", tags=["Comment API"])
    app.include_router(category_router.router, prefix="/api/categories", tags=["Category API"])
    app.include_router(post_router.admin_router, prefix="/api/admin/posts", tags=["Admin Post API"])
    app.include_router(category_router.admin_router, prefix="/api/admin/categories", tags=["Admin Category API"])
    app.include_router(comment_router.admin_router, prefix="/api/admin/comments", tags=["Admin Comment API"])

    @app.get("/")
    def index():
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "endpoints": {
                "posts": "/api/posts",
                "categories": "/api/categories",
                "comments": "/api/posts/{post_id}/comments",
            },
        }

    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Health check failed")
            return JSONResponse(status_code=500, content={"status": "unhealthy", "database": "disconnected"})
        return {"status": "healthy", "database": "connected"}

    @app.post("/api/init", dependencies=[Depends(require_admin)])
    def init_database(db: Session = Depends(get_db)):
        try:
            create_tables(db.get_bind())
        except SQLAlchemyError as e:
            logger.exception("Database initialization failed")
            raise UpstreamError("Failed to initialize database") from e
        return {"message": "Database initialized successfully"}

    return app


setup_logging(settings.LOG_LEVEL)
app = create_app()
