# cli.py
from __future__ import annotations
import argparse
from loguru import logger

from blog_api.log_config import setup_logging
from blog_api.services.db_service import create_tables, get_session_factory
from blog_api.services.seed_service import seed_sample_data
from blog_api.settings import settings


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="blog-api", description="Blog API management commands.")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="테이블/인덱스 생성 (이미 있으면 건너뜀)")
    sub.add_parser("seed", help="샘플 카테고리/글/댓글 삽입")

    serve = sub.add_parser("serve", help="uvicorn 으로 API 서버 실행")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="코드 변경 시 자동 재시작")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(settings.LOG_LEVEL)

    if args.command == "init-db":
        create_tables()
        logger.info("Database initialized successfully")
    elif args.command == "seed":
        create_tables()
        SessionLocal = get_session_factory()
        with SessionLocal() as db:
            stats = seed_sample_data(db)
        logger.info(
            f"시드 완료 | categories={stats['categories']} posts={stats['posts']} comments={stats['comments']}"
        )
    elif args.command == "serve":
        import uvicorn
        # log_config=None: uvicorn 이 위 loguru 설정을 덮어쓰지 않게
        uvicorn.run("blog_api.main:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
