from __future__ import annotations
import logging
import sys
from loguru import logger


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (uvicorn, sqlalchemy) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class DropASGITraceback(logging.Filter):
    """앱의 Exception 핸들러가 이미 남긴 traceback 을 uvicorn 이 다시 찍지 않도록 거름."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not record.getMessage().startswith("Exception in ASGI application")


def setup_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sys.stdout,
        level=level.upper(),
        enqueue=True,
        backtrace=True,
        diagnose=False,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function} | {message}",
    )
    # 외부 라이브러리는 WARNING 이상만, uvicorn 은 설정 레벨 그대로
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.WARNING, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(level.upper())
        std_logger.propagate = False
    error_logger = logging.getLogger("uvicorn.error")
    if not any(isinstance(f, DropASGITraceback) for f in error_logger.filters):
        error_logger.addFilter(DropASGITraceback())
