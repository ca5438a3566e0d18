# services/db_service.py
from contextlib import contextmanager
from typing import Generator, Iterator, Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.db import get_db as _get_db, get_session_factory as _get_session_factory, create_tables as _create_tables
from blog_api.errors import ConflictError, UpstreamError, ValidationError, field_error

# 드라이버별 UNIQUE 위반 메시지 (sqlite / mysql / postgres)
_UNIQUE_SIGNATURES = ("unique constraint failed", "duplicate entry", "duplicate key")
_FK_SIGNATURES = ("foreign key constraint", "foreign key")


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI Depends에서 사용.
    내부적으로 blog_api/db.py의 get_db를 위임 호출합니다.
    """
    yield from _get_db()


get_session_factory = _get_session_factory
create_tables = _create_tables


def is_unique_violation(exc: IntegrityError) -> bool:
    msg = str(exc.orig if exc.orig is not None else exc).lower()
    return any(sig in msg for sig in _UNIQUE_SIGNATURES)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    msg = str(exc.orig if exc.orig is not None else exc).lower()
    return any(sig in msg for sig in _FK_SIGNATURES)


@contextmanager
def storage_errors(
    db: Session,
    action: str,
    conflict_message: str = "Resource already exists",
    fk_field: Optional[str] = None,
) -> Iterator[None]:
    """
    Translate SQLAlchemy failures raised inside the block into API errors.
    The session is rolled back before the translated error propagates.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            logger.info(f"[storage] {action}: unique constraint violated")
            raise ConflictError(conflict_message) from e
        if fk_field and is_foreign_key_violation(e):
            logger.info(f"[storage] {action}: foreign key violated on {fk_field}")
            raise ValidationError(details=[field_error(fk_field, f"{fk_field} does not reference an existing row")]) from e
        logger.exception(f"[storage] {action}: integrity error")
        raise UpstreamError(f"Failed to {action}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"[storage] {action}: database error")
        raise UpstreamError(f"Failed to {action}") from e
