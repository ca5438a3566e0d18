from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, PlainSerializer

from blog_api.settings import settings

# 부호 있는 64bit 정수 상한 (sqlite INTEGER / mysql BIGINT)
MAX_SQL_INT = 2**63 - 1
# offset = (page - 1) * limit 가 MAX_SQL_INT 를 넘지 않는 최대 page
MAX_PAGE = MAX_SQL_INT // settings.MAX_PAGE_SIZE


def _assume_utc(v: datetime) -> datetime:
    # DB 는 UTC 를 naive 로 돌려줌
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


def _iso_z(v: datetime) -> str:
    return v.isoformat().replace("+00:00", "Z")


UTCDateTime = Annotated[
    datetime,
    AfterValidator(_assume_utc),
    PlainSerializer(_iso_z, return_type=str, when_used="json"),
]


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageOut(BaseModel):
    message: str
