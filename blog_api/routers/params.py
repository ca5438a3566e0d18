# routers/params.py
from typing import Annotated

from fastapi import Path, Query

from blog_api.schemas.common_schema import MAX_PAGE, MAX_SQL_INT

# 64bit 를 넘는 id / page 는 SQL 바인딩 전에 400 으로 막음
IdPath = Annotated[int, Path(ge=1, le=MAX_SQL_INT)]
PageQuery = Annotated[int, Query(ge=1, le=MAX_PAGE)]
