from __future__ import annotations
import re

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def slugify(value: str | None) -> str:
    """
    URL-safe 식별자 생성.
    - 소문자화 후 [a-z0-9] 이외 문자의 연속 구간을 '-' 하나로 치환
    - 앞뒤 '-' 제거
    빈 문자열/기호만 있는 입력은 "" 를 돌려줌 (호출측에서 검증 오류로 처리)
    """
    if not value:
        return ""
    return _NON_SLUG_RUN.sub("-", value.lower()).strip("-")


def make_excerpt(content: str | None, limit: int = 200) -> str:
    return (content or "")[:limit] + "..."
