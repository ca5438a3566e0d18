from __future__ import annotations
import secrets
from typing import Optional, Protocol

from fastapi import Depends, Header, HTTPException, status

from blog_api.settings import settings


class TokenVerifier(Protocol):
    def verify(self, token: str) -> bool: ...


class StaticTokenVerifier:
    """Single shared admin token, compared in constant time."""

    def __init__(self, expected: str):
        self._expected = expected or ""

    def verify(self, token: str) -> bool:
        # 키가 비어 있으면 모든 관리자 요청 거부
        if not self._expected or not token:
            return False
        return secrets.compare_digest(token.encode("utf-8"), self._expected.encode("utf-8"))


def get_token_verifier() -> TokenVerifier:
    return StaticTokenVerifier(settings.ADMIN_API_KEY)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_admin(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> None:
    if not authorization:
        raise _unauthorized()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not verifier.verify(token.strip()):
        raise _unauthorized()
