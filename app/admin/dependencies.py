import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException, status

from app.admin.auth import TokenGuard
from app.core.config import AuthSettings, load_auth_settings
from app.core.exceptions import TokenVerificationError

logger = logging.getLogger(__name__)


@lru_cache
def get_auth_settings() -> AuthSettings:
    """앱 시작 시 한 번 읽은 인증 설정 (테스트에서는 dependency_overrides로 교체)"""
    return load_auth_settings()


async def get_current_admin(
    Authorization: Optional[str] = Header(None),
    settings: AuthSettings = Depends(get_auth_settings),
) -> Dict[str, Any]:
    """
    Authorization 헤더의 JWT를 검증하고 디코딩된 관리자 클레임을 반환합니다.
    헤더 없음/토큰 누락은 401, 설정 누락은 500, 서명 오류/만료는 403.
    """
    if not Authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header with bearer token is required.",
        )

    token = TokenGuard.extract_token(Authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token is missing or malformed.",
        )

    if not settings.has_signing_secret:
        logger.critical("JWT secret is not configured. Cannot verify token.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication configuration error.",
        )

    try:
        return TokenGuard(settings).verify(token)
    except TokenVerificationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
