from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from app.admin.dependencies import get_auth_settings, get_current_admin
from app.core.config import AuthSettings
from app.domains.admin_auth.schemas import (AdminLoginRequest,
                                            AdminLoginResponse,
                                            AdminMeResponse)
from app.domains.admin_auth.service import login_admin

router = APIRouter(prefix="/api/admin", tags=["관리자 인증"])


# 로그인
@router.post(
    "/login",
    summary="관리자 로그인",
    status_code=status.HTTP_200_OK,
    response_model=AdminLoginResponse,
    responses={
        200: {"description": "로그인 성공, 토큰 발급"},
        400: {"description": "아이디 또는 비밀번호 누락"},
        401: {"description": "아이디 또는 비밀번호 오류"},
        500: {"description": "서버 인증 설정 오류"},
    },
)
async def login(
    payload: AdminLoginRequest,
    settings: AuthSettings = Depends(get_auth_settings),
):
    return await login_admin(payload, settings)


# 토큰 확인 (현재 관리자 정보)
@router.get(
    "/me",
    summary="현재 관리자 토큰 정보",
    response_model=AdminMeResponse,
    responses={
        401: {"description": "토큰 없음 또는 형식 오류"},
        403: {"description": "유효하지 않거나 만료된 토큰"},
    },
)
async def read_me(admin: Dict[str, Any] = Depends(get_current_admin)):
    return {"user": admin}
