import logging

from app.admin.auth import ADMIN_ROLE, CredentialVerifier, TokenIssuer
from app.core.config import AuthSettings
from app.core.datetime_utils import get_now_utc, to_iso_utc
from app.core.exceptions import AuthenticationError, ConfigurationError
from app.domains.admin_auth.schemas import (AdminLoginRequest,
                                            AdminLoginResponse, AdminUserInfo)

logger = logging.getLogger(__name__)


# 관리자 로그인
async def login_admin(payload: AdminLoginRequest, settings: AuthSettings) -> AdminLoginResponse:
    """
    자격 증명 확인 후 관리자 토큰을 발급합니다.
    - 설정 누락: ConfigurationError (500, 클라이언트에는 어떤 키인지 숨김)
    - 아이디/비밀번호 불일치: AuthenticationError (401, 어느 쪽이 틀렸는지 구분하지 않음)
    """
    verifier = CredentialVerifier(settings)
    if not verifier.verify(payload.username, payload.password):
        if not settings.has_admin_identity:
            raise ConfigurationError()
        logger.info("Admin login failed.")
        raise AuthenticationError()

    claims = {
        "username": payload.username,
        "role": ADMIN_ROLE,
        "loginTime": to_iso_utc(get_now_utc()),
    }
    token = TokenIssuer(settings).issue(claims)
    if token is None:
        raise ConfigurationError()

    logger.info(f"Admin '{payload.username}' logged in.")
    return AdminLoginResponse(
        token=token,
        user=AdminUserInfo(username=payload.username, role=ADMIN_ROLE),
    )
