import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import jwt

from app.core.config import AuthSettings
from app.core.datetime_utils import get_now_utc
from app.core.exceptions import TokenVerificationError
from app.core.utils import verify_password

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

# bcrypt는 앞 72바이트만 사용하며, bcrypt 5.x부터는 초과 입력에 ValueError를 던짐
BCRYPT_MAX_PASSWORD_BYTES = 72
_BCRYPT_HASH_PATTERN = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")


class CredentialVerifier:
    """설정에 등록된 단일 관리자 계정과 입력 자격 증명을 비교"""

    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def verify(self, username: str, password: str) -> bool:
        if not self.settings.has_admin_identity:
            logger.critical("Admin username or password hash is not configured.")
            return False

        # 아이디가 다르면 해시 비교 없이 바로 실패
        if username != self.settings.admin_username:
            return False

        # 저장된 해시 형식 오류는 설정 문제 (비밀번호 불일치와 구분해서 로그)
        if not _BCRYPT_HASH_PATTERN.match(self.settings.admin_password_hash):
            logger.critical("Configured admin password hash is not a valid bcrypt hash.")
            return False

        # 72바이트를 넘는 입력은 저장된 해시와 일치할 수 없는 비밀번호로 취급
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            return False

        return verify_password(password, self.settings.admin_password_hash)


class TokenIssuer:
    """관리자 클레임으로 만료 시간이 포함된 서명 토큰(JWT)을 발급"""

    def __init__(self, settings: AuthSettings, clock: Callable[[], datetime] = get_now_utc):
        self.settings = settings
        self.clock = clock

    def issue(self, claims: Dict[str, Any]) -> Optional[str]:
        # 서명 키가 없으면 None 반환 -> 호출 측에서 500으로 변환
        if not self.settings.has_signing_secret:
            logger.critical("JWT secret is not configured. Cannot issue token.")
            return None

        now = self.clock()
        payload = dict(claims)
        payload.update({"iat": now, "exp": now + self.settings.token_expiry})
        return jwt.encode(payload, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)


class TokenGuard:
    """토큰 서명과 만료를 검증하고 디코딩된 클레임을 그대로 반환"""

    def __init__(self, settings: AuthSettings):
        self.settings = settings

    @staticmethod
    def extract_token(authorization: str) -> Optional[str]:
        """'<scheme> <token>' 형식에서 두 번째 구간만 토큰으로 사용 (scheme 단어는 검사하지 않음)"""
        parts = authorization.split()
        return parts[1] if len(parts) > 1 else None

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
                options={"require": ["exp", "iat"]},  # 만료 없는 토큰은 거부
            )
        except jwt.InvalidTokenError as e:  # 만료(ExpiredSignatureError) 포함
            logger.warning(f"JWT verification failed: {e}")
            raise TokenVerificationError() from e
