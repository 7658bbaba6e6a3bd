import os
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv  # .env 파일 로드 지원

load_dotenv()

# 데이터베이스 연결 URL
DATABASE_URL = os.getenv("DATABASE_URL")

# 현재 실행 환경 구분용 변수
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
PORT = int(os.getenv("PORT", "4000"))

# CORS 허용 origin (콤마 구분, 비어 있으면 전체 허용)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "").split(",")
    if origin.strip()
]

# 관리자 계정 (단일 관리자, DB가 아닌 환경 변수로 관리)
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

# JWT 서명 설정
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "1h")

# 이메일 전송 관련 환경 변수
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "465"))
EMAIL_USE_SSL = os.getenv("EMAIL_USE_SSL", "True") == "True"
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD")
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL")
# 문의/예약 알림을 받을 업체 메일함
NOTIFY_EMAIL = os.getenv("NOTIFY_EMAIL", DEFAULT_FROM_EMAIL)

# 로그 설정
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_TOKEN_EXPIRY = timedelta(hours=1)

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: Optional[str], default: timedelta = DEFAULT_TOKEN_EXPIRY) -> timedelta:
    """'3600', '30m', '1h', '7d' 형태의 만료 시간 문자열을 timedelta로 변환"""
    if not value:
        return default
    match = _DURATION_PATTERN.match(value.lower())
    if not match:
        raise ValueError(f"지원하지 않는 만료 시간 형식입니다: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


@dataclass(frozen=True)
class AuthSettings:
    """관리자 인증에 필요한 설정 묶음 (앱 시작 시 한 번 생성, 이후 변경 없음)"""

    admin_username: Optional[str]
    admin_password_hash: Optional[str]
    jwt_secret: Optional[str]
    jwt_algorithm: str = "HS256"
    token_expiry: timedelta = DEFAULT_TOKEN_EXPIRY

    @property
    def has_admin_identity(self) -> bool:
        return bool(self.admin_username and self.admin_password_hash)

    @property
    def has_signing_secret(self) -> bool:
        return bool(self.jwt_secret)


def load_auth_settings() -> AuthSettings:
    return AuthSettings(
        admin_username=ADMIN_USERNAME,
        admin_password_hash=ADMIN_PASSWORD_HASH,
        jwt_secret=JWT_SECRET,
        jwt_algorithm=JWT_ALGORITHM,
        token_expiry=parse_duration(JWT_EXPIRES_IN),
    )
