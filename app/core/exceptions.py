import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PawsomeError(Exception):
    """요청 경계에서 HTTP 응답으로 변환되는 도메인 예외의 기본 클래스"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(PawsomeError):
    # 어떤 설정 키가 빠졌는지는 운영 로그에만 남기고 클라이언트에는 숨김
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server configuration error."


class RequestValidationFailed(PawsomeError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class AuthenticationError(PawsomeError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password."


class TokenVerificationError(AuthenticationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token. Please log in again."


class NotFoundError(PawsomeError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class TransactionError(PawsomeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database transaction failed."


def _describe_validation_error(exc: RequestValidationError) -> str:
    """첫 번째 검증 오류를 '필드: 메시지' 형태로 요약"""
    errors = exc.errors()
    if not errors:
        return RequestValidationFailed.default_message
    first = errors[0]
    # loc의 첫 요소("body", "path" 등)는 클라이언트에게 의미가 없으므로 제외
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """도메인 예외, 요청 검증 오류, 미처리 예외를 공통 응답 형식으로 변환"""

    @app.exception_handler(PawsomeError)
    async def pawsome_error_handler(request: Request, exc: PawsomeError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _describe_validation_error(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": PawsomeError.default_message},
        )
