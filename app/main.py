from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware

from app.admin.dependencies import get_current_admin
from app.core.config import CORS_ORIGINS, ENVIRONMENT, PORT
from app.core.datetime_utils import get_now_utc, to_iso_utc
from app.core.exceptions import register_exception_handlers
from app.core.logger import setup_logging
from app.domains.admin_auth.router import router as admin_auth_router
from app.domains.contact.router import router as contact_router
from app.domains.services.router import router as services_router

setup_logging()

# FastAPI 애플리케이션 인스턴스 생성
app = FastAPI(title="Pawsome Backend", version="0.1.0")

# CORS: 설정된 origin이 없으면 전체 허용 (쿠키 미사용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS or ["*"],
    allow_credentials=bool(CORS_ORIGINS),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


def _requires_admin(dependant) -> bool:
    return any(
        dep.call is get_current_admin or _requires_admin(dep)
        for dep in dependant.dependencies
    )


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description="Pet-care service catalog, admin auth and contact/booking forms",
        routes=app.routes,
    )
    # 관리자 API 테스트용 Bearer 입력칸
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
        }
    }
    # get_current_admin 의존성이 있는 관리자 API에만 적용
    for route in app.routes:
        if not isinstance(route, APIRoute) or not _requires_admin(route.dependant):
            continue
        for method in route.methods:
            operation = openapi_schema["paths"][route.path_format].get(method.lower())
            if operation is not None:
                operation["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.get("/")
async def root():
    return {"message": f"Debbie's Awesome Pawsome backend is running in {ENVIRONMENT} environment!"}


@app.get("/api/health")
async def health():
    return {"status": "ok", "timestamp": to_iso_utc(get_now_utc())}


app.include_router(admin_auth_router)
app.include_router(services_router)
app.include_router(contact_router)


class CSPMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = "upgrade-insecure-requests"
        return response

app.add_middleware(CSPMiddleware)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
