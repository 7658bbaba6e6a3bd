import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.admin.dependencies import get_current_admin
from app.core.db import get_session_factory
from app.domains.services import service
from app.domains.services.repository import ServiceRepository
from app.domains.services.schemas import (ServiceCreate, ServiceListResponse,
                                          ServiceMutationResponse,
                                          ServiceReorderRequest,
                                          ServiceReorderResponse,
                                          ServiceUpdate)
from app.domains.services.service import get_service_repository

# 로거 설정
logger = logging.getLogger(__name__)

# 서비스 카탈로그 API 라우터
router = APIRouter(prefix="/api/services", tags=["서비스"])


@router.get(
    "",
    response_model=ServiceListResponse,
    summary="서비스 목록 조회",
    description="노출 순서대로 전체 서비스 목록을 조회합니다.",
)
async def list_services(
    repository: ServiceRepository = Depends(get_service_repository),
):
    services = await service.list_services(repository)
    return {"services": services}


@router.post(
    "",
    response_model=ServiceMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="서비스 생성",
    description="관리자가 새 서비스를 목록 맨 뒤에 추가합니다.",
)
async def create_service(
    data: ServiceCreate,
    admin: Dict[str, Any] = Depends(get_current_admin),
    repository: ServiceRepository = Depends(get_service_repository),
):
    created = await service.create_service(data, repository)
    logger.info(f"Service {created.id} created by {admin.get('username')}")
    return {"message": "Service created successfully", "service": created}


# /{service_id} 보다 먼저 등록해야 "reorder"가 id로 해석되지 않음
@router.put(
    "/reorder",
    response_model=ServiceReorderResponse,
    summary="서비스 순서 변경",
    description="orderedIds 배열 순서대로 sort_order를 0부터 다시 매깁니다. 전부 성공하거나 전부 롤백됩니다.",
    responses={
        400: {"description": "orderedIds가 정수 배열이 아님"},
        500: {"description": "트랜잭션 실패 (롤백 완료)"},
    },
)
async def reorder_services(
    data: ServiceReorderRequest,
    admin: Dict[str, Any] = Depends(get_current_admin),
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    if not data.ordered_ids:
        return {"message": "No services to reorder.", "updated": 0}

    updated = await service.reorder_services(data.ordered_ids, session_factory)
    return {"message": "Services reordered successfully", "updated": updated}


@router.put(
    "/{service_id}",
    response_model=ServiceMutationResponse,
    summary="서비스 수정",
    description="전달된 필드만 수정합니다.",
)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    admin: Dict[str, Any] = Depends(get_current_admin),
    repository: ServiceRepository = Depends(get_service_repository),
):
    updated = await service.update_service(service_id, data, repository)
    return {"message": "Service updated successfully", "service": updated}


@router.delete(
    "/{service_id}",
    response_model=ServiceMutationResponse,
    summary="서비스 삭제",
)
async def delete_service(
    service_id: int,
    admin: Dict[str, Any] = Depends(get_current_admin),
    repository: ServiceRepository = Depends(get_service_repository),
):
    deleted = await service.delete_service(service_id, repository)
    return {"message": "Service deleted successfully", "service": deleted}
