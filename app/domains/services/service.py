import logging
from typing import List, Sequence

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.db import get_db_session
from app.core.exceptions import (NotFoundError, RequestValidationFailed,
                                 TransactionError)
from app.domains.services.repository import ServiceRepository
from app.domains.services.schemas import ServiceCreate, ServiceUpdate
from app.models.services import DEFAULT_CATEGORY, Service

# 로거 설정
logger = logging.getLogger(__name__)

# 한 번의 executemany로 보낼 최대 UPDATE 수
REORDER_BATCH_SIZE = 100


# --- 레포지토리 의존성 주입 프로바이더 ---

def get_service_repository(session: AsyncSession = Depends(get_db_session)) -> ServiceRepository:
    """ServiceRepository 인스턴스를 생성하여 의존성 주입"""
    return ServiceRepository(session)


# --- 서비스 함수 --- (비즈니스 로직 담당)

async def list_services(repository: ServiceRepository) -> List[Service]:
    try:
        return await repository.list_all()
    except SQLAlchemyError as e:
        logger.exception("Error fetching services from DB")
        raise TransactionError("Failed to fetch services from database.") from e


async def create_service(data: ServiceCreate, repository: ServiceRepository) -> Service:
    """서비스 생성 (목록 맨 뒤에 추가)"""
    orm_data = {
        "name": data.name,
        "price_string": data.price_string or None,
        "description": data.description or None,
        "category": data.category or DEFAULT_CATEGORY,
    }
    try:
        orm_data["sort_order"] = await repository.next_sort_order()
        return await repository.create(orm_data)
    except SQLAlchemyError as e:
        await repository.session.rollback()
        logger.exception("Error creating service in DB")
        raise TransactionError("Failed to create service in database.") from e


async def update_service(service_id: int, data: ServiceUpdate, repository: ServiceRepository) -> Service:
    """전달된 필드만 수정"""
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        raise RequestValidationFailed(
            "No fields provided for update. At least one field "
            "(name, price_string, description, or category) must be supplied."
        )

    try:
        service = await repository.update(service_id, update_data)
    except SQLAlchemyError as e:
        await repository.session.rollback()
        logger.exception(f"Error updating service ID {service_id} in DB")
        raise TransactionError("Failed to update service in database.") from e

    if service is None:
        raise NotFoundError("Service not found with the provided ID.")
    return service


async def delete_service(service_id: int, repository: ServiceRepository) -> Service:
    try:
        service = await repository.delete(service_id)
    except SQLAlchemyError as e:
        await repository.session.rollback()
        logger.exception(f"Error deleting service ID {service_id} from DB")
        raise TransactionError("Failed to delete service from database.") from e

    if service is None:
        raise NotFoundError("Service not found with the provided ID.")
    return service


async def reorder_services(
    ordered_ids: Sequence[int],
    session_factory: async_sessionmaker,
    batch_size: int = REORDER_BATCH_SIZE,
) -> int:
    """
    ordered_ids 순서대로 sort_order 를 0부터 다시 매깁니다.

    - 빈 목록은 아무것도 하지 않는 성공 (세션도 열지 않음)
    - 전용 세션 하나에서 단일 트랜잭션으로 처리: 모든 UPDATE가 끝난 뒤에만 커밋,
      하나라도 실패하면 전체 롤백 후 TransactionError
    - 세션(연결)은 성공/실패와 관계없이 async with 종료 시 풀로 반환
    """
    if not ordered_ids:
        return 0

    async with session_factory() as session:
        try:
            async with session.begin():
                await ServiceRepository(session).apply_positions(ordered_ids, batch_size)
        except Exception as e:
            logger.exception(f"Service reorder failed, rolled back ({len(ordered_ids)} ids)")
            raise TransactionError("Failed to reorder services.") from e

    logger.info(f"Reordered {len(ordered_ids)} services.")
    return len(ordered_ids)
