from typing import Any, Dict, List, Sequence

from sqlalchemy import bindparam, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.services import Service

services_table = Service.__table__

# 순서 변경용 UPDATE 문 (executemany로 파라미터 묶음 전송)
_position_update = (
    update(services_table)
    .where(services_table.c.id == bindparam("b_id"))
    .values(sort_order=bindparam("b_position"))
)


class ServiceRepository:
    """services 테이블 데이터베이스 상호작용을 담당하는 레포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Service]:
        """노출 순서(sort_order, id) 기준으로 전체 서비스를 조회합니다."""
        query = select(Service).order_by(Service.sort_order, Service.id)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_by_id(self, service_id: int) -> Service | None:
        return await self.session.get(Service, service_id)

    async def next_sort_order(self) -> int:
        """새 서비스를 목록 맨 뒤에 붙이기 위한 다음 sort_order 값"""
        query = select(func.coalesce(func.max(Service.sort_order), -1) + 1)
        return await self.session.scalar(query) or 0

    async def create(self, service_data: Dict[str, Any]) -> Service:
        service = Service(**service_data)
        self.session.add(service)
        await self.session.commit()
        await self.session.refresh(service)
        return service

    async def update(self, service_id: int, update_data: Dict[str, Any]) -> Service | None:
        service = await self.get_by_id(service_id)
        if not service:
            return None

        for key, value in update_data.items():
            setattr(service, key, value)

        await self.session.commit()
        await self.session.refresh(service)
        return service

    async def delete(self, service_id: int) -> Service | None:
        """삭제된 서비스를 반환, 대상이 없으면 None"""
        service = await self.get_by_id(service_id)
        if not service:
            return None

        await self.session.delete(service)
        await self.session.commit()
        return service

    async def apply_positions(self, ordered_ids: Sequence[int], batch_size: int) -> None:
        """
        ordered_ids[i] 의 sort_order 를 i 로 갱신합니다.
        트랜잭션 시작/커밋은 호출 측 책임이며, 각 묶음은 드라이버가 파이프라인으로 전송하고
        execute가 끝날 때 묶음 전체의 응답이 도착한 상태입니다.
        존재하지 않는 id는 0행 갱신으로 끝나며 오류가 아닙니다.
        """
        params = [
            {"b_id": service_id, "b_position": position}
            for position, service_id in enumerate(ordered_ids)
        ]
        for start in range(0, len(params), batch_size):
            await self.session.execute(_position_update, params[start:start + batch_size])
