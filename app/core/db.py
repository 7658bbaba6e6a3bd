import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)

from app.core.config import DATABASE_URL

if not DATABASE_URL:
    raise ValueError(
        "DATABASE_URL 환경 변수가 설정되지 않았거나 .env 파일 로드에 실패했습니다."
    )

logger = logging.getLogger(__name__)

# 프로세스 전체에서 공유하는 연결 풀
# pool_pre_ping: 유휴 중 끊긴 연결을 요청 처리 전에 걸러냄
engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    pool_recycle=600,
    pool_pre_ping=True,
)

AsyncSessionFactory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    서비스 CRUD 한 건 = 요청 하나에 묶인 세션.
    커밋은 ServiceRepository 가 작업마다 직접 하고, 여기서는 실패 시 열린 트랜잭션만 정리합니다.
    """
    async with AsyncSessionFactory() as session:
        try:
            yield session
        except Exception:
            if session.in_transaction():
                logger.exception("DB session rolled back due to an error in the request")
                await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker:
    """
    요청 세션과 분리된 전용 세션이 필요한 작업용 (서비스 순서 변경).
    호출 측이 세션 하나를 열어 session.begin() 으로 전체 UPDATE를 단일 트랜잭션으로 묶습니다.
    """
    return AsyncSessionFactory
