from sqlalchemy import Column, DateTime, Integer, String, Text

# 유틸리티 함수 임포트
from app.core.datetime_utils import get_now_utc
from app.models.base import Base

DEFAULT_CATEGORY = "Regular"


class Service(Base):
    __tablename__ = "services"  # 테이블 이름

    id = Column(Integer, primary_key=True, index=True)  # 고유 식별자
    name = Column(String(255), nullable=False)  # 서비스명
    price_string = Column(String(100), nullable=True)  # 가격 표기 ("$25 / visit" 등 자유 형식)
    description = Column(Text, nullable=True)  # 설명
    category = Column(String(100), nullable=False, default=DEFAULT_CATEGORY)  # 분류
    sort_order = Column(Integer, nullable=False, default=0, index=True)  # 노출 순서 (0부터)
    created_at = Column(
        DateTime(timezone=True),
        default=get_now_utc
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=get_now_utc,
        onupdate=get_now_utc
    )
