from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


def _require_name(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Service name cannot be empty.")
    return value


### 서비스 생성 요청
class ServiceCreate(BaseModel):
    name: str
    price_string: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _require_name(v)


### 서비스 수정 요청 (전달된 필드만 수정)
class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    price_string: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        # 명시적으로 null이 들어온 경우에도 호출됨 (기본값일 때는 호출되지 않음)
        if v is None:
            raise ValueError("Service name cannot be empty.")
        return _require_name(v)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        # category 컬럼은 NOT NULL
        if v is None or not v.strip():
            raise ValueError("Service category cannot be empty.")
        return v


### 순서 변경 요청: 배열의 인덱스가 곧 새 sort_order
class ServiceReorderRequest(BaseModel):
    # StrictInt: "2", 2.0, true 같은 값은 정수 id로 인정하지 않음
    ordered_ids: List[StrictInt] = Field(..., alias="orderedIds")

    model_config = ConfigDict(populate_by_name=True)


class ServiceResponse(BaseModel):
    id: int
    name: str
    price_string: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ServiceListResponse(BaseModel):
    services: List[ServiceResponse]


class ServiceMutationResponse(BaseModel):
    message: str
    service: ServiceResponse


class ServiceReorderResponse(BaseModel):
    message: str
    updated: int
