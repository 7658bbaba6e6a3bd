from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class _FormBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name is required.")
        return v.strip()


### 문의 폼
class ContactRequest(_FormBase):
    phone: Optional[str] = Field(None, max_length=30)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError("Message is required.")
        return v


### 예약 요청 폼
class BookingRequest(_FormBase):
    phone: str = Field(..., min_length=7, max_length=30)
    pet_name: str = Field(..., min_length=1, max_length=100)
    pet_type: Optional[str] = Field(None, max_length=50)
    service: str = Field(..., min_length=1, max_length=255)
    preferred_date: date
    preferred_time: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=5000)


class FormSubmitResponse(BaseModel):
    message: str
