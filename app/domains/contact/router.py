from fastapi import APIRouter, BackgroundTasks, status

from app.domains.contact.schemas import (BookingRequest, ContactRequest,
                                         FormSubmitResponse)
from app.domains.contact.service import submit_booking, submit_contact

router = APIRouter(prefix="/api", tags=["문의/예약"])


@router.post(
    "/contact",
    summary="문의 폼 제출",
    status_code=status.HTTP_200_OK,
    response_model=FormSubmitResponse,
    responses={400: {"description": "입력값 오류"}, 500: {"description": "메일 설정 오류"}},
)
async def contact(payload: ContactRequest, background_tasks: BackgroundTasks):
    await submit_contact(background_tasks, payload)
    return {"message": "Thanks for reaching out! We'll get back to you soon."}


@router.post(
    "/booking",
    summary="예약 요청 폼 제출",
    status_code=status.HTTP_200_OK,
    response_model=FormSubmitResponse,
    responses={400: {"description": "입력값 오류"}, 500: {"description": "메일 설정 오류"}},
)
async def booking(payload: BookingRequest, background_tasks: BackgroundTasks):
    await submit_booking(background_tasks, payload)
    return {"message": "Booking request received! We'll confirm by email shortly."}
