import logging

from fastapi import BackgroundTasks

from app.core.config import NOTIFY_EMAIL
from app.core.email_utils.mail_send import render_email, send_html_email
from app.core.exceptions import ConfigurationError
from app.domains.contact.schemas import BookingRequest, ContactRequest

logger = logging.getLogger(__name__)


def _business_inbox() -> str:
    if not NOTIFY_EMAIL:
        logger.critical("NOTIFY_EMAIL (or DEFAULT_FROM_EMAIL) is not configured.")
        raise ConfigurationError()
    return NOTIFY_EMAIL


# 문의 접수 -> 업체 메일함으로 알림
async def submit_contact(background_tasks: BackgroundTasks, form: ContactRequest) -> None:
    html_body = render_email(
        title="New contact message",
        intro="A visitor sent a message through the website contact form.",
        fields={"Name": form.name, "Email": str(form.email), "Phone": form.phone},
        note=form.message,
    )
    await send_html_email(
        background_tasks,
        to_email=_business_inbox(),
        subject=f"Contact form: {form.name}",
        html_body=html_body,
    )
    logger.info("Contact form notification queued.")


# 예약 요청 접수 -> 업체 알림 + 고객 접수 확인 메일
async def submit_booking(background_tasks: BackgroundTasks, form: BookingRequest) -> None:
    fields = {
        "Name": form.name,
        "Email": str(form.email),
        "Phone": form.phone,
        "Pet name": form.pet_name,
        "Pet type": form.pet_type,
        "Service": form.service,
        "Preferred date": form.preferred_date.isoformat(),
        "Preferred time": form.preferred_time,
    }
    inbox = _business_inbox()

    await send_html_email(
        background_tasks,
        to_email=inbox,
        subject=f"Booking request: {form.service} for {form.pet_name}",
        html_body=render_email(
            title="New booking request",
            intro="A customer requested a booking through the website.",
            fields=fields,
            note=form.notes,
        ),
    )
    await send_html_email(
        background_tasks,
        to_email=str(form.email),
        subject="We received your booking request",
        html_body=render_email(
            title=f"Thanks, {form.name}!",
            intro="We received your booking request and will contact you shortly to confirm.",
            fields=fields,
        ),
    )
    logger.info("Booking notifications queued.")
