from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.core.email_utils import mail_send
from app.domains.contact import service as contact_service


@pytest.fixture
def mailer(monkeypatch):
    """실제 SMTP 대신 발송 요청만 기록하는 메일러"""
    dummy = SimpleNamespace(send_message=AsyncMock())
    monkeypatch.setattr(mail_send, "get_fast_mail", lambda: dummy)
    return dummy


def _addresses(message):
    return [getattr(r, "email", r) for r in message.recipients]


def _booking_payload(**overrides):
    payload = {
        "name": "Jamie",
        "email": "jamie@example.com",
        "phone": "555-0100",
        "pet_name": "Biscuit",
        "pet_type": "Dog",
        "service": "Dog Walking",
        "preferred_date": "2026-11-02",
        "preferred_time": "Morning",
        "notes": "Pulls on the leash <a little>",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_contact_notifies_business(async_client: AsyncClient, mailer):
    response = await async_client.post(
        "/api/contact",
        json={"name": "Jamie", "email": "jamie@example.com", "message": "Do you board cats?"},
    )
    assert response.status_code == 200
    assert "message" in response.json()

    mailer.send_message.assert_awaited_once()
    message = mailer.send_message.await_args.args[0]
    assert _addresses(message) == ["debbie@example.com"]
    assert "Jamie" in message.subject


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Jamie", "email": "not-an-email", "message": "hi"},
        {"name": "", "email": "jamie@example.com", "message": "hi"},
        {"name": "Jamie", "email": "jamie@example.com", "message": "   "},
        {"name": "Jamie", "email": "jamie@example.com"},
    ],
)
async def test_contact_invalid_payload(async_client: AsyncClient, mailer, payload):
    response = await async_client.post("/api/contact", json=payload)
    assert response.status_code == 400
    mailer.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_booking_sends_business_and_customer_mail(async_client: AsyncClient, mailer):
    response = await async_client.post("/api/booking", json=_booking_payload())
    assert response.status_code == 200

    assert mailer.send_message.await_count == 2
    recipients = [_addresses(call.args[0]) for call in mailer.send_message.await_args_list]
    assert recipients == [["debbie@example.com"], ["jamie@example.com"]]

    # 사용자 입력은 HTML 이스케이프 후 본문에 포함
    business_mail = mailer.send_message.await_args_list[0].args[0]
    assert "&lt;a little&gt;" in business_mail.body


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["phone", "pet_name", "service", "preferred_date"])
async def test_booking_requires_fields(async_client: AsyncClient, mailer, field):
    payload = _booking_payload()
    payload.pop(field)

    response = await async_client.post("/api/booking", json=payload)
    assert response.status_code == 400
    assert field in response.json()["detail"]
    mailer.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_booking_invalid_date(async_client: AsyncClient, mailer):
    response = await async_client.post("/api/booking", json=_booking_payload(preferred_date="next tuesday"))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_inbox_is_server_error(async_client: AsyncClient, mailer, monkeypatch):
    monkeypatch.setattr(contact_service, "NOTIFY_EMAIL", None)

    response = await async_client.post(
        "/api/contact",
        json={"name": "Jamie", "email": "jamie@example.com", "message": "Do you board cats?"},
    )
    assert response.status_code == 500
    assert response.json()["detail"] == "Server configuration error."
    mailer.send_message.assert_not_awaited()


def test_render_email_skips_empty_fields():
    html = mail_send.render_email(
        title="New booking request",
        intro="intro",
        fields={"Name": "Jamie", "Pet type": None},
    )
    assert "Jamie" in html
    assert "Pet type" not in html
