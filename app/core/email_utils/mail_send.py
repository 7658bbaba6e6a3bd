import logging
import os
from functools import lru_cache
from typing import Dict, Optional

from fastapi import BackgroundTasks
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import (DEFAULT_FROM_EMAIL, EMAIL_HOST,
                             EMAIL_HOST_PASSWORD, EMAIL_HOST_USER, EMAIL_PORT,
                             EMAIL_USE_SSL)
from app.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BUSINESS_NAME = "Debbie's Awesome Pawsome"

# 메일 템플릿 로더: email_utils/templates 디렉터리 사용
jinja_env = Environment(
    loader=FileSystemLoader(os.path.join(os.path.dirname(__file__), "templates")),
    autoescape=select_autoescape(["html", "xml"])
)


@lru_cache
def get_fast_mail() -> FastMail:
    """SMTP 설정으로 FastMail 인스턴스를 생성 (최초 발송 시 한 번)"""
    if not EMAIL_HOST_USER or not EMAIL_HOST_PASSWORD or not DEFAULT_FROM_EMAIL:
        logger.critical("SMTP credentials or sender address are not configured.")
        raise ConfigurationError()

    mail_conf = ConnectionConfig(
        MAIL_USERNAME=EMAIL_HOST_USER,
        MAIL_PASSWORD=EMAIL_HOST_PASSWORD,
        MAIL_FROM=DEFAULT_FROM_EMAIL,
        MAIL_FROM_NAME=BUSINESS_NAME,
        MAIL_PORT=EMAIL_PORT,
        MAIL_SERVER=EMAIL_HOST,
        MAIL_STARTTLS=not EMAIL_USE_SSL,     # 465/SSL을 쓰면 STARTTLS=False
        MAIL_SSL_TLS=EMAIL_USE_SSL,
        USE_CREDENTIALS=True,
        VALIDATE_CERTS=True,
    )
    return FastMail(mail_conf)


async def send_html_email(
    background_tasks: BackgroundTasks,
    to_email: str,
    subject: str,
    html_body: str
) -> None:
    """HTML 메일 한 통을 응답 이후 백그라운드로 발송 (재시도 없음)"""
    mailer = get_fast_mail()
    message = MessageSchema(
        subject=subject,
        recipients=[to_email],
        body=html_body,
        subtype="html",
    )
    background_tasks.add_task(mailer.send_message, message)


def render_email(title: str, intro: str, fields: Dict[str, Optional[str]], note: Optional[str] = None) -> str:
    """공통 레이아웃: 제목, 안내 문구, 항목 표, (선택) 본문 메모. 값이 비어 있는 항목은 생략"""
    template = jinja_env.get_template("notification.html")
    return template.render(
        title=title,
        intro=intro,
        rows=[(label, value) for label, value in fields.items() if value],
        note=note,
        business_name=BUSINESS_NAME,
    )
