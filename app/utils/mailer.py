# app/utils/mailer.py
from __future__ import annotations

import logging
import smtplib
from email.headerregistry import Address
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app import config

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template: str, **context: Any) -> str:
    return _env.get_template(template).render(**context)


def _send_smtp(msg: EmailMessage) -> None:
    if not config.SMTP_HOST:
        # Dev fallback: log instead of sending
        log.info("DEV EMAIL (SMTP not configured)\n%s", msg)
        return
    if config.SMTP_SECURE:
        smtp = smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT, timeout=config.SMTP_TIMEOUT)
    else:
        smtp = smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=config.SMTP_TIMEOUT)
    with smtp as s:
        if not config.SMTP_SECURE:
            s.starttls()
        if config.SMTP_USER and config.SMTP_PASSWORD:
            s.login(config.SMTP_USER, config.SMTP_PASSWORD)
        s.send_message(msg)


def send_mail(
    to_email: str,
    subject: str,
    text: str,
    html: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> None:
    msg = EmailMessage()
    msg["From"] = str(Address(config.MAIL_FROM_NAME, addr_spec=config.MAIL_FROM_ADDR))
    msg["To"] = to_email
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(text)
    if html:
        msg.add_alternative(html, subtype="html")
    _send_smtp(msg)


def send_reservation_email(reservation: Mapping[str, Any]) -> None:
    """reservation: wire-shaped dict (fullName, phoneNumber, email, guestCount, ...)."""
    subject = f"[{config.SITE_NAME}] New reservation from {reservation['fullName']}"
    context = {"subject": subject, "site_name": config.SITE_NAME, "r": reservation}
    send_mail(
        config.MAIL_TO_ADDR,
        subject,
        text=render("reservation.txt", **context),
        html=render("reservation.html", **context),
        reply_to=reservation.get("email") or None,
    )
