from __future__ import annotations

import html
import logging
import re
import smtplib
from email.message import EmailMessage

from cineclube_signup.models import SmtpSettings

LOGGER = logging.getLogger(__name__)
IMPLICIT_TLS_PORT = 465


class EmailDeliveryError(RuntimeError):
    pass


def send_email(settings: SmtpSettings, *, to_email: str, subject: str, html_body: str) -> None:
    msg = _build_message(settings, to_email=to_email, subject=subject, html_body=html_body)
    try:
        with _open_connection(settings) as smtp:
            if settings.port != IMPLICIT_TLS_PORT:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if settings.username:
                smtp.login(settings.username, settings.password)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise EmailDeliveryError(
            f"SMTP delivery to {to_email} via {settings.host}:{settings.port} failed: {exc}"
        ) from exc
    LOGGER.info("Email sent to=%s subject=%r relay=%s:%s", to_email, subject, settings.host, settings.port)


def _open_connection(settings: SmtpSettings) -> smtplib.SMTP:
    if settings.port == IMPLICIT_TLS_PORT:
        return smtplib.SMTP_SSL(settings.host, settings.port, timeout=settings.timeout_sec)
    return smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout_sec)


def _build_message(settings: SmtpSettings, *, to_email: str, subject: str, html_body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.from_address
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(_html_to_text(html_body))
    msg.add_alternative(html_body, subtype="html")
    return msg


def _html_to_text(html_body: str) -> str:
    text = re.sub(r'<a\s+href="([^"]*)"[^>]*>(.*?)</a>', r"\2: \1", html_body)
    text = re.sub(r"<br\s*/?>", "\n", text)
    text = re.sub(r"</p>", "\n", text)
    text = html.unescape(re.sub(r"<[^>]+>", "", text))
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line) + "\n"
