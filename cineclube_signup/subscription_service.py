from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Mapping

from cineclube_signup.email_transport import send_email
from cineclube_signup.models import AppSettings, Subscriber
from cineclube_signup.subscriber_store import append_subscriber
from cineclube_signup.welcome_email import build_welcome_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone")


class SubscriptionValidationError(ValueError):
    def __init__(
        self,
        code: str,
        message: str,
        missing: list[str] | None = None,
        invalid: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.missing = missing or []
        self.invalid = invalid or []


class WelcomeEmailError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


def subscribe(
    payload: Mapping[str, Any],
    settings: AppSettings,
    *,
    now: datetime | None = None,
) -> Subscriber:
    """Record a subscriber and send the welcome email.

    The record is appended before the email is attempted, so a relay failure
    still leaves the subscriber on file. Append failures are only logged.
    Resubmission is not deduplicated.
    """
    name, email, phone = _validate(payload)
    subscriber = Subscriber(
        name=name,
        email=email,
        phone=phone,
        subscribed_at=now or datetime.now(UTC),
    )

    try:
        append_subscriber(settings.subscribers_file, subscriber)
    except (OSError, ValueError):
        logger.exception(
            "subscriber record append failed file=%s email=%s",
            settings.subscribers_file,
            email,
        )

    welcome = build_welcome_email(name, settings.whatsapp_link)
    try:
        send_email(settings.smtp, to_email=email, subject=welcome.subject, html_body=welcome.html)
    except Exception as exc:
        logger.exception("welcome email delivery failed email=%s", email)
        raise WelcomeEmailError(
            code="EMAIL_SEND_FAILED",
            message="Falha ao enviar o e-mail de boas-vindas.",
        ) from exc

    logger.info("subscriber accepted email=%s", email)
    return subscriber


def _validate(payload: Mapping[str, Any]) -> tuple[str, str, str]:
    values: dict[str, str] = {}
    missing: list[str] = []
    invalid: list[str] = []
    for key in REQUIRED_FIELDS:
        value = payload.get(key)
        # JSON numbers (e.g. a phone sent as 5511999990000) are accepted as text.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
            continue
        if not isinstance(value, str):
            invalid.append(key)
            continue
        values[key] = value.strip()
    if missing:
        raise SubscriptionValidationError(
            code="MISSING_FIELDS",
            message=f"missing required fields: {', '.join(missing)}",
            missing=missing,
        )
    if invalid:
        raise SubscriptionValidationError(
            code="INVALID_FIELDS",
            message=f"fields must be text: {', '.join(invalid)}",
            invalid=invalid,
        )
    return values["name"], values["email"], values["phone"]
