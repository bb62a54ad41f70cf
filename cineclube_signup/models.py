from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class Subscriber:
    name: str
    email: str
    phone: str
    subscribed_at: datetime

    def to_record_line(self) -> str:
        fields = ",".join(_quote(v) for v in (self.name, self.email, self.phone))
        return f"{fields},{format_timestamp(self.subscribed_at)}\n"

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "subscribed_at": format_timestamp(self.subscribed_at),
        }


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    username: str
    password: str
    from_address: str
    timeout_sec: int


@dataclass(frozen=True)
class AppSettings:
    api_host: str
    api_port: int
    subscribers_file: str
    whatsapp_link: str
    log_level: str
    smtp: SmtpSettings
    logs_dir: str = "logs"


def format_timestamp(ts: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing ``Z``."""
    utc = ts.astimezone(UTC) if ts.tzinfo else ts.replace(tzinfo=UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _quote(value: str) -> str:
    # One record per line: embedded line breaks are flattened, quotes doubled.
    flat = " ".join(value.splitlines())
    return '"' + flat.replace('"', '""') + '"'


def parse_timestamp(raw: str) -> datetime:
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
