from __future__ import annotations

import csv
import threading
from pathlib import Path

from cineclube_signup.models import Subscriber, parse_timestamp

_APPEND_LOCK = threading.Lock()


def append_subscriber(path: str, subscriber: Subscriber) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    line = subscriber.to_record_line()
    # Single write per record; the lock only covers threads of this process.
    with _APPEND_LOCK, p.open("a", encoding="utf-8", newline="") as fh:
        fh.write(line)


def read_subscribers(path: str) -> list[Subscriber]:
    p = Path(path)
    if not p.exists():
        return []

    subscribers: list[Subscriber] = []
    with p.open("r", encoding="utf-8", newline="") as fh:
        for line_no, row in enumerate(csv.reader(fh), start=1):
            if not row:
                continue
            if len(row) != 4:
                msg = f"Invalid record in {path} at line {line_no}: expected 4 fields, got {len(row)}"
                raise ValueError(msg)
            name, email, phone, raw_ts = row
            try:
                subscribed_at = parse_timestamp(raw_ts)
            except ValueError as exc:
                msg = f"Invalid timestamp in {path} at line {line_no}: {raw_ts}"
                raise ValueError(msg) from exc
            subscribers.append(
                Subscriber(name=name, email=email, phone=phone, subscribed_at=subscribed_at)
            )
    return subscribers
