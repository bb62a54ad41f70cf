from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str, logs_dir: str = "logs") -> Path | None:
    """Configure root logging for the subscription server.

    An empty ``logs_dir`` (``LOGS_DIR=``) keeps output on the console only,
    for hosts that collect stderr. Returns the log file path, if any.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    root.addHandler(sh)

    if not logs_dir:
        return None

    log_root = Path(logs_dir)
    log_root.mkdir(parents=True, exist_ok=True)
    log_file = log_root / f"server-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setFormatter(formatter)
    root.addHandler(fh)
    return log_file
