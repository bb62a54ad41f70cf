from __future__ import annotations

import argparse
import json
import sys

from cineclube_signup.api import run_api_server
from cineclube_signup.logging_utils import setup_logging
from cineclube_signup.settings import load_settings
from cineclube_signup.subscriber_store import read_subscribers


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="cineclube-signup")
    parser.add_argument("command", choices=["api-run", "subscribers-list"])
    args = parser.parse_args(argv)

    settings = load_settings()

    if args.command == "api-run":
        setup_logging(settings.log_level, settings.logs_dir)
        run_api_server(settings)
        return 0

    for subscriber in read_subscribers(settings.subscribers_file):
        print(json.dumps(subscriber.to_dict(), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
