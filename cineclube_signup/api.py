from __future__ import annotations

import json
import logging
from http import HTTPStatus
from socketserver import ThreadingMixIn
from urllib.parse import parse_qs
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from cineclube_signup.models import AppSettings
from cineclube_signup.subscription_service import (
    SubscriptionValidationError,
    WelcomeEmailError,
    subscribe,
)

LOGGER = logging.getLogger(__name__)

CORS_HEADERS = [
    ("Access-Control-Allow-Origin", "*"),
    ("Access-Control-Allow-Methods", "POST, OPTIONS"),
    ("Access-Control-Allow-Headers", "Content-Type, Accept"),
]
ROUTES = {"/subscribe": ("POST",), "/health": ("GET",)}


class LoggingRequestHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args) -> None:  # type: ignore[no-untyped-def]
        LOGGER.info("%s %s", self.address_string(), format % args)


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def run_api_server(settings: AppSettings) -> None:
    app = create_app(settings)
    with make_server(
        settings.api_host,
        settings.api_port,
        app,
        server_class=ThreadingWSGIServer,
        handler_class=LoggingRequestHandler,
    ) as server:
        LOGGER.info("subscription api listening on http://%s:%s", settings.api_host, settings.api_port)
        server.serve_forever()


def create_app(settings: AppSettings):  # type: ignore[no-untyped-def]
    def app(environ: dict, start_response):  # type: ignore[no-untyped-def]
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO", "").rstrip("/") or "/"
        try:
            if method == "OPTIONS":
                return _empty(start_response, HTTPStatus.NO_CONTENT)

            if method == "GET" and path == "/health":
                return _json(start_response, HTTPStatus.OK, {"status": "ok"})

            if method == "POST" and path == "/subscribe":
                payload = _read_payload(environ)
                subscribe(payload, settings)
                return _json(start_response, HTTPStatus.OK, {"success": True})

            if path in ROUTES:
                return _json(
                    start_response,
                    HTTPStatus.METHOD_NOT_ALLOWED,
                    {"error": "METHOD_NOT_ALLOWED"},
                    extra_headers=[("Allow", ", ".join(ROUTES[path]))],
                )
            return _json(start_response, HTTPStatus.NOT_FOUND, {"error": "NOT_FOUND"})
        except SubscriptionValidationError as exc:
            if exc.invalid:
                body = {"error": "Campos inválidos.", "code": exc.code, "invalid": exc.invalid}
            else:
                body = {"error": "Campos obrigatórios ausentes.", "code": exc.code, "missing": exc.missing}
            return _json(start_response, HTTPStatus.BAD_REQUEST, body)
        except WelcomeEmailError as exc:
            return _json(
                start_response,
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": str(exc), "code": exc.code},
            )
        except ValueError as exc:
            return _json(
                start_response,
                HTTPStatus.BAD_REQUEST,
                {"error": "INVALID_BODY", "message": str(exc)},
            )
        except Exception:
            LOGGER.exception("unhandled error method=%s path=%s", method, path)
            return _json(
                start_response,
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "INTERNAL_ERROR"},
            )

    return app


def _read_payload(environ: dict) -> dict:
    body_size = int(environ.get("CONTENT_LENGTH", "0") or "0")
    body = environ["wsgi.input"].read(body_size) if body_size > 0 else b""
    content_type = environ.get("CONTENT_TYPE", "").split(";", 1)[0].strip().lower()

    if content_type == "application/json":
        try:
            payload = json.loads(body.decode("utf-8") or "{}")
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(f"malformed JSON body: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("request body must be JSON object")
        return payload

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(f"malformed form body: {exc}") from exc
    fields = parse_qs(text, keep_blank_values=True)
    return {key: values[0] for key, values in fields.items()}


def _json(start_response, status: HTTPStatus, payload: dict, extra_headers=None):  # type: ignore[no-untyped-def]
    body = json.dumps(payload, ensure_ascii=True).encode("utf-8")
    start_response(
        f"{status.value} {status.phrase}",
        [
            ("Content-Type", "application/json; charset=utf-8"),
            ("Content-Length", str(len(body))),
            *CORS_HEADERS,
            *(extra_headers or []),
        ],
    )
    return [body]


def _empty(start_response, status: HTTPStatus):  # type: ignore[no-untyped-def]
    start_response(f"{status.value} {status.phrase}", [("Content-Length", "0"), *CORS_HEADERS])
    return [b""]
