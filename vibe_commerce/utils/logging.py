# vibe_commerce/utils/logging.py
import json
import logging
import sys
import time
import traceback
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from vibe_commerce.utils.settings import LOG_LEVEL, LOG_JSON

_PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False

# pola dodawane przez RequestLoggingMiddleware w extra=
_EXTRA_FIELDS = ("request_id", "user_id", "method", "path", "status_code", "duration_ms")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "func": record.funcName,
            "line": record.lineno,
        }
        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_obj[field] = getattr(record, field)

        if record.exc_info:
            log_obj["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(log_obj)


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Konfiguruje root logger (raz na proces)."""
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())

    handler = logging.StreamHandler(sys.stdout)
    use_json = LOG_JSON if json_output is None else json_output
    handler.setFormatter(JSONFormatter() if use_json else logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Loguje kazde zapytanie HTTP i propaguje X-Request-ID."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = get_logger("vibe_commerce.http")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start, request_id, exc_info=sys.exc_info())
            raise

        self._log(request, response.status_code, start, request_id)
        response.headers["X-Request-ID"] = request_id
        return response

    def _log(self, request: Request, status_code: int, start: float, request_id: str, exc_info=None):
        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            "user_id": request.headers.get("x-user-id"),
        }
        message = f"{request.method} {request.url.path} -> {status_code}"

        if status_code >= 500:
            self.logger.error(message, extra=extra, exc_info=exc_info)
        elif status_code >= 400:
            self.logger.warning(message, extra=extra)
        else:
            self.logger.info(message, extra=extra)
