import contextvars
import logging
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# request id of the request being served, readable from any log record
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Attach request_id to every LogRecord so the formatter can include it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once at startup.
    Repeated calls (app factory used by tests, reloads) do not add handlers.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logger.

    - Generates a request id and keeps it in a context var for the duration of the request.
    - Logs method, path and client on start, status and duration on end.
    - Echoes the id back in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(req_id)
        logger = logging.getLogger("cinema_admin.request")
        start = time.time()
        try:
            client_host = request.client.host if request.client else None
            logger.info("%s %s from %s", request.method, request.url.path, client_host)
            response = await call_next(request)
            duration_ms = int((time.time() - start) * 1000)
            logger.info("%s %s -> %s in %dms", request.method, request.url.path, response.status_code, duration_ms)
            response.headers["X-Request-ID"] = req_id
            return response
        except Exception:
            duration_ms = int((time.time() - start) * 1000)
            logger.exception("%s %s failed after %dms", request.method, request.url.path, duration_ms)
            raise
        finally:
            request_id_ctx.reset(token)
