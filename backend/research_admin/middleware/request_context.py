"""
Request context middleware.

Propagates (or generates) the X-Request-ID header and remembers the
caller's X-Job-Title, both in ContextVars, so log lines emitted anywhere
during the request can carry them.
"""

import time
import logging
from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")
_job_title_var: ContextVar[str] = ContextVar("job_title", default="")


def get_request_id() -> str:
    return _request_id_var.get()


def get_job_title() -> str:
    return _job_title_var.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        rid_token = _request_id_var.set(request_id)
        jt_token = _job_title_var.set(request.headers.get("X-Job-Title", "").strip())

        start_time = time.time()
        try:
            response = await call_next(request)
            duration_ms = round((time.time() - start_time) * 1000, 2)
            response.headers["X-Request-ID"] = request_id
            logger.info(
                "%s %s %s %.0fms",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={"duration_ms": duration_ms},
            )
        finally:
            _job_title_var.reset(jt_token)
            _request_id_var.reset(rid_token)

        return response
