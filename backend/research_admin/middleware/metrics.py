"""
Prometheus metrics middleware.

Collects HTTP request metrics (counter + histogram) and exposes
application-level counters for role-permission writes, navigation guard
denials, and permission store failures.
"""

import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# ── HTTP metrics ─────────────────────────────────────────────────────────────

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# ── Navigation permission metrics ────────────────────────────────────────────

role_permission_writes_total = Counter(
    "role_permission_writes_total",
    "Role permission writes accepted by the store API",
    ["operation"],
)

navigation_guard_denials_total = Counter(
    "navigation_guard_denials_total",
    "Requests refused by a navigation guard",
    ["navigation_item", "reason"],
)

permission_store_failures_total = Counter(
    "permission_store_failures_total",
    "Permission store load/save failures recovered by a session",
    ["operation"],
)


def _normalize_path(path: str) -> str:
    """Collapse path parameters to reduce cardinality.

    e.g. /api/role-permissions/PhD%20Student/contracts → /api/role-permissions/{job_title}/{item}
    """
    parts = path.strip("/").split("/")
    if len(parts) == 4 and parts[:2] == ["api", "role-permissions"]:
        return "/api/role-permissions/{job_title}/{item}"
    normalized = []
    for i, part in enumerate(parts):
        if i > 1 and (part.isdigit() or len(part) > 20):
            normalized.append("{id}")
        else:
            normalized.append(part)
    return "/" + "/".join(normalized)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint itself to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        path = _normalize_path(request.url.path)

        start = time.time()
        response = await call_next(request)
        duration = time.time() - start

        http_requests_total.labels(
            method=method,
            path=path,
            status_code=response.status_code,
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            path=path,
        ).observe(duration)

        return response
