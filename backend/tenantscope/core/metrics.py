# Centralized Prometheus metrics. The middleware below records timing
# and counts for every request; the scoped data client bumps a counter
# for each operation it rewrites so dashboards can see tenant traffic.

from time import monotonic

from fastapi import Request
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

# Generic API latency + request counters, labelled by method and route
# template so path parameters do not explode the series count.
REQUEST_LATENCY = Histogram(
    "api_request_latency_seconds",
    "Latency of API requests in seconds",
    ["method", "endpoint"],
)
REQUESTS_TOTAL = Counter(
    "requests_total",
    "Total API requests",
    ["method", "route", "status_code"],
)

# Requests turned away by the tenant guard.
TENANT_REJECTIONS_TOTAL = Counter(
    "tenant_rejections_total",
    "Requests rejected for a missing or invalid tenant identifier",
    ["reason"],
)

# Every data-access call the tenant-scoping wrapper intercepts.
TENANT_SCOPED_OPERATIONS_TOTAL = Counter(
    "tenant_scoped_operations_total",
    "Data-access operations rewritten with a tenant constraint",
    ["model", "operation"],
)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = monotonic()
        response = await call_next(request)
        duration = monotonic() - start

        route = request.scope.get("route")
        route_path = getattr(route, "path", None) or request.url.path
        REQUEST_LATENCY.labels(request.method, route_path).observe(duration)
        REQUESTS_TOTAL.labels(request.method, route_path, str(response.status_code)).inc()
        return response
