# This file bootstraps the FastAPI app, wires up the request-context,
# logging and metrics middlewares, maps tenancy errors to responses and
# includes the routers.

import os

from fastapi import APIRouter, FastAPI, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

import tenantscope.models  # noqa: F401
from tenantscope.core.db import Base, engine
from tenantscope.core.logging import APILoggingMiddleware
from tenantscope.core.metrics import MetricsMiddleware
from tenantscope.core.versioning import API_V1_PREFIX
from tenantscope.crud.errors import RecordNotFound
from tenantscope.tenancy.errors import InvalidTenantIdentifier, TenantNotSelected
from tenantscope.tenancy.middleware import RequestContextMiddleware

from tenantscope.api.posts import router as posts_router
from tenantscope.api.tenants import router as tenants_router

# Create DB tables right away so the app doesn't hit missing schema
# issues later. Tests set SKIP_MIGRATIONS=1 and build their own engine.
if os.getenv("SKIP_MIGRATIONS") != "1":
    Base.metadata.create_all(bind=engine)

app = FastAPI(title="tenantscope")


def _error_response(exc, detail: str) -> JSONResponse:
    response = JSONResponse(status_code=exc.status_code, content={"detail": detail})
    response.headers["X-Error-Code"] = exc.code
    return response


@app.exception_handler(TenantNotSelected)
def handle_tenant_not_selected(_request, exc: TenantNotSelected):
    return _error_response(exc, exc.message)


@app.exception_handler(InvalidTenantIdentifier)
def handle_invalid_tenant(_request, exc: InvalidTenantIdentifier):
    return _error_response(exc, exc.message)


@app.exception_handler(RecordNotFound)
def handle_record_not_found(_request, exc: RecordNotFound):
    return _error_response(exc, exc.message)


# Observability layers. The request-context middleware is added last so
# it runs outermost and every inner layer sees the per-request bag.
app.add_middleware(APILoggingMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

# Routers are served both unversioned and under /api/v1.
api_v1 = APIRouter(prefix=API_V1_PREFIX)
api_root = APIRouter(prefix="")

routers = [
    posts_router,
    tenants_router,
]

for r in routers:
    api_v1.include_router(r)
    api_root.include_router(r)

app.include_router(api_v1)
app.include_router(api_root)


# /metrics endpoint (Prometheus scraping)
@app.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# /ping endpoint and versioned health; no tenant required.
@app.get("/ping")
@app.get(f"{API_V1_PREFIX}/health")
def ping():
    return {"message": "pong"}
