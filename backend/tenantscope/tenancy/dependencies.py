"""
FastAPI dependency helpers for tenant context.
"""

from typing import Optional

from fastapi import HTTPException, Request, status

from tenantscope.core.config import settings
from tenantscope.core.logging import get_structured_logger
from tenantscope.core.metrics import TENANT_REJECTIONS_TOTAL
from tenantscope.tenancy.constants import (
    TENANT_HEADER,
    TENANT_ID_MAX,
    TENANT_ID_MIN,
    TENANT_REQUIRED_MESSAGE,
)
from tenantscope.tenancy.context import set_tenant_id
from tenantscope.tenancy.errors import InvalidTenantIdentifier, TenantNotSelected

logger = get_structured_logger("tenancy")


def _read_tenant_header(request: Request) -> Optional[str]:
    header_name = settings.TENANT_HEADER_NAME or TENANT_HEADER
    raw = request.headers.get(header_name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def parse_tenant_id(raw: str) -> int:
    try:
        tenant_id = int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidTenantIdentifier() from exc
    if not TENANT_ID_MIN <= tenant_id <= TENANT_ID_MAX:
        raise InvalidTenantIdentifier()
    return tenant_id


def tenant_access_granted(request: Request, tenant_id: int) -> bool:
    """
    Placeholder for a per-tenant authorization policy: any caller naming a
    tenant is allowed in.
    """
    return True


async def require_tenant(request: Request) -> int:
    """
    Guard that rejects requests without a tenant header and records the
    tenant in the request context for the data-access layer.
    """
    raw = _read_tenant_header(request)
    if raw is None:
        TENANT_REJECTIONS_TOTAL.labels("missing").inc()
        logger.info(
            "tenant.rejected",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "reason": "missing",
            },
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=TENANT_REQUIRED_MESSAGE,
            headers={"X-Error-Code": TenantNotSelected.code},
        )

    try:
        tenant_id = parse_tenant_id(raw)
    except InvalidTenantIdentifier:
        TENANT_REJECTIONS_TOTAL.labels("invalid").inc()
        raise

    if not tenant_access_granted(request, tenant_id):
        TENANT_REJECTIONS_TOTAL.labels("forbidden").inc()
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant access denied",
            headers={"X-Error-Code": "tenant_forbidden"},
        )

    set_tenant_id(tenant_id)
    request.state.tenant_id = tenant_id
    return tenant_id
