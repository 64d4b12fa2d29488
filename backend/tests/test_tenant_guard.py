import asyncio
import os

import pytest
from fastapi import HTTPException
from starlette.requests import Request

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SKIP_MIGRATIONS", "1")

from tenantscope.tenancy.context import get_tenant_id, request_scope
from tenantscope.tenancy.dependencies import parse_tenant_id, require_tenant
from tenantscope.tenancy.errors import InvalidTenantIdentifier


def _request(headers=None):
    scope = {"type": "http", "method": "GET", "path": "/posts", "headers": []}
    if headers:
        scope["headers"] = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request(scope)


def test_missing_header_is_forbidden():
    with request_scope():
        with pytest.raises(HTTPException) as exc:
            asyncio.run(require_tenant(_request()))
        assert get_tenant_id() is None
    assert exc.value.status_code == 403
    assert exc.value.detail == "Tenant ID is required"


def test_blank_header_is_forbidden():
    with request_scope():
        with pytest.raises(HTTPException) as exc:
            asyncio.run(require_tenant(_request({"x-tenant-id": "  "})))
    assert exc.value.status_code == 403


def test_header_is_parsed_and_stored_in_context():
    request = _request({"X-Tenant-ID": "3"})
    with request_scope():
        tenant_id = asyncio.run(require_tenant(request))
        assert get_tenant_id() == 3
    assert tenant_id == 3
    assert request.state.tenant_id == 3


def test_non_numeric_header_is_rejected():
    with request_scope():
        with pytest.raises(InvalidTenantIdentifier):
            asyncio.run(require_tenant(_request({"x-tenant-id": "acme"})))


def test_parse_tenant_id_requires_integer():
    assert parse_tenant_id("42") == 42
    assert parse_tenant_id(str(2**31 - 1)) == 2**31 - 1
    for raw in ("4.2", "0", "-3", str(2**31), "99999999999999999999999"):
        with pytest.raises(InvalidTenantIdentifier):
            parse_tenant_id(raw)
