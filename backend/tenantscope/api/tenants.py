from fastapi import APIRouter, Depends

from tenantscope.api.dependencies import get_data_client
from tenantscope.crud.client import DataClient
from tenantscope.schemas.tenants import TenantRead
from tenantscope.tenancy.dependencies import require_tenant


router = APIRouter(tags=["tenants"])


@router.get("/tenants/current", response_model=TenantRead)
def current_tenant_endpoint(
    tenant_id: int = Depends(require_tenant),
    client: DataClient = Depends(get_data_client),
):
    # Tenants are not tenant-owned rows; look the caller's tenant up by id.
    return client.tenant.find_unique_or_throw({"id": tenant_id})
