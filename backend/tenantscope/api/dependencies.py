from fastapi import Depends
from sqlalchemy.orm import Session

from tenantscope.core.db import get_db
from tenantscope.crud.client import DataClient
from tenantscope.tenancy.scoping import TenantScopedClient


def get_data_client(db: Session = Depends(get_db)) -> DataClient:
    return DataClient(db)


def get_scoped_client(client: DataClient = Depends(get_data_client)) -> TenantScopedClient:
    """Tenant-confined view of the data client; reads the tenant per call."""
    return TenantScopedClient(client)
