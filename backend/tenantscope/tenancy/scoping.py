"""
Tenant-scoping wrapper around the generic data-access client.

``TenantScopedClient`` hands out ``TenantScopedModelClient`` objects that
expose the same operations as ``ModelClient``. Every call reads the tenant
from the request context at call time, folds a ``tenant_id`` constraint
into its filter and/or payload, and then delegates.

Example:
    scoped = TenantScopedClient(DataClient(db))
    scoped.post.find_many()          # WHERE tenant_id = <current>
    scoped.post.create({"title": "x", "tenant_id": 99})  # stored under <current>
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, Union

from tenantscope.core.config import settings
from tenantscope.core.logging import get_structured_logger
from tenantscope.core.metrics import TENANT_SCOPED_OPERATIONS_TOTAL
from tenantscope.crud.client import Data, DataClient, ModelClient, OrderBy, Where
from tenantscope.tenancy.constants import TENANT_COLUMN
from tenantscope.tenancy.context import get_request_id, get_tenant_id
from tenantscope.tenancy.errors import TenantNotSelected

logger = get_structured_logger("tenant_scope")

TenantIdResolver = Callable[[], Optional[int]]


def _ensure_model_has_tenant_id(client: ModelClient) -> None:
    if not client.has_column(TENANT_COLUMN):
        raise ValueError(f"{client.model_name} does not define tenant_id and cannot be tenant-scoped.")


def _with_tenant(values: Optional[Mapping[str, Any]], tenant_id: Optional[int]) -> dict[str, Any]:
    merged = dict(values or {})
    merged[TENANT_COLUMN] = tenant_id
    return merged


class TenantScopedModelClient:
    """Per-model view of ``ModelClient`` confined to the current tenant."""

    def __init__(
        self,
        client: ModelClient,
        tenant_id_resolver: TenantIdResolver = get_tenant_id,
        *,
        fail_closed: Optional[bool] = None,
    ):
        _ensure_model_has_tenant_id(client)
        self._client = client
        self._resolve_tenant_id = tenant_id_resolver
        self._fail_closed = settings.TENANT_SCOPE_FAIL_CLOSED if fail_closed is None else fail_closed

    @property
    def model(self):
        return self._client.model

    @property
    def model_name(self) -> str:
        return self._client.model_name

    def _tenant_id(self, operation: str) -> Optional[int]:
        tenant_id = self._resolve_tenant_id()
        if tenant_id is None and self._fail_closed:
            logger.warning(
                "tenant_scope.no_tenant",
                extra={
                    "request_id": get_request_id(),
                    "model": self.model_name,
                    "operation": operation,
                },
            )
            raise TenantNotSelected()
        TENANT_SCOPED_OPERATIONS_TOTAL.labels(self.model_name, operation).inc()
        logger.debug(
            "tenant_scope.rewrite",
            extra={
                "request_id": get_request_id(),
                "tenant_id": tenant_id,
                "model": self.model_name,
                "operation": operation,
            },
        )
        return tenant_id

    # Reads

    def find_many(
        self,
        where: Optional[Where] = None,
        *,
        order_by: Optional[OrderBy] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> list:
        tenant_id = self._tenant_id("find_many")
        return self._client.find_many(
            _with_tenant(where, tenant_id), order_by=order_by, skip=skip, take=take
        )

    def find_first(self, where: Optional[Where] = None, *, order_by: Optional[OrderBy] = None):
        tenant_id = self._tenant_id("find_first")
        return self._client.find_first(_with_tenant(where, tenant_id), order_by=order_by)

    def find_first_or_throw(self, where: Optional[Where] = None, *, order_by: Optional[OrderBy] = None):
        tenant_id = self._tenant_id("find_first_or_throw")
        return self._client.find_first_or_throw(_with_tenant(where, tenant_id), order_by=order_by)

    def find_unique(self, where: Where):
        # A primary-key lookup also has to match the tenant, so another
        # tenant's row reads as missing.
        tenant_id = self._tenant_id("find_unique")
        return self._client.find_unique(_with_tenant(where, tenant_id))

    def find_unique_or_throw(self, where: Where):
        tenant_id = self._tenant_id("find_unique_or_throw")
        return self._client.find_unique_or_throw(_with_tenant(where, tenant_id))

    # Writes

    def update_many(self, where: Optional[Where], data: Data) -> int:
        tenant_id = self._tenant_id("update_many")
        # tenant_id is immutable: pin it rather than let the payload move rows.
        return self._client.update_many(_with_tenant(where, tenant_id), _with_tenant(data, tenant_id))

    def delete_many(self, where: Optional[Where] = None) -> int:
        tenant_id = self._tenant_id("delete_many")
        return self._client.delete_many(_with_tenant(where, tenant_id))

    def create(self, data: Data):
        tenant_id = self._tenant_id("create")
        return self._client.create(_with_tenant(data, tenant_id))

    def upsert(self, where: Where, create: Data, update: Data):
        tenant_id = self._tenant_id("upsert")
        return self._client.upsert(
            _with_tenant(where, tenant_id),
            _with_tenant(create, tenant_id),
            _with_tenant(update, tenant_id),
        )

    def create_many(self, data: Union[Data, Sequence[Data]]) -> int:
        tenant_id = self._tenant_id("create_many")
        if isinstance(data, Mapping):
            return self._client.create_many(_with_tenant(data, tenant_id))
        return self._client.create_many([_with_tenant(row, tenant_id) for row in data])


class TenantScopedClient:
    """
    Derived data client whose tenant-owned models are confined to the
    tenant held in the request context.
    """

    def __init__(
        self,
        client: DataClient,
        tenant_id_resolver: TenantIdResolver = get_tenant_id,
        *,
        fail_closed: Optional[bool] = None,
    ):
        self._client = client
        self._resolve_tenant_id = tenant_id_resolver
        self._fail_closed = fail_closed
        self.post = self._scope(client.post)

    def _scope(self, model_client: ModelClient) -> TenantScopedModelClient:
        return TenantScopedModelClient(
            model_client,
            self._resolve_tenant_id,
            fail_closed=self._fail_closed,
        )

    def model(self, model) -> TenantScopedModelClient:
        return self._scope(self._client.model(model))
