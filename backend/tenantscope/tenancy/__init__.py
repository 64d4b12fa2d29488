"Tenancy utilities: request context, header guard, and data-access scoping."

from .constants import TENANT_HEADER  # noqa: F401
from .context import get_tenant_id, request_scope, set_tenant_id  # noqa: F401
from .errors import InvalidTenantIdentifier, TenantNotSelected  # noqa: F401
from .middleware import RequestContextMiddleware  # noqa: F401
from .scoping import TenantScopedClient, TenantScopedModelClient  # noqa: F401
