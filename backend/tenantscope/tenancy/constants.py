"""
Constants for tenancy concerns.
"""

# Header carrying the caller's tenant selection. Starlette header lookups
# are case-insensitive, so "X-Tenant-ID" matches as well.
TENANT_HEADER = "x-tenant-id"

# Keys in the request-scoped context bag.
TENANT_ID_KEY = "tenant_id"
REQUEST_ID_KEY = "request_id"

# Discriminator column every tenant-owned table carries.
TENANT_COLUMN = "tenant_id"

TENANT_REQUIRED_MESSAGE = "Tenant ID is required"
TENANT_INVALID_MESSAGE = "Tenant ID must be a positive integer"

# Tenant ids are SERIAL keys; anything outside a 32-bit positive INTEGER
# cannot name a tenant and would overflow the driver.
TENANT_ID_MIN = 1
TENANT_ID_MAX = 2**31 - 1
