"""
Custom exceptions for tenant resolution and scoping.
"""

from tenantscope.tenancy.constants import TENANT_INVALID_MESSAGE, TENANT_REQUIRED_MESSAGE


class TenantNotSelected(Exception):
    """Raised when a tenant context is required but none was provided."""

    code = "tenant_required"
    status_code = 403

    def __init__(self, message: str = TENANT_REQUIRED_MESSAGE):
        super().__init__(message)
        self.message = message


class InvalidTenantIdentifier(Exception):
    """Raised when the tenant header cannot be read as an integer id."""

    code = "tenant_invalid"
    status_code = 400

    def __init__(self, message: str = TENANT_INVALID_MESSAGE):
        super().__init__(message)
        self.message = message
