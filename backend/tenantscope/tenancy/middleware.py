"""
Middleware for request-scoped tenancy concerns.
"""

import logging
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from tenantscope.tenancy.constants import REQUEST_ID_KEY
from tenantscope.tenancy.context import request_scope

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Opens a fresh context bag per request, seeds it with a request_id and
    echoes that id back on the response.
    """

    async def dispatch(self, request, call_next):
        request_id = (
            getattr(request.state, "request_id", None)
            or request.headers.get("X-Request-ID")
            or str(uuid4())
        )
        request.state.request_id = request_id
        request.state.tenant_id = None

        with request_scope(**{REQUEST_ID_KEY: request_id}):
            logger.debug(
                "request.start",
                extra={"request_id": request_id, "path": request.url.path},
            )
            response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response
