"""Contextvars-based request context that flows through every request.

Each inbound request gets its own mutable bag. The bag is installed by
``RequestContextMiddleware`` and populated by the tenant guard; anything
running inside the request (async handlers, sync handlers in the threadpool,
data-access clients) reads it without the value being passed around.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

from tenantscope.tenancy.constants import REQUEST_ID_KEY, TENANT_ID_KEY

_context_var: ContextVar[Optional[dict[str, Any]]] = ContextVar("request_context", default=None)


@contextmanager
def request_scope(**initial: Any) -> Iterator[dict[str, Any]]:
    """Install a fresh context bag for the duration of the block."""
    bag: dict[str, Any] = dict(initial)
    token = _context_var.set(bag)
    try:
        yield bag
    finally:
        _context_var.reset(token)


def has_request_scope() -> bool:
    return _context_var.get() is not None


def set_context_value(key: str, value: Any) -> None:
    bag = _context_var.get()
    if bag is None:
        raise RuntimeError("No active request context; wrap the call in request_scope()")
    bag[key] = value


def get_context_value(key: str, default: Any = None) -> Any:
    bag = _context_var.get()
    if bag is None:
        return default
    return bag.get(key, default)


def get_tenant_id() -> Optional[int]:
    """Get the current tenant ID from context."""
    return get_context_value(TENANT_ID_KEY)


def set_tenant_id(tenant_id: Optional[int]) -> None:
    """Set the current tenant ID in context."""
    set_context_value(TENANT_ID_KEY, tenant_id)


def get_request_id() -> Optional[str]:
    return get_context_value(REQUEST_ID_KEY)
