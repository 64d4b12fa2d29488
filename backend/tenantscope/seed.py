"""
Deterministic seed script for dev/demo environments.

    python -m tenantscope.seed
"""

from __future__ import annotations

import argparse
import os
import sys

import tenantscope.models  # noqa: F401
from tenantscope.core.db import Base, SessionLocal, engine
from tenantscope.core.logging import get_structured_logger
from tenantscope.crud.client import DataClient
from tenantscope.tenancy.context import request_scope, set_tenant_id
from tenantscope.tenancy.scoping import TenantScopedClient

logger = get_structured_logger("seed")

DEMO_TENANTS = {
    1: "Acme",
    2: "Umbrella",
}

DEMO_POSTS = {
    1: [{"title": "Welcome to Acme", "content": "First post for tenant 1."}],
    2: [{"title": "Welcome to Umbrella", "content": "First post for tenant 2."}],
}


def ensure_not_production():
    env = os.getenv("ENV", "").lower()
    allow_prod = os.getenv("ALLOW_SEED_PROD", "0").lower() in {"1", "true", "yes"}
    if env == "production" and not allow_prod:
        print("Refusing to seed in production. Set ALLOW_SEED_PROD=1 to override.", file=sys.stderr)
        sys.exit(1)


def seed_demo_data(db) -> dict[str, int]:
    """Create the demo tenants and their posts; safe to run repeatedly."""
    client = DataClient(db)
    created = {"tenants": 0, "posts": 0}
    for tenant_id, name in DEMO_TENANTS.items():
        if client.tenant.find_unique({"id": tenant_id}) is None:
            client.tenant.create({"id": tenant_id, "name": name})
            created["tenants"] += 1

    scoped = TenantScopedClient(client)
    for tenant_id, posts in DEMO_POSTS.items():
        with request_scope():
            set_tenant_id(tenant_id)
            for post in posts:
                if scoped.post.find_first({"title": post["title"]}) is None:
                    scoped.post.create(post)
                    created["posts"] += 1
    return created


def seed():
    ensure_not_production()
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        created = seed_demo_data(db)
    logger.info("seed.completed", extra=created)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed demo tenants and posts.")
    parser.parse_args(argv)
    seed()


if __name__ == "__main__":
    main()
