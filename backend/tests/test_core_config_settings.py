import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SKIP_MIGRATIONS", "1")

from tenantscope.core.config import Settings, settings
from tenantscope.tenancy.scoping import TenantScopedModelClient


class _PostClient:
    model_name = "Post"

    def __init__(self):
        self.where = "unset"

    def has_column(self, name):
        return name == "tenant_id"

    def find_many(self, where=None, **_kwargs):
        self.where = where
        return []


def test_settings_defaults(monkeypatch):
    for key in ("DATABASE_URL", "TENANT_HEADER_NAME", "TENANT_SCOPE_FAIL_CLOSED", "SQL_ECHO"):
        monkeypatch.delenv(key, raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.DATABASE_URL == "sqlite:///./tenantscope.db"
    assert cfg.TENANT_HEADER_NAME == "x-tenant-id"
    assert cfg.TENANT_SCOPE_FAIL_CLOSED is True
    assert cfg.SQL_ECHO is False


def test_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://app:pw@db/tenants")
    monkeypatch.setenv("TENANT_HEADER_NAME", " X-Org-ID ")
    monkeypatch.setenv("TENANT_SCOPE_FAIL_CLOSED", "false")
    monkeypatch.setenv("SQL_ECHO", "true")
    cfg = Settings(_env_file=None)
    assert cfg.DATABASE_URL == "postgresql://app:pw@db/tenants"
    assert cfg.TENANT_HEADER_NAME == "x-org-id"
    assert cfg.TENANT_SCOPE_FAIL_CLOSED is False
    assert cfg.SQL_ECHO is True


def test_fail_closed_setting_drives_scoped_client(monkeypatch):
    monkeypatch.setattr(settings, "TENANT_SCOPE_FAIL_CLOSED", False)
    inner = _PostClient()
    TenantScopedModelClient(inner, lambda: None).find_many()
    assert inner.where == {"tenant_id": None}
