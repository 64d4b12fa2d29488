# Central place for all configurable settings. We use Pydantic's
# BaseSettings so values can be read from env vars or a .env file.

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def safe_json_loads(value):
    try:
        return json.loads(value)
    except Exception:
        return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_json_loads=safe_json_loads,
    )

    # Shared database holding every tenant's rows.
    DATABASE_URL: str = "sqlite:///./tenantscope.db"

    # Echo every SQL statement through the sqlalchemy.engine logger.
    SQL_ECHO: bool = False

    # Header carrying the numeric tenant identifier on inbound requests.
    TENANT_HEADER_NAME: str = "x-tenant-id"

    # When no tenant is in context, scoped data access raises instead of
    # filtering on a null tenant.
    TENANT_SCOPE_FAIL_CLOSED: bool = True

    @field_validator("TENANT_HEADER_NAME", mode="before")
    @classmethod
    def _normalize_header_name(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


settings = Settings()
