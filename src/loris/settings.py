"""
loris.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, CouchDB admin password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LORIS_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "loris"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Prefix for static asset URLs emitted by pages (e.g. "https://loris.example.org").
    base_url: str = ""

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "loris"
    jwt_audience: str = "loris-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Users holding this permission see entities from every site.
    all_sites_permission: str = "access_all_profiles"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./loris.db"

    # CouchDB document store (data dictionary / data query tool)
    couchdb_db_name: str = "loris"
    couchdb_hostname: str = "localhost"
    couchdb_port: int = 5984
    couchdb_admin: str = "admin"
    couchdb_adminpass: str = Field(default="", repr=False)
    couchdb_timeout_seconds: float = 10.0

    # Design document holding the data query views.
    dataquery_design_doc: str = "DQG-2.0"

    @property
    def couchdb_url(self) -> str:
        return f"http://{self.couchdb_hostname}:{self.couchdb_port}/{self.couchdb_db_name}/"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# CouchDB credentials mirror the `CouchDB` block of the legacy config.xml
# (dbName/hostname/port/admin/adminpass), flattened into env vars.
