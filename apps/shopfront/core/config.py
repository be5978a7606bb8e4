"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from .dataset import CATALOG_PATH

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Settings that cannot produce a working browser."""


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


class Settings(BaseModel):
    catalog_source: Literal["file", "postgrest"] = "file"
    catalog_path: Path = CATALOG_PATH
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    catalog_table: str = "products"
    request_timeout: float = Field(default=10.0, gt=0)
    search_debounce_seconds: float = Field(default=0.3, ge=0)
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        source = (env.get("CATALOG_SOURCE") or "file").strip().lower()
        if source not in {"file", "postgrest"}:
            raise ConfigurationError(f"CATALOG_SOURCE must be 'file' or 'postgrest', got {source!r}")

        origins = env.get("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        settings = cls(
            catalog_source=source,
            catalog_path=Path(env["CATALOG_PATH"]) if env.get("CATALOG_PATH") else CATALOG_PATH,
            supabase_url=env.get("SUPABASE_URL") or None,
            supabase_anon_key=env.get("SUPABASE_ANON_KEY") or None,
            catalog_table=env.get("CATALOG_TABLE") or "products",
            request_timeout=_float_env(env, "CATALOG_REQUEST_TIMEOUT", 10.0),
            search_debounce_seconds=_float_env(env, "SEARCH_DEBOUNCE_MS", 300.0) / 1000,
            cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
        settings.validate_source()
        return settings

    def validate_source(self) -> None:
        if self.catalog_source == "postgrest" and not (self.supabase_url and self.supabase_anon_key):
            raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY are required for the postgrest source")
