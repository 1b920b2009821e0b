"""Configuration utilities.

This module loads application configuration with the following rules:
- Primary source: `binder_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from content_binder.db.base import DEFAULT_DATABASE_URL
from content_binder.logic.paths import get_mvc_area


CONFIG_DIR = Path("config")
ROOT_CONFIG_FILE = Path("binder_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: an unreadable override falls through to the next source
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class RoutingConfig(BaseModel):
    render_prefixes: List[str] = Field(default_factory=lambda: ["/api/v1/render", "/api/v1/content", "/api/v1/typed"])

    @field_validator("render_prefixes")
    @classmethod
    def prefixes_must_be_absolute(cls, v: List[str]) -> List[str]:
        cleaned = [p.rstrip("/") for p in v if p and p.strip()]
        if not cleaned:
            raise ValueError("routing.render_prefixes must contain at least one prefix")
        for p in cleaned:
            if not p.startswith("/"):
                raise ValueError(f"routing.render_prefixes entries must start with '/': {p}")
        return cleaned


class BackofficeConfig(BaseModel):
    path: str = Field(default="~/umbraco")
    application_virtual_path: str = Field(default="/")

    @field_validator("application_virtual_path")
    @classmethod
    def virtual_path_must_be_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("backoffice.application_virtual_path must start with '/'")
        return v

    @property
    def mvc_area(self) -> str:
        return get_mvc_area(self.path, self.application_virtual_path)


class AppConfig(BaseModel):
    database: DatabaseConfig
    routing: RoutingConfig
    backoffice: BackofficeConfig

    @property
    def mvc_area(self) -> str:
        return self.backoffice.mvc_area


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover - defensive
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) binder_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG_FILE)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(item) for item in cur)
        return str(cur) if cur is not None else default

    dsn = _env("DATABASE_URL") or _read_config_file("database.url") or _base("database.dsn") or DEFAULT_DATABASE_URL

    prefixes_text = _env("RENDER_PREFIXES") or _read_config_file("routing.render_prefixes") or _base("routing.render_prefixes")

    backoffice_path = _env("BACKOFFICE_PATH") or _read_config_file("backoffice.path") or _base("backoffice.path", "~/umbraco")
    virtual_path = (
        _env("APPLICATION_VIRTUAL_PATH")
        or _read_config_file("backoffice.application_virtual_path")
        or _base("backoffice.application_virtual_path", "/")
    )

    try:
        routing = RoutingConfig(render_prefixes=[p.strip() for p in prefixes_text.split(",")]) if prefixes_text else RoutingConfig()
        cfg = AppConfig(
            database=DatabaseConfig(dsn=dsn),
            routing=routing,
            backoffice=BackofficeConfig(path=backoffice_path, application_virtual_path=virtual_path),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "RoutingConfig",
    "BackofficeConfig",
    "load_config",
]
