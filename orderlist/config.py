"""Configuration utilities for the ordered list service and its client.

This module loads application configuration with the following rules:
- Primary source: `orderlist_config.json` at the project root.
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


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("orderlist_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def _truthy(text: object) -> bool:
    return str(text).strip().lower() in {"1", "true", "yes", "on"}


class CatalogConfig(BaseModel):
    size: int = Field(default=1_000_000, ge=0)


class ApiConfig(BaseModel):
    prefix: str = "/api"
    default_limit: int = Field(default=20, gt=0)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    enable_test_support: bool = False
    host: str = "127.0.0.1"
    port: int = Field(default=3001, gt=0, lt=65536)

    @field_validator("prefix")
    @classmethod
    def prefix_must_be_rooted(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            return ""
        if not v.startswith("/"):
            raise ValueError("api.prefix must start with '/'")
        return v.rstrip("/")


class ClientConfig(BaseModel):
    base_url: str = "http://127.0.0.1:3001/api"
    batch_size: int = Field(default=20, gt=0)
    search_debounce_ms: int = Field(default=400, ge=0)
    request_timeout: float = Field(default=10.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            raise ValueError("client.base_url must be an http(s) URL")
        return v.rstrip("/")


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if v not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")
        return v


class AppConfig(BaseModel):
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) orderlist_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(x) for x in cur)
        return str(cur) if cur is not None else default

    def _pick(env_key: str, file_key: str, json_key: str, default: str) -> str:
        return _env(env_key) or _read_config_file(file_key) or _base(json_key, default) or default

    # Catalog
    size_text = _pick("ORDERLIST_CATALOG_SIZE", "catalog.size", "catalog.size", "1000000")

    # HTTP API
    prefix = _pick("ORDERLIST_API_PREFIX", "api.prefix", "api.prefix", "/api")
    default_limit_text = _pick("ORDERLIST_DEFAULT_LIMIT", "api.default_limit", "api.default_limit", "20")
    origins_text = _pick("ORDERLIST_CORS_ORIGINS", "api.cors_origins", "api.cors_origins", "*")
    test_support_text = _pick(
        "ORDERLIST_ENABLE_TEST_SUPPORT", "api.enable_test_support", "api.enable_test_support", "false"
    )
    host = _pick("ORDERLIST_HOST", "api.host", "api.host", "127.0.0.1")
    port_text = _pick("ORDERLIST_PORT", "api.port", "api.port", "3001")

    # Client
    base_url = _pick("ORDERLIST_BASE_URL", "client.base_url", "client.base_url", "http://127.0.0.1:3001/api")
    batch_text = _pick("ORDERLIST_BATCH_SIZE", "client.batch_size", "client.batch_size", "20")
    debounce_text = _pick(
        "ORDERLIST_SEARCH_DEBOUNCE_MS", "client.search_debounce_ms", "client.search_debounce_ms", "400"
    )
    timeout_text = _pick("ORDERLIST_REQUEST_TIMEOUT", "client.request_timeout", "client.request_timeout", "10")

    # Logging
    log_level = _pick("ORDERLIST_LOG_LEVEL", "logging.level", "logging.level", "INFO")

    try:
        cfg = AppConfig(
            catalog=CatalogConfig(size=int(str(size_text).strip())),
            logging=LoggingConfig(level=str(log_level)),
            api=ApiConfig(
                prefix=prefix,
                default_limit=int(str(default_limit_text).strip()),
                cors_origins=[o.strip() for o in str(origins_text).split(",") if o.strip()],
                enable_test_support=_truthy(test_support_text),
                host=str(host).strip(),
                port=int(str(port_text).strip()),
            ),
            client=ClientConfig(
                base_url=str(base_url).strip(),
                batch_size=int(str(batch_text).strip()),
                search_debounce_ms=int(str(debounce_text).strip()),
                request_timeout=float(str(timeout_text).strip()),
            ),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        # Surface actionable message before propagating
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "CatalogConfig",
    "ApiConfig",
    "ClientConfig",
    "LoggingConfig",
    "load_config",
]
