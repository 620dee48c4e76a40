"""Centralized settings and the configuration provider handed to the responder."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from response_builder.categories import ExceptionCategory

# Load .env before anything reads os.getenv
load_dotenv(Path(__file__).resolve().parent / ".env")

# ── Configuration keys ──
CONF_ROOT_KEY = "response_builder"
CONF_EXCEPTION_HANDLER_KEY = f"{CONF_ROOT_KEY}.exception_handler"
CONF_KEY_MAP = f"{CONF_ROOT_KEY}.map"
CONF_KEY_LOCALE = f"{CONF_ROOT_KEY}.locale"
CONF_KEY_DEBUG_KEY = f"{CONF_ROOT_KEY}.debug.debug_key"
CONF_KEY_DEBUG_EX_TRACE_ENABLED = f"{CONF_ROOT_KEY}.debug.exception_handler.trace_enabled"
CONF_KEY_DEBUG_EX_TRACE_KEY = f"{CONF_ROOT_KEY}.debug.exception_handler.trace_key"


def exception_config_key(category: ExceptionCategory, field: str) -> str:
    """Return e.g. ``response_builder.exception_handler.exception.http_not_found.code``."""
    return f"{CONF_EXCEPTION_HANDLER_KEY}.exception.{category.value}.{field}"


class ConfigProvider(Protocol):
    """Read-only key/value store with default fallback."""

    def get(self, key: str, default: Any = None) -> Any: ...


class DictConfig:
    """ConfigProvider over nested mappings, addressed with dotted keys."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = data or {}

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node

    def __repr__(self) -> str:
        return f"DictConfig({self._data!r})"


class ExceptionOverride(BaseModel):
    """Per-category override of the API code and/or HTTP status."""

    code: int | None = None
    http_code: int | None = None


class Settings(BaseSettings):
    """Application settings. Values come from environment variables, then defaults."""

    # ── Exception handler overrides, keyed by category ──
    exception_handler: dict[str, ExceptionOverride] = Field(default_factory=dict)

    # ── API code → message template id ──
    code_map: dict[int, str] = Field(default_factory=dict)

    # ── Messages ──
    locale: str = "en"
    messages: dict[str, str] = Field(default_factory=dict)

    # ── Debug ──
    debug_key: str = "debug"
    debug_trace_enabled: bool = False
    debug_trace_key: str = "trace"

    # ── Server ──
    project_name: str = "Response Builder API"
    version: str = "0.1.0"
    log_level: str = "INFO"

    model_config = {"env_prefix": "RESPONSE_BUILDER_", "env_file": ".env", "extra": "ignore"}

    @field_validator("exception_handler")
    @classmethod
    def _check_category_keys(cls, value: dict[str, ExceptionOverride]) -> dict[str, ExceptionOverride]:
        """Fail fast at startup on a misspelled category key."""
        known = {category.value for category in ExceptionCategory}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ValueError(
                f"Unknown exception categories: {', '.join(unknown)}"
            )
        return value

    def to_config(self) -> DictConfig:
        """Lay the settings out under the dotted keys the responder reads."""
        overrides = {
            key: override.model_dump(exclude_none=True)
            for key, override in self.exception_handler.items()
        }
        return DictConfig({
            CONF_ROOT_KEY: {
                "exception_handler": {"exception": overrides},
                "map": dict(self.code_map),
                "locale": self.locale,
                "debug": {
                    "debug_key": self.debug_key,
                    "exception_handler": {
                        "trace_enabled": self.debug_trace_enabled,
                        "trace_key": self.debug_trace_key,
                    },
                },
            },
        })


@lru_cache
def get_settings() -> Settings:
    """Return cached singleton settings instance."""
    return Settings()
