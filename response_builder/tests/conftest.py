"""Shared fixtures for response builder tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from response_builder.builder import ResponseBuilder
from response_builder.config import DictConfig
from response_builder.exception_handler import ExceptionHandler
from response_builder.messages import MessageCatalog


def make_config(
    overrides: dict[str, dict[str, Any]] | None = None,
    trace_enabled: bool = False,
    trace_key: str | None = None,
    code_map: dict[int, str] | None = None,
    debug_key: str | None = None,
) -> DictConfig:
    """Build a DictConfig laid out like Settings.to_config()."""
    debug: dict[str, Any] = {"exception_handler": {"trace_enabled": trace_enabled}}
    if trace_key is not None:
        debug["exception_handler"]["trace_key"] = trace_key
    if debug_key is not None:
        debug["debug_key"] = debug_key
    return DictConfig({
        "response_builder": {
            "exception_handler": {"exception": overrides or {}},
            "map": code_map or {},
            "debug": debug,
        },
    })


@pytest.fixture
def messages() -> MessageCatalog:
    return MessageCatalog()


@pytest.fixture
def make_handler(messages) -> Callable[..., ExceptionHandler]:
    """Factory: ExceptionHandler over a config built from make_config kwargs."""

    def _make(message_overrides: dict[str, str] | None = None, **config_kwargs: Any) -> ExceptionHandler:
        config = make_config(**config_kwargs)
        catalog = MessageCatalog(overrides=message_overrides) if message_overrides else messages
        return ExceptionHandler(config, ResponseBuilder(config, catalog), catalog)

    return _make


@pytest.fixture
def handler(make_handler) -> ExceptionHandler:
    """Handler with no configuration overrides."""
    return make_handler()


@pytest.fixture
def builder(messages) -> ResponseBuilder:
    return ResponseBuilder(make_config(), messages)


@pytest.fixture
def raised() -> Callable[[BaseException], BaseException]:
    """Raise and catch ``exc`` so it carries a traceback."""

    def _raise(exc: BaseException) -> BaseException:
        try:
            raise exc
        except BaseException as caught:  # noqa: BLE001
            return caught

    return _raise


@pytest.fixture
def config_factory() -> Callable[..., DictConfig]:
    return make_config
