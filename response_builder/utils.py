"""Shared utility functions used across the package."""

from __future__ import annotations

import traceback
from collections.abc import Iterable, Mapping
from typing import Any


def flatten_validation_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic-style error dicts into ``{field: [message, ...]}``.

    The field is the dotted ``loc`` of the error, e.g. ``("body", "email")``
    becomes ``"body.email"``. Errors without a location are filed under ``""``.
    """
    result: dict[str, list[str]] = {}
    for err in errors:
        loc = err.get("loc") or ()
        field = ".".join(str(part) for part in loc)
        result.setdefault(field, []).append(str(err.get("msg", "")))
    return result


def exception_origin(exc: BaseException) -> tuple[str | None, int | None]:
    """Return (file, line) of the innermost traceback frame, or (None, None) if never raised."""
    tb = exc.__traceback__
    if tb is None:
        return None, None
    frames = traceback.extract_tb(tb)
    if not frames:
        return None, None
    last = frames[-1]
    return last.filename, last.lineno


def int_or_none(value: Any) -> int | None:
    """Coerce config/attribute values to int. Booleans and junk give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
