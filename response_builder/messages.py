"""Localized message templates.

Templates use ``:name`` placeholders, e.g. ``"Error #:api_code"``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def _http_templates() -> dict[str, str]:
    return {
        f"http_{s.value}": s.phrase
        for s in HTTPStatus
        if 400 <= s.value <= 599
    }


BUILTIN_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "ok": "OK",
        "no_error_message": "Error #:api_code",
        "uncaught_exception": "Uncaught exception :message",
        "http_exception": "HTTP exception :message",
        "http_not_found": "Unknown method",
        "http_service_unavailable": "Service maintenance in progress",
        "authentication_exception": "Not authorized to access this resource",
        "validation_exception": "Invalid data",
        **_http_templates(),
    },
}


class MessageCatalog:
    """Template lookup for one locale, with per-application overrides on top."""

    def __init__(self, locale: str = "en", overrides: Mapping[str, str] | None = None) -> None:
        if locale not in BUILTIN_MESSAGES:
            logger.warning("No built-in messages for locale %r (falling back to 'en')", locale)
        self.locale = locale
        self._templates = {**BUILTIN_MESSAGES.get(locale, BUILTIN_MESSAGES["en"]), **(overrides or {})}

    def has(self, template_id: str) -> bool:
        return template_id in self._templates

    def get(self, template_id: str, substitutions: Mapping[str, Any] | None = None) -> str:
        """Render a template. Unknown ids are returned as-is."""
        template = self._templates.get(template_id)
        if template is None:
            return template_id
        if not substitutions:
            return template

        def _replace(match: re.Match) -> str:
            name = match.group(1)
            if name in substitutions:
                return str(substitutions[name])
            return match.group(0)

        return _PLACEHOLDER.sub(_replace, template)
