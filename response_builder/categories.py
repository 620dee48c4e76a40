"""Exception categories and their compiled-in defaults."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from starlette import status

from response_builder.api_codes import BaseApiCodes


class ExceptionCategory(str, Enum):
    """Stable category keys, also used to namespace configuration overrides."""

    NOT_FOUND = "http_not_found"
    SERVICE_UNAVAILABLE = "http_service_unavailable"
    UNAUTHORIZED = "unauthorized_exception"
    HTTP_EXCEPTION = "http_exception"
    VALIDATION = "validation_exception"
    UNCAUGHT = "uncaught_exception"
    AUTHENTICATION = "authentication_exception"


class CategoryDefaults(NamedTuple):
    api_code: int
    http_code: int


CATEGORY_DEFAULTS: dict[ExceptionCategory, CategoryDefaults] = {
    ExceptionCategory.NOT_FOUND: CategoryDefaults(
        BaseApiCodes.EX_HTTP_NOT_FOUND, status.HTTP_404_NOT_FOUND
    ),
    ExceptionCategory.SERVICE_UNAVAILABLE: CategoryDefaults(
        BaseApiCodes.EX_HTTP_SERVICE_UNAVAILABLE, status.HTTP_503_SERVICE_UNAVAILABLE
    ),
    ExceptionCategory.UNAUTHORIZED: CategoryDefaults(
        BaseApiCodes.EX_AUTHENTICATION_EXCEPTION, status.HTTP_401_UNAUTHORIZED
    ),
    ExceptionCategory.HTTP_EXCEPTION: CategoryDefaults(
        BaseApiCodes.EX_HTTP_EXCEPTION, status.HTTP_400_BAD_REQUEST
    ),
    ExceptionCategory.VALIDATION: CategoryDefaults(
        BaseApiCodes.EX_VALIDATION_EXCEPTION, status.HTTP_400_BAD_REQUEST
    ),
    ExceptionCategory.UNCAUGHT: CategoryDefaults(
        BaseApiCodes.EX_UNCAUGHT_EXCEPTION, status.HTTP_500_INTERNAL_SERVER_ERROR
    ),
    ExceptionCategory.AUTHENTICATION: CategoryDefaults(
        BaseApiCodes.EX_AUTHENTICATION_EXCEPTION, status.HTTP_401_UNAUTHORIZED
    ),
}

_missing = set(ExceptionCategory) - set(CATEGORY_DEFAULTS)
if _missing:
    raise RuntimeError(f"No defaults for categories: {sorted(c.value for c in _missing)}")

# Order matters: the first category whose effective code matches wins.
KNOWN_CODE_CATEGORIES: tuple[ExceptionCategory, ...] = (
    ExceptionCategory.NOT_FOUND,
    ExceptionCategory.SERVICE_UNAVAILABLE,
    ExceptionCategory.UNCAUGHT,
    ExceptionCategory.AUTHENTICATION,
    ExceptionCategory.VALIDATION,
    ExceptionCategory.HTTP_EXCEPTION,
)


def get_defaults(category: ExceptionCategory) -> CategoryDefaults:
    return CATEGORY_DEFAULTS[category]
