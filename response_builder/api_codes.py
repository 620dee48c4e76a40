"""Reserved application-level API codes and their message template ids."""

from __future__ import annotations


class BaseApiCodes:
    """API codes reserved by the response builder.

    Application codes should live outside ``RESERVED_MIN_API_CODE``..``RESERVED_MAX_API_CODE``.
    """

    RESERVED_MIN_API_CODE = 0
    RESERVED_MAX_API_CODE = 19

    OK = 0
    NO_ERROR_MESSAGE = 1
    EX_HTTP_NOT_FOUND = 10
    EX_HTTP_SERVICE_UNAVAILABLE = 11
    EX_HTTP_EXCEPTION = 12
    EX_UNCAUGHT_EXCEPTION = 13
    EX_AUTHENTICATION_EXCEPTION = 14
    EX_VALIDATION_EXCEPTION = 15

    _MESSAGE_KEYS: dict[int, str] = {
        OK: "ok",
        NO_ERROR_MESSAGE: "no_error_message",
        EX_HTTP_NOT_FOUND: "http_not_found",
        EX_HTTP_SERVICE_UNAVAILABLE: "http_service_unavailable",
        EX_HTTP_EXCEPTION: "http_exception",
        EX_UNCAUGHT_EXCEPTION: "uncaught_exception",
        EX_AUTHENTICATION_EXCEPTION: "authentication_exception",
        EX_VALIDATION_EXCEPTION: "validation_exception",
    }

    @classmethod
    def get_code_message_key(cls, api_code: int) -> str | None:
        """Return the message template id for a reserved code, or None."""
        return cls._MESSAGE_KEYS.get(api_code)

    @classmethod
    def is_reserved(cls, api_code: int) -> bool:
        return cls.RESERVED_MIN_API_CODE <= api_code <= cls.RESERVED_MAX_API_CODE
