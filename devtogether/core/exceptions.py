"""
Centralized Exception Handling Module
=====================================

Defines custom exception classes for the application.

The policy engines themselves never raise: MalformedInputError is
raised by the strict parsers and caught at the coercion helpers, which
log it and fall back to the most restrictive default.

Usage:
    raise MalformedInputError("role", "superuser", "unknown role")
"""

from typing import Any, Dict, Optional

from fastapi import status


class DevTogetherException(Exception):
    """
    Base exception class for the DevTogether policy service.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ==========================
# Input Exceptions
# ==========================

class MalformedInputError(DevTogetherException):
    """Raised when session facts or a notification payload cannot be interpreted."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            message=f"Malformed value for '{field}': {reason}",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"field": field, "reason": reason},
        )

