"""Custom exceptions for pyhiveomnia library."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Normalized error codes.

    Codes reported by the remote service that are not listed here are passed
    through verbatim, so ``HiveError.code`` is typed as a plain string.
    """

    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    NOT_PERMITTED = "NOT_PERMITTED"
    INVALID_LOGIN = "INVALID_LOGIN"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    NETWORK_ERROR = "NETWORK_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    REQUEST_NOT_SENT = "REQUEST_NOT_SENT"
    TIMEOUT = "TIMEOUT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES: dict[str, str] = {
    ErrorCode.ACCOUNT_LOCKED: "Account locked",
    ErrorCode.NOT_PERMITTED: "Not permitted",
    ErrorCode.INVALID_LOGIN: "Invalid login",
    ErrorCode.METHOD_NOT_ALLOWED: "Method not allowed",
    ErrorCode.NETWORK_ERROR: "Network error",
    ErrorCode.NOT_AUTHENTICATED: "Not authenticated",
    ErrorCode.REQUEST_NOT_SENT: "Request not sent",
    ErrorCode.TIMEOUT: "Timeout",
    ErrorCode.UNKNOWN_ERROR: "Unknown error",
}


class HiveError(Exception):
    """Base exception for all Hive errors.

    Attributes:
        code: Stable error code, either an ErrorCode or a code passed through
            from the remote service.
        message: Human readable message.
        error: The underlying exception that caused this error, if any.
        errors: Error detail list reported by the remote service, if any.
    """

    def __init__(
        self,
        message: str = "",
        code: str = ErrorCode.UNKNOWN_ERROR,
        *,
        error: BaseException | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize HiveError.

        Args:
            message: Error message. Defaults to the known message for ``code``.
            code: Error code.
            error: Optional underlying exception.
            errors: Optional remote error detail list.
        """
        message = message or ERROR_MESSAGES.get(code, code)
        super().__init__(message)
        self.code = code
        self.message = message
        self.error = error
        self.errors = errors


class AuthenticationError(HiveError):
    """Exception raised for authentication and permission failures."""


class HiveConnectionError(HiveError):
    """Exception raised when the request could not reach the service."""


class HiveTimeoutError(HiveError):
    """Exception raised when API requests timeout."""


class DeviceError(HiveError):
    """Exception raised for device-related errors.

    Attributes:
        device_id: Optional device ID associated with the error.
    """

    def __init__(self, message: str = "", device_id: str | None = None, **kwargs: Any) -> None:
        """Initialize DeviceError.

        Args:
            message: Error message.
            device_id: Optional device ID associated with the error.
            **kwargs: Passed through to HiveError.
        """
        super().__init__(message, **kwargs)
        self.device_id = device_id
