"""Normalization of transport and remote failures.

Every failure raised by :meth:`pyhiveomnia.api.HiveAPI.request` passes through
:func:`normalize_error`, which maps it onto the closed set of codes in
:class:`~pyhiveomnia.exceptions.ErrorCode`. Codes reported by the remote
service that have no mapping are passed through verbatim.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from aiohttp import ClientConnectionError

from pyhiveomnia.exceptions import (
    ERROR_MESSAGES,
    AuthenticationError,
    ErrorCode,
    HiveConnectionError,
    HiveError,
    HiveTimeoutError,
)


__all__ = [
    "ResponseStatusError",
    "build_error",
    "normalize_error",
]

_LOGGER = logging.getLogger(__name__)

# Remote codes with a normalized equivalent
_REMOTE_CODES: dict[str, ErrorCode] = {
    "USERNAME_PASSWORD_ERROR": ErrorCode.INVALID_LOGIN,
    "ACCOUNT_LOCKED": ErrorCode.ACCOUNT_LOCKED,
}

_ERROR_CLASSES: dict[str, type[HiveError]] = {
    ErrorCode.ACCOUNT_LOCKED: AuthenticationError,
    ErrorCode.INVALID_LOGIN: AuthenticationError,
    ErrorCode.NOT_AUTHENTICATED: AuthenticationError,
    ErrorCode.NOT_PERMITTED: AuthenticationError,
    ErrorCode.NETWORK_ERROR: HiveConnectionError,
    ErrorCode.REQUEST_NOT_SENT: HiveConnectionError,
    ErrorCode.TIMEOUT: HiveTimeoutError,
}


class ResponseStatusError(Exception):
    """A response was received with a status the caller does not accept.

    Attributes:
        status: HTTP status code of the response.
        data: Decoded response body, or None if it was empty or not JSON.
    """

    def __init__(self, status: int, data: Any = None) -> None:
        """Initialize ResponseStatusError.

        Args:
            status: HTTP status code.
            data: Decoded response body.
        """
        super().__init__(f"Request failed with status code {status}")
        self.status = status
        self.data = data


def _remote_errors(error: BaseException) -> list[dict[str, Any]] | None:
    """Return the remote error list carried by ``error``, if any."""
    if not isinstance(error, ResponseStatusError) or not isinstance(error.data, dict):
        return None
    errors = error.data.get("errors")
    return errors if isinstance(errors, list) else None


def build_error(code: str | None, error: BaseException) -> HiveError:
    """Create the HiveError for ``code``.

    Known codes get their fixed message. Any other code is used as its own
    message; a missing code becomes UNKNOWN_ERROR.

    Args:
        code: Normalized or remote error code.
        error: The underlying exception.

    Returns:
        HiveError subclass instance matching the code.
    """
    if not code:
        code = ErrorCode.UNKNOWN_ERROR
    message = ERROR_MESSAGES.get(code, code)
    error_class = _ERROR_CLASSES.get(code, HiveError)
    return error_class(message, code, error=error, errors=_remote_errors(error))


def _classify(error: BaseException, *, request_sent: bool) -> str | None:
    """Return the error code for ``error``.

    Raises:
        KeyError, IndexError, TypeError, AttributeError: If a response body
            does not have the expected shape.
    """
    if isinstance(error, ResponseStatusError):
        if error.status == HTTPStatus.UNAUTHORIZED:
            return ErrorCode.NOT_AUTHENTICATED
        if error.status == HTTPStatus.METHOD_NOT_ALLOWED:
            return ErrorCode.METHOD_NOT_ALLOWED
        remote_code = error.data["errors"][0]["code"]
        return _REMOTE_CODES.get(remote_code, remote_code)

    if not request_sent:
        return ErrorCode.REQUEST_NOT_SENT

    # ServerTimeoutError is also a ClientConnectionError, so check timeouts first
    if isinstance(error, TimeoutError):
        return ErrorCode.TIMEOUT

    if isinstance(error, ClientConnectionError):
        return ErrorCode.NETWORK_ERROR

    return str(error)


def normalize_error(error: BaseException, *, request_sent: bool = True) -> HiveError:
    """Map a transport or remote failure onto a HiveError.

    Classification, first match wins:

    1. Response with status 401: NOT_AUTHENTICATED.
    2. Response with status 405: METHOD_NOT_ALLOWED.
    3. Any other response: the first remote error code, with
       USERNAME_PASSWORD_ERROR mapped to INVALID_LOGIN and ACCOUNT_LOCKED
       kept; other codes are passed through.
    4. The request was never sent: REQUEST_NOT_SENT.
    5. Timeout: TIMEOUT.
    6. Connection failure: NETWORK_ERROR.
    7. Anything else: the failure's message, or UNKNOWN_ERROR if it has none.

    A response body that cannot be classified degrades to rule 7.

    Args:
        error: The failure raised by the transport or by the status check.
        request_sent: False if the failure happened before the request was
            dispatched.

    Returns:
        The normalized error. The caller is responsible for raising it.
    """
    try:
        code = _classify(error, request_sent=request_sent)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        _LOGGER.debug("Could not classify error response %r: %s", error, exc)
        code = str(error)

    normalized = build_error(code, error)
    _LOGGER.debug("Normalized %s to %s", type(error).__name__, normalized.code)
    return normalized
