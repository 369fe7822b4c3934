"""Low-level API client for the Hive (Omnia) REST API.

This module provides direct HTTP communication with the Hive API. Every
failure is converted to a :class:`~pyhiveomnia.exceptions.HiveError` by
:func:`~pyhiveomnia.errors.normalize_error`.

Endpoint methods return the parsed data by default. Pass ``with_response=True``
to get a ``(data, HiveResponse)`` tuple instead.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from pyhiveomnia.auth import AuthenticationHandler
from pyhiveomnia.const import (
    DEFAULT_BASE_URL,
    DEFAULT_CLIENT_NAME,
    DEFAULT_SERIES_INTERVAL,
    DEFAULT_SERIES_OPERATION,
    DEFAULT_SERIES_TYPE,
    DEFAULT_SERIES_UNIT,
    DEFAULT_TIMEOUT,
    HEADER_CLIENT,
    LOGOUT_ACCEPTED_STATUSES,
    MEDIA_TYPE,
)
from pyhiveomnia.errors import ResponseStatusError, normalize_error
from pyhiveomnia.exceptions import AuthenticationError, DeviceError
from pyhiveomnia.models import HiveResponse
from pyhiveomnia.serializers import (
    build_channel_id,
    build_events_params,
    build_time_series_params,
    deserialize_time_series,
    serialize_login,
    serialize_node_update,
)


if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime
    from types import TracebackType

    from aiohttp import ClientResponse

_LOGGER = logging.getLogger(__name__)


def _records(response: HiveResponse, key: str) -> list[dict[str, Any]]:
    """Get the records listed under ``key`` in a response body.

    Returns:
        The mapping entries of ``data[key]``, or an empty list if the body is
        not a JSON object or ``key`` does not hold a list.
    """
    data = response.data
    items = data.get(key) if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _with_response(data: Any, response: HiveResponse, with_response: bool) -> Any:
    """Return ``data``, or ``(data, response)`` if ``with_response`` is set."""
    if with_response:
        return data, response
    return data


class HiveAPI:
    """Low-level API client for the Hive platform.

    This class handles raw HTTP communication with the Hive API, including
    request construction, session headers and response parsing.

    Example:
        ```python
        from pyhiveomnia.api import HiveAPI

        async with HiveAPI() as api:
            await api.login("user@example.com", "password")

            nodes = await api.get_nodes()
            node = await api.get_node(nodes[0]["id"])

            await api.logout()
        ```

    Attributes:
        auth: Session state shared by every request made through this client.
    """

    def __init__(
        self,
        *,
        session: ClientSession | None = None,
        auth_handler: AuthenticationHandler | None = None,
        base_url: str = DEFAULT_BASE_URL,
        client_name: str = DEFAULT_CLIENT_NAME,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the API client.

        Args:
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            auth_handler: Optional AuthenticationHandler holding session state.
                A new, logged out handler is created if not provided.
            base_url: Base URL for the API. Defaults to the Hive production API.
            client_name: Application name sent in the X-Omnia-Client header.
            timeout: Total request timeout in seconds.
        """
        self.auth = auth_handler if auth_handler is not None else AuthenticationHandler()
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url.rstrip("/")
        self._timeout = ClientTimeout(total=timeout)
        self._default_headers = {
            "Content-Type": MEDIA_TYPE,
            "Accept": MEDIA_TYPE,
            HEADER_CLIENT: client_name,
        }

    @property
    def headers(self) -> dict[str, str]:
        """Get the headers sent with every request, including the session token."""
        return {**self._default_headers, **self.auth.headers}

    async def __aenter__(self) -> HiveAPI:
        """Enter the context manager.

        Creates a session if one wasn't provided during initialization.

        Returns:
            Self for use in async with statements.
        """
        if self._session is None:
            self._session = ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Clears session state and closes the aiohttp session if it was created
        by this client.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        self.auth.clear_session()

        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        *,
        accept_status: Collection[int] | None = None,
    ) -> HiveResponse:
        """Make a request to the Hive API.

        This is the core method for all HTTP communication and the escape hatch
        for endpoints without a dedicated method.

        Args:
            method: HTTP method (GET, PUT, POST, DELETE).
            path: Path relative to the base URL (e.g., "nodes").
            data: Query parameters for GET requests, JSON body otherwise.
            accept_status: Status codes treated as success. Defaults to any
                2xx status.

        Returns:
            The response.

        Raises:
            HiveError: If the request fails or the status is not accepted.
        """
        if self._session is None or self._session.closed:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise normalize_error(RuntimeError(msg), request_sent=False)

        url = f"{self._base_url}/{path.lstrip('/')}"
        is_get = method.upper() == "GET"

        _LOGGER.debug("%s %s", method.upper(), url)

        try:
            async with self._session.request(
                method,
                url,
                params=data if is_get else None,
                json=None if is_get else data,
                headers=self.headers,
                timeout=self._timeout,
            ) as response:
                body = await self._read_body(response)

                if accept_status is not None:
                    accepted = response.status in accept_status
                else:
                    accepted = HTTPStatus.OK <= response.status < HTTPStatus.MULTIPLE_CHOICES

                if not accepted:
                    raise ResponseStatusError(response.status, body)

                return HiveResponse(status=response.status, data=body, headers=dict(response.headers))

        except (ResponseStatusError, TimeoutError, ClientError) as exc:
            _LOGGER.debug("Request %s %s failed: %s", method.upper(), url, exc)
            raise normalize_error(exc) from exc

    @staticmethod
    async def _read_body(response: ClientResponse) -> Any:
        """Decode a JSON response body.

        The API answers with a vendor media type, so the content type is not
        checked.

        Returns:
            Decoded body, or None if the body is empty or not JSON.
        """
        text = await response.text(errors="replace")
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            _LOGGER.debug("Response from %s is not JSON", response.url)
            return None

    # -------------------------------------------------------------------------
    # Session Endpoints
    # -------------------------------------------------------------------------

    async def login(self, username: str, password: str, *, with_response: bool = False) -> Any:
        """Log in and register the session for subsequent requests.

        Any existing session is cleared first, so a failed login leaves the
        client logged out.

        Args:
            username: User name (email).
            password: Plain text password.
            with_response: Also return the raw response.

        Returns:
            The session record of the logged in user.

        Raises:
            AuthenticationError: If the credentials are rejected or the account
                is locked.
            HiveError: If the request fails.
        """
        self.auth.clear_session()

        response = await self.request("POST", "auth/sessions", serialize_login(username, password))
        sessions = _records(response, "sessions")
        if not sessions or not sessions[0].get("sessionId"):
            msg = "Login response did not contain a session"
            raise AuthenticationError(msg)

        user: dict[str, Any] = sessions[0]
        self.auth.register_session(user)

        _LOGGER.info("Logged in as %s", user.get("username", username))
        return _with_response(user, response, with_response)

    async def logout(self) -> None:
        """Log out and clear the session.

        Unauthorized and similar responses count as logged out, so logging out
        twice is not an error. The session is cleared even if the request
        fails.

        Raises:
            HiveError: If the request fails.
        """
        path = f"auth/sessions/{self.auth.session_id or ''}"
        try:
            await self.request("DELETE", path, accept_status=LOGOUT_ACCEPTED_STATUSES)
        except Exception:
            _LOGGER.warning("Logout request failed, clearing session anyway")
            raise
        else:
            _LOGGER.info("Logged out")
        finally:
            self.auth.clear_session()

    # -------------------------------------------------------------------------
    # Node Endpoints
    # -------------------------------------------------------------------------

    async def get_nodes(self, *, with_response: bool = False) -> Any:
        """Get all nodes of the logged in user.

        Returns:
            List of raw nodes.
        """
        response = await self.request("GET", "nodes")
        nodes = _records(response, "nodes")
        return _with_response(nodes, response, with_response)

    async def get_node(
        self,
        node_id: str,
        *,
        fields: list[str] | str | None = None,
        with_response: bool = False,
    ) -> Any:
        """Get a single node.

        Args:
            node_id: The node's unique identifier.
            fields: Optional node fields to return, all fields if omitted.
            with_response: Also return the raw response.

        Returns:
            The raw node.

        Raises:
            DeviceError: If the response holds no node.
        """
        params: dict[str, Any] = {}
        if fields:
            params["fields"] = fields if isinstance(fields, str) else ",".join(fields)

        response = await self.request("GET", f"nodes/{node_id}", params)
        return _with_response(self._first_node(node_id, response), response, with_response)

    async def update_node(
        self,
        node_id: str,
        features: dict[str, Any],
        *,
        with_response: bool = False,
    ) -> Any:
        """Update features of a node.

        Args:
            node_id: The node's unique identifier.
            features: Feature properties to change, e.g.
                ``{"heating_thermostat_v1": {"targetHeatTemperature": {"targetValue": 21}}}``.
            with_response: Also return the raw response.

        Returns:
            The updated node as echoed by the server.
        """
        response = await self.request("PUT", f"nodes/{node_id}", serialize_node_update(features))
        return _with_response(self._first_node(node_id, response), response, with_response)

    @staticmethod
    def _first_node(node_id: str, response: HiveResponse) -> dict[str, Any]:
        nodes = _records(response, "nodes")
        if not nodes:
            msg = f"No node returned for {node_id}"
            raise DeviceError(msg, device_id=node_id)
        return nodes[0]

    # -------------------------------------------------------------------------
    # Channel and Event Endpoints
    # -------------------------------------------------------------------------

    async def get_time_series(self, *, with_response: bool = False) -> Any:
        """Get the time series channels available to the user.

        Returns:
            List of channels.
        """
        response = await self.request("GET", "channels")
        channels = _records(response, "channels")
        return _with_response(channels, response, with_response)

    async def get_time_series_data(
        self,
        node_id: str,
        *,
        from_time: datetime | float | None = None,
        to_time: datetime | float | None = None,
        unit: str = DEFAULT_SERIES_UNIT,
        interval: int = DEFAULT_SERIES_INTERVAL,
        value: str = DEFAULT_SERIES_OPERATION,
        series_type: str = DEFAULT_SERIES_TYPE,
        with_response: bool = False,
    ) -> Any:
        """Get time series data of a node.

        Args:
            node_id: The node's unique identifier.
            from_time: Start of the series. Defaults to one hour ago.
            to_time: End of the series. Defaults to one day after the start.
            unit: Time unit of ``interval``.
            interval: Sampling rate.
            value: Aggregation operation.
            series_type: Channel type (e.g., "temperature").
            with_response: Also return the raw response.

        Returns:
            The channel, with a ``data`` list of ``[timestamp, value]`` pairs.
        """
        params = build_time_series_params(
            from_time=from_time,
            to_time=to_time,
            unit=unit,
            interval=interval,
            value=value,
        )
        channel_id = build_channel_id(node_id, series_type)

        response = await self.request("GET", f"channels/{channel_id}", params)
        channels = _records(response, "channels")
        if not channels:
            msg = f"No time series returned for {channel_id}"
            raise DeviceError(msg, device_id=node_id)

        channel = deserialize_time_series(channels[0])
        return _with_response(channel, response, with_response)

    async def get_events(
        self,
        *,
        limit_per_device: int | None = None,
        limit: int | None = None,
        from_time: datetime | float | None = None,
        to_time: datetime | float | None = None,
        nodes: list[str] | None = None,
        with_response: bool = False,
    ) -> Any:
        """Get device events.

        Args:
            limit_per_device: Maximum number of events per device.
            limit: Maximum number of events, ignored if ``limit_per_device``
                is given. Without either, 100 events per device are returned.
            from_time: Only events after this time.
            to_time: Only events before this time.
            nodes: Only events of these node IDs.
            with_response: Also return the raw response.

        Returns:
            List of events.
        """
        params = build_events_params(
            limit_per_device=limit_per_device,
            limit=limit,
            from_time=from_time,
            to_time=to_time,
            nodes=nodes,
        )
        response = await self.request("GET", "events", params)
        events = _records(response, "events")
        return _with_response(events, response, with_response)
