"""High-level client for Hive devices.

This module coordinates the low-level API layer and the device objects:
it manages login and logout and turns the node list into typed devices.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pyhiveomnia.api import HiveAPI
from pyhiveomnia.const import DEFAULT_BASE_URL, DEFAULT_CLIENT_NAME, DEFAULT_TIMEOUT
from pyhiveomnia.devices import device_from_node, partition_devices


if TYPE_CHECKING:
    from types import TracebackType

    from aiohttp import ClientSession

    from pyhiveomnia.devices import HiveDevice

_LOGGER = logging.getLogger(__name__)


class HiveClient:
    """Client for the devices of a Hive account.

    Example:
        Basic usage with automatic login:

        ```python
        from pyhiveomnia import HiveClient

        async with HiveClient(username="user@example.com", password="password") as client:
            devices = await client.get_devices()

            for thermostat in devices.thermostats:
                print(f"{thermostat.name}: {thermostat.current_temperature}")
                await thermostat.set_target_temperature(20)
        ```

        Usage with an injected session and explicit login:

        ```python
        from aiohttp import ClientSession
        from pyhiveomnia import HiveClient

        async with ClientSession() as session:
            client = HiveClient(session=session, client_name="My heating app")
            await client.login("user@example.com", "password")
            try:
                nodes = await client.api.get_nodes()
            finally:
                await client.logout()
        ```

    Attributes:
        api: Low-level HiveAPI instance for HTTP communication.
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        api: HiveAPI | None = None,
        client_name: str = DEFAULT_CLIENT_NAME,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the Hive client.

        Args:
            username: User name (email). When given with ``password``, entering
                the context manager logs in.
            password: Plain text password.
            base_url: Base URL for the API. Defaults to the Hive production API.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            api: Optional pre-configured HiveAPI. If provided, ``base_url``,
                ``session``, ``client_name`` and ``timeout`` are ignored.
            client_name: Application name sent in the X-Omnia-Client header.
            timeout: Total request timeout in seconds.
        """
        self._username = username
        self._password = password

        if api is not None:
            self._api = api
        else:
            self._api = HiveAPI(
                session=session,
                base_url=base_url,
                client_name=client_name,
                timeout=timeout,
            )

    @property
    def api(self) -> HiveAPI:
        """Get the underlying API client.

        This provides direct access to low-level API methods for advanced use cases.

        Returns:
            HiveAPI instance.
        """
        return self._api

    @property
    def user(self) -> dict[str, Any] | None:
        """Get the session record of the logged in user."""
        return self._api.auth.user

    async def __aenter__(self) -> HiveClient:
        """Enter the context manager.

        Creates the session if needed and logs in when credentials were given.

        Returns:
            Self for use in async with statements.

        Raises:
            HiveError: If the login fails.
        """
        await self._api.__aenter__()

        if self._username is not None and self._password is not None:
            try:
                await self.login(self._username, self._password)
            except Exception:
                await self._api.__aexit__(None, None, None)
                raise

        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager.

        Clears the session state and closes the API client.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        await self._api.__aexit__(exc_type, exc_val, exc_tb)

    async def login(self, username: str, password: str, *, with_response: bool = False) -> Any:
        """Log in. See :meth:`HiveAPI.login`."""
        return await self._api.login(username, password, with_response=with_response)

    async def logout(self) -> None:
        """Log out. See :meth:`HiveAPI.logout`."""
        await self._api.logout()

    async def get_devices(self, *, with_response: bool = False) -> Any:
        """Get all devices, grouped by variant.

        The collections are built fresh on every call.

        Args:
            with_response: Also return the raw response of the nodes request.

        Returns:
            DeviceCollections, or ``(DeviceCollections, HiveResponse)``.

        Raises:
            HiveError: If the request fails.
        """
        nodes, response = await self._api.get_nodes(with_response=True)
        devices = partition_devices(self._api, nodes)

        _LOGGER.debug(
            "Found %d hub(s), %d thermostat(s), %d thermostat UI(s), %d receiver(s), %d other",
            len(devices.hubs),
            len(devices.thermostats),
            len(devices.thermostat_uis),
            len(devices.receivers),
            len(devices.other),
        )

        if with_response:
            return devices, response
        return devices

    async def get_device(self, node_id: str) -> HiveDevice:
        """Get a single device.

        Args:
            node_id: The node's unique identifier.

        Returns:
            Device of the variant matching the node.

        Raises:
            DeviceError: If the node does not exist.
            HiveError: If the request fails.
        """
        node = await self._api.get_node(node_id)
        return device_from_node(self._api, node)
