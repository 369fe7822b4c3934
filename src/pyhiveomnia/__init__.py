"""Python client library for the Hive heating API.

This package provides an async client for the Hive (Omnia) REST API used by
Hive hubs, thermostats and receivers.

The library is organized into three layers:
1. **API Layer** (pyhiveomnia.api): HTTP communication, session headers and error normalization
2. **Client Layer** (pyhiveomnia.client): Login/logout and device discovery
3. **Device Layer** (pyhiveomnia.devices): Typed devices over raw nodes

Example:
    Basic usage:

    ```python
    from pyhiveomnia import HiveClient

    async with HiveClient(username="user@example.com", password="password") as client:
        devices = await client.get_devices()

        for thermostat in devices.thermostats:
            print(f"{thermostat.name}: {thermostat.current_temperature}")
            print(f"  Target: {thermostat.target_temperature}")
            print(f"  Boost: {thermostat.boost}")
    ```

    Error handling:

    ```python
    from pyhiveomnia import ErrorCode, HiveClient, HiveError

    try:
        async with HiveClient(username="user@example.com", password="wrong") as client:
            ...
    except HiveError as err:
        if err.code == ErrorCode.INVALID_LOGIN:
            print("Check your credentials")
    ```
"""

from __future__ import annotations

from pyhiveomnia.api import HiveAPI
from pyhiveomnia.auth import AuthenticationHandler
from pyhiveomnia.client import HiveClient
from pyhiveomnia.const import VERSION
from pyhiveomnia.devices import (
    HiveDevice,
    Hub,
    Receiver,
    Thermostat,
    ThermostatUi,
    classify_node,
    device_from_node,
    partition_devices,
)
from pyhiveomnia.errors import normalize_error
from pyhiveomnia.exceptions import (
    AuthenticationError,
    DeviceError,
    ErrorCode,
    HiveConnectionError,
    HiveError,
    HiveTimeoutError,
)
from pyhiveomnia.models import (
    BatteryInfo,
    BoostState,
    DeviceCollections,
    DeviceType,
    EthernetInfo,
    HeatingSchedule,
    HeatingStatus,
    HiveResponse,
    HubStatus,
)
from pyhiveomnia.schedule import parse_schedule


__version__ = VERSION

__all__ = [
    "AuthenticationError",
    "AuthenticationHandler",
    "BatteryInfo",
    "BoostState",
    "DeviceCollections",
    "DeviceError",
    "DeviceType",
    "ErrorCode",
    "EthernetInfo",
    "HeatingSchedule",
    "HeatingStatus",
    "HiveAPI",
    "HiveClient",
    "HiveConnectionError",
    "HiveDevice",
    "HiveError",
    "HiveResponse",
    "HiveTimeoutError",
    "Hub",
    "HubStatus",
    "Receiver",
    "Thermostat",
    "ThermostatUi",
    "__version__",
    "classify_node",
    "device_from_node",
    "normalize_error",
    "parse_schedule",
    "partition_devices",
]
