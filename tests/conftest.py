"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from pyhiveomnia.const import NODE_TYPE_HUB, NODE_TYPE_THERMOSTAT, NODE_TYPE_THERMOSTAT_UI


def reported(value: Any, **fields: Any) -> dict[str, Any]:
    """Build a feature property with a reported value."""
    return {"reportedValue": value, **fields}


@pytest.fixture
def hub_node() -> dict[str, Any]:
    """Create a raw hub node."""
    return {
        "id": "hub-1",
        "name": "Hub",
        "lastSeen": 1518000000000,
        "nodeType": NODE_TYPE_HUB,
        "features": {
            "ethernet_device_v1": {
                "internalIPAddress": reported("192.168.1.20"),
                "macAddress": reported("00:1C:2B:AA:BB:CC"),
            },
            "hive_hub_v1": {
                "devicesState": reported("UP"),
                "serverConnectionState": reported("CONNECTED"),
                "connection": reported("ETHERNET"),
                "ethernetConnectionState": reported("CONNECTED"),
                "uptime": reported(86400),
            },
        },
    }


@pytest.fixture
def thermostat_node() -> dict[str, Any]:
    """Create a raw thermostat node (thermostat node type with the heating feature)."""
    return {
        "id": "thermostat-1",
        "name": "Heating",
        "lastSeen": 1518000001000,
        "nodeType": NODE_TYPE_THERMOSTAT,
        "features": {
            "heating_thermostat_v1": {
                "operatingMode": reported("SCHEDULE"),
                "operatingState": reported("HEAT"),
                "temporaryOperatingModeOverride": reported("NONE"),
                "targetHeatTemperature": reported(19.0, displayValue=21.5, propertyStatus="PENDING"),
                "heatSchedule": reported(
                    {
                        "setpoints": [
                            {"dayIndex": 1, "time": "06:30", "actions": [{"attribute": "t", "value": 21}]},
                            {"dayIndex": 1, "time": "22:00", "actions": [{"attribute": "t", "value": 16}]},
                            {"dayIndex": 7, "time": "08:00", "actions": [{"attribute": "t", "value": 20}]},
                        ]
                    }
                ),
            },
            "temperature_sensor_v1": {
                "temperature": reported("19.63", reportReceivedTime=1518000000500),
            },
            "frost_protect_v1": {
                "frostProtectTemperature": reported(7),
            },
            "on_off_device_v1": {
                "mode": reported("ON"),
            },
            "transient_mode_v1": {
                "actions": reported([{"attribute": "targetHeatTemperature", "value": "22.0"}]),
                "duration": reported(3600),
                "startDatetime": reported("2018-02-19T15:38:49.972+0000"),
                "endDatetime": reported("2018-02-19T16:38:49.972+0000"),
            },
        },
    }


@pytest.fixture
def receiver_node() -> dict[str, Any]:
    """Create a raw receiver node (thermostat node type without the heating feature)."""
    return {
        "id": "receiver-1",
        "name": "Receiver",
        "lastSeen": 1518000002000,
        "nodeType": NODE_TYPE_THERMOSTAT,
        "features": {
            "radio_device_v1": {"signalStrength": reported(87)},
        },
    }


@pytest.fixture
def thermostat_ui_node() -> dict[str, Any]:
    """Create a raw thermostat UI node."""
    return {
        "id": "ui-1",
        "name": "Thermostat",
        "lastSeen": 1518000003000,
        "nodeType": NODE_TYPE_THERMOSTAT_UI,
        "features": {
            "battery_device_v1": {
                "batteryLevel": reported(80),
                "batteryState": reported("NORMAL"),
                "batteryVoltage": reported(2.9),
            },
            "radio_device_v1": {"signalStrength": reported(100)},
            "thermostat_ui_v1": {"temperatureUnit": reported("C")},
        },
    }


@pytest.fixture
def mock_api() -> AsyncMock:
    """Create a mock HiveAPI."""
    return AsyncMock()


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock aiohttp ClientSession whose requests can be configured.

    Set ``session.request_context.__aenter__`` to control what a request
    returns or raises.

    Returns:
        Mock ClientSession for testing.
    """
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()

    context = MagicMock()
    context.__aenter__ = AsyncMock()
    context.__aexit__ = AsyncMock(return_value=None)
    session.request.return_value = context
    session.request_context = context

    return session


@pytest.fixture
def mock_response() -> MagicMock:
    """Create a mock aiohttp ClientResponse.

    Returns:
        Mock ClientResponse for testing.
    """
    response = MagicMock()
    response.status = 200
    response.headers = {}
    response.text = AsyncMock(return_value="")
    return response
