"""Data models for Hive API responses and derived device values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from datetime import datetime

    from pyhiveomnia.devices import HiveDevice, Hub, Receiver, Thermostat, ThermostatUi


__all__ = [
    "BatteryInfo",
    "BoostState",
    "DeviceCollections",
    "DeviceType",
    "EthernetInfo",
    "HeatingSchedule",
    "HeatingStatus",
    "HiveResponse",
    "HubStatus",
    "WeeklySchedule",
]

WeeklySchedule = dict[str, list[tuple[str, Any]]]


class DeviceType(StrEnum):
    """Device variant tags."""

    GENERIC = "generic"
    HUB = "hub"
    THERMOSTAT = "thermostat"
    THERMOSTAT_UI = "thermostatUi"
    RECEIVER = "receiver"


@dataclass(frozen=True)
class HiveResponse:
    """Raw response from the Hive API.

    Attributes:
        status: HTTP status code.
        data: Decoded JSON body (None if the body was empty).
        headers: Response headers.
    """

    status: int
    data: Any
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class EthernetInfo:
    """Hub network information.

    Attributes:
        ip_address: Internal IP address of the hub.
        mac_address: MAC address of the hub.
    """

    ip_address: str | None = None
    mac_address: str | None = None


@dataclass
class HubStatus:
    """Hub connection status.

    Attributes:
        state: Devices state (e.g., "UP").
        server: Server connection state (e.g., "CONNECTED").
        connection: Connection type (e.g., "ETHERNET").
        ethernet: Ethernet connection state (e.g., "CONNECTED").
        uptime: Uptime in seconds.
    """

    state: str | None = None
    server: str | None = None
    connection: str | None = None
    ethernet: str | None = None
    uptime: int | None = None


@dataclass
class BatteryInfo:
    """Battery information of a battery powered device.

    Attributes:
        battery_level: Battery level percentage.
        battery_state: Battery state (e.g., "NORMAL").
        battery_voltage: Battery voltage.
    """

    battery_level: Any = None
    battery_state: Any = None
    battery_voltage: Any = None


@dataclass
class HeatingStatus:
    """Heating mode and whether the boiler is currently heating.

    Attributes:
        mode: SCHEDULE, MANUAL or OFF.
        is_on: True if the thermostat is calling for heat.
    """

    mode: str | None = None
    is_on: bool = False


@dataclass
class HeatingSchedule:
    """Weekly heating schedule.

    Attributes:
        schedule: Set points per weekday, or None if none are reported.
        frost_protect: Frost protection temperature.
    """

    schedule: WeeklySchedule | None = None
    frost_protect: float | None = None


@dataclass(frozen=True)
class BoostState:
    """Active boost (temporary override of the heating schedule).

    Either ``target_temperature`` is set (when the boost targets the heating
    temperature) or ``target_attribute`` and ``target_value`` are.

    Attributes:
        duration: Boost duration in seconds.
        start: Start of the boost.
        end: End of the boost.
        target_temperature: Boosted target temperature.
        target_attribute: Name of the boosted attribute.
        target_value: Boosted value of ``target_attribute``.
    """

    duration: int | None = None
    start: datetime | None = None
    end: datetime | None = None
    target_temperature: float | None = None
    target_attribute: str | None = None
    target_value: Any = None


@dataclass
class DeviceCollections:
    """Devices grouped by variant.

    Attributes:
        hubs: Hub devices.
        receivers: Receiver devices.
        thermostats: Thermostat devices.
        thermostat_uis: Thermostat UI devices.
        other: Devices of any other type.
    """

    hubs: list[Hub] = field(default_factory=list)
    receivers: list[Receiver] = field(default_factory=list)
    thermostats: list[Thermostat] = field(default_factory=list)
    thermostat_uis: list[ThermostatUi] = field(default_factory=list)
    other: list[HiveDevice] = field(default_factory=list)

    def all(self) -> list[HiveDevice]:
        """Get every device in the collections."""
        return [*self.hubs, *self.receivers, *self.thermostats, *self.thermostat_uis, *self.other]
