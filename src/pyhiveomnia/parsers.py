"""Parsing utilities for Hive nodes.

This module provides the derived values exposed by the device classes as
plain functions of a raw node, so they can also be used on nodes that were
fetched without creating a device.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from pyhiveomnia.const import (
    BOOST_OVERRIDE,
    BOOST_TARGET_ATTRIBUTE,
    FEATURE_BATTERY,
    FEATURE_ETHERNET,
    FEATURE_FROST_PROTECT,
    FEATURE_HEATING,
    FEATURE_HUB,
    FEATURE_ON_OFF,
    FEATURE_RADIO,
    FEATURE_TEMPERATURE_SENSOR,
    FEATURE_THERMOSTAT_UI,
    FEATURE_TRANSIENT_MODE,
    FROST_PROTECT_TARGET,
    MODE_OFF,
    OPERATING_STATE_HEAT,
)
from pyhiveomnia.features import get_feature, parse_float, read_field, read_value, read_values
from pyhiveomnia.models import (
    BatteryInfo,
    BoostState,
    EthernetInfo,
    HeatingSchedule,
    HeatingStatus,
    HubStatus,
)
from pyhiveomnia.schedule import parse_schedule


if TYPE_CHECKING:
    from collections.abc import Mapping


__all__ = [
    "is_frost_protect",
    "parse_battery",
    "parse_boost",
    "parse_current_temperature",
    "parse_current_temperature_time",
    "parse_ethernet_info",
    "parse_frost_protect_temperature",
    "parse_heating_schedule",
    "parse_heating_status",
    "parse_hub_status",
    "parse_on_off",
    "parse_signal_strength",
    "parse_target_temperature",
    "parse_temperature_unit",
    "parse_timestamp",
]


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a timestamp reported by the API.

    Args:
        value: ISO 8601 string (e.g., "2018-02-19T15:38:49.972+0000") or
            milliseconds since the epoch.

    Returns:
        Timezone aware datetime, or None if the value is missing or invalid.
        Strings without an offset are taken as UTC.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def parse_battery(node: Mapping[str, Any]) -> BatteryInfo:
    """Parse battery information."""
    values = read_values(
        get_feature(node, FEATURE_BATTERY),
        {
            "battery_level": "batteryLevel",
            "battery_state": "batteryState",
            "battery_voltage": "batteryVoltage",
        },
    )
    return BatteryInfo(**values)


def parse_boost(node: Mapping[str, Any]) -> BoostState | Literal[False]:
    """Parse the boost state of a thermostat.

    A boost is active when the heating feature reports a TRANSIENT operating
    mode override. The boost details come from the transient mode feature;
    when the first boost action targets ``targetHeatTemperature`` its value is
    exposed as ``target_temperature``, otherwise the raw attribute and value
    are exposed.

    Args:
        node: Raw thermostat node.

    Returns:
        BoostState if a boost is active, False otherwise.
    """
    override = read_value(get_feature(node, FEATURE_HEATING), "temporaryOperatingModeOverride")
    if override != BOOST_OVERRIDE:
        return False

    raw = read_values(
        get_feature(node, FEATURE_TRANSIENT_MODE),
        {
            "actions": "actions",
            "duration": "duration",  # seconds
            "start": "startDatetime",
            "end": "endDatetime",
        },
    )

    actions = raw["actions"] if isinstance(raw["actions"], list) else []
    action: Mapping[str, Any] = actions[0] if actions and isinstance(actions[0], dict) else {}
    target: dict[str, Any] = {}
    if action.get("attribute") == BOOST_TARGET_ATTRIBUTE:
        target["target_temperature"] = parse_float(action.get("value"))
    elif action:
        target["target_attribute"] = action.get("attribute")
        target["target_value"] = action.get("value")

    return BoostState(
        duration=raw["duration"],
        start=parse_timestamp(raw["start"]),
        end=parse_timestamp(raw["end"]),
        **target,
    )


def parse_current_temperature(node: Mapping[str, Any]) -> float | None:
    """Parse the measured temperature."""
    return parse_float(read_value(get_feature(node, FEATURE_TEMPERATURE_SENSOR), "temperature"))


def parse_current_temperature_time(node: Mapping[str, Any]) -> Any:
    """Parse the time the measured temperature was received by the server."""
    return read_field(node, FEATURE_TEMPERATURE_SENSOR, "temperature", "reportReceivedTime")


def parse_ethernet_info(node: Mapping[str, Any]) -> EthernetInfo:
    """Parse hub network information."""
    values = read_values(
        get_feature(node, FEATURE_ETHERNET),
        {
            "ip_address": "internalIPAddress",
            "mac_address": "macAddress",
        },
    )
    return EthernetInfo(**values)


def parse_hub_status(node: Mapping[str, Any]) -> HubStatus:
    """Parse hub connection status.

    This reads the hub feature for every device type; only hubs report it.
    """
    values = read_values(
        get_feature(node, FEATURE_HUB),
        {
            "state": "devicesState",
            "server": "serverConnectionState",
            "connection": "connection",
            "ethernet": "ethernetConnectionState",
            "uptime": "uptime",
        },
    )
    return HubStatus(**values)


def parse_frost_protect_temperature(node: Mapping[str, Any]) -> float | None:
    """Parse the frost protection temperature."""
    return parse_float(read_value(get_feature(node, FEATURE_FROST_PROTECT), "frostProtectTemperature"))


def parse_target_temperature(node: Mapping[str, Any]) -> float | None:
    """Parse the target temperature.

    Reads the display value rather than the reported value. Right after the
    target has been set, the property status is PENDING and the display value
    already holds the new target while the reported value still holds the
    old one.
    """
    return parse_float(read_field(node, FEATURE_HEATING, "targetHeatTemperature", "displayValue"))


def is_frost_protect(node: Mapping[str, Any]) -> bool:
    """Check if the thermostat is in frost protection (target of 1 degree)."""
    return parse_target_temperature(node) == FROST_PROTECT_TARGET


def parse_heating_schedule(node: Mapping[str, Any]) -> HeatingSchedule:
    """Parse the weekly heating schedule and the frost protection temperature."""
    reported = read_value(get_feature(node, FEATURE_HEATING), "heatSchedule")
    schedule = None
    if isinstance(reported, dict) and isinstance(reported.get("setpoints"), list):
        schedule = parse_schedule(reported["setpoints"])

    return HeatingSchedule(
        schedule=schedule,
        frost_protect=parse_frost_protect_temperature(node),
    )


def parse_heating_status(node: Mapping[str, Any]) -> HeatingStatus:
    """Parse heating mode and state.

    The heating feature reports SCHEDULE or MANUAL even when the thermostat
    is switched off, so an OFF reported by the on/off feature overrides it.
    """
    values = read_values(
        get_feature(node, FEATURE_HEATING),
        {
            "mode": "operatingMode",
            "state": "operatingState",  # HEAT or OFF
        },
    )
    mode = values["mode"]
    if parse_on_off(node) == MODE_OFF:
        mode = MODE_OFF

    return HeatingStatus(mode=mode, is_on=values["state"] == OPERATING_STATE_HEAT)


def parse_on_off(node: Mapping[str, Any]) -> str | None:
    """Parse the on/off mode ("ON" or "OFF")."""
    return read_value(get_feature(node, FEATURE_ON_OFF), "mode")


def parse_signal_strength(node: Mapping[str, Any]) -> Any:
    """Parse the radio signal strength."""
    return read_value(get_feature(node, FEATURE_RADIO), "signalStrength")


def parse_temperature_unit(node: Mapping[str, Any]) -> str | None:
    """Parse the display temperature unit."""
    return read_value(get_feature(node, FEATURE_THERMOSTAT_UI), "temperatureUnit")
