"""Device objects for Hive nodes.

Raw nodes are classified into one of five device variants, each a thin typed
wrapper around the node it owns:

- ``HiveDevice``: any node without a more specific variant
- ``Hub``: the hub
- ``Thermostat``: the heating thermostat (the boiler-side node with the
  heating feature)
- ``ThermostatUi``: the wall-mounted thermostat display
- ``Receiver``: a receiver, which the API reports with the thermostat node
  type but without the heating feature
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Self

from pyhiveomnia.const import (
    FEATURE_HEATING,
    NODE_TYPE_HUB,
    NODE_TYPE_THERMOSTAT,
    NODE_TYPE_THERMOSTAT_UI,
)
from pyhiveomnia.features import get_feature
from pyhiveomnia.models import DeviceCollections, DeviceType
from pyhiveomnia.parsers import (
    is_frost_protect,
    parse_battery,
    parse_boost,
    parse_current_temperature,
    parse_current_temperature_time,
    parse_ethernet_info,
    parse_frost_protect_temperature,
    parse_heating_schedule,
    parse_heating_status,
    parse_hub_status,
    parse_on_off,
    parse_signal_strength,
    parse_target_temperature,
    parse_temperature_unit,
)
from pyhiveomnia.serializers import serialize_target_temperature


if TYPE_CHECKING:
    from collections.abc import Iterable

    from pyhiveomnia.api import HiveAPI
    from pyhiveomnia.models import (
        BatteryInfo,
        BoostState,
        EthernetInfo,
        HeatingSchedule,
        HeatingStatus,
        HubStatus,
    )

_LOGGER = logging.getLogger(__name__)


class HiveDevice:
    """A Hive node.

    The device owns the raw node it was created from. ``id`` and ``name`` are
    copied from the node and only updated by :meth:`reload`.

    Example:
        ```python
        async with HiveClient(username="user@example.com", password="password") as client:
            devices = await client.get_devices()
            hub = devices.hubs[0]

            print(hub.name, hub.last_seen)
            await hub.reload()
        ```

    Attributes:
        id: Node ID.
        name: Node name.
        node: The raw node.
        type: Device variant tag.
    """

    type: ClassVar[DeviceType] = DeviceType.GENERIC

    def __init__(self, api: HiveAPI, node: dict[str, Any]) -> None:
        """Initialize the device.

        Args:
            api: HiveAPI used to reload and control the device.
            node: The raw node.
        """
        self._api = api
        self.node = node
        self.id: str = node.get("id", "")
        self.name: str | None = node.get("name")

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"<{type(self).__name__} id={self.id!r} name={self.name!r}>"

    @property
    def last_seen(self) -> Any:
        """Get the time the node was last seen by the server."""
        return self.node.get("lastSeen")

    async def reload(self, *, fields: list[str] | str | None = None) -> Self:
        """Fetch the node again and replace the owned node.

        Args:
            fields: Optional node fields to fetch.

        Returns:
            Self, for chaining.

        Raises:
            HiveError: If the request fails.
        """
        node = await self._api.get_node(self.id, fields=fields)
        self.node = node
        self.id = node.get("id", self.id)
        self.name = node.get("name")
        _LOGGER.debug("Reloaded %r", self)
        return self


class Hub(HiveDevice):
    """The Hive hub."""

    type = DeviceType.HUB

    @property
    def ethernet_info(self) -> EthernetInfo:
        """Get the hub's IP and MAC address."""
        return parse_ethernet_info(self.node)

    @property
    def status_info(self) -> HubStatus:
        """Get the hub's connection status."""
        return parse_hub_status(self.node)


class Thermostat(HiveDevice):
    """A heating thermostat.

    Example:
        ```python
        thermostat = devices.thermostats[0]
        print(thermostat.current_temperature, thermostat.heating_status)

        if not thermostat.boost:
            await thermostat.set_target_temperature(21)
        ```
    """

    type = DeviceType.THERMOSTAT

    @property
    def boost(self) -> BoostState | Literal[False]:
        """Get the active boost, or False if the thermostat is not boosted."""
        return parse_boost(self.node)

    @property
    def current_temperature(self) -> float | None:
        """Get the measured temperature."""
        return parse_current_temperature(self.node)

    @property
    def current_temperature_time(self) -> Any:
        """Get the time the measured temperature was received."""
        return parse_current_temperature_time(self.node)

    @property
    def frost_protect_temperature(self) -> float | None:
        """Get the frost protection temperature."""
        return parse_frost_protect_temperature(self.node)

    @property
    def is_frost_protect(self) -> bool:
        """Check if the thermostat is in frost protection."""
        return is_frost_protect(self.node)

    @property
    def heating_status(self) -> HeatingStatus:
        """Get the heating mode and whether it is heating."""
        return parse_heating_status(self.node)

    @property
    def heating_schedule(self) -> HeatingSchedule:
        """Get the weekly heating schedule."""
        return parse_heating_schedule(self.node)

    @property
    def on_off(self) -> str | None:
        """Get the on/off mode ("ON" or "OFF")."""
        return parse_on_off(self.node)

    @property
    def target_temperature(self) -> float | None:
        """Get the target temperature, including a change not yet confirmed."""
        return parse_target_temperature(self.node)

    async def set_target_temperature(self, value: float) -> float | None:
        """Set the target temperature.

        On success the owned node is replaced with the node echoed by the
        server.

        Args:
            value: New target temperature.

        Returns:
            The target temperature read from the updated node.

        Raises:
            HiveError: If the request fails.
        """
        _LOGGER.debug("Setting target temperature of %s to %s", self.id, value)
        self.node = await self._api.update_node(self.id, serialize_target_temperature(value))
        return self.target_temperature

    async def get_history(self, **options: Any) -> dict[str, Any]:
        """Get time series data of this thermostat.

        Args:
            **options: Passed to :meth:`HiveAPI.get_time_series_data`.

        Returns:
            The channel, with a ``data`` list of ``[timestamp, value]`` pairs.
        """
        history: dict[str, Any] = await self._api.get_time_series_data(self.id, **options)
        return history


class ThermostatUi(HiveDevice):
    """A thermostat display."""

    type = DeviceType.THERMOSTAT_UI

    @property
    def battery(self) -> BatteryInfo:
        """Get battery information."""
        return parse_battery(self.node)

    @property
    def signal_strength(self) -> Any:
        """Get the radio signal strength."""
        return parse_signal_strength(self.node)

    @property
    def status_info(self) -> HubStatus:
        """Get hub connection status as reported by this node."""
        return parse_hub_status(self.node)

    @property
    def temperature_unit(self) -> str | None:
        """Get the display temperature unit."""
        return parse_temperature_unit(self.node)


class Receiver(HiveDevice):
    """A boiler receiver."""

    type = DeviceType.RECEIVER

    @property
    def status_info(self) -> HubStatus:
        """Get hub connection status as reported by this node."""
        return parse_hub_status(self.node)

    @property
    def signal_strength(self) -> Any:
        """Get the radio signal strength."""
        return parse_signal_strength(self.node)


DEVICE_CLASSES: dict[DeviceType, type[HiveDevice]] = {
    DeviceType.GENERIC: HiveDevice,
    DeviceType.HUB: Hub,
    DeviceType.THERMOSTAT: Thermostat,
    DeviceType.THERMOSTAT_UI: ThermostatUi,
    DeviceType.RECEIVER: Receiver,
}


def classify_node(node: dict[str, Any]) -> DeviceType:
    """Decide which device variant a raw node is.

    The API uses the thermostat node type for receivers as well as for
    thermostats. Only thermostats have the heating feature, so its presence
    decides between the two.

    Args:
        node: The raw node.

    Returns:
        The device variant tag.
    """
    node_type = node.get("nodeType")
    if not node_type:
        return DeviceType.GENERIC
    if node_type == NODE_TYPE_HUB:
        return DeviceType.HUB
    if node_type == NODE_TYPE_THERMOSTAT_UI:
        return DeviceType.THERMOSTAT_UI
    if node_type == NODE_TYPE_THERMOSTAT and get_feature(node, FEATURE_HEATING) is not None:
        return DeviceType.THERMOSTAT
    if node_type == NODE_TYPE_THERMOSTAT:
        return DeviceType.RECEIVER
    return DeviceType.GENERIC


def device_from_node(api: HiveAPI, node: dict[str, Any]) -> HiveDevice:
    """Create the device object for a raw node.

    Args:
        api: HiveAPI the device will use.
        node: The raw node.

    Returns:
        Instance of the variant chosen by :func:`classify_node`.
    """
    return DEVICE_CLASSES[classify_node(node)](api, node)


def partition_devices(api: HiveAPI, nodes: Iterable[dict[str, Any]]) -> DeviceCollections:
    """Create devices for raw nodes and group them by variant.

    Args:
        api: HiveAPI the devices will use.
        nodes: Raw nodes.

    Returns:
        DeviceCollections, each list in the order of ``nodes``.
    """
    collections = DeviceCollections()
    buckets: dict[DeviceType, list[Any]] = {
        DeviceType.HUB: collections.hubs,
        DeviceType.RECEIVER: collections.receivers,
        DeviceType.THERMOSTAT: collections.thermostats,
        DeviceType.THERMOSTAT_UI: collections.thermostat_uis,
    }

    for node in nodes:
        device = device_from_node(api, node)
        buckets.get(device.type, collections.other).append(device)

    return collections
