"""Tests for device classification and device objects."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from pyhiveomnia.const import NODE_TYPE_HUB, NODE_TYPE_THERMOSTAT
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
from pyhiveomnia.exceptions import HiveError
from pyhiveomnia.models import BoostState, DeviceType, EthernetInfo, HeatingStatus


class TestClassifyNode:
    """Tests for classify_node."""

    def test_hub(self, hub_node: dict[str, Any]) -> None:
        """Test classifying a hub."""
        assert classify_node(hub_node) == DeviceType.HUB

    def test_thermostat_ui(self, thermostat_ui_node: dict[str, Any]) -> None:
        """Test classifying a thermostat display."""
        assert classify_node(thermostat_ui_node) == DeviceType.THERMOSTAT_UI

    def test_thermostat_with_heating_feature(self, thermostat_node: dict[str, Any]) -> None:
        """Test that the thermostat node type with heating feature is a thermostat."""
        assert classify_node(thermostat_node) == DeviceType.THERMOSTAT

    def test_thermostat_without_heating_feature(self, receiver_node: dict[str, Any]) -> None:
        """Test that the thermostat node type without heating feature is a receiver."""
        assert classify_node(receiver_node) == DeviceType.RECEIVER

    @pytest.mark.parametrize(
        "node",
        [
            {"id": "x"},
            {"id": "x", "nodeType": None},
            {"id": "x", "nodeType": ""},
            {"id": "x", "nodeType": "http://alertme.com/schema/json/node.class.light.json#"},
        ],
    )
    def test_generic(self, node: dict[str, Any]) -> None:
        """Test that nodes without a known node type are generic."""
        assert classify_node(node) == DeviceType.GENERIC

    def test_thermostat_without_features(self) -> None:
        """Test a thermostat node type with no features at all."""
        assert classify_node({"nodeType": NODE_TYPE_THERMOSTAT}) == DeviceType.RECEIVER

    def test_hub_with_heating_feature(self) -> None:
        """Test that the heating feature only matters for the thermostat node type."""
        node = {"nodeType": NODE_TYPE_HUB, "features": {"heating_thermostat_v1": {}}}

        assert classify_node(node) == DeviceType.HUB


class TestDeviceFromNode:
    """Tests for device_from_node."""

    @pytest.mark.parametrize(
        ("fixture", "device_class"),
        [
            ("hub_node", Hub),
            ("thermostat_node", Thermostat),
            ("receiver_node", Receiver),
            ("thermostat_ui_node", ThermostatUi),
        ],
    )
    def test_variant(
        self,
        request: pytest.FixtureRequest,
        mock_api: AsyncMock,
        fixture: str,
        device_class: type[HiveDevice],
    ) -> None:
        """Test that each node becomes its variant."""
        node = request.getfixturevalue(fixture)

        device = device_from_node(mock_api, node)

        assert type(device) is device_class
        assert device.node is node
        assert device.id == node["id"]
        assert device.name == node["name"]

    def test_generic(self, mock_api: AsyncMock) -> None:
        """Test that unknown nodes become generic devices."""
        device = device_from_node(mock_api, {"id": "x", "name": "Plug"})

        assert type(device) is HiveDevice
        assert device.type == DeviceType.GENERIC

    def test_type_tags(self) -> None:
        """Test the variant tag of each device class."""
        assert HiveDevice.type == DeviceType.GENERIC
        assert Hub.type == DeviceType.HUB
        assert Thermostat.type == DeviceType.THERMOSTAT
        assert ThermostatUi.type == DeviceType.THERMOSTAT_UI
        assert Receiver.type == DeviceType.RECEIVER


class TestPartitionDevices:
    """Tests for partition_devices."""

    def test_partition(
        self,
        mock_api: AsyncMock,
        hub_node: dict[str, Any],
        thermostat_node: dict[str, Any],
        receiver_node: dict[str, Any],
    ) -> None:
        """Test grouping a hub, a thermostat and a receiver."""
        devices = partition_devices(mock_api, [hub_node, thermostat_node, receiver_node])

        assert [device.id for device in devices.hubs] == ["hub-1"]
        assert [device.id for device in devices.thermostats] == ["thermostat-1"]
        assert [device.id for device in devices.receivers] == ["receiver-1"]
        assert devices.thermostat_uis == []
        assert devices.other == []

    def test_partition_keeps_order(self, mock_api: AsyncMock, thermostat_ui_node: dict[str, Any]) -> None:
        """Test that devices keep the order of the nodes."""
        second_ui = {**thermostat_ui_node, "id": "ui-2"}
        nodes = [{"id": "a"}, thermostat_ui_node, {"id": "b"}, second_ui]

        devices = partition_devices(mock_api, nodes)

        assert [device.id for device in devices.thermostat_uis] == ["ui-1", "ui-2"]
        assert [device.id for device in devices.other] == ["a", "b"]
        assert len(devices.all()) == 4

    def test_partition_empty(self, mock_api: AsyncMock) -> None:
        """Test partitioning no nodes."""
        devices = partition_devices(mock_api, [])

        assert devices.all() == []


class TestHiveDevice:
    """Tests for the base device."""

    def test_last_seen(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test reading when the node was last seen."""
        assert HiveDevice(mock_api, hub_node).last_seen == 1518000000000
        assert HiveDevice(mock_api, {}).last_seen is None

    def test_repr(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test the debug representation."""
        assert repr(Hub(mock_api, hub_node)) == "<Hub id='hub-1' name='Hub'>"

    def test_id_and_name_not_updated_by_node_changes(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test that id and name are copied when the device is created."""
        device = Hub(mock_api, hub_node)

        device.node = {**hub_node, "name": "Renamed"}

        assert device.name == "Hub"

    async def test_reload(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test that reload replaces the node, id and name."""
        updated = {**hub_node, "name": "Renamed", "lastSeen": 1518000009000}
        mock_api.get_node.return_value = updated
        device = Hub(mock_api, hub_node)

        result = await device.reload()

        assert result is device
        assert device.node is updated
        assert device.name == "Renamed"
        assert device.last_seen == 1518000009000
        mock_api.get_node.assert_awaited_once_with("hub-1", fields=None)

    async def test_reload_with_fields(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test reloading selected fields."""
        mock_api.get_node.return_value = hub_node
        device = Hub(mock_api, hub_node)

        await device.reload(fields=["name", "lastSeen"])

        mock_api.get_node.assert_awaited_once_with("hub-1", fields=["name", "lastSeen"])

    async def test_reload_failure_keeps_node(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test that a failed reload leaves the device unchanged."""
        mock_api.get_node.side_effect = HiveError(code="NETWORK_ERROR")
        device = Hub(mock_api, hub_node)

        with pytest.raises(HiveError):
            await device.reload()

        assert device.node is hub_node


class TestHub:
    """Tests for Hub."""

    def test_properties(self, mock_api: AsyncMock, hub_node: dict[str, Any]) -> None:
        """Test hub accessors."""
        hub = Hub(mock_api, hub_node)

        assert hub.ethernet_info == EthernetInfo(ip_address="192.168.1.20", mac_address="00:1C:2B:AA:BB:CC")
        assert hub.status_info.server == "CONNECTED"
        assert hub.status_info.uptime == 86400


class TestThermostat:
    """Tests for Thermostat."""

    def test_properties(self, mock_api: AsyncMock, thermostat_node: dict[str, Any]) -> None:
        """Test thermostat accessors."""
        thermostat = Thermostat(mock_api, thermostat_node)

        assert thermostat.boost is False
        assert thermostat.current_temperature == 19.63
        assert thermostat.current_temperature_time == 1518000000500
        assert thermostat.frost_protect_temperature == 7.0
        assert thermostat.is_frost_protect is False
        assert thermostat.heating_status == HeatingStatus(mode="SCHEDULE", is_on=True)
        assert thermostat.on_off == "ON"
        assert thermostat.target_temperature == 21.5

        schedule = thermostat.heating_schedule.schedule
        assert schedule is not None
        assert schedule["Mon"] == [("06:30", 21), ("22:00", 16)]

    def test_boost(self, mock_api: AsyncMock, thermostat_node: dict[str, Any]) -> None:
        """Test reading an active boost."""
        thermostat_node["features"]["heating_thermostat_v1"]["temporaryOperatingModeOverride"] = {
            "reportedValue": "TRANSIENT"
        }

        boost = Thermostat(mock_api, thermostat_node).boost

        assert isinstance(boost, BoostState)
        assert boost.target_temperature == 22.0

    def test_accessors_follow_node(self, mock_api: AsyncMock, thermostat_node: dict[str, Any]) -> None:
        """Test that accessors read the current node."""
        thermostat = Thermostat(mock_api, thermostat_node)

        thermostat.node = {"id": "thermostat-1", "features": {}}

        assert thermostat.current_temperature is None
        assert thermostat.boost is False

    async def test_set_target_temperature(self, mock_api: AsyncMock, thermostat_node: dict[str, Any]) -> None:
        """Test that setting the target replaces the node with the echoed node."""
        echoed = {
            **thermostat_node,
            "features": {
                "heating_thermostat_v1": {
                    "targetHeatTemperature": {
                        "reportedValue": 21.5,
                        "displayValue": 23.0,
                        "propertyStatus": "PENDING",
                    }
                }
            },
        }
        mock_api.update_node.return_value = echoed
        thermostat = Thermostat(mock_api, thermostat_node)

        result = await thermostat.set_target_temperature(23)

        assert result == 23.0
        assert thermostat.node is echoed
        assert thermostat.target_temperature == 23.0
        mock_api.update_node.assert_awaited_once_with(
            "thermostat-1",
            {"heating_thermostat_v1": {"targetHeatTemperature": {"targetValue": 23}}},
        )

    async def test_set_target_temperature_failure(
        self, mock_api: AsyncMock, thermostat_node: dict[str, Any]
    ) -> None:
        """Test that a failed update keeps the node."""
        mock_api.update_node.side_effect = HiveError(code="NOT_AUTHENTICATED")
        thermostat = Thermostat(mock_api, thermostat_node)

        with pytest.raises(HiveError):
            await thermostat.set_target_temperature(23)

        assert thermostat.node is thermostat_node
        assert thermostat.target_temperature == 21.5

    async def test_get_history(self, mock_api: AsyncMock, thermostat_node: dict[str, Any]) -> None:
        """Test that history is fetched for the thermostat's node."""
        channel = {"id": "temperature@thermostat-1", "data": [[1000, 19.5]]}
        mock_api.get_time_series_data.return_value = channel
        thermostat = Thermostat(mock_api, thermostat_node)

        result = await thermostat.get_history(unit="MINUTES", interval=5)

        assert result is channel
        mock_api.get_time_series_data.assert_awaited_once_with("thermostat-1", unit="MINUTES", interval=5)


class TestThermostatUi:
    """Tests for ThermostatUi."""

    def test_properties(self, mock_api: AsyncMock, thermostat_ui_node: dict[str, Any]) -> None:
        """Test thermostat display accessors."""
        display = ThermostatUi(mock_api, thermostat_ui_node)

        assert display.battery.battery_level == 80
        assert display.battery.battery_state == "NORMAL"
        assert display.signal_strength == 100
        assert display.temperature_unit == "C"
        assert display.status_info.server is None


class TestReceiver:
    """Tests for Receiver."""

    def test_properties(self, mock_api: AsyncMock, receiver_node: dict[str, Any]) -> None:
        """Test receiver accessors."""
        receiver = Receiver(mock_api, receiver_node)

        assert receiver.signal_strength == 87
        assert receiver.status_info.state is None
