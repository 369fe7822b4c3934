"""Serialization of API requests and deserialization of API responses.

Stateless functions that build request bodies and query strings for the Hive
API, and convert response payloads that need reshaping before use.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any

from pyhiveomnia.const import (
    DEFAULT_EVENTS_LIMIT_PER_DEVICE,
    DEFAULT_SERIES_INTERVAL,
    DEFAULT_SERIES_LOOKBACK_MS,
    DEFAULT_SERIES_OPERATION,
    DEFAULT_SERIES_SPAN_MS,
    DEFAULT_SERIES_TYPE,
    DEFAULT_SERIES_UNIT,
    FEATURE_HEATING,
)

_LOGGER = logging.getLogger(__name__)


__all__ = [
    "build_channel_id",
    "build_events_params",
    "build_time_series_params",
    "deserialize_time_series",
    "serialize_login",
    "serialize_node_update",
    "serialize_target_temperature",
    "to_epoch_ms",
]


def to_epoch_ms(value: datetime | float) -> int:
    """Convert a datetime or epoch milliseconds to epoch milliseconds."""
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    return int(value)


def serialize_login(username: str, password: str) -> dict[str, Any]:
    """Serialize credentials for the session endpoint.

    Example:
        >>> serialize_login("user@example.com", "secret")
        {'sessions': [{'username': 'user@example.com', 'password': 'secret'}]}
    """
    return {"sessions": [{"username": username, "password": password}]}


def serialize_node_update(features: dict[str, Any]) -> dict[str, Any]:
    """Serialize a partial feature update of a node.

    Args:
        features: Features to update, in the same shape as a node's
            ``features``, containing only the properties being changed.

    Returns:
        Request body for ``PUT nodes/{id}``.
    """
    return {"nodes": [{"features": features}]}


def serialize_target_temperature(value: float) -> dict[str, Any]:
    """Serialize a heating target temperature change.

    Example:
        >>> serialize_target_temperature(21.5)
        {'heating_thermostat_v1': {'targetHeatTemperature': {'targetValue': 21.5}}}
    """
    return {FEATURE_HEATING: {"targetHeatTemperature": {"targetValue": value}}}


def build_channel_id(node_id: str, series_type: str = DEFAULT_SERIES_TYPE) -> str:
    """Build a channel ID in the form ``type@nodeId``."""
    return f"{series_type}@{node_id}"


def build_time_series_params(
    *,
    from_time: datetime | float | None = None,
    to_time: datetime | float | None = None,
    unit: str = DEFAULT_SERIES_UNIT,
    interval: int = DEFAULT_SERIES_INTERVAL,
    value: str = DEFAULT_SERIES_OPERATION,
) -> dict[str, Any]:
    """Build the query of a time series data request.

    Without ``from_time`` the series starts one hour ago. Without ``to_time``
    it ends one day after its start.

    Args:
        from_time: Start of the series (datetime or epoch milliseconds).
        to_time: End of the series (datetime or epoch milliseconds).
        unit: Time unit of ``interval`` (e.g., "SECONDS", "MINUTES").
        interval: Sampling rate in ``unit``.
        value: Aggregation operation (e.g., "AVG", "MAX").

    Returns:
        Query parameters.
    """
    if from_time is None:
        start = int(time.time() * 1000) - DEFAULT_SERIES_LOOKBACK_MS
    else:
        start = to_epoch_ms(from_time)
    end = start + DEFAULT_SERIES_SPAN_MS if to_time is None else to_epoch_ms(to_time)

    return {
        "start": start,
        "end": end,
        "timeUnit": unit,
        "rate": interval,
        "operation": value,
    }


def build_events_params(
    *,
    limit_per_device: int | None = None,
    limit: int | None = None,
    from_time: datetime | float | None = None,
    to_time: datetime | float | None = None,
    nodes: list[str] | None = None,
) -> dict[str, Any]:
    """Build the query of an events request.

    Only one of ``limit_per_device`` and ``limit`` is sent, with
    ``limit_per_device`` taking precedence. When neither is given, events are
    limited to 100 per device.

    Returns:
        Query parameters.
    """
    params: dict[str, Any] = {}

    if limit_per_device:
        params["limitPerDevice"] = limit_per_device
    elif limit:
        params["limit"] = limit
    else:
        params["limitPerDevice"] = DEFAULT_EVENTS_LIMIT_PER_DEVICE

    if from_time is not None:
        params["fromTime"] = to_epoch_ms(from_time)
    if to_time is not None:
        params["toTime"] = to_epoch_ms(to_time)
    if nodes:
        params["source"] = ",".join(nodes)

    return params


def deserialize_time_series(channel: dict[str, Any]) -> dict[str, Any]:
    """Add a ``data`` list of ``[timestamp, value]`` pairs to a channel.

    The API reports samples as a mapping of timestamp string to value.
    Samples whose timestamp is not an integer are skipped.

    Example:
        >>> deserialize_time_series({"id": "temperature@n1", "values": {"1000": 19.5}})["data"]
        [[1000, 19.5]]

    Returns:
        Copy of the channel with ``data`` added.
    """
    values = channel.get("values")
    data: list[list[Any]] = []
    if not isinstance(values, dict):
        return {**channel, "data": data}

    for key, value in values.items():
        try:
            timestamp = int(key)
        except (TypeError, ValueError):
            _LOGGER.debug("Skipping sample with invalid timestamp %r in channel %s", key, channel.get("id"))
            continue
        data.append([timestamp, value])

    return {**channel, "data": data}
