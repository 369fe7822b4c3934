"""Accessors for the feature records of raw nodes.

A node's ``features`` maps feature names (e.g. ``heating_thermostat_v1``) to
feature records, whose properties look like::

    {"reportedValue": 19.0, "displayValue": 21.5, "reportReceivedTime": 1518...}

Nodes, features and properties may all be missing. None of the functions
here raise for missing data; they fall back to a default instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


__all__ = [
    "get_feature",
    "parse_float",
    "read_field",
    "read_value",
    "read_values",
]


def get_feature(node: Mapping[str, Any] | None, feature_name: str) -> Mapping[str, Any] | None:
    """Get a feature record of a node.

    Args:
        node: Raw node.
        feature_name: Feature name.

    Returns:
        The feature record, or None if the node does not have it.
    """
    features = node.get("features") if isinstance(node, Mapping) else None
    if not isinstance(features, Mapping):
        return None
    feature = features.get(feature_name)
    return feature if isinstance(feature, Mapping) else None


def read_value(feature: Mapping[str, Any] | None, property_name: str | None, default: Any = None) -> Any:
    """Read the reported value of a feature property.

    Args:
        feature: Feature record, may be None.
        property_name: Property to read. None means nothing is requested.
        default: Value returned when the property or its value is missing.

    Returns:
        The property's ``reportedValue``, or ``default``.
    """
    if property_name is None or feature is None:
        return default
    prop = feature.get(property_name)
    if not isinstance(prop, Mapping):
        return default
    return prop.get("reportedValue", default)


def read_values(
    feature: Mapping[str, Any] | None,
    names: Mapping[str, str],
    into: dict[str, Any] | None = None,
    default: Any = None,
) -> dict[str, Any]:
    """Read the reported values of several feature properties.

    Args:
        feature: Feature record, may be None.
        names: Mapping of output key to property name.
        into: Dict to write the values into. A new dict is used if omitted,
            pass one in to collect values from several features.
        default: Value used for missing properties.

    Returns:
        The dict the values were written into.
    """
    values = {} if into is None else into
    for key, property_name in names.items():
        values[key] = read_value(feature, property_name, default)
    return values


def read_field(node: Mapping[str, Any] | None, feature_name: str, property_name: str, field: str) -> Any:
    """Read any field of a feature property, e.g. ``displayValue``.

    Returns:
        The field value, or None if any part of the path is missing.
    """
    prop = (get_feature(node, feature_name) or {}).get(property_name)
    if not isinstance(prop, Mapping):
        return None
    return prop.get(field)


def parse_float(value: Any) -> float | None:
    """Convert a reported value to float.

    Returns:
        The float value, or None if the value is missing or not numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
