"""Constants for pyhiveomnia library."""

from __future__ import annotations

from http import HTTPStatus


VERSION = "1.1.0"

# API Configuration
DEFAULT_BASE_URL = "https://api-prod.bgchprod.info:443/omnia"
DEFAULT_TIMEOUT = 4  # seconds
DEFAULT_CLIENT_NAME = f"Unidentified app using pyhiveomnia v{VERSION}"

# Headers
MEDIA_TYPE = "application/vnd.alertme.zoo-6.5+json"
HEADER_CLIENT = "X-Omnia-Client"
HEADER_ACCESS_TOKEN = "X-Omnia-Access-Token"  # noqa: S105 - header name, not a secret

# Node type discriminators
NODE_TYPE_HUB = "http://alertme.com/schema/json/node.class.hub.json#"
NODE_TYPE_THERMOSTAT = "http://alertme.com/schema/json/node.class.thermostat.json#"
NODE_TYPE_THERMOSTAT_UI = "http://alertme.com/schema/json/node.class.thermostatui.json#"

# Feature names
FEATURE_BATTERY = "battery_device_v1"
FEATURE_ETHERNET = "ethernet_device_v1"
FEATURE_FROST_PROTECT = "frost_protect_v1"
FEATURE_HEATING = "heating_thermostat_v1"
FEATURE_HUB = "hive_hub_v1"
FEATURE_ON_OFF = "on_off_device_v1"
FEATURE_RADIO = "radio_device_v1"
FEATURE_TEMPERATURE_SENSOR = "temperature_sensor_v1"
FEATURE_THERMOSTAT_UI = "thermostat_ui_v1"
FEATURE_TRANSIENT_MODE = "transient_mode_v1"

# Heating values
BOOST_OVERRIDE = "TRANSIENT"
BOOST_TARGET_ATTRIBUTE = "targetHeatTemperature"
OPERATING_STATE_HEAT = "HEAT"
MODE_OFF = "OFF"
FROST_PROTECT_TARGET = 1

WEEKDAYS = {
    1: "Mon",
    2: "Tue",
    3: "Wed",
    4: "Thu",
    5: "Fri",
    6: "Sat",
    7: "Sun",
}

# Time series defaults
DEFAULT_SERIES_TYPE = "temperature"
DEFAULT_SERIES_UNIT = "SECONDS"
DEFAULT_SERIES_INTERVAL = 1
DEFAULT_SERIES_OPERATION = "AVG"
DEFAULT_SERIES_LOOKBACK_MS = 60 * 60 * 1000  # 1 hour
DEFAULT_SERIES_SPAN_MS = 24 * 60 * 60 * 1000  # 1 day

# Events
DEFAULT_EVENTS_LIMIT_PER_DEVICE = 100

# Logout treats these as success
LOGOUT_ACCEPTED_STATUSES = frozenset(
    {HTTPStatus.OK, HTTPStatus.BAD_REQUEST, HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN}
)
