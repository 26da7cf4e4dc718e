"""Constants for Mi Air Purifier tests."""

from typing import Any

from custom_components.mi_air_purifier.const import (
    CONF_AIR_PURIFIER_NAME,
    CONF_AIR_QUALITY_NAME,
    CONF_BUZZER_SWITCH_NAME,
    CONF_HUMIDITY_NAME,
    CONF_LED_BULB_NAME,
    CONF_SILENT_MODE_SWITCH_NAME,
    CONF_TEMPERATURE_NAME,
)
from homeassistant.const import CONF_HOST, CONF_TOKEN

MOCK_HOST = "192.168.1.50"
MOCK_TOKEN = "0123456789abcdef0123456789abcdef"

MOCK_CONNECTION: dict[str, str] = {CONF_HOST: MOCK_HOST, CONF_TOKEN: MOCK_TOKEN}

MOCK_CONFIG: dict[str, Any] = {
    **MOCK_CONNECTION,
    CONF_AIR_PURIFIER_NAME: "Air Purifier",
    CONF_SILENT_MODE_SWITCH_NAME: "Silent Mode",
    CONF_TEMPERATURE_NAME: "Temperature",
    CONF_HUMIDITY_NAME: "Humidity",
    CONF_BUZZER_SWITCH_NAME: "Buzzer",
    CONF_LED_BULB_NAME: "LED",
    CONF_AIR_QUALITY_NAME: "Air Quality",
}

DEVICE_PROPERTIES: dict[str, Any] = {
    "mode": "auto",
    "power": "on",
    "child_lock": "off",
    "favorite_level": 10,
    "temp_dec": 215,
    "humidity": 45,
    "aqi": 55,
    "filter1_life": 80,
    "volume": "on",
    "led": "on",
}
