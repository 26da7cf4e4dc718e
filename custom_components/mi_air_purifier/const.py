"""Constants for the Mi Air Purifier integration."""

from enum import StrEnum

from homeassistant.const import Platform

DOMAIN = "mi_air_purifier"

# Platforms
PLATFORMS = [
    Platform.BINARY_SENSOR,
    Platform.NUMBER,
    Platform.SELECT,
    Platform.SENSOR,
    Platform.SWITCH,
]

# Config entry keys
CONF_AIR_PURIFIER_NAME = "air_purifier_name"
CONF_AIR_PURIFIER_DISABLE = "air_purifier_disable"
CONF_SILENT_MODE_SWITCH_NAME = "silent_mode_switch_name"
CONF_SILENT_MODE_SWITCH_DISABLE = "silent_mode_switch_disable"
CONF_TEMPERATURE_NAME = "temperature_name"
CONF_TEMPERATURE_DISABLE = "temperature_disable"
CONF_HUMIDITY_NAME = "humidity_name"
CONF_HUMIDITY_DISABLE = "humidity_disable"
CONF_BUZZER_SWITCH_NAME = "buzzer_switch_name"
CONF_BUZZER_SWITCH_DISABLE = "buzzer_switch_disable"
CONF_LED_BULB_NAME = "led_bulb_name"
CONF_LED_BULB_DISABLE = "led_bulb_disable"
CONF_AIR_QUALITY_NAME = "air_quality_name"
CONF_AIR_QUALITY_DISABLE = "air_quality_disable"

DEFAULT_SCAN_INTERVAL = 5  # seconds between forced property refreshes

MANUFACTURER = "Xiaomi"
MODEL = "AirPurifier2S"

# Device properties
PROP_MODE = "mode"
PROP_POWER = "power"
PROP_CHILD_LOCK = "child_lock"
PROP_FAVORITE_LEVEL = "favorite_level"
PROP_TEMPERATURE = "temp_dec"
PROP_HUMIDITY = "humidity"
PROP_AQI = "aqi"
PROP_FILTER_LIFE = "filter1_life"
PROP_VOLUME = "volume"
PROP_LED = "led"

POLL_PROPERTIES = (
    PROP_MODE,
    PROP_POWER,
    PROP_CHILD_LOCK,
    PROP_FAVORITE_LEVEL,
    PROP_TEMPERATURE,
    PROP_HUMIDITY,
    PROP_AQI,
    PROP_FILTER_LIFE,
    PROP_VOLUME,
    PROP_LED,
)

# Device commands
CMD_GET_PROP = "get_prop"
CMD_SET_POWER = "set_power"
CMD_SET_MODE = "set_mode"
CMD_SET_CHILD_LOCK = "set_child_lock"
CMD_SET_LEVEL_FAVORITE = "set_level_favorite"
CMD_SET_BUZZER = "set_buzzer"
CMD_SET_LED = "set_led"

RESULT_OK = "ok"

# Values of the `mode` property
MODE_AUTO = "auto"
MODE_SILENT = "silent"
MODE_FAVORITE = "favorite"

STATE_ON = "on"
STATE_OFF = "off"

# Upper edges of the favourite level bands on the 0-100 rotation speed slider
FAVORITE_LEVEL_BOUNDARIES = (0, 5, 10, 15, 20, 25, 30, 40, 50, 60, 70, 80, 90, 95, 100)

FILTER_CHANGE_THRESHOLD = 5  # percent of filter life left

# Characteristic names
CHAR_ACTIVE = "active"
CHAR_CURRENT_STATE = "current_state"
CHAR_TARGET_MODE = "target_mode"
CHAR_SILENT_MODE = "silent_mode"
CHAR_CHILD_LOCK = "child_lock"
CHAR_ROTATION_SPEED = "rotation_speed"
CHAR_TEMPERATURE = "temperature"
CHAR_HUMIDITY = "humidity"
CHAR_PM25 = "pm25"
CHAR_AIR_QUALITY = "air_quality"
CHAR_FILTER_CHANGE = "filter_change"
CHAR_FILTER_LIFE = "filter_life"
CHAR_BUZZER = "buzzer"
CHAR_LED = "led"


class PurifierState(StrEnum):
    """Current operating state of the purifier."""

    INACTIVE = "inactive"
    IDLE = "idle"
    PURIFYING_AIR = "purifying_air"


class TargetMode(StrEnum):
    """Target operating mode exposed to Home Assistant."""

    AUTO = "auto"
    MANUAL = "manual"


class AirQuality(StrEnum):
    """Air quality classification derived from the AQI reading."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    INFERIOR = "inferior"
    POOR = "poor"
    UNKNOWN = "unknown"
