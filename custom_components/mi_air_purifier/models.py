"""Data models for Mi Air Purifier integration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from homeassistant.const import CONF_HOST, CONF_SCAN_INTERVAL, CONF_TOKEN

from .const import (
    CONF_AIR_PURIFIER_DISABLE,
    CONF_AIR_PURIFIER_NAME,
    CONF_AIR_QUALITY_DISABLE,
    CONF_AIR_QUALITY_NAME,
    CONF_BUZZER_SWITCH_DISABLE,
    CONF_BUZZER_SWITCH_NAME,
    CONF_HUMIDITY_DISABLE,
    CONF_HUMIDITY_NAME,
    CONF_LED_BULB_DISABLE,
    CONF_LED_BULB_NAME,
    CONF_SILENT_MODE_SWITCH_DISABLE,
    CONF_SILENT_MODE_SWITCH_NAME,
    CONF_TEMPERATURE_DISABLE,
    CONF_TEMPERATURE_NAME,
    DEFAULT_SCAN_INTERVAL,
)

if TYPE_CHECKING:
    from .accessory import Accessory
    from .api import DeviceProxy
    from .coordinator import MiAirPurifierCoordinator

# Sub-accessory key -> (name option, disable option)
SUB_ACCESSORIES: dict[str, tuple[str, str]] = {
    "air_purifier": (CONF_AIR_PURIFIER_NAME, CONF_AIR_PURIFIER_DISABLE),
    "silent_mode_switch": (CONF_SILENT_MODE_SWITCH_NAME, CONF_SILENT_MODE_SWITCH_DISABLE),
    "temperature": (CONF_TEMPERATURE_NAME, CONF_TEMPERATURE_DISABLE),
    "humidity": (CONF_HUMIDITY_NAME, CONF_HUMIDITY_DISABLE),
    "buzzer_switch": (CONF_BUZZER_SWITCH_NAME, CONF_BUZZER_SWITCH_DISABLE),
    "led_bulb": (CONF_LED_BULB_NAME, CONF_LED_BULB_DISABLE),
    "air_quality": (CONF_AIR_QUALITY_NAME, CONF_AIR_QUALITY_DISABLE),
}


@dataclass(frozen=True)
class AccessoryContext:
    """Per-device context shared by every accessory of one purifier."""

    name: str
    proxy: DeviceProxy
    logger: logging.Logger


@dataclass
class MiAirPurifierConfig:
    """Options of one configured purifier."""

    host: str
    token: str
    names: dict[str, str | None] = field(default_factory=dict)
    scan_interval: int = DEFAULT_SCAN_INTERVAL

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MiAirPurifierConfig:
        """Build the config from config entry data merged with options.

        A sub-accessory whose name is missing or empty, or whose disable
        flag is set, gets a name of None.
        """
        names: dict[str, str | None] = {}
        for key, (name_option, disable_option) in SUB_ACCESSORIES.items():
            name = (data.get(name_option) or "").strip()
            names[key] = name if name and not data.get(disable_option, False) else None
        return cls(
            host=data[CONF_HOST],
            token=data[CONF_TOKEN],
            names=names,
            scan_interval=int(data.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)),
        )

    def name_of(self, key: str) -> str | None:
        """Return the display name of an enabled sub-accessory, None if disabled."""
        return self.names.get(key)


@dataclass
class MiAirPurifierData:
    """Runtime objects of one config entry."""

    proxy: DeviceProxy
    coordinator: MiAirPurifierCoordinator
    accessories: list[Accessory]
