"""Binary sensors of the Mi Air Purifier integration."""

from __future__ import annotations

from homeassistant.components.binary_sensor import BinarySensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .entity import MiAirPurifierEntity, build_entities


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Mi Air Purifier binary sensors."""
    async_add_entities(
        build_entities(hass, entry, Platform.BINARY_SENSOR, MiAirPurifierBinarySensor)
    )


class MiAirPurifierBinarySensor(MiAirPurifierEntity, BinarySensorEntity):
    """Filter change indicator."""

    @property
    def is_on(self) -> bool | None:  # type: ignore[override]
        """Return true if the filter needs changing."""
        return self.characteristic.value
