"""Switches of the Mi Air Purifier integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.switch import SwitchEntity
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
    """Set up Mi Air Purifier switches."""
    async_add_entities(
        build_entities(hass, entry, Platform.SWITCH, MiAirPurifierSwitch)
    )


class MiAirPurifierSwitch(MiAirPurifierEntity, SwitchEntity):
    """Active, silent mode, child lock, buzzer and LED switches."""

    @property
    def is_on(self) -> bool | None:  # type: ignore[override]
        """Return true if the switch is on."""
        return self.characteristic.value

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the switch on."""
        await self._async_set(True, "turn on")

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the switch off."""
        await self._async_set(False, "turn off")
