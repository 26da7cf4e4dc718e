"""Rotation speed slider of the Mi Air Purifier integration."""

from __future__ import annotations

from homeassistant.components.number import NumberEntity, NumberMode
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .accessory import Accessory, ExposedCharacteristic
from .coordinator import MiAirPurifierCoordinator
from .entity import MiAirPurifierEntity, build_entities


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Mi Air Purifier numbers."""
    async_add_entities(
        build_entities(hass, entry, Platform.NUMBER, MiAirPurifierRotationSpeed)
    )


class MiAirPurifierRotationSpeed(MiAirPurifierEntity, NumberEntity):
    """Favourite level shown as a 0-100 slider."""

    _attr_native_min_value = 0
    _attr_native_max_value = 100
    _attr_native_step = 1
    _attr_mode = NumberMode.SLIDER

    def __init__(
        self,
        coordinator: MiAirPurifierCoordinator,
        entry: ConfigEntry,
        accessory: Accessory,
        exposed: ExposedCharacteristic,
    ) -> None:
        """Initialize the slider."""
        super().__init__(coordinator, entry, accessory, exposed)
        self._attr_native_unit_of_measurement = exposed.unit

    @property
    def native_value(self) -> float | None:  # type: ignore[override]
        """Return the slider position."""
        return self.characteristic.value

    async def async_set_native_value(self, value: float) -> None:
        """Move the slider."""
        await self._async_set(int(value), "set rotation speed")
