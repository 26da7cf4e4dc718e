"""Sensors of the Mi Air Purifier integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity
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
    """Set up Mi Air Purifier sensors."""
    async_add_entities(
        build_entities(hass, entry, Platform.SENSOR, MiAirPurifierSensor)
    )


class MiAirPurifierSensor(MiAirPurifierEntity, SensorEntity):
    """Read-only reading or state of the purifier."""

    def __init__(
        self,
        coordinator: MiAirPurifierCoordinator,
        entry: ConfigEntry,
        accessory: Accessory,
        exposed: ExposedCharacteristic,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, accessory, exposed)
        self._attr_state_class = exposed.state_class
        self._attr_native_unit_of_measurement = exposed.unit
        if exposed.options is not None:
            self._attr_options = [str(option) for option in exposed.options]

    @property
    def native_value(self) -> Any:  # type: ignore[override]
        """Return the displayed value."""
        value = self.characteristic.value
        if self.options is not None and value is not None:
            return str(value)
        return value
