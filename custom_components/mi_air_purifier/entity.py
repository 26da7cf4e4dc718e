"""Base entity for Mi Air Purifier characteristics."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .accessory import Accessory, ExposedCharacteristic
from .api import MiAirPurifierError
from .const import DOMAIN, MANUFACTURER, MODEL
from .coordinator import MiAirPurifierCoordinator
from .models import MiAirPurifierData


class MiAirPurifierEntity(CoordinatorEntity[MiAirPurifierCoordinator]):
    """Entity showing one characteristic of an accessory."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: MiAirPurifierCoordinator,
        entry: ConfigEntry,
        accessory: Accessory,
        exposed: ExposedCharacteristic,
    ) -> None:
        """Initialize the entity."""
        super().__init__(coordinator)
        self.accessory = accessory
        self.characteristic = exposed.characteristic

        self._attr_unique_id = f"{entry.entry_id}_{accessory.key}_{self.characteristic.name}"
        self._attr_name = exposed.name
        self._attr_device_class = exposed.device_class
        self._attr_entity_category = exposed.entity_category

        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, f"{entry.entry_id}_{accessory.key}")},
            name=accessory.name,
            manufacturer=MANUFACTURER,
            model=MODEL,
        )

    async def async_added_to_hass(self) -> None:
        """Follow pushes to the characteristic."""
        await super().async_added_to_hass()
        self.async_on_remove(
            self.characteristic.async_add_listener(self.async_write_ha_state)
        )

    @property
    def available(self) -> bool:  # type: ignore[override]
        """Return if entity is available."""
        return super().available and self.characteristic.value is not None

    async def _async_set(self, value: Any, action: str) -> None:
        """Write ``value`` through the characteristic's set handler."""
        try:
            await self.characteristic.async_set(value)
        except MiAirPurifierError as err:
            raise HomeAssistantError(
                f"Failed to {action} (value: {value}) for {self.accessory.name}: {err}"
            ) from err
        self.async_write_ha_state()


def build_entities(
    hass: HomeAssistant,
    entry: ConfigEntry,
    platform: Platform,
    entity_factory: Callable[
        [MiAirPurifierCoordinator, ConfigEntry, Accessory, ExposedCharacteristic], Any
    ],
) -> list[Any]:
    """Construct the entities of ``platform`` for every accessory of ``entry``."""
    data: MiAirPurifierData = hass.data[DOMAIN][entry.entry_id]
    return [
        entity_factory(data.coordinator, entry, accessory, exposed)
        for accessory in data.accessories
        for exposed in accessory.exposed(platform)
    ]
