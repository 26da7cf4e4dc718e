"""Target mode select of the Mi Air Purifier integration."""

from __future__ import annotations

from homeassistant.components.select import SelectEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .accessory import Accessory, ExposedCharacteristic
from .const import TargetMode
from .coordinator import MiAirPurifierCoordinator
from .entity import MiAirPurifierEntity, build_entities


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up Mi Air Purifier selects."""
    async_add_entities(
        build_entities(hass, entry, Platform.SELECT, MiAirPurifierTargetModeSelect)
    )


class MiAirPurifierTargetModeSelect(MiAirPurifierEntity, SelectEntity):
    """Choose between automatic and manual (favourite level) operation."""

    def __init__(
        self,
        coordinator: MiAirPurifierCoordinator,
        entry: ConfigEntry,
        accessory: Accessory,
        exposed: ExposedCharacteristic,
    ) -> None:
        """Initialize the select."""
        super().__init__(coordinator, entry, accessory, exposed)
        self._attr_options = [str(option) for option in exposed.options or TargetMode]

    @property
    def current_option(self) -> str | None:  # type: ignore[override]
        """Return the selected mode."""
        value = self.characteristic.value
        return None if value is None else str(value)

    async def async_select_option(self, option: str) -> None:
        """Change the target mode."""
        await self._async_set(TargetMode(option), "set target mode")
