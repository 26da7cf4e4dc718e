"""Data update coordinator for Mi Air Purifier devices."""

from __future__ import annotations

from datetime import timedelta
import logging
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .accessory import Accessory
from .api import (
    DeviceCommunicationError,
    DeviceProxy,
    MiAirPurifierError,
    NotConnectedError,
)
from .const import DEFAULT_SCAN_INTERVAL, DOMAIN, POLL_PROPERTIES

_LOGGER = logging.getLogger(__name__)


class MiAirPurifierCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Poll the purifier and keep every characteristic in sync.

    Each refresh force-fetches the whole property batch, so that changes
    made with the device's own buttons show up, then re-runs the get
    handler of every characteristic against the refreshed cache.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry | None,
        proxy: DeviceProxy,
        accessories: list[Accessory],
        scan_interval: int = DEFAULT_SCAN_INTERVAL,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name=DOMAIN,
            update_interval=timedelta(seconds=scan_interval),
        )
        self.proxy = proxy
        self.accessories = accessories

    async def _async_update_data(self) -> dict[str, Any]:
        """Fetch data from the device.

        Returns:
            Property values keyed by property name

        Raises:
            UpdateFailed: If the update operation fails

        """
        try:
            values = await self.proxy.async_read(POLL_PROPERTIES, force_refetch=True)
            for accessory in self.accessories:
                await accessory.async_refresh()
        except NotConnectedError as err:
            raise UpdateFailed(f"Air purifier is not connected: {err}") from err
        except DeviceCommunicationError as err:
            raise UpdateFailed(f"Error communicating with air purifier: {err}") from err
        except MiAirPurifierError as err:
            raise UpdateFailed(f"Polling failed: {err}") from err
        return values
