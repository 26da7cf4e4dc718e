"""Integration for Xiaomi Mi Air Purifier 2S devices."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from .accessory import build_accessories
from .api import DeviceCommunicationError, DeviceProxy, async_connect
from .const import DOMAIN, PLATFORMS
from .coordinator import MiAirPurifierCoordinator
from .models import AccessoryContext, MiAirPurifierConfig, MiAirPurifierData

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Mi Air Purifier from a config entry."""
    config = MiAirPurifierConfig.from_mapping({**entry.data, **entry.options})
    device_name = config.name_of("air_purifier") or config.host

    proxy = DeviceProxy(device_name)

    # Connect to the device, Home Assistant retries setup while it is unreachable
    _LOGGER.debug("Connecting to device %s", config.host)
    try:
        handle = await async_connect(hass, config.host, config.token)
    except DeviceCommunicationError as err:
        raise ConfigEntryNotReady(
            f"Failed to connect to air purifier at {config.host}: {err}"
        ) from err
    proxy.attach(handle)

    context = AccessoryContext(name=device_name, proxy=proxy, logger=_LOGGER)
    accessories = build_accessories(context, config)
    _LOGGER.debug(
        "Initializing device %s, accessories size: %s", config.host, len(accessories)
    )

    # Create coordinator for data updates
    coordinator = MiAirPurifierCoordinator(
        hass, entry, proxy, accessories, config.scan_interval
    )
    await coordinator.async_config_entry_first_refresh()

    # Store runtime data for platforms to access
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = MiAirPurifierData(
        proxy=proxy, coordinator=coordinator, accessories=accessories
    )

    # Set up platforms
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # Reload when the options change
    entry.async_on_unload(entry.add_update_listener(update_listener))

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)

        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN)

    return unload_ok


async def update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update."""
    await hass.config_entries.async_reload(entry.entry_id)
