"""Test the Mi Air Purifier poller."""

import logging

from custom_components.mi_air_purifier.accessory import PurifierAccessory
from custom_components.mi_air_purifier.api import (
    DeviceCommunicationError,
    DeviceProxy,
)
from custom_components.mi_air_purifier.const import POLL_PROPERTIES, PurifierState
from custom_components.mi_air_purifier.coordinator import MiAirPurifierCoordinator
from custom_components.mi_air_purifier.models import AccessoryContext
from homeassistant.core import HomeAssistant

from .common import FakeDevice


def _coordinator(
    hass: HomeAssistant, context: AccessoryContext
) -> tuple[MiAirPurifierCoordinator, PurifierAccessory]:
    purifier = PurifierAccessory(context, "Air Purifier", "Silent Mode")
    coordinator = MiAirPurifierCoordinator(hass, None, context.proxy, [purifier])
    return coordinator, purifier


async def test_refresh_fetches_once(
    hass: HomeAssistant, context: AccessoryContext, fake_device: FakeDevice
) -> None:
    """Test one poll is one batched fetch that updates every characteristic."""

    coordinator, purifier = _coordinator(hass, context)

    await coordinator.async_refresh()

    assert coordinator.last_update_success
    assert fake_device.fetches == [list(POLL_PROPERTIES)]
    assert coordinator.data["favorite_level"] == 10
    assert purifier.active.value is True
    assert purifier.rotation_speed.value == 70
    assert purifier.temperature.value == 21.5


async def test_refresh_picks_up_external_changes(
    hass: HomeAssistant, context: AccessoryContext, fake_device: FakeDevice
) -> None:
    """Test changes made on the device itself show up after the next poll."""

    coordinator, purifier = _coordinator(hass, context)
    await coordinator.async_refresh()
    states: list[PurifierState] = []
    purifier.current_state.async_add_listener(
        lambda: states.append(purifier.current_state.value)
    )

    fake_device.properties["power"] = "off"
    fake_device.properties["mode"] = "silent"
    await coordinator.async_refresh()

    assert len(fake_device.fetches) == 2
    assert purifier.active.value is False
    assert purifier.silent_mode.value is True
    assert states == [PurifierState.INACTIVE]


async def test_refresh_failure_recovers(
    hass: HomeAssistant, context: AccessoryContext, fake_device: FakeDevice
) -> None:
    """Test a failed poll keeps the displayed values and the next poll recovers."""

    coordinator, purifier = _coordinator(hass, context)
    await coordinator.async_refresh()

    fake_device.properties["humidity"] = 60
    fake_device.fetch_error = DeviceCommunicationError("timeout")
    await coordinator.async_refresh()

    assert not coordinator.last_update_success
    assert purifier.humidity.value == 45

    fake_device.fetch_error = None
    await coordinator.async_refresh()

    assert coordinator.last_update_success
    assert purifier.humidity.value == 60


async def test_refresh_not_connected(hass: HomeAssistant) -> None:
    """Test polling an unattached proxy fails the update."""

    context = AccessoryContext(
        "Test Purifier", DeviceProxy("Test Purifier"), logging.getLogger(__name__)
    )
    coordinator, purifier = _coordinator(hass, context)

    await coordinator.async_refresh()

    assert not coordinator.last_update_success
    assert purifier.active.value is None


async def test_refresh_survives_missing_property(
    hass: HomeAssistant, context: AccessoryContext, fake_device: FakeDevice
) -> None:
    """Test a property answered with None does not fail the whole poll."""

    coordinator, purifier = _coordinator(hass, context)
    await coordinator.async_refresh()

    fake_device.properties.update(filter1_life=None, humidity=60, power="off")
    await coordinator.async_refresh()

    assert coordinator.last_update_success
    assert purifier.filter_change.value is None
    assert purifier.filter_life.value is None
    assert purifier.humidity.value == 60
    assert purifier.active.value is False
    assert purifier.current_state.value is PurifierState.INACTIVE
