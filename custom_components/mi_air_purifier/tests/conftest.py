"""Global fixtures for Mi Air Purifier integration."""

import logging
from typing import Any

import pytest

from custom_components.mi_air_purifier.api import DeviceProxy
from custom_components.mi_air_purifier.models import AccessoryContext

from .common import FakeDevice

pytest_plugins = "pytest_homeassistant_custom_component"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> None:  # noqa: D103
    return


@pytest.fixture
def fake_device() -> FakeDevice:
    """Return a fake purifier with default properties."""
    return FakeDevice()


@pytest.fixture
def proxy(fake_device: FakeDevice) -> DeviceProxy:
    """Return a proxy connected to the fake purifier."""
    device_proxy = DeviceProxy("Test Purifier")
    device_proxy.attach(fake_device)
    return device_proxy


@pytest.fixture
def context(proxy: DeviceProxy) -> AccessoryContext:
    """Return the accessory context of the fake purifier."""
    return AccessoryContext(
        name="Test Purifier", proxy=proxy, logger=logging.getLogger(__name__)
    )
