"""Test the Mi Air Purifier config flow."""

from unittest.mock import patch

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.mi_air_purifier.api import DeviceCommunicationError
from custom_components.mi_air_purifier.const import CONF_LED_BULB_DISABLE, DOMAIN
from homeassistant.config_entries import SOURCE_USER
from homeassistant.const import CONF_HOST, CONF_SCAN_INTERVAL, CONF_TOKEN
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType

from .const import MOCK_CONFIG, MOCK_CONNECTION, MOCK_HOST

CONNECT = "custom_components.mi_air_purifier.config_flow.async_connect"


@pytest.fixture(autouse=True)
def bypass_setup_fixture():
    """Prevent setup."""
    with patch(
        "custom_components.mi_air_purifier.async_setup_entry",
        return_value=True,
    ):
        yield


async def test_form(hass: HomeAssistant) -> None:
    """Test we get the form."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    assert result["handler"] == DOMAIN
    assert result.get("type") is FlowResultType.FORM
    assert result.get("step_id") == "user"
    assert result.get("errors") == {}
    data_schema = result.get("data_schema")
    assert data_schema is not None
    assert isinstance(data_schema.schema[CONF_HOST], type)


async def test_flow_success(hass: HomeAssistant) -> None:
    """Test that we can configure with a reachable purifier."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(CONNECT, return_value=object()):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONNECTION
        )
    assert result.get("type") == FlowResultType.FORM
    assert result.get("step_id") == "accessories"

    names = {key: value for key, value in MOCK_CONFIG.items() if key.endswith("_name")}
    result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
        result["flow_id"], user_input=names
    )
    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert result.get("title") == f"Mi Air Purifier ({MOCK_HOST})"
    data = result.get("data")
    assert data[CONF_HOST] == MOCK_HOST
    assert data[CONF_TOKEN] == MOCK_CONNECTION[CONF_TOKEN]
    assert data[CONF_SCAN_INTERVAL] == 5
    assert data[CONF_LED_BULB_DISABLE] is False
    assert result.get("result")


async def test_flow_invalid_token(hass: HomeAssistant) -> None:
    """Test a token that is not 32 hex digits is refused before connecting."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(CONNECT) as connect:
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"],
            user_input={CONF_HOST: MOCK_HOST, CONF_TOKEN: "not-a-token"},
        )
    assert result.get("type") == FlowResultType.FORM
    assert result.get("errors") == {"base": "invalid_token"}
    connect.assert_not_called()


async def test_flow_failure(hass: HomeAssistant) -> None:
    """Test that a connection exception fails the config flow."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(CONNECT, side_effect=DeviceCommunicationError("timeout")):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONNECTION
        )
    assert result.get("type") == FlowResultType.FORM
    assert result.get("step_id") == "user"
    assert result.get("errors") == {"base": "cannot_connect"}

    with patch(CONNECT, side_effect=Exception):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONNECTION
        )
    assert result.get("errors") == {"base": "unknown"}


async def test_flow_already_configured(hass: HomeAssistant) -> None:
    """Test the same host cannot be added twice."""

    MockConfigEntry(domain=DOMAIN, unique_id=MOCK_HOST, data=MOCK_CONFIG).add_to_hass(
        hass
    )

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
        result["flow_id"], user_input=MOCK_CONNECTION
    )
    assert result.get("type") == FlowResultType.ABORT
    assert result.get("reason") == "already_configured"


async def test_options_flow(hass: HomeAssistant) -> None:
    """Test changing the polling interval and disabling an accessory."""

    entry = MockConfigEntry(domain=DOMAIN, unique_id=MOCK_HOST, data=MOCK_CONFIG)
    entry.add_to_hass(hass)

    result = await hass.config_entries.options.async_init(entry.entry_id)
    assert result.get("type") == FlowResultType.FORM
    assert result.get("step_id") == "init"

    result = await hass.config_entries.options.async_configure(
        result["flow_id"],
        user_input={CONF_SCAN_INTERVAL: 10, CONF_LED_BULB_DISABLE: True},
    )
    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert entry.options[CONF_SCAN_INTERVAL] == 10
    assert entry.options[CONF_LED_BULB_DISABLE] is True
    assert entry.options["air_purifier_name"] == "Air Purifier"
