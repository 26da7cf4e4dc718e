"""Config flow for Mi Air Purifier integration."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import re
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_HOST, CONF_SCAN_INTERVAL, CONF_TOKEN
from homeassistant.core import callback

from .api import DeviceCommunicationError, async_connect
from .const import (
    CONF_AIR_PURIFIER_DISABLE,
    CONF_AIR_PURIFIER_NAME,
    CONF_AIR_QUALITY_DISABLE,
    CONF_AIR_QUALITY_NAME,
    CONF_BUZZER_SWITCH_DISABLE,
    CONF_BUZZER_SWITCH_NAME,
    CONF_HUMIDITY_DISABLE,
    CONF_HUMIDITY_NAME,
    CONF_LED_BULB_DISABLE,
    CONF_LED_BULB_NAME,
    CONF_SILENT_MODE_SWITCH_DISABLE,
    CONF_SILENT_MODE_SWITCH_NAME,
    CONF_TEMPERATURE_DISABLE,
    CONF_TEMPERATURE_NAME,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
)

_LOGGER = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[0-9a-fA-F]{32}")

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): str,
        vol.Required(CONF_TOKEN): str,
    }
)

DEFAULT_NAMES = {
    CONF_AIR_PURIFIER_NAME: "Air Purifier",
    CONF_SILENT_MODE_SWITCH_NAME: "Silent Mode",
    CONF_TEMPERATURE_NAME: "Temperature",
    CONF_HUMIDITY_NAME: "Humidity",
    CONF_BUZZER_SWITCH_NAME: "Buzzer",
    CONF_LED_BULB_NAME: "LED",
    CONF_AIR_QUALITY_NAME: "Air Quality",
}

NAME_AND_DISABLE_OPTIONS = (
    (CONF_AIR_PURIFIER_NAME, CONF_AIR_PURIFIER_DISABLE),
    (CONF_SILENT_MODE_SWITCH_NAME, CONF_SILENT_MODE_SWITCH_DISABLE),
    (CONF_TEMPERATURE_NAME, CONF_TEMPERATURE_DISABLE),
    (CONF_HUMIDITY_NAME, CONF_HUMIDITY_DISABLE),
    (CONF_BUZZER_SWITCH_NAME, CONF_BUZZER_SWITCH_DISABLE),
    (CONF_LED_BULB_NAME, CONF_LED_BULB_DISABLE),
    (CONF_AIR_QUALITY_NAME, CONF_AIR_QUALITY_DISABLE),
)


def accessories_schema(defaults: Mapping[str, Any]) -> vol.Schema:
    """Return the schema of the per-accessory names and disable flags."""
    fields: dict[Any, Any] = {}
    for name_option, disable_option in NAME_AND_DISABLE_OPTIONS:
        fields[
            vol.Optional(
                name_option, default=defaults.get(name_option, DEFAULT_NAMES[name_option])
            )
        ] = str
        fields[
            vol.Optional(disable_option, default=defaults.get(disable_option, False))
        ] = bool
    fields[
        vol.Optional(
            CONF_SCAN_INTERVAL,
            default=defaults.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL),
        )
    ] = vol.All(vol.Coerce(int), vol.Range(min=1, max=3600))
    return vol.Schema(fields)


class MiAirPurifierConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Mi Air Purifier."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize the flow."""
        self._connection: dict[str, Any] = {}

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Create the options flow."""
        return MiAirPurifierOptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            host = user_input[CONF_HOST].strip()
            token = user_input[CONF_TOKEN].strip()

            # Check if already configured
            await self.async_set_unique_id(host)
            self._abort_if_unique_id_configured()

            if not TOKEN_PATTERN.fullmatch(token):
                errors["base"] = "invalid_token"
            else:
                try:
                    await async_connect(self.hass, host, token)
                except DeviceCommunicationError:
                    errors["base"] = "cannot_connect"
                except Exception:  # pylint: disable=broad-except
                    _LOGGER.exception("Unexpected exception")
                    errors["base"] = "unknown"
                else:
                    self._connection = {CONF_HOST: host, CONF_TOKEN: token}
                    return await self.async_step_accessories()

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )

    async def async_step_accessories(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Name the accessories, or turn some of them off."""
        if user_input is not None:
            return self.async_create_entry(
                title=f"Mi Air Purifier ({self._connection[CONF_HOST]})",
                data={**self._connection, **user_input},
            )

        return self.async_show_form(
            step_id="accessories",
            data_schema=accessories_schema({}),
        )


class MiAirPurifierOptionsFlow(OptionsFlow):
    """Change accessory names, disable flags and the polling interval."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the options."""
        if user_input is not None:
            return self.async_create_entry(data=user_input)

        current = {**self.config_entry.data, **self.config_entry.options}
        return self.async_show_form(
            step_id="init",
            data_schema=accessories_schema(current),
        )
