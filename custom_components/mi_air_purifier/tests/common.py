"""Test helpers for Mi Air Purifier."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .const import DEVICE_PROPERTIES

# Command -> property it changes on the device
COMMAND_PROPERTIES = {
    "set_power": "power",
    "set_mode": "mode",
    "set_child_lock": "child_lock",
    "set_level_favorite": "favorite_level",
    "set_buzzer": "volume",
    "set_led": "led",
}


class FakeDevice:
    """In-memory purifier implementing the device handle interface."""

    def __init__(self, **properties: Any) -> None:
        """Initialize the fake with the default properties, overridden by ``properties``."""
        self.properties: dict[str, Any] = {**DEVICE_PROPERTIES, **properties}
        self.fetches: list[list[str]] = []
        self.calls: list[tuple[str, list[Any]]] = []
        self.results: dict[str, list[Any]] = {}
        self.fetch_error: Exception | None = None
        self.invoke_error: Exception | None = None

    async def async_fetch_properties(self, names: Sequence[str]) -> list[Any]:
        """Return the requested properties."""
        self.fetches.append(list(names))
        if self.fetch_error is not None:
            raise self.fetch_error
        return [self.properties.get(name) for name in names]

    async def async_invoke(self, command: str, args: Sequence[Any]) -> list[Any]:
        """Record the command and apply it unless a result is forced."""
        self.calls.append((command, list(args)))
        if self.invoke_error is not None:
            raise self.invoke_error
        if command in self.results:
            return self.results[command]
        if command in COMMAND_PROPERTIES:
            self.properties[COMMAND_PROPERTIES[command]] = args[0]
        return ["ok"]
