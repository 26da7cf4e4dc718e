"""Exposed characteristics backed by device properties."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from .api import MiAirPurifierError

if TYPE_CHECKING:
    from .models import AccessoryContext

GetHandler = Callable[[], Awaitable[Any]]
SetHandler = Callable[[Any], Awaitable[None]]
ChangeListener = Callable[[], None]


class Characteristic:
    """One user visible value with its own get and set handlers.

    ``value`` is what is currently displayed. It changes after a successful
    get or set, or when a sibling pushes it with ``update_value``. Pushing
    never runs the set handler.
    """

    def __init__(
        self,
        context: AccessoryContext,
        name: str,
        *,
        getter: GetHandler | None = None,
        setter: SetHandler | None = None,
        initial_value: Any = None,
    ) -> None:
        """Initialize the characteristic."""
        self.context = context
        self.name = name
        self._getter = getter
        self._setter = setter
        self._value = initial_value
        self._listeners: list[ChangeListener] = []

    def __repr__(self) -> str:
        return f"<Characteristic {self.context.name}/{self.name}={self._value!r}>"

    @property
    def value(self) -> Any:
        """Return the displayed value."""
        return self._value

    @property
    def readable(self) -> bool:
        """Return True when the value can be fetched from the device."""
        return self._getter is not None

    @property
    def writable(self) -> bool:
        """Return True when the value can be written to the device."""
        return self._setter is not None

    def async_add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Call ``listener`` whenever the displayed value changes."""
        self._listeners.append(listener)

        def remove_listener() -> None:
            self._listeners.remove(listener)

        return remove_listener

    def update_value(self, value: Any) -> None:
        """Push a new displayed value without touching the device."""
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            listener()

    async def async_get(self) -> Any:
        """Run the get handler and display its result."""
        if self._getter is None:
            return self._value
        try:
            value = await self._getter()
        except MiAirPurifierError as err:
            self.context.logger.error(
                "[%s] %s - get error: %s", self.context.name, self.name, err
            )
            raise
        self.context.logger.debug(
            "[%s] %s - get: %s", self.context.name, self.name, value
        )
        self.update_value(value)
        return value

    async def async_set(self, value: Any) -> None:
        """Run the set handler, then display ``value``."""
        if self._setter is None:
            raise ValueError(f"{self.name} of {self.context.name} is read-only")
        self.context.logger.debug(
            "[%s] %s - set: %s", self.context.name, self.name, value
        )
        try:
            await self._setter(value)
        except MiAirPurifierError as err:
            self.context.logger.error(
                "[%s] %s - set %s error: %s", self.context.name, self.name, value, err
            )
            raise
        self.update_value(value)
