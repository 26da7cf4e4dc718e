"""Device access layer for the Mi Air Purifier integration."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import logging
from typing import Any, Protocol

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError

from .const import CMD_GET_PROP, RESULT_OK

_LOGGER = logging.getLogger(__name__)


class MiAirPurifierError(HomeAssistantError):
    """Base class for errors raised while talking to the purifier."""


class NotConnectedError(MiAirPurifierError):
    """Exception to indicate the device connection is not established yet."""


class DeviceCommunicationError(MiAirPurifierError):
    """Exception to indicate a transport failure during a fetch or a command."""


class DeviceRejectedError(MiAirPurifierError):
    """Exception to indicate the device answered a command with something other than ok."""

    def __init__(self, command: str, token: Any) -> None:
        """Initialize the error with the rejected command and the device token."""
        super().__init__(f"Device rejected {command}: {token}")
        self.command = command
        self.token = token


class DeviceHandle(Protocol):
    """Connected device as seen by the proxy."""

    async def async_fetch_properties(self, names: Sequence[str]) -> list[Any]:
        """Fetch ``names`` in one round trip, returning values in the same order."""

    async def async_invoke(self, command: str, args: Sequence[Any]) -> list[Any]:
        """Run ``command`` and return the result tokens."""


def _import_miio() -> tuple[Any, type[Exception]]:
    """Import python-miio lazily, it is only needed once a real device is used."""
    from miio import Device, DeviceException  # pylint: disable=import-outside-toplevel

    return Device, DeviceException


class MiioDeviceHandle:
    """Device handle backed by a python-miio ``Device``.

    python-miio is synchronous, so every call is run in the executor.
    """

    def __init__(self, hass: HomeAssistant, device: Any) -> None:
        """Initialize the handle around a python-miio device."""
        self.hass = hass
        self._device = device
        _, self._device_exception = _import_miio()

    async def _async_send(self, command: str, args: Sequence[Any]) -> list[Any]:
        try:
            result = await self.hass.async_add_executor_job(
                self._device.send, command, list(args)
            )
        except self._device_exception as err:
            raise DeviceCommunicationError(
                f"Failed to call {command} on {self._device.ip}: {err}"
            ) from err
        if not isinstance(result, list):
            raise DeviceCommunicationError(
                f"Unexpected reply to {command} from {self._device.ip}: {result!r}"
            )
        return result

    async def async_fetch_properties(self, names: Sequence[str]) -> list[Any]:
        """Fetch properties with ``get_prop``."""
        return await self._async_send(CMD_GET_PROP, names)

    async def async_invoke(self, command: str, args: Sequence[Any]) -> list[Any]:
        """Run a device command."""
        return await self._async_send(command, args)


async def async_connect(hass: HomeAssistant, host: str, token: str) -> MiioDeviceHandle:
    """Connect to the purifier at ``host`` and validate the token.

    Raises:
        DeviceCommunicationError: If the device cannot be reached or the
            token is wrong

    """
    device_cls, device_exception = _import_miio()
    device = device_cls(host, token)
    try:
        info = await hass.async_add_executor_job(device.info)
    except device_exception as err:
        _LOGGER.error("Failed to connect to air purifier at %s", host)
        raise DeviceCommunicationError(
            f"Failed to connect to air purifier at {host}: {err}"
        ) from err

    _LOGGER.debug("Connected to air purifier at %s: %s", host, info)
    return MiioDeviceHandle(hass, device)


class PropertyCache:
    """Last known value of each device property.

    Entries never expire. A ``None`` value counts as missing.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._values: dict[str, Any] = {}

    def get(self, name: str) -> Any:
        """Return the cached value of ``name`` or None."""
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return self._values.get(name) is not None  # type: ignore[call-overload]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def update(self, values: dict[str, Any]) -> None:
        """Store several values at once."""
        self._values.update(values)

    def prime(self, name: str, value: Any) -> None:
        """Overwrite a single entry."""
        self._values[name] = value


class DeviceProxy:
    """Cached property reads and live command writes against the purifier."""

    def __init__(self, name: str) -> None:
        """Initialize a disconnected proxy.

        Args:
            name: Device name used in log messages

        """
        self.name = name
        self.cache = PropertyCache()
        self._handle: DeviceHandle | None = None

    @property
    def connected(self) -> bool:
        """Return True once a device handle is attached."""
        return self._handle is not None

    def attach(self, handle: DeviceHandle) -> None:
        """Switch the proxy to the connected state.

        Raises:
            RuntimeError: If a handle is already attached

        """
        if self._handle is not None:
            raise RuntimeError(f"{self.name} is already connected")
        self._handle = handle

    def _require_handle(self, action: str) -> DeviceHandle:
        if self._handle is None:
            raise NotConnectedError(f"Cannot {action}: not connected to {self.name}")
        return self._handle

    async def async_read(
        self, names: Iterable[str], force_refetch: bool = False
    ) -> dict[str, Any]:
        """Read properties, fetching only those missing from the cache.

        Args:
            names: Property names, the result keeps their order
            force_refetch: Fetch every requested property even when cached

        Returns:
            Property values keyed by name

        Raises:
            NotConnectedError: If the device is not connected yet
            DeviceCommunicationError: If the fetch fails, the cache is untouched

        """
        requested = list(dict.fromkeys(names))
        handle = self._require_handle(f"read {', '.join(requested)}")

        if force_refetch:
            to_fetch = requested
        else:
            to_fetch = [name for name in requested if name not in self.cache]

        if not to_fetch:
            values = {name: self.cache.get(name) for name in requested}
            _LOGGER.debug("[%s] Using cached values: %s", self.name, values)
            return values

        _LOGGER.debug("[%s] Fetching device values for %s", self.name, ", ".join(to_fetch))
        try:
            fetched = await handle.async_fetch_properties(to_fetch)
        except (OSError, TimeoutError) as err:
            raise DeviceCommunicationError(
                f"Failed to fetch {', '.join(to_fetch)} from {self.name}: {err}"
            ) from err

        if len(fetched) != len(to_fetch):
            raise DeviceCommunicationError(
                f"Expected {len(to_fetch)} values from {self.name}, got {len(fetched)}"
            )

        self.cache.update(dict(zip(to_fetch, fetched, strict=True)))
        return {name: self.cache.get(name) for name in requested}

    async def async_write(self, command: str, args: Sequence[Any]) -> list[Any]:
        """Run ``command`` on the device.

        Returns:
            The result tokens, starting with ``ok``

        Raises:
            NotConnectedError: If the device is not connected yet
            DeviceCommunicationError: If the transport fails
            DeviceRejectedError: If the device answers with anything but ok

        """
        handle = self._require_handle(f"perform call {command}")
        try:
            result = await handle.async_invoke(command, args)
        except (OSError, TimeoutError) as err:
            raise DeviceCommunicationError(
                f"Failed to call {command} on {self.name}: {err}"
            ) from err

        _LOGGER.debug("[%s] %s%s result: %s", self.name, command, list(args), result)
        if not result or result[0] != RESULT_OK:
            raise DeviceRejectedError(command, result[0] if result else None)
        return result

    def prime(self, name: str, value: Any) -> None:
        """Optimistically store the value a command is about to produce."""
        self.cache.prime(name, value)
