"""Accessories binding purifier properties to exposed characteristics."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from homeassistant.components.binary_sensor import BinarySensorDeviceClass
from homeassistant.components.sensor import SensorDeviceClass, SensorStateClass
from homeassistant.const import (
    CONCENTRATION_MICROGRAMS_PER_CUBIC_METER,
    PERCENTAGE,
    EntityCategory,
    Platform,
    UnitOfTemperature,
)

from .api import MiAirPurifierError
from .characteristic import Characteristic, GetHandler, SetHandler
from .const import (
    CHAR_ACTIVE,
    CHAR_AIR_QUALITY,
    CHAR_BUZZER,
    CHAR_CHILD_LOCK,
    CHAR_CURRENT_STATE,
    CHAR_FILTER_CHANGE,
    CHAR_FILTER_LIFE,
    CHAR_HUMIDITY,
    CHAR_LED,
    CHAR_PM25,
    CHAR_ROTATION_SPEED,
    CHAR_SILENT_MODE,
    CHAR_TARGET_MODE,
    CHAR_TEMPERATURE,
    CMD_SET_BUZZER,
    CMD_SET_CHILD_LOCK,
    CMD_SET_LED,
    CMD_SET_LEVEL_FAVORITE,
    CMD_SET_MODE,
    CMD_SET_POWER,
    FILTER_CHANGE_THRESHOLD,
    MODE_AUTO,
    MODE_FAVORITE,
    MODE_SILENT,
    PROP_AQI,
    PROP_CHILD_LOCK,
    PROP_FAVORITE_LEVEL,
    PROP_FILTER_LIFE,
    PROP_HUMIDITY,
    PROP_LED,
    PROP_MODE,
    PROP_POWER,
    PROP_TEMPERATURE,
    PROP_VOLUME,
    STATE_OFF,
    STATE_ON,
    AirQuality,
    PurifierState,
    TargetMode,
)
from .level import LevelMapper
from .models import AccessoryContext, MiAirPurifierConfig

_AIR_QUALITY_BANDS = (
    (50, AirQuality.EXCELLENT),
    (100, AirQuality.GOOD),
    (200, AirQuality.FAIR),
    (300, AirQuality.INFERIOR),
)


def classify_air_quality(aqi: Any) -> AirQuality:
    """Classify an AQI reading, band upper bounds are inclusive."""
    try:
        value = float(aqi)
    except (TypeError, ValueError):
        return AirQuality.UNKNOWN
    for upper, quality in _AIR_QUALITY_BANDS:
        if value <= upper:
            return quality
    return AirQuality.POOR


def on_off(value: Any) -> str:
    """Return the device spelling of a boolean."""
    return STATE_ON if value else STATE_OFF


def is_on(value: Any) -> bool:
    """Return True for the device's ``on`` value."""
    return value == STATE_ON


def temperature_from_device(value: Any) -> float | None:
    """Convert ``temp_dec`` tenths of a degree to degrees."""
    if value is None:
        return None
    return value / 10


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class ExposedCharacteristic:
    """Describe how a characteristic is shown in Home Assistant."""

    platform: Platform
    characteristic: Characteristic
    name: str | None = None
    device_class: str | None = None
    state_class: str | None = None
    unit: str | None = None
    options: tuple[str, ...] | None = None
    entity_category: EntityCategory | None = None


class Accessory:
    """Group of characteristics presented as one device."""

    def __init__(self, context: AccessoryContext, key: str, name: str) -> None:
        """Initialize the accessory.

        Args:
            context: Shared per-device context
            key: Sub-accessory key, stable across restarts
            name: Display name of the accessory

        """
        self.context = context
        self.key = key
        self.name = name
        self.characteristics: dict[str, Characteristic] = {}
        self._exposed: list[ExposedCharacteristic] = []

    def add_characteristic(
        self,
        name: str,
        *,
        getter: GetHandler | None = None,
        setter: SetHandler | None = None,
    ) -> Characteristic:
        """Create and register a characteristic."""
        characteristic = Characteristic(
            self.context, name, getter=getter, setter=setter
        )
        self.characteristics[name] = characteristic
        return characteristic

    def expose(
        self, platform: Platform, characteristic: Characteristic, **kwargs: Any
    ) -> ExposedCharacteristic:
        """Expose ``characteristic`` as an entity of ``platform``."""
        exposed = ExposedCharacteristic(
            platform=platform, characteristic=characteristic, **kwargs
        )
        self._exposed.append(exposed)
        return exposed

    def exposed(self, platform: Platform) -> list[ExposedCharacteristic]:
        """Return the characteristics exposed on ``platform``."""
        return [item for item in self._exposed if item.platform == platform]

    async def async_refresh(self) -> None:
        """Re-run every get handler so the displayed values follow the cache.

        A failing handler is logged by its characteristic and does not stop
        the others.
        """
        for characteristic in self.characteristics.values():
            if not characteristic.readable:
                continue
            try:
                await characteristic.async_get()
            except MiAirPurifierError:
                continue

    async def _async_read(self, name: str) -> Any:
        return (await self.context.proxy.async_read([name]))[name]

    async def _async_command(
        self, prop: str, value: Any, command: str, args: Sequence[Any]
    ) -> None:
        """Prime ``prop`` with ``value``, then run ``command``."""
        self.context.proxy.prime(prop, value)
        await self.context.proxy.async_write(command, args)


class PurifierAccessory(Accessory):
    """The air purifier itself, with its cross-characteristic rules."""

    def __init__(
        self,
        context: AccessoryContext,
        name: str,
        silent_mode_name: str | None = None,
        mapper: LevelMapper | None = None,
    ) -> None:
        """Initialize the purifier characteristics.

        Args:
            context: Shared per-device context
            name: Display name of the purifier
            silent_mode_name: Name of the silent mode switch, None to keep
                the switch hidden
            mapper: Rotation speed to favourite level mapper

        """
        super().__init__(context, "air_purifier", name)
        self.mapper = mapper or LevelMapper()

        self.active = self.add_characteristic(
            CHAR_ACTIVE, getter=self._async_get_active, setter=self._async_set_active
        )
        self.current_state = self.add_characteristic(
            CHAR_CURRENT_STATE, getter=self._async_get_current_state
        )
        self.target_mode = self.add_characteristic(
            CHAR_TARGET_MODE,
            getter=self._async_get_target_mode,
            setter=self._async_set_target_mode,
        )
        self.silent_mode = self.add_characteristic(
            CHAR_SILENT_MODE,
            getter=self._async_get_silent_mode,
            setter=self._async_set_silent_mode,
        )
        self.child_lock = self.add_characteristic(
            CHAR_CHILD_LOCK,
            getter=self._async_get_child_lock,
            setter=self._async_set_child_lock,
        )
        self.rotation_speed = self.add_characteristic(
            CHAR_ROTATION_SPEED,
            getter=self._async_get_rotation_speed,
            setter=self._async_set_rotation_speed,
        )
        self.temperature = self.add_characteristic(
            CHAR_TEMPERATURE, getter=self._async_get_temperature
        )
        self.humidity = self.add_characteristic(
            CHAR_HUMIDITY, getter=self._async_get_humidity
        )
        self.pm25 = self.add_characteristic(CHAR_PM25, getter=self._async_get_pm25)
        self.air_quality = self.add_characteristic(CHAR_AIR_QUALITY)
        self.filter_change = self.add_characteristic(
            CHAR_FILTER_CHANGE, getter=self._async_get_filter_change
        )
        self.filter_life = self.add_characteristic(
            CHAR_FILTER_LIFE, getter=self._async_get_filter_life
        )

        self.expose(Platform.SWITCH, self.active)
        if silent_mode_name:
            self.expose(Platform.SWITCH, self.silent_mode, name=silent_mode_name)
        self.expose(
            Platform.SWITCH,
            self.child_lock,
            name="Child lock",
            entity_category=EntityCategory.CONFIG,
        )
        self.expose(
            Platform.SENSOR,
            self.current_state,
            name="Current state",
            device_class=SensorDeviceClass.ENUM,
            options=tuple(PurifierState),
        )
        self.expose(
            Platform.SELECT,
            self.target_mode,
            name="Target mode",
            options=tuple(TargetMode),
        )
        self.expose(
            Platform.NUMBER,
            self.rotation_speed,
            name="Rotation speed",
            unit=PERCENTAGE,
        )
        self.expose(
            Platform.SENSOR,
            self.temperature,
            name="Temperature",
            device_class=SensorDeviceClass.TEMPERATURE,
            state_class=SensorStateClass.MEASUREMENT,
            unit=UnitOfTemperature.CELSIUS,
        )
        self.expose(
            Platform.SENSOR,
            self.humidity,
            name="Humidity",
            device_class=SensorDeviceClass.HUMIDITY,
            state_class=SensorStateClass.MEASUREMENT,
            unit=PERCENTAGE,
        )
        self.expose(
            Platform.SENSOR,
            self.pm25,
            name="PM2.5",
            device_class=SensorDeviceClass.PM25,
            state_class=SensorStateClass.MEASUREMENT,
            unit=CONCENTRATION_MICROGRAMS_PER_CUBIC_METER,
        )
        self.expose(
            Platform.SENSOR,
            self.air_quality,
            name="Air quality",
            device_class=SensorDeviceClass.ENUM,
            options=tuple(AirQuality),
        )
        self.expose(
            Platform.BINARY_SENSOR,
            self.filter_change,
            name="Filter change",
            device_class=BinarySensorDeviceClass.PROBLEM,
            entity_category=EntityCategory.DIAGNOSTIC,
        )
        self.expose(
            Platform.SENSOR,
            self.filter_life,
            name="Filter life",
            state_class=SensorStateClass.MEASUREMENT,
            unit=PERCENTAGE,
            entity_category=EntityCategory.DIAGNOSTIC,
        )

    # Active / current state

    async def _async_get_active(self) -> bool | None:
        power = await self._async_read(PROP_POWER)
        if power is None:
            return None
        return power != STATE_OFF

    async def _async_set_active(self, value: bool) -> None:
        power = on_off(value)
        await self._async_command(PROP_POWER, power, CMD_SET_POWER, [power])

        self.current_state.update_value(PurifierState.IDLE)
        if value:
            self.current_state.update_value(PurifierState.PURIFYING_AIR)
            # set_power is confirmed here, a failed re-read keeps the silent display
            try:
                mode = await self._async_read(PROP_MODE)
            except MiAirPurifierError as err:
                self.context.logger.error(
                    "[%s] %s - mode re-read error: %s",
                    self.context.name,
                    self.active.name,
                    err,
                )
            else:
                self.silent_mode.update_value(mode == MODE_SILENT)
        else:
            self.current_state.update_value(PurifierState.INACTIVE)
            self.silent_mode.update_value(False)

    async def _async_get_current_state(self) -> PurifierState | None:
        power = await self._async_read(PROP_POWER)
        if power is None:
            return None
        if power == STATE_OFF:
            return PurifierState.INACTIVE
        return PurifierState.PURIFYING_AIR

    # Target mode / silent mode

    async def _async_get_target_mode(self) -> TargetMode:
        if await self._async_read(PROP_MODE) == MODE_FAVORITE:
            return TargetMode.MANUAL
        return TargetMode.AUTO

    async def _async_set_target_mode(self, value: TargetMode) -> None:
        target = TargetMode(value)
        if target is TargetMode.MANUAL:
            mode = MODE_FAVORITE
        elif self.silent_mode.value:
            mode = MODE_SILENT
        else:
            mode = MODE_AUTO
        await self._async_command(PROP_MODE, mode, CMD_SET_MODE, [mode])

        if target is TargetMode.MANUAL:
            level = await self._async_read(PROP_FAVORITE_LEVEL)
            self.silent_mode.update_value(False)
            self.rotation_speed.update_value(
                self.mapper.position_for_level(int(level), self.rotation_speed.value)
            )
        elif mode == MODE_AUTO:
            self.silent_mode.update_value(False)

    async def _async_get_silent_mode(self) -> bool:
        return await self._async_read(PROP_MODE) == MODE_SILENT

    async def _async_set_silent_mode(self, value: bool) -> None:
        if value:
            await self._async_command(PROP_MODE, MODE_SILENT, CMD_SET_MODE, [MODE_SILENT])
            self.target_mode.update_value(TargetMode.AUTO)
            if not self.active.value:
                self.active.update_value(True)
                self.current_state.update_value(PurifierState.PURIFYING_AIR)
            return

        if not self.active.value:
            return
        if self.target_mode.value == TargetMode.MANUAL:
            mode = MODE_FAVORITE
        else:
            mode = MODE_AUTO
        await self._async_command(PROP_MODE, mode, CMD_SET_MODE, [mode])

    # Child lock

    async def _async_get_child_lock(self) -> bool:
        return is_on(await self._async_read(PROP_CHILD_LOCK))

    async def _async_set_child_lock(self, value: bool) -> None:
        lock = on_off(value)
        await self._async_command(PROP_CHILD_LOCK, lock, CMD_SET_CHILD_LOCK, [lock])

    # Rotation speed

    async def _async_get_rotation_speed(self) -> float | None:
        level = await self._async_read(PROP_FAVORITE_LEVEL)
        if level is None:
            return self.rotation_speed.value
        return self.mapper.position_for_level(int(level), self.rotation_speed.value)

    async def _async_set_rotation_speed(self, value: float) -> None:
        # 0 is not a favourite level
        if value == 0:
            return
        level = self.mapper.level_for_position(value)
        await self._async_command(
            PROP_FAVORITE_LEVEL, level, CMD_SET_LEVEL_FAVORITE, [level]
        )

    # Sensors

    async def _async_get_temperature(self) -> float | None:
        return temperature_from_device(await self._async_read(PROP_TEMPERATURE))

    async def _async_get_humidity(self) -> Any:
        return await self._async_read(PROP_HUMIDITY)

    async def _async_get_pm25(self) -> Any:
        aqi = await self._async_read(PROP_AQI)
        self.air_quality.update_value(classify_air_quality(aqi))
        return aqi

    async def _async_get_filter_change(self) -> bool | None:
        life = await self._async_read(PROP_FILTER_LIFE)
        if life is None:
            return None
        return life < FILTER_CHANGE_THRESHOLD

    async def _async_get_filter_life(self) -> Any:
        return await self._async_read(PROP_FILTER_LIFE)


@dataclass(frozen=True)
class PropertyBinding:
    """How one characteristic of a single property accessory shows the property."""

    name: str
    platform: Platform
    transform: Callable[[Any], Any] = _identity
    entity_name: str | None = None
    device_class: str | None = None
    state_class: str | None = None
    unit: str | None = None
    options: tuple[str, ...] | None = None


class SinglePropertyAccessory(Accessory):
    """Accessory showing one property, optionally writable with one command.

    Companion characteristics are derived from the same property and pushed
    on every read of the primary characteristic.
    """

    def __init__(
        self,
        context: AccessoryContext,
        key: str,
        name: str,
        *,
        property_name: str,
        primary: PropertyBinding,
        command: str | None = None,
        to_device: Callable[[Any], Any] = on_off,
        companions: Sequence[PropertyBinding] = (),
    ) -> None:
        """Initialize the accessory."""
        super().__init__(context, key, name)
        self.property_name = property_name
        self.command = command
        self._primary = primary
        self._to_device = to_device
        self._companions = [
            (binding, self.add_characteristic(binding.name)) for binding in companions
        ]
        self.primary = self.add_characteristic(
            primary.name,
            getter=self._async_get,
            setter=self._async_set if command is not None else None,
        )

        for binding, characteristic in [(primary, self.primary), *self._companions]:
            self.expose(
                binding.platform,
                characteristic,
                name=binding.entity_name,
                device_class=binding.device_class,
                state_class=binding.state_class,
                unit=binding.unit,
                options=binding.options,
            )

    async def _async_get(self) -> Any:
        raw = await self._async_read(self.property_name)
        for binding, characteristic in self._companions:
            characteristic.update_value(binding.transform(raw))
        return self._primary.transform(raw)

    async def _async_set(self, value: Any) -> None:
        assert self.command is not None
        device_value = self._to_device(value)
        await self._async_command(
            self.property_name, device_value, self.command, [device_value]
        )


def build_accessories(
    context: AccessoryContext, config: MiAirPurifierConfig
) -> list[Accessory]:
    """Create the enabled accessories of one purifier."""
    accessories: list[Accessory] = []

    if name := config.name_of("air_purifier"):
        accessories.append(
            PurifierAccessory(context, name, config.name_of("silent_mode_switch"))
        )

    if name := config.name_of("temperature"):
        accessories.append(
            SinglePropertyAccessory(
                context,
                "temperature",
                name,
                property_name=PROP_TEMPERATURE,
                primary=PropertyBinding(
                    CHAR_TEMPERATURE,
                    Platform.SENSOR,
                    temperature_from_device,
                    device_class=SensorDeviceClass.TEMPERATURE,
                    state_class=SensorStateClass.MEASUREMENT,
                    unit=UnitOfTemperature.CELSIUS,
                ),
            )
        )

    if name := config.name_of("humidity"):
        accessories.append(
            SinglePropertyAccessory(
                context,
                "humidity",
                name,
                property_name=PROP_HUMIDITY,
                primary=PropertyBinding(
                    CHAR_HUMIDITY,
                    Platform.SENSOR,
                    device_class=SensorDeviceClass.HUMIDITY,
                    state_class=SensorStateClass.MEASUREMENT,
                    unit=PERCENTAGE,
                ),
            )
        )

    if name := config.name_of("buzzer_switch"):
        accessories.append(
            SinglePropertyAccessory(
                context,
                "buzzer_switch",
                name,
                property_name=PROP_VOLUME,
                primary=PropertyBinding(CHAR_BUZZER, Platform.SWITCH, is_on),
                command=CMD_SET_BUZZER,
            )
        )

    if name := config.name_of("led_bulb"):
        accessories.append(
            SinglePropertyAccessory(
                context,
                "led_bulb",
                name,
                property_name=PROP_LED,
                primary=PropertyBinding(CHAR_LED, Platform.SWITCH, is_on),
                command=CMD_SET_LED,
            )
        )

    if name := config.name_of("air_quality"):
        accessories.append(
            SinglePropertyAccessory(
                context,
                "air_quality",
                name,
                property_name=PROP_AQI,
                primary=PropertyBinding(
                    CHAR_AIR_QUALITY,
                    Platform.SENSOR,
                    classify_air_quality,
                    device_class=SensorDeviceClass.ENUM,
                    options=tuple(AirQuality),
                ),
                companions=[
                    PropertyBinding(
                        CHAR_PM25,
                        Platform.SENSOR,
                        entity_name="PM2.5",
                        device_class=SensorDeviceClass.PM25,
                        state_class=SensorStateClass.MEASUREMENT,
                        unit=CONCENTRATION_MICROGRAMS_PER_CUBIC_METER,
                    )
                ],
            )
        )

    return accessories
