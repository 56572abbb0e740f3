import logging
from typing import Any

from homeassistant.components.fan import FanEntity, FanEntityFeature
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .constants import DOMAIN, AirVolume, Power
from .coordinator import DaikinPurifierCoordinator
from .entity_base import DaikinPurifierBaseEntity
from .presets import MODE_PRESETS, PRESET_BY_MODE

_LOGGER = logging.getLogger(__name__)


class DaikinPurifierFan(DaikinPurifierBaseEntity, CoordinatorEntity[DaikinPurifierCoordinator], FanEntity):
    """Power, operating preset and fan volume of the purifier."""

    def __init__(self, coordinator, api, entry):
        super().__init__(coordinator)
        self._api = api
        self._entry = entry

        self._attr_has_entity_name = True
        self._attr_translation_key = "purifier"
        self._attr_unique_id = f"{entry.entry_id}_fan"

        # Fan volume maps onto four discrete percentage steps
        self._attr_supported_features = (
            FanEntityFeature.SET_SPEED
            | FanEntityFeature.PRESET_MODE
            | FanEntityFeature.TURN_ON
            | FanEntityFeature.TURN_OFF
        )
        self._attr_speed_count = len(AirVolume.manual_levels())
        self._attr_preset_modes = list(MODE_PRESETS)

    @property
    def is_on(self) -> bool | None:
        ctrl = self._ctrl_info
        if ctrl is None:
            return None
        return ctrl.power == Power.ON

    @property
    def percentage(self) -> int | None:
        ctrl = self._ctrl_info
        if ctrl is None:
            return None
        if ctrl.power == Power.OFF:
            return 0
        return ctrl.air_volume.to_percentage()  # None while the unit picks the volume

    @property
    def preset_mode(self) -> str | None:
        ctrl = self._ctrl_info
        if ctrl is None or ctrl.power == Power.OFF:
            return None
        return PRESET_BY_MODE.get(ctrl.mode)

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,
        **kwargs: Any,
    ) -> None:
        if preset_mode is not None:
            await self.async_set_preset_mode(preset_mode)
        elif percentage is not None:
            await self.async_set_percentage(percentage)
        else:
            await self._async_send_command(self._api.async_power_on(), "turning on")

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self._async_send_command(self._api.async_power_off(), "turning off")

    async def async_set_percentage(self, percentage: int) -> None:
        if percentage == 0:
            await self.async_turn_off()
            return
        air_volume = AirVolume.from_percentage(percentage)
        # A non-zero speed also switches the unit on
        await self._async_send_command(
            self._api.async_set_air_volume(air_volume, power=Power.ON),
            f"setting fan volume to {air_volume.name.lower()}",
        )

    async def async_set_preset_mode(self, preset_mode: str) -> None:
        await self._async_send_command(
            self._api.async_set_mode_preset(preset_mode), f"setting preset {preset_mode}"
        )


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
):
    data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([DaikinPurifierFan(data["coordinator"], data["api"], entry)])
