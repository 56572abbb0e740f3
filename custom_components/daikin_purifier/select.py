import logging

from homeassistant.components.select import SelectEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .constants import DOMAIN, HUMIDITY_OPTIONS, HUMIDITY_OPTIONS_REVERSE
from .coordinator import DaikinPurifierCoordinator
from .entity_base import DaikinPurifierBaseEntity

_LOGGER = logging.getLogger(__name__)


class DaikinPurifierHumiditySelect(
    DaikinPurifierBaseEntity, CoordinatorEntity[DaikinPurifierCoordinator], SelectEntity
):
    """Humidification target of the purifier."""

    def __init__(self, coordinator, api, entry):
        super().__init__(coordinator)
        self._api = api
        self._entry = entry

        self._attr_has_entity_name = True
        self._attr_translation_key = "humidity_target"
        self._attr_unique_id = f"{entry.entry_id}_humidity_target"
        self._attr_options = list(HUMIDITY_OPTIONS.values())

    @property
    def current_option(self) -> str | None:
        ctrl = self._ctrl_info
        if ctrl is None:
            return None
        return HUMIDITY_OPTIONS.get(ctrl.humidity)

    async def async_select_option(self, option: str) -> None:
        humidity = HUMIDITY_OPTIONS_REVERSE.get(option)
        if humidity is None:
            raise ServiceValidationError(f"Unknown humidity target: {option}")
        await self._async_send_command(self._api.async_set_humidity(humidity), f"setting humidity target to {option}")


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
):
    data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([DaikinPurifierHumiditySelect(data["coordinator"], data["api"], entry)])
