import logging
from datetime import timedelta

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .constants import API_DEFAULTS, CONF_SCAN_INTERVAL
from .infrastructure.errors import DaikinPurifierError
from .models import UnitInfo

_LOGGER = logging.getLogger(__name__)


class DaikinPurifierCoordinator(DataUpdateCoordinator[UnitInfo]):
    """Polls the unit state for display.

    The snapshot held here is never used as the base of a write; every
    command reads the unit again.
    """

    def __init__(self, hass, api, config_entry=None):
        scan_interval = API_DEFAULTS.POLLING_INTERVAL
        if config_entry is not None:
            scan_interval = config_entry.options.get(CONF_SCAN_INTERVAL, scan_interval)
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name="Daikin Purifier Unit Info",
            update_interval=timedelta(seconds=scan_interval),
        )
        self.api = api

    async def _async_update_data(self) -> UnitInfo:
        try:
            return await self.api.async_get_unit_info()
        except DaikinPurifierError as e:
            _LOGGER.warning("Error fetching unit info: %s", e)
            raise UpdateFailed(f"Error fetching unit info: {e}") from e
