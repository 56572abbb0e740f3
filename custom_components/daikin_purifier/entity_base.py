"""Base entity mixin for all Daikin purifier entities.

Provides device info and the command helper shared by the fan and select
entity modules.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.device_registry import DeviceInfo

from .constants import CONF_LOGIN_ID, DOMAIN
from .infrastructure.errors import DaikinPurifierError

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry

    from .coordinator import DaikinPurifierCoordinator
    from .models import ControlInfo, ControlResult

_LOGGER = logging.getLogger(__name__)


class DaikinPurifierBaseEntity:
    """Mixin providing common functionality for all Daikin purifier entities.

    Subclasses must set ``_entry`` before ``device_info`` is accessed.
    Typical usage::

        class MyEntity(DaikinPurifierBaseEntity, CoordinatorEntity, FanEntity):
            ...
    """

    _entry: ConfigEntry
    coordinator: DaikinPurifierCoordinator

    @property
    def device_info(self) -> DeviceInfo:
        """Return device information for the entity registry."""
        unit_id = self._entry.unique_id or self._entry.data.get(CONF_LOGIN_ID, self._entry.entry_id)
        return DeviceInfo(
            identifiers={(DOMAIN, unit_id)},
            name="Daikin Air Purifier",
            manufacturer="Daikin",
            model="Air Purifier",
        )

    @property
    def _ctrl_info(self) -> ControlInfo | None:
        data = self.coordinator.data
        if data is None:
            return None
        return data.ctrl_info

    async def _async_send_command(self, command: Awaitable[ControlResult], name: str) -> None:
        """Await a client command and refresh the coordinator.

        Raises:
            HomeAssistantError: If the command fails.
        """
        try:
            await command
        except DaikinPurifierError as e:
            _LOGGER.error("Error while %s: %s", name, e)
            raise HomeAssistantError(f"Error while {name}: {e}") from e
        await self.coordinator.async_request_refresh()
