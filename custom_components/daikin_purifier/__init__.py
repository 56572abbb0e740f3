import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .constants import CONF_LOGIN_ID, CONF_PASSWORD, CONF_TOKEN, DOMAIN, PLATFORMS
from .coordinator import DaikinPurifierCoordinator
from .purifier_api import DaikinPurifierAPI

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: HomeAssistant, config: dict):
    return True  # configured through config entries only


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry):
    api = DaikinPurifierAPI(
        entry.data[CONF_LOGIN_ID],
        entry.data[CONF_PASSWORD],
        entry.data[CONF_TOKEN],
        session=async_get_clientsession(hass),
    )
    coordinator = DaikinPurifierCoordinator(hass, api, entry)
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "api": api,
        "coordinator": coordinator,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))
    _LOGGER.debug("Set up Daikin purifier for %s", entry.data[CONF_LOGIN_ID])
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry):
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)
    return unload_ok


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry):
    await hass.config_entries.async_reload(entry.entry_id)
