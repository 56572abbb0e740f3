import logging

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry, ConfigFlow, OptionsFlow
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .constants import (
    API_DEFAULTS,
    CONF_LOGIN_ID,
    CONF_PASSWORD,
    CONF_SCAN_INTERVAL,
    CONF_TOKEN,
    DOMAIN,
)
from .infrastructure.errors import DaikinProtocolError, DaikinTransportError
from .infrastructure.validation import validate_login_id, validate_password, validate_token
from .purifier_api import DaikinPurifierAPI

_LOGGER = logging.getLogger(__name__)

_AUTH_STATUS_CODES = (401, 403)


class DaikinPurifierConfigFlow(ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(self, user_input=None):
        errors = {}

        if user_input is not None:
            login_id = user_input[CONF_LOGIN_ID].strip()
            password = user_input[CONF_PASSWORD]
            token = user_input[CONF_TOKEN].strip()

            for key, (is_valid, error_message) in (
                (CONF_LOGIN_ID, validate_login_id(login_id)),
                (CONF_PASSWORD, validate_password(password)),
                (CONF_TOKEN, validate_token(token)),
            ):
                if not is_valid:
                    _LOGGER.debug("Invalid %s: %s", key, error_message)
                    errors[key] = f"invalid_{key}"

            if not errors:
                api = DaikinPurifierAPI(login_id, password, token, session=async_get_clientsession(self.hass))
                try:
                    await api.async_get_unit_info()
                except DaikinTransportError as e:
                    if e.status_code in _AUTH_STATUS_CODES:
                        errors["base"] = "invalid_auth"
                    else:
                        _LOGGER.debug("Cannot reach Daikin cloud: %s", e)
                        errors["base"] = "cannot_connect"
                except DaikinProtocolError as e:
                    _LOGGER.debug("Unexpected unit info response: %s", e)
                    errors["base"] = "unexpected_response"
                else:
                    await self.async_set_unique_id(login_id)
                    self._abort_if_unique_id_configured()
                    return self.async_create_entry(
                        title=f"Daikin Purifier ({login_id})",
                        data={
                            CONF_LOGIN_ID: login_id,
                            CONF_PASSWORD: password,
                            CONF_TOKEN: token,
                        },
                    )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_LOGIN_ID): str,
                    vol.Required(CONF_PASSWORD): str,
                    vol.Required(CONF_TOKEN): str,
                }
            ),
            errors=errors,
        )

    @classmethod
    def async_get_options_flow(cls, entry: ConfigEntry):
        return DaikinPurifierOptionsFlow(entry)


class DaikinPurifierOptionsFlow(OptionsFlow):
    def __init__(self, entry):
        self.entry = entry

    async def async_step_init(self, user_input=None):
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(
                {
                    vol.Optional(
                        CONF_SCAN_INTERVAL,
                        default=self.entry.options.get(CONF_SCAN_INTERVAL, API_DEFAULTS.POLLING_INTERVAL),
                    ): vol.All(int, vol.Range(min=API_DEFAULTS.MIN_SCAN_INTERVAL)),
                }
            ),
        )
