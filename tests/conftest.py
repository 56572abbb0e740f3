"""Common fixtures for Daikin purifier tests."""
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import quote

import pytest
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from custom_components.daikin_purifier.models import UnitInfo
from custom_components.daikin_purifier.protocol import DecodeStyle, decode_response
from custom_components.daikin_purifier.purifier_api import DaikinPurifierAPI


def build_unit_info_body(pow=1, mode=5, airvol=0, humd=2, **extra):
    """Build a get_unit_info response body with an encoded ctrl_info record."""
    ctrl = f"pow={pow},mode={mode},airvol={airvol},humd={humd}"
    pairs = ["ret=OK", f"ctrl_info={quote(ctrl, safe='')}"]
    pairs.extend(f"{key}={value}" for key, value in extra.items())
    return ",".join(pairs)


@pytest.fixture
def unit_info_body():
    """Factory for get_unit_info response bodies."""
    return build_unit_info_body


@pytest.fixture
def mock_hass():
    """Create a mock Home Assistant instance."""
    hass = MagicMock(spec=HomeAssistant)
    hass.data = {}
    hass.loop = None
    hass.async_create_task = MagicMock()
    hass.add_job = MagicMock()
    return hass


@pytest.fixture
def mock_config_entry():
    """Create a mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_id"
    entry.unique_id = "user@example.com"
    entry.data = {
        "login_id": "user@example.com",
        "password": "secret",
        "token": "test-token",
    }
    entry.options = {}
    return entry


@pytest.fixture
def mock_transport(unit_info_body):
    """Create a transport that answers every GET with a default unit snapshot.

    Tests override ``get.side_effect`` to script responses; the recorded
    ``get.call_args_list`` holds (path, params) per request.
    """
    transport = MagicMock()
    transport.get = AsyncMock(return_value=unit_info_body())
    transport.close = AsyncMock()
    return transport


@pytest.fixture
def api(mock_transport):
    """Create a DaikinPurifierAPI wired to the mock transport."""
    return DaikinPurifierAPI("user@example.com", "secret", "test-token", transport=mock_transport)


@pytest.fixture
def unit_info(unit_info_body):
    """Unit snapshot: on, circulator mode, automatic fan volume, standard humidity."""
    return UnitInfo.from_raw(decode_response(unit_info_body(), DecodeStyle.NESTED))


@pytest.fixture
def mock_api():
    """Create a mock DaikinPurifierAPI instance."""
    api = MagicMock()
    api.login_id = "user@example.com"
    api.async_get_unit_info = AsyncMock()
    api.async_set_control_info = AsyncMock()
    api.async_update_control = AsyncMock()
    api.async_power_on = AsyncMock()
    api.async_power_off = AsyncMock()
    api.async_set_air_volume = AsyncMock()
    api.async_set_humidity = AsyncMock()
    api.async_set_mode_preset = AsyncMock()
    api.close = AsyncMock()
    return api


@pytest.fixture
def mock_coordinator(unit_info):
    """Create a mock coordinator holding the default snapshot."""
    coordinator = MagicMock()
    coordinator.data = unit_info
    coordinator.async_request_refresh = AsyncMock()
    coordinator.async_add_listener = MagicMock(return_value=lambda: None)
    coordinator.last_update_success = True
    return coordinator
