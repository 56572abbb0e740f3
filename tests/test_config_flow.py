"""Tests for Daikin purifier config_flow."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import voluptuous as vol
from homeassistant import config_entries
from homeassistant.data_entry_flow import FlowResultType

from custom_components.daikin_purifier.config_flow import (
    DaikinPurifierConfigFlow,
    DaikinPurifierOptionsFlow,
)
from custom_components.daikin_purifier.constants import DOMAIN
from custom_components.daikin_purifier.infrastructure.errors import (
    DaikinConnectionError,
    DaikinProtocolError,
    DaikinTransportError,
)

USER_INPUT = {
    "login_id": " user@example.com ",
    "password": "secret",
    "token": "test-token",
}


def make_flow():
    flow = DaikinPurifierConfigFlow()
    flow.hass = MagicMock()
    flow.context = {"source": config_entries.SOURCE_USER}
    flow.handler = DOMAIN
    flow.flow_id = "test_flow"
    flow.async_set_unique_id = AsyncMock()
    flow._abort_if_unique_id_configured = MagicMock()
    return flow


async def run_user_step(flow, user_input, side_effect=None):
    """Run the user step with a patched API client."""
    with (
        patch("custom_components.daikin_purifier.config_flow.async_get_clientsession"),
        patch("custom_components.daikin_purifier.config_flow.DaikinPurifierAPI") as mock_api_class,
    ):
        mock_api_class.return_value.async_get_unit_info = AsyncMock(side_effect=side_effect)
        result = await flow.async_step_user(user_input=user_input)
    return result, mock_api_class


@pytest.mark.asyncio
async def test_user_flow_shows_form():
    """Test the first step shows the credentials form."""
    flow = make_flow()

    result = await flow.async_step_user()

    assert result["type"] == FlowResultType.FORM
    assert result["step_id"] == "user"
    assert result["errors"] == {}


@pytest.mark.asyncio
async def test_user_flow_success():
    """Test successful user configuration flow."""
    flow = make_flow()

    result, mock_api_class = await run_user_step(flow, dict(USER_INPUT))

    assert result["type"] == FlowResultType.CREATE_ENTRY
    assert result["title"] == "Daikin Purifier (user@example.com)"
    assert result["data"] == {
        "login_id": "user@example.com",
        "password": "secret",
        "token": "test-token",
    }
    assert mock_api_class.call_args[0] == ("user@example.com", "secret", "test-token")
    flow.async_set_unique_id.assert_awaited_once_with("user@example.com")
    flow._abort_if_unique_id_configured.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error,expected",
    [
        (DaikinTransportError("Response code is out of 2xx: 401", status_code=401), "invalid_auth"),
        (DaikinTransportError("Response code is out of 2xx: 403", status_code=403), "invalid_auth"),
        (DaikinTransportError("Response code is out of 2xx: 500", status_code=500), "cannot_connect"),
        (DaikinConnectionError("Request failed"), "cannot_connect"),
        (DaikinProtocolError("Unit info response has no ctrl_info record"), "unexpected_response"),
    ],
)
async def test_user_flow_errors(error, expected):
    """Test failures while reading the unit are shown on the form."""
    flow = make_flow()

    result, _ = await run_user_step(flow, dict(USER_INPUT), side_effect=error)

    assert result["type"] == FlowResultType.FORM
    assert result["errors"] == {"base": expected}
    flow.async_set_unique_id.assert_not_called()


@pytest.mark.asyncio
async def test_user_flow_invalid_input():
    """Test invalid credentials are rejected without contacting the cloud."""
    flow = make_flow()

    result, mock_api_class = await run_user_step(
        flow, {"login_id": "user name", "password": "", "token": "bad\ntoken"}
    )

    assert result["type"] == FlowResultType.FORM
    assert result["errors"] == {
        "login_id": "invalid_login_id",
        "password": "invalid_password",
        "token": "invalid_token",
    }
    mock_api_class.assert_not_called()


@pytest.mark.asyncio
async def test_options_flow_shows_form():
    entry = MagicMock()
    entry.options = {"scan_interval": 120}
    flow = DaikinPurifierOptionsFlow(entry)
    flow.hass = MagicMock()
    flow.handler = "test_entry_id"
    flow.flow_id = "test_options_flow"

    result = await flow.async_step_init()

    assert result["type"] == FlowResultType.FORM
    assert result["step_id"] == "init"


@pytest.mark.asyncio
async def test_options_flow_saves_interval():
    entry = MagicMock()
    entry.options = {}
    flow = DaikinPurifierOptionsFlow(entry)
    flow.hass = MagicMock()
    flow.handler = "test_entry_id"
    flow.flow_id = "test_options_flow"

    result = await flow.async_step_init(user_input={"scan_interval": 30})

    assert result["type"] == FlowResultType.CREATE_ENTRY
    assert result["data"] == {"scan_interval": 30}


@pytest.mark.asyncio
async def test_options_flow_rejects_short_interval():
    """Test the polling interval has a lower bound."""
    entry = MagicMock()
    entry.options = {}
    flow = DaikinPurifierOptionsFlow(entry)
    flow.hass = MagicMock()
    flow.handler = "test_entry_id"
    flow.flow_id = "test_options_flow"

    result = await flow.async_step_init()
    schema = result["data_schema"]

    with pytest.raises(vol.Invalid):
        schema({"scan_interval": 5})
    assert schema({"scan_interval": 15}) == {"scan_interval": 15}
