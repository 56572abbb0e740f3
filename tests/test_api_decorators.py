"""Tests for API decorators."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from custom_components.daikin_purifier.infrastructure.api import api_command, api_get
from custom_components.daikin_purifier.infrastructure.errors import (
    DaikinAPIError,
    DaikinValidationError,
)
from custom_components.daikin_purifier.models import CommandParameters, ControlResult
from custom_components.daikin_purifier.protocol import DecodeStyle


class MockAPI:
    """Mock API class for testing decorators."""

    def __init__(self):
        self._transport = MagicMock()
        self._transport.get = AsyncMock(return_value="ret=OK")

    def _auth_params(self):
        return {"id": "user", "spw": "secret", "port": 30051}


@pytest.mark.asyncio
async def test_api_get_passes_nested_data():
    """Test api_get decodes the body and hands it to the method."""
    api = MockAPI()
    api._transport.get.return_value = "ret=OK,ctrl_info=pow%3D1%2Cmode%3D2"

    @api_get("/cleaner/get_unit_info")
    async def get_info(self, response_data, suffix=""):
        return response_data, suffix

    data, suffix = await get_info(api, suffix="x")

    api._transport.get.assert_awaited_once_with(
        "/cleaner/get_unit_info", {"id": "user", "spw": "secret", "port": 30051}
    )
    assert data == {"ret": "OK", "ctrl_info": {"pow": "1", "mode": "2"}}
    assert suffix == "x"


@pytest.mark.asyncio
async def test_api_get_flat_style():
    """Test api_get honours the requested decode style."""
    api = MockAPI()
    api._transport.get.return_value = "ctrl_info=pow%3D1%2Cmode%3D2"

    @api_get("/cleaner/get_unit_info", style=DecodeStyle.FLAT)
    async def get_info(self, response_data):
        return response_data

    assert await get_info(api) == {"ctrl_info": "pow%3D1%2Cmode%3D2"}


@pytest.mark.asyncio
async def test_api_command_submits_parameters():
    """Test api_command merges command and authentication parameters."""
    api = MockAPI()

    @api_command("/cleaner/set_control_info")
    async def set_info(self, power, humidity=None):
        command = CommandParameters()
        command.insert("pow", power)
        command.insert_if_present("humd", humidity)
        return command

    result = await set_info(api, 1, humidity=3)

    path, params = api._transport.get.await_args.args
    assert path == "/cleaner/set_control_info"
    assert params == {"pow": 1, "humd": 3, "id": "user", "spw": "secret", "port": 30051}
    assert isinstance(result, ControlResult)
    assert result.succeeded is True


@pytest.mark.asyncio
async def test_api_command_auth_params_win():
    """Test authentication parameters cannot be overridden by a command."""
    api = MockAPI()

    @api_command("/cleaner/set_control_info")
    async def set_info(self):
        command = CommandParameters()
        command.insert("pow", 1)
        command.insert("port", 1)
        return command

    await set_info(api)

    assert api._transport.get.await_args.args[1]["port"] == 30051


@pytest.mark.asyncio
async def test_api_command_empty_command():
    """Test an empty command is rejected before any request."""
    api = MockAPI()

    @api_command("/cleaner/set_control_info")
    async def set_info(self):
        return CommandParameters()

    with pytest.raises(DaikinValidationError):
        await set_info(api)

    api._transport.get.assert_not_called()


@pytest.mark.asyncio
async def test_api_command_rejected():
    api = MockAPI()
    api._transport.get.return_value = "ret=NG"

    @api_command("/cleaner/set_control_info")
    async def set_info(self):
        command = CommandParameters()
        command.insert("pow", 0)
        return command

    with pytest.raises(DaikinAPIError):
        await set_info(api)


@pytest.mark.asyncio
async def test_api_command_redacts_password(caplog):
    """Test the password never reaches the debug log."""
    api = MockAPI()

    @api_command("/cleaner/set_control_info")
    async def set_info(self):
        command = CommandParameters()
        command.insert("pow", 1)
        return command

    with caplog.at_level(logging.DEBUG, logger="custom_components.daikin_purifier.infrastructure.api"):
        await set_info(api)

    assert "**REDACTED**" in caplog.text
    assert "secret" not in caplog.text


def test_decorators_preserve_metadata():
    """Test decorated methods keep their name and docstring."""

    @api_get("/cleaner/get_unit_info")
    async def async_get_unit_info(self, response_data):
        """Read unit info."""

    assert async_get_unit_info.__name__ == "async_get_unit_info"
    assert async_get_unit_info.__doc__ == "Read unit info."
