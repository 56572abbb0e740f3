"""API infrastructure for Daikin purifier integration.

Decorators for unified endpoint patterns. They handle the parts every
endpoint shares: attaching the authentication parameters, calling the
transport, decoding the response in the right style and logging.

Usage:
    @api_get("/cleaner/get_unit_info", style=DecodeStyle.NESTED)
    async def async_get_unit_info(self, response_data):
        return UnitInfo.from_raw(response_data)

    @api_command("/cleaner/set_control_info")
    async def async_set_control_info(self, power, mode=None):
        return ControlChange.build(power=power, mode=mode).to_command()

The decorated methods live on a class that provides ``_transport`` and
``_auth_params()``. Nothing here retries or caches: each call is exactly one
request and every error propagates to the caller.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any

from ..models import CommandParameters, ControlResult
from ..protocol import DecodeStyle, decode_response
from .errors import DaikinValidationError

_LOGGER = logging.getLogger(__name__)

_REDACTED_PARAMS = frozenset({"spw"})


def _redact(params: dict[str, Any]) -> dict[str, Any]:
    return {key: "**REDACTED**" if key in _REDACTED_PARAMS else value for key, value in params.items()}


def api_get(path: str, *, style: DecodeStyle = DecodeStyle.NESTED):
    """Decorator for read endpoints.

    The decorated function receives the decoded response as its first
    argument after ``self`` and returns the typed result.

    Args:
        path: Endpoint path relative to the API base URL.
        style: How the response body is decoded.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            params = self._auth_params()
            body = await self._transport.get(path, params)
            _LOGGER.debug("API GET %s returned body: %s", path, body)

            data = decode_response(body, style)
            return await func(self, data, *args, **kwargs)

        return wrapper

    return decorator


def api_command(path: str, *, style: DecodeStyle = DecodeStyle.FLAT):
    """Decorator for command endpoints.

    The decorated function builds and returns the CommandParameters to
    submit. The wrapper sends them, decodes the acknowledgement and returns
    a ControlResult.

    Args:
        path: Endpoint path relative to the API base URL.
        style: How the acknowledgement is decoded.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> ControlResult:
            command: CommandParameters = await func(self, *args, **kwargs)

            if not command:
                raise DaikinValidationError("Control command has no fields to submit")

            # Command parameters first; authentication parameters win on collisions
            params = {**command.as_dict(), **self._auth_params()}
            _LOGGER.debug("API command %s with params=%s", path, _redact(params))

            body = await self._transport.get(path, params)
            _LOGGER.debug("API command %s acknowledged: %s", path, body)

            ack = decode_response(body, style)
            return ControlResult.from_ack(ack, command)

        return wrapper

    return decorator
