"""Client for Daikin air purifiers connected to the Daikin cloud.

Reads the unit state and writes the control vector. The write endpoint
expects the whole vector, so changing a single dimension is a
read-modify-write: fetch the current state, overlay the requested values and
submit everything together.

Concurrency:
    Each public operation performs at most one read followed by one write,
    sequentially. No lock is held across the read and the write. Two updates
    running concurrently against the same unit, or a change made with the
    physical remote in between, can interleave so that the second write is
    based on a stale read and reverts a field the first write just changed.
    The cloud offers no compare-and-swap, so this lost-update hazard is
    accepted rather than papered over with a lock that could not prevent it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import aiohttp

from .constants import (
    API_DEFAULTS,
    BASE_URL,
    CARRY_OVER_FIELDS,
    ENDPOINT_SET_CONTROL_INFO,
    ENDPOINT_UNIT_INFO,
    PORT_NUM,
    AirVolume,
    ControlField,
    HumidityTarget,
    OperationMode,
    Power,
)
from .infrastructure.api import api_command, api_get
from .models import CommandParameters, ControlChange, ControlResult, UnitInfo
from .presets import ModePreset, get_preset
from .protocol import DecodeStyle, RawKeyValueMap
from .transport import DaikinTransport, Transport

_LOGGER = logging.getLogger(__name__)


class DaikinPurifierAPI:
    """API client for a single purifier unit.

    Args:
        login_id: Login identifier of the cloud account.
        password: Password of the cloud account.
        token: Authorization token, sent as the ``Authorization`` header.
        session: Optional shared aiohttp session.
        base_url: Cloud API base URL.
        read_timeout: Timeout per request in seconds.
        transport: Optional transport; replaces the aiohttp transport.

    Example:
        >>> api = DaikinPurifierAPI("user@example.com", "secret", "token")
        >>> info = await api.async_get_unit_info()
        >>> await api.async_set_air_volume(AirVolume.STANDARD)
    """

    def __init__(
        self,
        login_id: str,
        password: str,
        token: str,
        *,
        session: aiohttp.ClientSession | None = None,
        base_url: str = BASE_URL,
        read_timeout: float = API_DEFAULTS.READ_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        self.login_id = login_id
        self._password = password
        self._transport: Transport = transport or DaikinTransport(
            token, base_url=base_url, session=session, timeout=read_timeout
        )

    def _auth_params(self) -> dict[str, str | int]:
        return {"id": self.login_id, "spw": self._password, "port": PORT_NUM}

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    @api_get(ENDPOINT_UNIT_INFO, style=DecodeStyle.NESTED)
    async def async_get_unit_info(self, response_data: RawKeyValueMap) -> UnitInfo:
        """Fetch a fresh snapshot of the unit.

        Raises:
            DaikinProtocolError: If the control record is missing or incomplete.
            DaikinTransportError: If the request fails.
        """
        return UnitInfo.from_raw(response_data)

    @api_command(ENDPOINT_SET_CONTROL_INFO)
    async def async_set_control_info(
        self,
        power: Power,
        mode: OperationMode | None = None,
        air_volume: AirVolume | None = None,
        humidity: HumidityTarget | None = None,
        ac_ope_mode: int | None = None,
    ) -> CommandParameters:
        """Submit a control command as given, without reading the unit first.

        Only the fields passed are sent; the unit keeps its value for the
        others.

        Raises:
            DaikinValidationError: If a value is outside its domain.
        """
        change = ControlChange.build(
            power=power,
            mode=mode,
            air_volume=air_volume,
            humidity=humidity,
            ac_ope_mode=ac_ope_mode,
        )
        return change.to_command()

    # -------------------------------------------------------------------------
    # Read-modify-write
    # -------------------------------------------------------------------------

    async def async_update_control(
        self,
        changes: ControlChange | None = None,
        *,
        preserve: Iterable[ControlField] | None = None,
        **fields: Any,
    ) -> ControlResult:
        """Change part of the control vector, keeping the rest as it is.

        Fields listed in ``preserve`` that are not requested are copied from
        a freshly fetched snapshot. Power is always copied when not requested
        because the command cannot be sent without it. When nothing has to be
        copied, no snapshot is fetched.

        Args:
            changes: Requested changes; built from ``fields`` when omitted.
            preserve: Fields to carry over. Defaults to power, mode, fan volume
                and humidity. Pass an empty tuple to let the unit keep its
                values for unsent fields.
            **fields: Requested values by field name, e.g. ``air_volume=AirVolume.LOW``.

        Returns:
            The acknowledged control values.

        Raises:
            DaikinValidationError: Before any request, if a value is invalid.
            DaikinProtocolError: If the snapshot or acknowledgement is incomplete.
            DaikinTransportError: If a request fails.
        """
        if changes is None:
            changes = ControlChange.build(**fields)
        elif fields:
            raise TypeError("Pass either a ControlChange or field values, not both")

        requested = changes.requested_fields()
        keep = CARRY_OVER_FIELDS if preserve is None else tuple(preserve)
        carry = [field for field in keep if field not in requested]
        if ControlField.POWER not in requested and ControlField.POWER not in carry:
            carry.insert(0, ControlField.POWER)

        if carry:
            _LOGGER.debug(
                "Reading unit state to carry over %s (not atomic against concurrent writers)",
                ", ".join(carry),
            )
            snapshot = await self.async_get_unit_info()
            changes = changes.carry_over(snapshot.ctrl_info, carry)

        return await self.async_set_control_info(
            changes.power,
            changes.mode,
            changes.air_volume,
            changes.humidity,
            changes.ac_ope_mode,
        )

    # -------------------------------------------------------------------------
    # High level operations
    # -------------------------------------------------------------------------

    async def async_power_on(self) -> ControlResult:
        return await self.async_set_power(Power.ON)

    async def async_power_off(self) -> ControlResult:
        return await self.async_set_power(Power.OFF)

    async def async_set_power(self, power: Power) -> ControlResult:
        """Switch power only; the unit keeps its other settings."""
        return await self.async_update_control(ControlChange.build(power=power), preserve=())

    async def async_set_air_volume(self, air_volume: AirVolume, power: Power | None = None) -> ControlResult:
        """Set the fan volume.

        The unit honours a manual fan volume only in AUTOFAN mode, so the mode
        is switched to AUTOFAN. The humidity target is kept, and so is power
        unless ``power`` is given.
        """
        change = ControlChange.build(power=power, mode=OperationMode.AUTOFAN, air_volume=air_volume)
        return await self.async_update_control(change, preserve=(ControlField.POWER, ControlField.HUMIDITY))

    async def async_set_humidity(self, humidity: HumidityTarget) -> ControlResult:
        """Set the humidity target, keeping power, mode and fan volume."""
        change = ControlChange.build(humidity=humidity)
        return await self.async_update_control(
            change,
            preserve=(ControlField.POWER, ControlField.MODE, ControlField.AIR_VOLUME),
        )

    async def async_set_mode_preset(self, preset: str | ModePreset) -> ControlResult:
        """Apply a named preset (smart, autofan, econo, pollen, moist, circulator).

        Raises:
            DaikinValidationError: If the preset name is unknown.
        """
        if isinstance(preset, str):
            preset = get_preset(preset)
        preserve = (ControlField.HUMIDITY,) if preset.preserve_humidity else ()
        return await self.async_update_control(preset.to_change(), preserve=preserve)

    async def async_set_smart_mode(self) -> ControlResult:
        return await self.async_set_mode_preset("smart")

    async def async_set_autofan_mode(self) -> ControlResult:
        return await self.async_set_mode_preset("autofan")

    async def async_set_econo_mode(self) -> ControlResult:
        return await self.async_set_mode_preset("econo")

    async def async_set_pollen_mode(self) -> ControlResult:
        return await self.async_set_mode_preset("pollen")

    async def async_set_moist_mode(self) -> ControlResult:
        return await self.async_set_mode_preset("moist")

    async def async_set_circulator_mode(self) -> ControlResult:
        return await self.async_set_mode_preset("circulator")
