"""Data models for Daikin purifier integration.

This module provides Pydantic models that turn decoded wire maps into typed
state, plus the CommandParameters builder used for control writes.

Wire values arrive as strings (``"pow": "1"``); the models coerce numeric
strings to the enumerated types. Values requested by callers are not coerced:
they must already be members of the closed domains in constants.py.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from .constants import (
    CARRY_OVER_FIELDS,
    CTRL_INFO_KEY,
    RET_KEY,
    RET_OK,
    AirVolume,
    ControlField,
    HumidityTarget,
    OperationMode,
    Power,
)
from .infrastructure.errors import DaikinAPIError, DaikinProtocolError, DaikinValidationError
from .infrastructure.validation import validate_enum_value

# Model attribute holding each control field
FIELD_ATTRIBUTES: dict[ControlField, str] = {
    ControlField.POWER: "power",
    ControlField.MODE: "mode",
    ControlField.AIR_VOLUME: "air_volume",
    ControlField.HUMIDITY: "humidity",
    ControlField.AC_OPE_MODE: "ac_ope_mode",
}

_FIELD_ENUMS: dict[str, type] = {
    "power": Power,
    "mode": OperationMode,
    "air_volume": AirVolume,
    "humidity": HumidityTarget,
}


# Base model for all Daikin purifier data models
class DaikinModel(BaseModel):
    """Base model for all Daikin purifier data structures."""

    model_config = {"validate_assignment": True, "populate_by_name": True}


def wire_to_int(value: Any) -> Any:
    """Coerce a numeric wire string to int, leave anything else untouched.

    Example:
        >>> wire_to_int("3")
        3
        >>> wire_to_int("OK")
        'OK'
    """
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lstrip("-").isdigit():
            return int(stripped)
    return value


def _present_values(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in raw.items() if value not in ("", None)}


class CommandParameters:
    """Ordered parameter set for a control write.

    Only inserted keys are submitted. A key that is absent leaves the device
    value unchanged; it is never written as zero.

    Example:
        >>> command = CommandParameters()
        >>> command.insert(ControlField.POWER, Power.ON)
        >>> command.insert_if_present(ControlField.HUMIDITY, None)
        False
        >>> command.as_dict()
        {'pow': 1}
    """

    def __init__(self) -> None:
        self._params: dict[str, int] = {}

    def insert(self, key: str, value: int) -> None:
        """Insert or replace a parameter."""
        self._params[str(key)] = int(value)

    def insert_if_present(self, key: str, value: int | None) -> bool:
        """Insert a parameter only when a value is given.

        Returns:
            True if the parameter was inserted.
        """
        if value is None:
            return False
        self.insert(key, value)
        return True

    def get(self, key: str, default: int | None = None) -> int | None:
        return self._params.get(str(key), default)

    def as_dict(self) -> dict[str, int]:
        return dict(self._params)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommandParameters):
            return self._params == other._params
        if isinstance(other, Mapping):
            return self._params == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"CommandParameters({self._params!r})"


class ControlInfo(DaikinModel):
    """Control vector reported by the unit.

    Attributes:
        power: Power state (``pow``).
        mode: Operating mode (``mode``).
        air_volume: Fan volume (``airvol``).
        humidity: Humidification target (``humd``).
        ac_ope_mode: Optional operation sub-mode (``acOpeMode``).

    Example:
        >>> info = ControlInfo.from_raw({"pow": "1", "mode": "5", "airvol": "0", "humd": "2"})
        >>> info.mode
        <OperationMode.CIRCULATOR: 5>
    """

    model_config = {"frozen": True}

    power: Power = Field(..., alias="pow", description="Power state")
    mode: OperationMode = Field(..., alias="mode", description="Operating mode")
    air_volume: AirVolume = Field(..., alias="airvol", description="Fan volume")
    humidity: HumidityTarget = Field(..., alias="humd", description="Humidification target")
    ac_ope_mode: int | None = Field(default=None, alias="acOpeMode", description="Operation sub-mode")

    @field_validator("power", "mode", "air_volume", "humidity", "ac_ope_mode", mode="before")
    @classmethod
    def _coerce_wire_value(cls, value: Any) -> Any:
        return wire_to_int(value)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> ControlInfo:
        """Build a ControlInfo from a decoded ``ctrl_info`` record.

        Raises:
            DaikinProtocolError: If a required field is missing or outside its domain.
        """
        present = _present_values(raw)
        missing = [field.value for field in CARRY_OVER_FIELDS if field.value not in present]
        if missing:
            raise DaikinProtocolError(f"Control info is missing required fields: {', '.join(missing)}")

        try:
            return cls.model_validate(present)
        except ValidationError as err:
            raise DaikinProtocolError(f"Control info contains unexpected values: {err}") from err


class UnitInfo(DaikinModel):
    """Snapshot of the unit as reported by ``get_unit_info``.

    The control vector is typed; every other field the cloud reports
    (sensor readings, status flags) is kept as decoded in ``attributes``.
    """

    model_config = {"frozen": True}

    ctrl_info: ControlInfo
    attributes: dict[str, str | dict[str, str]] = Field(
        default_factory=dict, description="Other decoded fields, read-only"
    )

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> UnitInfo:
        """Build a UnitInfo from a response decoded in NESTED style.

        Raises:
            DaikinAPIError: If the response carries a ``ret`` other than OK.
            DaikinProtocolError: If the control record is absent or incomplete.
        """
        ret = raw.get(RET_KEY)
        if isinstance(ret, str) and ret and ret != RET_OK:
            raise DaikinAPIError(f"Unit info request rejected: ret={ret}", ret=ret)

        ctrl = raw.get(CTRL_INFO_KEY)
        if ctrl is None:
            raise DaikinProtocolError(f"Unit info response has no {CTRL_INFO_KEY} record")
        if not isinstance(ctrl, Mapping):
            raise DaikinProtocolError(f"{CTRL_INFO_KEY} is not a nested record: {ctrl!r}")

        attributes = {key: value for key, value in raw.items() if key != CTRL_INFO_KEY}
        return cls(ctrl_info=ControlInfo.from_raw(ctrl), attributes=attributes)

    @property
    def is_on(self) -> bool:
        return self.ctrl_info.power == Power.ON

    def get(self, key: str, default: Any = None) -> Any:
        """Return a raw attribute reported by the unit."""
        return self.attributes.get(key, default)


class ControlChange(DaikinModel):
    """Changes requested by a caller; unset fields are not requested.

    Values must be members of the enumerated domains. Use ``build`` to get a
    DaikinValidationError instead of a pydantic ValidationError.

    Example:
        >>> ControlChange.build(air_volume=AirVolume.STANDARD).requested_fields()
        {<ControlField.AIR_VOLUME: 'airvol'>}
        >>> ControlChange.build(air_volume=4)
        Traceback (most recent call last):
        ...
        DaikinValidationError: ...
    """

    model_config = {"frozen": True, "extra": "forbid"}

    power: Power | None = Field(default=None, alias="pow")
    mode: OperationMode | None = Field(default=None, alias="mode")
    air_volume: AirVolume | None = Field(default=None, alias="airvol")
    humidity: HumidityTarget | None = Field(default=None, alias="humd")
    ac_ope_mode: int | None = Field(default=None, ge=0, alias="acOpeMode")

    @field_validator("power", "mode", "air_volume", "humidity", mode="before")
    @classmethod
    def _check_domain(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return value
        is_valid, error_message = validate_enum_value(_FIELD_ENUMS[info.field_name], value)
        if not is_valid:
            raise ValueError(error_message)
        return value

    @classmethod
    def build(cls, **fields: Any) -> ControlChange:
        """Validate requested fields.

        Raises:
            DaikinValidationError: If a value is outside its domain or a field is unknown.
        """
        try:
            return cls(**fields)
        except ValidationError as err:
            raise DaikinValidationError(str(err)) from err

    def requested_fields(self) -> set[ControlField]:
        return {field for field, name in FIELD_ATTRIBUTES.items() if getattr(self, name) is not None}

    def carry_over(self, current: ControlInfo, fields: Iterable[ControlField]) -> ControlChange:
        """Fill unrequested fields from the current control vector.

        Requested values always win over the current ones.
        """
        updates = {}
        for field in fields:
            name = FIELD_ATTRIBUTES[field]
            if getattr(self, name) is None:
                updates[name] = getattr(current, name)
        return self.model_copy(update=updates)

    def to_command(self) -> CommandParameters:
        """Build the parameters for a control write.

        Raises:
            DaikinValidationError: If power is not set.
        """
        if self.power is None:
            raise DaikinValidationError("Power must be set on every control command")

        command = CommandParameters()
        command.insert(ControlField.POWER, self.power)
        command.insert_if_present(ControlField.MODE, self.mode)
        command.insert_if_present(ControlField.AIR_VOLUME, self.air_volume)
        command.insert_if_present(ControlField.HUMIDITY, self.humidity)
        command.insert_if_present(ControlField.AC_OPE_MODE, self.ac_ope_mode)
        return command


class ControlResult(DaikinModel):
    """Acknowledged control write.

    Holds the values that were submitted, replaced by any value the cloud
    echoed back in its acknowledgement. Fields that were not submitted are None.
    """

    model_config = {"frozen": True}

    ret: str = Field(..., min_length=1, description="Status returned by the cloud")
    power: Power = Field(..., alias="pow")
    mode: OperationMode | None = Field(default=None, alias="mode")
    air_volume: AirVolume | None = Field(default=None, alias="airvol")
    humidity: HumidityTarget | None = Field(default=None, alias="humd")
    ac_ope_mode: int | None = Field(default=None, alias="acOpeMode")

    @field_validator("power", "mode", "air_volume", "humidity", "ac_ope_mode", mode="before")
    @classmethod
    def _coerce_wire_value(cls, value: Any) -> Any:
        return wire_to_int(value)

    @property
    def succeeded(self) -> bool:
        return self.ret == RET_OK

    @classmethod
    def from_ack(cls, ack: Mapping[str, Any], command: CommandParameters) -> ControlResult:
        """Build a result from an acknowledgement decoded in FLAT style.

        Raises:
            DaikinAPIError: If ``ret`` is not OK.
            DaikinProtocolError: If ``ret`` is missing or an echoed value is outside its domain.
        """
        ret = ack.get(RET_KEY)
        if not isinstance(ret, str) or not ret:
            raise DaikinProtocolError(f"Acknowledgement has no {RET_KEY} field: {dict(ack)!r}")
        if ret != RET_OK:
            raise DaikinAPIError(f"Command rejected by cloud: ret={ret}", ret=ret)

        values: dict[str, Any] = command.as_dict()
        echoed = _present_values(ack)
        for field in ControlField:
            if field.value in echoed:
                values[field.value] = echoed[field.value]

        try:
            return cls.model_validate({RET_KEY: ret, **values})
        except ValidationError as err:
            raise DaikinProtocolError(f"Acknowledgement contains unexpected values: {err}") from err
