"""Named operating presets.

Each preset powers the unit on and pins mode and fan volume. Presets that
do not pin a humidity target keep whatever target the unit currently has,
which needs a read of the current state before the write.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .constants import AirVolume, HumidityTarget, OperationMode, Power
from .infrastructure.errors import DaikinValidationError
from .models import ControlChange


class ModePreset(BaseModel):
    """Overlay applied by a named preset."""

    model_config = {"frozen": True}

    name: str = Field(..., min_length=1)
    mode: OperationMode
    air_volume: AirVolume = AirVolume.AUTOFAN
    humidity: HumidityTarget | None = Field(default=None, description="None keeps the current target")

    @property
    def preserve_humidity(self) -> bool:
        return self.humidity is None

    def to_change(self) -> ControlChange:
        return ControlChange.build(
            power=Power.ON,
            mode=self.mode,
            air_volume=self.air_volume,
            humidity=self.humidity,
        )


MODE_PRESETS: dict[str, ModePreset] = {
    preset.name: preset
    for preset in (
        ModePreset(name="smart", mode=OperationMode.SMART, humidity=HumidityTarget.AUTO),
        ModePreset(name="autofan", mode=OperationMode.AUTOFAN),
        ModePreset(name="econo", mode=OperationMode.ECONO),
        ModePreset(name="pollen", mode=OperationMode.POLLEN),
        ModePreset(name="moist", mode=OperationMode.MOIST, humidity=HumidityTarget.AUTO),
        ModePreset(name="circulator", mode=OperationMode.CIRCULATOR),
    )
}

# Reverse lookup used to report the active preset
PRESET_BY_MODE: dict[OperationMode, str] = {preset.mode: name for name, preset in MODE_PRESETS.items()}


def get_preset(name: str) -> ModePreset:
    """Look up a preset by name.

    Raises:
        DaikinValidationError: If the name is unknown.
    """
    try:
        return MODE_PRESETS[name]
    except KeyError:
        raise DaikinValidationError(
            f"Unknown mode preset {name!r} (allowed: {', '.join(MODE_PRESETS)})"
        ) from None
