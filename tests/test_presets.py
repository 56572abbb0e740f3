"""Tests for mode presets."""

import pytest

from custom_components.daikin_purifier.constants import (
    AirVolume,
    ControlField,
    HumidityTarget,
    OperationMode,
    Power,
)
from custom_components.daikin_purifier.infrastructure.errors import DaikinValidationError
from custom_components.daikin_purifier.presets import MODE_PRESETS, PRESET_BY_MODE, ModePreset, get_preset


class TestModePresets:
    """Test the preset table."""

    def test_preset_names(self):
        assert list(MODE_PRESETS) == ["smart", "autofan", "econo", "pollen", "moist", "circulator"]

    @pytest.mark.parametrize(
        "name,mode,humidity",
        [
            ("smart", OperationMode.SMART, HumidityTarget.AUTO),
            ("autofan", OperationMode.AUTOFAN, None),
            ("econo", OperationMode.ECONO, None),
            ("pollen", OperationMode.POLLEN, None),
            ("moist", OperationMode.MOIST, HumidityTarget.AUTO),
            ("circulator", OperationMode.CIRCULATOR, None),
        ],
    )
    def test_preset_overlay(self, name, mode, humidity):
        """Test every preset powers on with automatic fan volume."""
        change = get_preset(name).to_change()

        assert change.power is Power.ON
        assert change.mode is mode
        assert change.air_volume is AirVolume.AUTOFAN
        assert change.humidity == humidity

    def test_preserve_humidity(self):
        assert get_preset("econo").preserve_humidity is True
        assert get_preset("smart").preserve_humidity is False

    def test_requested_fields(self):
        assert get_preset("pollen").to_change().requested_fields() == {
            ControlField.POWER,
            ControlField.MODE,
            ControlField.AIR_VOLUME,
        }

    def test_preset_by_mode(self):
        """Test every operating mode maps back to exactly one preset."""
        assert set(PRESET_BY_MODE) == set(OperationMode)
        assert PRESET_BY_MODE[OperationMode.MOIST] == "moist"

    def test_unknown_preset(self):
        with pytest.raises(DaikinValidationError, match="allowed"):
            get_preset("boost")

    def test_custom_preset(self):
        preset = ModePreset(name="quiet_econo", mode=OperationMode.ECONO, air_volume=AirVolume.QUIET)

        change = preset.to_change()

        assert change.air_volume is AirVolume.QUIET
        assert preset.preserve_humidity is True
