"""Constants and Enums for Daikin purifier integration."""

from __future__ import annotations

from enum import IntEnum, StrEnum

from pydantic import BaseModel, Field

# Integration Domain
DOMAIN = "daikin_purifier"

# Supported Platforms
PLATFORMS = ["fan", "select"]

# Config entry keys
CONF_LOGIN_ID = "login_id"
CONF_PASSWORD = "password"
CONF_TOKEN = "token"
CONF_SCAN_INTERVAL = "scan_interval"

# Cloud endpoint
BASE_URL = "https://api.daikinsmartdb.jp"
PORT_NUM = 30051

ENDPOINT_UNIT_INFO = "/cleaner/get_unit_info"
ENDPOINT_SET_CONTROL_INFO = "/cleaner/set_control_info"

# Response keys
CTRL_INFO_KEY = "ctrl_info"
RET_KEY = "ret"

# Acknowledgement status returned by command endpoints
RET_OK = "OK"


class ControlField(StrEnum):
    """Wire keys of the control vector."""

    POWER = "pow"
    MODE = "mode"
    AIR_VOLUME = "airvol"
    HUMIDITY = "humd"
    AC_OPE_MODE = "acOpeMode"


# Fields required in a decoded snapshot and carried over by read-modify-write
CARRY_OVER_FIELDS: tuple[ControlField, ...] = (
    ControlField.POWER,
    ControlField.MODE,
    ControlField.AIR_VOLUME,
    ControlField.HUMIDITY,
)


class Power(IntEnum):
    """Power state of the unit."""

    OFF = 0
    ON = 1


class OperationMode(IntEnum):
    """Operating modes supported by the purifier.

    - AUTOFAN: Plain purifying, fan volume chosen by the user or automatic
    - SMART: Purifying and humidifying controlled by the unit
    - ECONO: Energy-saving operation
    - POLLEN: Pollen mode (alternating fan volume)
    - MOIST: Humidifying priority
    - CIRCULATOR: Air circulation
    """

    AUTOFAN = 0
    SMART = 1
    ECONO = 2
    POLLEN = 3
    MOIST = 4
    CIRCULATOR = 5


class AirVolume(IntEnum):
    """Fan volume levels.

    The wire protocol skips the value 4; TURBO is 5.
    """

    AUTOFAN = 0
    QUIET = 1
    LOW = 2
    STANDARD = 3
    TURBO = 5

    @classmethod
    def manual_levels(cls) -> list[AirVolume]:
        """Return the manually selectable levels, slowest first."""
        return [cls.QUIET, cls.LOW, cls.STANDARD, cls.TURBO]

    def to_percentage(self) -> int | None:
        """Convert fan volume to percentage (25, 50, 75, 100).

        Returns:
            Percentage for manual levels, None for AUTOFAN.
        """
        if self == AirVolume.AUTOFAN:
            return None
        levels = AirVolume.manual_levels()
        return (levels.index(self) + 1) * 100 // len(levels)

    @classmethod
    def from_percentage(cls, percentage: int) -> AirVolume:
        """Convert percentage to the nearest manual fan volume level.

        Args:
            percentage: Fan speed as percentage (1-100).

        Returns:
            Corresponding AirVolume level.
        """
        levels = cls.manual_levels()
        step = -(-percentage * len(levels) // 100)  # ceil division
        step = max(1, min(step, len(levels)))  # Clamp to 1-4
        return levels[step - 1]


class HumidityTarget(IntEnum):
    """Humidification targets."""

    OFF = 0
    LOW = 1
    STANDARD = 2
    HIGH = 3
    AUTO = 4


class APIDefaults(BaseModel):
    """Default values for API configuration.

    Immutable configuration values for API timeouts and polling.
    These values can be overridden when instantiating DaikinPurifierAPI.
    """

    model_config = {"frozen": True}

    READ_TIMEOUT: int = Field(default=5, description="Timeout for every request to the cloud API in seconds")
    POLLING_INTERVAL: int = Field(default=60, description="Default polling interval for the coordinator in seconds")
    MIN_SCAN_INTERVAL: int = Field(default=15, description="Smallest polling interval accepted by the options flow")


# Create a default instance for easy access
API_DEFAULTS = APIDefaults()


# Select option names for the humidity target entity
HUMIDITY_OPTIONS = {target: target.name.lower() for target in HumidityTarget}

HUMIDITY_OPTIONS_REVERSE = {v: k for k, v in HUMIDITY_OPTIONS.items()}
