"""Custom exceptions for Daikin purifier integration."""


class DaikinPurifierError(Exception):
    """Base exception for Daikin purifier."""


class DaikinTransportError(DaikinPurifierError):
    """Raised when a request fails or the cloud answers outside 2xx."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DaikinConnectionError(DaikinTransportError):
    """Raised when the request could not be completed."""


class DaikinTimeoutError(DaikinTransportError):
    """Raised when request times out."""


class DaikinProtocolError(DaikinPurifierError):
    """Raised when a decoded response lacks required fields."""


class DaikinAPIError(DaikinProtocolError):
    """Raised when the cloud rejects a command."""

    def __init__(self, message: str, ret: str | None = None) -> None:
        super().__init__(message)
        self.ret = ret


class DaikinValidationError(DaikinPurifierError):
    """Raised when input validation fails."""
