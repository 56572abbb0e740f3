"""Infrastructure layer for Daikin purifier integration.

This package contains core infrastructure components:
- API decorators for read and command endpoints (import from .api directly,
  it depends on the models which depend on this package)
- Validation logic
- Error definitions
"""

from .errors import (
    DaikinAPIError,
    DaikinConnectionError,
    DaikinProtocolError,
    DaikinPurifierError,
    DaikinTimeoutError,
    DaikinTransportError,
    DaikinValidationError,
)
from .validation import (
    validate_enum_value,
    validate_login_id,
    validate_password,
    validate_token,
)

__all__ = [
    # Errors
    "DaikinPurifierError",
    "DaikinTransportError",
    "DaikinConnectionError",
    "DaikinTimeoutError",
    "DaikinProtocolError",
    "DaikinAPIError",
    "DaikinValidationError",
    # Validation
    "validate_login_id",
    "validate_password",
    "validate_token",
    "validate_enum_value",
]
