"""Input validation for Daikin purifier integration.

This module provides validation functions for values entered by the user or
passed to the API client. It includes validation for:
- Cloud account credentials (login id, password, token)
- Members of the closed enumerated control domains

Validators return a tuple of (is_valid, error_message) so that they can be
used both by the config flow (to map onto form errors) and by the models (to
raise DaikinValidationError).
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Any

_TOKEN_PATTERN = re.compile(r"^[\x21-\x7e]+(?: [\x21-\x7e]+)?$")


def validate_login_id(login_id: str) -> tuple[bool, str | None]:
    """Validate a login identifier for the cloud account.

    Args:
        login_id: Login identifier (usually an e-mail address).

    Returns:
        Tuple of (is_valid, error_message).

    Example:
        >>> validate_login_id("user@example.com")
        (True, None)
        >>> validate_login_id("  ")
        (False, "Login id cannot be empty")
    """
    login_id = login_id.strip()

    if not login_id:
        return False, "Login id cannot be empty"

    if re.search(r"[\s,&=]", login_id):
        return False, "Login id contains invalid characters"

    return True, None


def validate_password(password: str) -> tuple[bool, str | None]:
    """Validate the account password is present."""
    if not password:
        return False, "Password cannot be empty"

    return True, None


def validate_token(token: str) -> tuple[bool, str | None]:
    """Validate an authorization token.

    The token is sent verbatim as the ``Authorization`` header, so it must be
    printable ASCII. A single space is allowed to support ``Bearer <token>``.

    Example:
        >>> validate_token("Bearer abc.def")
        (True, None)
        >>> validate_token("abc\\ndef")
        (False, "Token contains invalid characters")
    """
    token = token.strip()

    if not token:
        return False, "Token cannot be empty"

    if not _TOKEN_PATTERN.match(token):
        return False, "Token contains invalid characters"

    return True, None


def validate_enum_value(enum_cls: type[IntEnum], value: Any) -> tuple[bool, str | None]:
    """Validate a value is a member of a closed enumerated domain.

    Booleans are rejected even though they are ints. Strings are not coerced;
    wire strings are handled by the models.

    Example:
        >>> validate_enum_value(AirVolume, 3)
        (True, None)
        >>> validate_enum_value(AirVolume, 4)
        (False, "4 is not a valid AirVolume (allowed: 0, 1, 2, 3, 5)")
    """
    allowed = ", ".join(str(member.value) for member in enum_cls)

    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{value!r} is not a valid {enum_cls.__name__} (allowed: {allowed})"

    if value not in {member.value for member in enum_cls}:
        return False, f"{value} is not a valid {enum_cls.__name__} (allowed: {allowed})"

    return True, None
