"""Shared utilities for the phone auth backend.

Small helpers used by both the services and the route modules.
"""

from phone_auth.utils.clock import utcnow
from phone_auth.utils.validators import (
    PHONE_REGEX,
    MIN_PASSWORD_LENGTH,
    is_valid_phone_number,
    is_valid_password,
)

__all__ = [
    'utcnow',
    'PHONE_REGEX',
    'MIN_PASSWORD_LENGTH',
    'is_valid_phone_number',
    'is_valid_password',
]
