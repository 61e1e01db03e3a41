"""Database models for the phone auth service."""

from .user import User, NO_PASSWORD_SENTINEL
from .verification_code import VerificationCode, PURPOSES

__all__ = ['User', 'VerificationCode', 'NO_PASSWORD_SENTINEL', 'PURPOSES']
