"""Typed request objects parsed from JSON bodies.

Parsing decides once which shape a request has (for example code login
versus password login) so the flows never probe individual fields.
Format problems raise ``ValidationError`` before any store access.
"""

from dataclasses import dataclass
from typing import Optional, Union

from phone_auth.errors import ValidationError
from phone_auth.models import PURPOSES
from phone_auth.utils.validators import is_valid_phone_number


@dataclass(frozen=True)
class RequestCodeRequest:
    phone: str
    purpose: str


@dataclass(frozen=True)
class CodeLogin:
    phone: str
    code: Optional[str]


@dataclass(frozen=True)
class PasswordLogin:
    account: str
    password: str


LoginRequest = Union[CodeLogin, PasswordLogin]


@dataclass(frozen=True)
class RegisterRequest:
    phone: str
    code: Optional[str]
    agree_agreement: bool
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class ResetPasswordRequest:
    phone: str
    code: Optional[str]
    new_password: str


def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError()
    return data


def _text(data, key):
    """Return a non-empty string field or None; other types are malformed."""
    value = data.get(key)
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValidationError()
    return value


def _phone(data, key='phoneNumber', message=None):
    phone = _text(data, key)
    if phone is None:
        raise ValidationError()
    if not is_valid_phone_number(phone):
        raise ValidationError(message)
    return phone


def parse_request_code(data) -> RequestCodeRequest:
    data = _require_object(data)
    if _text(data, 'phoneNumber') is None or _text(data, 'purpose') is None:
        raise ValidationError()

    phone = _phone(data, message='Invalid phone format.')
    purpose = data['purpose']
    if purpose not in PURPOSES:
        raise ValidationError('Invalid purpose.')

    return RequestCodeRequest(phone=phone, purpose=purpose)


def parse_login(data, bypass_codes=False) -> LoginRequest:
    """Pick code login when a phone and code are sent, password login when an
    account and password are sent. In bypass mode a bare phone number is a
    code login."""
    data = _require_object(data)
    phone = _text(data, 'phoneNumber')
    code = _text(data, 'verificationCode')
    account = _text(data, 'accountOrPhone')
    password = _text(data, 'password')

    if phone is not None and (code is not None or (bypass_codes and password is None)):
        return CodeLogin(phone=_phone(data), code=code)
    if account is not None and password is not None:
        return PasswordLogin(account=account, password=password)
    raise ValidationError()


def parse_register(data, bypass_codes=False) -> RegisterRequest:
    data = _require_object(data)
    code = _text(data, 'verificationCode')
    if data.get('agreeAgreement') is None or (code is None and not bypass_codes):
        raise ValidationError()

    return RegisterRequest(
        phone=_phone(data),
        code=code,
        agree_agreement=bool(data['agreeAgreement']),
        username=_text(data, 'username'),
        password=_text(data, 'password')
    )


def parse_reset_password(data, bypass_codes=False) -> ResetPasswordRequest:
    data = _require_object(data)
    code = _text(data, 'verificationCode')
    new_password = _text(data, 'newPassword')
    if new_password is None or (code is None and not bypass_codes):
        raise ValidationError()

    return ResetPasswordRequest(
        phone=_phone(data),
        code=code,
        new_password=new_password
    )
