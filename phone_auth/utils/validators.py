"""Input format checks shared by request parsing and the flows."""

import re

# Mainland China mobile numbers: 11 ASCII digits, second digit 3-9
PHONE_REGEX = re.compile(r'1[3-9][0-9]{9}')

MIN_PASSWORD_LENGTH = 6


def is_valid_phone_number(phone) -> bool:
    return isinstance(phone, str) and PHONE_REGEX.fullmatch(phone) is not None


def is_valid_password(password) -> bool:
    return isinstance(password, str) and len(password) >= MIN_PASSWORD_LENGTH
