"""Verification code issuing and validation.

No SMS is sent: the generated code is written to the log so a demo operator
(or the ``debugCode`` response field) can read it.

Codes live for ``ttl_seconds`` (60 by default). A phone may request a new
code for the same purpose once every ``resend_interval_seconds``. Issuing a
code deletes every earlier code for the phone, so at most one live code per
phone exists at a time.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from phone_auth.errors import InvalidCode, RateLimited
from phone_auth.models import VerificationCode
from phone_auth.services.credential_store import CredentialStore
from phone_auth.utils.clock import utcnow

logger = logging.getLogger(__name__)

CODE_TTL_SECONDS = 60
CODE_RESEND_INTERVAL_SECONDS = 60


def generate_code() -> str:
    """Generate a 6-digit code in the range 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


@dataclass(frozen=True)
class IssuedCode:
    code: str
    expires_at: datetime


class CodeIssuer:
    """Creates verification codes, enforcing the per-purpose resend interval."""

    def __init__(
        self,
        store: CredentialStore,
        clock: Callable[[], datetime] = utcnow,
        ttl_seconds: int = CODE_TTL_SECONDS,
        resend_interval_seconds: int = CODE_RESEND_INTERVAL_SECONDS,
        code_factory: Callable[[], str] = generate_code,
    ):
        self.store = store
        self.clock = clock
        self.ttl = timedelta(seconds=ttl_seconds)
        self.resend_interval = timedelta(seconds=resend_interval_seconds)
        self.code_factory = code_factory

    def issue(self, phone: str, purpose: str) -> IssuedCode:
        """Issue a new code for ``phone``.

        Raises:
            RateLimited: the last code for this phone and purpose was created
                less than the resend interval ago. Nothing is written.
        """
        now = self.clock()

        latest = self.store.get_latest_code(phone, purpose)
        if latest is not None and now - latest.created_at < self.resend_interval:
            logger.warning(f"Code request rate limited - phone: {phone}, purpose: {purpose}")
            raise RateLimited()

        code = self.code_factory()
        expires_at = now + self.ttl

        self.store.replace_codes(VerificationCode(
            phone=phone,
            code=code,
            purpose=purpose,
            expires_at=expires_at,
            used=False,
            created_at=now
        ))
        self.store.commit()

        logger.info(f"Verification code generated - phone: {phone}, code: {code}, purpose: {purpose}")

        return IssuedCode(code=code, expires_at=expires_at)


class CodeValidator:
    """Checks submitted codes. Consuming a code is a separate step."""

    def __init__(self, store: CredentialStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    def validate(self, phone: str, code: str, purpose: str) -> VerificationCode:
        """Return the matching unused, unexpired record.

        Raises:
            InvalidCode: no such record. Expired, used and wrong codes are
                reported the same way.
        """
        record = self.store.find_valid_code(phone, code, purpose, self.clock())
        if record is None:
            raise InvalidCode()
        return record

    def mark_used(self, record: VerificationCode) -> None:
        """Flag the record as used; the caller commits."""
        self.store.mark_code_used(record)
