"""Repository over the ``users`` and ``verification_codes`` tables.

The auth services only reach the database through this class, so they can
be exercised against any SQLAlchemy session. Writes are only flushed;
callers end each unit of work with ``commit`` so a failure part way through
is undone by a rollback.
"""

from typing import Optional

from phone_auth import db
from phone_auth.models import User, VerificationCode


class CredentialStore:
    """Lookups and writes for users and verification codes."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # ---------------------------------------------------------------------
    # Users
    # ---------------------------------------------------------------------

    def get_user_by_phone(self, phone: str) -> Optional[User]:
        return self.session.query(User).filter_by(phone=phone).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter_by(username=username).first()

    def create_user(self, phone: str, username: Optional[str], password_hash: str, now) -> User:
        user = User(
            phone=phone,
            username=username,
            password_hash=password_hash,
            created_at=now,
            updated_at=now
        )
        self.session.add(user)
        self.session.flush()
        return user

    def update_user(self, user: User, now, **fields) -> User:
        """Set the given columns on ``user`` and bump ``updated_at``."""
        for name, value in fields.items():
            setattr(user, name, value)
        user.updated_at = now
        self.session.flush()
        return user

    # ---------------------------------------------------------------------
    # Verification codes
    # ---------------------------------------------------------------------

    def get_latest_code(self, phone: str, purpose: str) -> Optional[VerificationCode]:
        return (
            self.session.query(VerificationCode)
            .filter_by(phone=phone, purpose=purpose)
            .order_by(VerificationCode.created_at.desc(), VerificationCode.id.desc())
            .first()
        )

    def find_valid_code(self, phone: str, code: str, purpose: str, now) -> Optional[VerificationCode]:
        return (
            self.session.query(VerificationCode)
            .filter(
                VerificationCode.phone == phone,
                VerificationCode.code == code,
                VerificationCode.purpose == purpose,
                VerificationCode.used.is_(False),
                VerificationCode.expires_at > now
            )
            .order_by(VerificationCode.id.desc())
            .first()
        )

    def replace_codes(self, record: VerificationCode) -> VerificationCode:
        """Delete every code for ``record.phone`` and insert ``record``."""
        self.session.query(VerificationCode).filter_by(phone=record.phone).delete()
        self.session.add(record)
        self.session.flush()
        return record

    def mark_code_used(self, record: VerificationCode) -> None:
        record.used = True
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()
