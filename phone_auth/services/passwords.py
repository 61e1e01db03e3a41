"""Password hashing and verification."""

from typing import Optional

from werkzeug.security import generate_password_hash, check_password_hash

from phone_auth.models import NO_PASSWORD_SENTINEL


def password_is_set(stored_hash: Optional[str]) -> bool:
    """False for accounts without a password (sentinel or empty column)."""
    return bool(stored_hash) and stored_hash != NO_PASSWORD_SENTINEL


class Hasher:
    """Salted one-way hashing backed by werkzeug.

    Every call to ``hash`` uses a fresh random salt, so hashing the same
    password twice gives different strings.
    """

    def hash(self, password: str) -> str:
        return generate_password_hash(password)

    def verify(self, password: str, stored_hash: Optional[str]) -> bool:
        if not password_is_set(stored_hash):
            return False
        try:
            return check_password_hash(stored_hash, password)
        except ValueError:
            # Not a werkzeug hash string
            return False
