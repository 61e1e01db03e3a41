"""User model for phone-based authentication."""

from phone_auth import db
from phone_auth.utils.clock import utcnow

# Stored in password_hash for accounts that never set a password
# (legacy SMS-only users). It is not a valid hash of anything.
NO_PASSWORD_SENTINEL = 'legacy-no-password'


class User(db.Model):
    """Account identified by a mainland China mobile number."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(11), unique=True, nullable=False, index=True)
    username = db.Column(db.String(80), unique=True, nullable=True, index=True)
    password_hash = db.Column(db.String(255), nullable=True, default=NO_PASSWORD_SENTINEL)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f'<User {self.phone}>'
