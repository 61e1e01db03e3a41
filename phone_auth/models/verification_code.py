"""One-time verification codes sent (in demo mode: logged) to a phone."""

from phone_auth import db
from phone_auth.utils.clock import utcnow

PURPOSE_LOGIN = 'login'
PURPOSE_REGISTER = 'register'
PURPOSE_RESET = 'reset'

PURPOSES = (PURPOSE_LOGIN, PURPOSE_REGISTER, PURPOSE_RESET)


class VerificationCode(db.Model):
    """A 6-digit code bound to a phone number and a purpose.

    Codes are consumed by setting ``used``. Issuing a new code for a phone
    deletes every earlier row for that phone, whatever its purpose.
    """

    __tablename__ = 'verification_codes'

    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(11), nullable=False, index=True)
    code = db.Column(db.String(6), nullable=False)
    purpose = db.Column(db.String(16), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    used = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f'<VerificationCode phone={self.phone} purpose={self.purpose} expires_at={self.expires_at}>'
