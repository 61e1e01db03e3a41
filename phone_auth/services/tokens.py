"""Bearer token issuance.

Tokens are signed JWTs but nothing in this service verifies them; to
callers they are opaque strings bound to a user id.
"""

from datetime import timedelta

import jwt

from phone_auth.utils.clock import utcnow


class TokenIssuer:
    """Signs an HS256 JWT carrying the user id."""

    def __init__(self, secret_key: str, expires_in_seconds: int = 86400):
        self.secret_key = secret_key
        self.expires_in = timedelta(seconds=expires_in_seconds)

    def issue(self, user) -> str:
        payload = {
            'user_id': user.id,
            'username': user.username,
            'exp': utcnow() + self.expires_in
        }
        return jwt.encode(payload, self.secret_key, algorithm='HS256')
