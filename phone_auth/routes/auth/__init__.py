"""Auth routes package.

This package organizes authentication routes into logical submodules:
- core: Login, registration and the shared flow factory
- phone: Verification code requests
- password: Password reset with a verification code
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

# Import all route modules (registers routes on auth_bp)
from phone_auth.routes.auth import core  # noqa: E402,F401
from phone_auth.routes.auth import phone  # noqa: E402,F401
from phone_auth.routes.auth import password  # noqa: E402,F401
