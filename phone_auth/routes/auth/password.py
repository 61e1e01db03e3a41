"""Password reset route."""

from flask import jsonify
from phone_auth import db, limiter
from phone_auth.routes.auth import auth_bp
from phone_auth.routes.auth.core import get_auth_flows, get_request_data
from phone_auth.services.schemas import parse_reset_password


@auth_bp.route('/reset-password', methods=['POST'])
@limiter.limit("5 per minute")
def reset_password():
    """Reset password using a verification code sent to the phone."""
    try:
        flows = get_auth_flows()
        reset_request = parse_reset_password(get_request_data(), flows.config.bypass_codes)
        result = flows.reset_password(reset_request)
        return jsonify(result.body), result.status
    except Exception:
        db.session.rollback()
        raise
