"""Verification code request route."""

from flask import jsonify
from phone_auth import db, limiter
from phone_auth.routes.auth import auth_bp
from phone_auth.routes.auth.core import get_auth_flows, get_request_data
from phone_auth.services.schemas import parse_request_code


@auth_bp.route('/request-code', methods=['POST'])
@limiter.limit("5 per minute")
def request_code():
    """Generate a verification code for a phone number and purpose.

    No SMS is sent; the code is logged and, outside production, returned
    as ``debugCode``.
    """
    try:
        code_request = parse_request_code(get_request_data())
        result = get_auth_flows().request_code(code_request)
        return jsonify(result.body), result.status
    except Exception:
        db.session.rollback()
        raise
