"""Core authentication routes: login and registration."""

from flask import request, jsonify, current_app
from phone_auth import db, limiter
from phone_auth.routes.auth import auth_bp
from phone_auth.services import AuthConfig, AuthFlows, CredentialStore, Hasher, TokenIssuer
from phone_auth.services.schemas import parse_login, parse_register

# ---------------------------------------------------------------------------
# Shared helpers (used by sibling modules via import)
# ---------------------------------------------------------------------------


def get_auth_flows():
    """Build the flows for the current request from the app config.

    Config is read on every call so PSEUDO_SMS can be toggled at runtime.
    """
    config = current_app.config
    return AuthFlows(
        store=CredentialStore(db.session),
        hasher=Hasher(),
        tokens=TokenIssuer(
            config['JWT_SECRET_KEY'],
            expires_in_seconds=config['JWT_ACCESS_TOKEN_EXPIRES']
        ),
        config=AuthConfig.from_mapping(config)
    )


def get_request_data():
    """Parsed JSON body, or None when the body is missing or not JSON."""
    return request.get_json(silent=True)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Log in with phone + verification code, or account + password."""
    try:
        flows = get_auth_flows()
        login_request = parse_login(get_request_data(), flows.config.bypass_codes)
        result = flows.login(login_request)
        return jsonify(result.body), result.status
    except Exception:
        db.session.rollback()
        raise


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Register a phone number, or log in if it is already registered."""
    try:
        flows = get_auth_flows()
        register_request = parse_register(get_request_data(), flows.config.bypass_codes)
        result = flows.register(register_request)
        return jsonify(result.body), result.status
    except Exception:
        db.session.rollback()
        raise
