from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
limiter = Limiter(key_func=get_remote_address, storage_uri='memory://')


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on')


def create_app(config_name='development'):
    app = Flask(__name__)
    testing = config_name == 'testing'

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Config
    if testing:
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv(
            'DATABASE_URL',
            'sqlite:///auth_demo.db'
        )

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 86400))

    # Verification codes (demo only: no real SMS is sent)
    app.config['PSEUDO_SMS'] = _env_flag('PSEUDO_SMS')
    app.config['EXPOSE_DEBUG_CODE'] = _env_flag('EXPOSE_DEBUG_CODE', config_name != 'production')
    app.config['CODE_TTL_SECONDS'] = int(os.getenv('CODE_TTL_SECONDS', 60))
    app.config['CODE_RESEND_INTERVAL_SECONDS'] = int(os.getenv('CODE_RESEND_INTERVAL_SECONDS', 60))

    # Per-IP request limiter in front of the domain rate limit
    app.config['RATELIMIT_ENABLED'] = not testing and _env_flag('RATELIMIT_ENABLED', True)

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    CORS(app)

    # Create tables with error handling
    with app.app_context():
        from phone_auth import models  # noqa: F401
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    from phone_auth.errors import register_error_handlers
    register_error_handlers(app)

    from phone_auth.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'}), 200

    return app
