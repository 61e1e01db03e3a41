"""
Pytest configuration and fixtures for testing the phone auth API.
"""

import os
from datetime import datetime, timedelta

import pytest
from faker import Faker
from werkzeug.security import generate_password_hash

from phone_auth import create_app, db
from phone_auth.models import User, VerificationCode, NO_PASSWORD_SENTINEL
from phone_auth.utils.clock import utcnow

fake = Faker('zh_CN')

REGISTERED_PHONE = '13800138000'
REGISTERED_USERNAME = 'user13800138000'
REGISTERED_PASSWORD = 'secret123'
LEGACY_PHONE = '13800138006'
LEGACY_USERNAME = 'legacyUser'
FRESH_PHONE = '13800138003'
SEEDED_CODE = '123456'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    app = create_app('testing')
    app.config['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture(autouse=True)
def code_settings(app):
    """Restore code-related config toggled by individual tests."""
    saved = {key: app.config[key] for key in ('PSEUDO_SMS', 'EXPOSE_DEBUG_CODE')}
    app.config['PSEUDO_SMS'] = False
    yield app.config
    app.config.update(saved)


@pytest.fixture
def pseudo_sms(code_settings):
    """Turn on bypass mode: verification codes are not checked."""
    code_settings['PSEUDO_SMS'] = True
    return code_settings


def insert_user(phone, username=None, password=None, password_hash=None):
    """Insert a user; ``password`` is hashed, ``password_hash`` is stored as-is."""
    if password is not None:
        password_hash = generate_password_hash(password)
    now = utcnow()
    user = User(
        phone=phone,
        username=username,
        password_hash=password_hash if password_hash is not None else NO_PASSWORD_SENTINEL,
        created_at=now,
        updated_at=now,
    )
    db.session.add(user)
    db.session.commit()
    return user


def insert_code(phone, code, purpose, expires_in=60, used=False, created_ago=0):
    now = utcnow()
    record = VerificationCode(
        phone=phone,
        code=code,
        purpose=purpose,
        expires_at=now + timedelta(seconds=expires_in),
        used=used,
        created_at=now - timedelta(seconds=created_ago),
    )
    db.session.add(record)
    db.session.commit()
    return record


def random_phone():
    """A valid mainland mobile number that is not one of the seeded ones."""
    return '139' + fake.numerify('########')


@pytest.fixture
def seeded(db_session):
    """Users and codes shared by the endpoint tests.

    - 13800138000 / user13800138000 with password secret123
    - 13800138006 / legacyUser with no password set
    - code 123456 for (13800138000, login), (13800138000, register)
      and (13800138003, register)
    """
    user = insert_user(REGISTERED_PHONE, REGISTERED_USERNAME, password=REGISTERED_PASSWORD)
    legacy = insert_user(LEGACY_PHONE, LEGACY_USERNAME, password_hash=NO_PASSWORD_SENTINEL)

    insert_code(REGISTERED_PHONE, SEEDED_CODE, 'login')
    insert_code(REGISTERED_PHONE, SEEDED_CODE, 'register')
    insert_code(FRESH_PHONE, SEEDED_CODE, 'register')

    return {
        'user_id': user.id,
        'legacy_id': legacy.id,
    }


def fetch_user(phone):
    db.session.expire_all()
    return User.query.filter_by(phone=phone).first()


def fetch_codes(phone, purpose=None):
    db.session.expire_all()
    query = VerificationCode.query.filter_by(phone=phone)
    if purpose is not None:
        query = query.filter_by(purpose=purpose)
    return query.order_by(VerificationCode.id).all()


def count_codes(phone):
    db.session.expire_all()
    return VerificationCode.query.filter_by(phone=phone).count()


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now=None):
        self.now = now or datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)
