"""
Tests for POST /api/auth/login
"""

from conftest import (
    FRESH_PHONE,
    LEGACY_PHONE,
    LEGACY_USERNAME,
    REGISTERED_PASSWORD,
    REGISTERED_PHONE,
    REGISTERED_USERNAME,
    SEEDED_CODE,
    fetch_codes,
    insert_code,
)


class TestCodeLogin:
    """Phone number + verification code."""

    def test_unregistered_phone(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'phoneNumber': '13800138001',
            'verificationCode': SEEDED_CODE
        })

        assert response.status_code == 404
        assert response.json['error'] == 'Phone not registered.'

    def test_wrong_code(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'phoneNumber': REGISTERED_PHONE,
            'verificationCode': '000000'
        })

        assert response.status_code == 401
        assert response.json['error'] == 'Verification code invalid.'

    def test_success(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'phoneNumber': REGISTERED_PHONE,
            'verificationCode': SEEDED_CODE
        })

        assert response.status_code == 200
        assert response.json['userId'] == str(seeded['user_id'])
        assert response.json['token']
        assert fetch_codes(REGISTERED_PHONE, 'login')[0].used is True

    def test_code_cannot_be_reused(self, client, seeded):
        payload = {'phoneNumber': REGISTERED_PHONE, 'verificationCode': SEEDED_CODE}

        first = client.post('/api/auth/login', json=payload)
        second = client.post('/api/auth/login', json=payload)

        assert first.status_code == 200
        assert second.status_code == 401

    def test_code_for_other_purpose_is_rejected(self, client, seeded):
        insert_code(LEGACY_PHONE, '654321', 'register')

        response = client.post('/api/auth/login', json={
            'phoneNumber': LEGACY_PHONE,
            'verificationCode': '654321'
        })

        assert response.status_code == 401

    def test_expired_code(self, client, seeded):
        insert_code(LEGACY_PHONE, '654321', 'login', expires_in=-1)

        response = client.post('/api/auth/login', json={
            'phoneNumber': LEGACY_PHONE,
            'verificationCode': '654321'
        })

        assert response.status_code == 401
        assert response.json['error'] == 'Verification code invalid.'

    def test_invalid_phone_format(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'phoneNumber': '23800138000',
            'verificationCode': SEEDED_CODE
        })

        assert response.status_code == 400
        assert response.json['error'] == 'Invalid input or format.'

    def test_pseudo_sms_skips_code_check(self, client, seeded, pseudo_sms):
        response = client.post('/api/auth/login', json={
            'phoneNumber': REGISTERED_PHONE,
            'verificationCode': '000000'
        })

        assert response.status_code == 200
        assert fetch_codes(REGISTERED_PHONE, 'login')[0].used is False

    def test_pseudo_sms_still_requires_registration(self, client, seeded, pseudo_sms):
        response = client.post('/api/auth/login', json={'phoneNumber': FRESH_PHONE})

        assert response.status_code == 404


class TestPasswordLogin:
    """Username or phone + password."""

    def test_password_not_set(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'accountOrPhone': LEGACY_PHONE,
            'password': 'anything'
        })

        assert response.status_code == 401
        assert response.json['error'] == 'Password not set.'

    def test_password_not_set_by_username(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'accountOrPhone': LEGACY_USERNAME,
            'password': 'anything'
        })

        assert response.status_code == 401
        assert response.json['error'] == 'Password not set.'

    def test_incorrect_password(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'accountOrPhone': REGISTERED_USERNAME,
            'password': 'wrong'
        })

        assert response.status_code == 401
        assert response.json['error'] == 'Incorrect password.'

    def test_success_with_username(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'accountOrPhone': REGISTERED_USERNAME,
            'password': REGISTERED_PASSWORD
        })

        assert response.status_code == 200
        assert response.json['userId'] == str(seeded['user_id'])
        assert response.json['token']

    def test_success_with_phone(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'accountOrPhone': REGISTERED_PHONE,
            'password': REGISTERED_PASSWORD
        })

        assert response.status_code == 200
        assert response.json['userId'] == str(seeded['user_id'])

    def test_unknown_account(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'accountOrPhone': 'nobody',
            'password': 'whatever'
        })

        assert response.status_code == 404
        assert response.json['error'] == 'User not found.'


class TestLoginValidation:

    def test_empty_body(self, client, seeded):
        response = client.post('/api/auth/login', json={})

        assert response.status_code == 400
        assert response.json['error'] == 'Invalid input or format.'

    def test_phone_without_code(self, client, seeded):
        response = client.post('/api/auth/login', json={'phoneNumber': REGISTERED_PHONE})

        assert response.status_code == 400

    def test_account_without_password(self, client, seeded):
        response = client.post('/api/auth/login', json={'accountOrPhone': REGISTERED_USERNAME})

        assert response.status_code == 400

    def test_non_string_code(self, client, seeded):
        response = client.post('/api/auth/login', json={
            'phoneNumber': REGISTERED_PHONE,
            'verificationCode': 123456
        })

        assert response.status_code == 400
