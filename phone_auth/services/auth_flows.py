"""Authentication use cases: request code, login, register, reset password.

Each public method is one request/response transition. Failures are raised
as ``AuthError`` subclasses; successes come back as a ``FlowResult`` whose
status and body are the HTTP response.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from phone_auth.errors import (
    Conflict,
    IncorrectPassword,
    NotRegistered,
    PasswordNotSet,
    PreconditionFailed,
    UserNotFound,
    ValidationError,
)
from phone_auth.models.verification_code import PURPOSE_LOGIN, PURPOSE_REGISTER, PURPOSE_RESET
from phone_auth.services.codes import (
    CODE_RESEND_INTERVAL_SECONDS,
    CODE_TTL_SECONDS,
    CodeIssuer,
    CodeValidator,
)
from phone_auth.services.credential_store import CredentialStore
from phone_auth.services.passwords import Hasher, password_is_set
from phone_auth.services.schemas import (
    CodeLogin,
    LoginRequest,
    PasswordLogin,
    RegisterRequest,
    RequestCodeRequest,
    ResetPasswordRequest,
)
from phone_auth.services.tokens import TokenIssuer
from phone_auth.utils.clock import utcnow
from phone_auth.utils.validators import MIN_PASSWORD_LENGTH, is_valid_password, is_valid_phone_number

logger = logging.getLogger(__name__)

PASSWORD_TOO_SHORT = f'Password must be at least {MIN_PASSWORD_LENGTH} characters.'


@dataclass(frozen=True)
class AuthConfig:
    """Per-invocation switches for the flows.

    ``bypass_codes`` (pseudo-SMS mode) skips code validation in login,
    register and reset. ``expose_debug_code`` returns the generated code in
    the request-code response.
    """

    bypass_codes: bool = False
    expose_debug_code: bool = False
    code_ttl_seconds: int = CODE_TTL_SECONDS
    code_resend_interval_seconds: int = CODE_RESEND_INTERVAL_SECONDS

    @classmethod
    def from_mapping(cls, config):
        return cls(
            bypass_codes=bool(config.get('PSEUDO_SMS', False)),
            expose_debug_code=bool(config.get('EXPOSE_DEBUG_CODE', False)),
            code_ttl_seconds=int(config.get('CODE_TTL_SECONDS', CODE_TTL_SECONDS)),
            code_resend_interval_seconds=int(
                config.get('CODE_RESEND_INTERVAL_SECONDS', CODE_RESEND_INTERVAL_SECONDS)
            ),
        )


@dataclass
class FlowResult:
    status: int
    body: Dict[str, Any] = field(default_factory=dict)


class AuthFlows:
    """Orchestrates the code issuer, validator, hasher and token issuer."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: Hasher,
        tokens: TokenIssuer,
        config: Optional[AuthConfig] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.config = config or AuthConfig()
        self.clock = clock
        self.issuer = CodeIssuer(
            store,
            clock=clock,
            ttl_seconds=self.config.code_ttl_seconds,
            resend_interval_seconds=self.config.code_resend_interval_seconds,
        )
        self.validator = CodeValidator(store, clock=clock)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_code(self, phone, code, purpose):
        """Validate ``code`` unless bypass mode is on; return the record or None."""
        if self.config.bypass_codes:
            return None
        return self.validator.validate(phone, code, purpose)

    def _consume(self, record):
        if record is not None:
            self.validator.mark_used(record)

    def _token_body(self, user, **extra):
        body = {'userId': str(user.id), 'token': self.tokens.issue(user)}
        body.update(extra)
        return body

    # ------------------------------------------------------------------
    # Use cases
    # ------------------------------------------------------------------

    def request_code(self, req: RequestCodeRequest) -> FlowResult:
        issued = self.issuer.issue(req.phone, req.purpose)

        body = {'message': 'Code generated.'}
        if self.config.expose_debug_code or self.config.bypass_codes:
            body['debugCode'] = issued.code
        return FlowResult(200, body)

    def login(self, req: LoginRequest) -> FlowResult:
        if isinstance(req, CodeLogin):
            user = self._login_with_code(req)
        elif isinstance(req, PasswordLogin):
            user = self._login_with_password(req)
        else:
            raise ValidationError()

        body = self._token_body(user)
        self.store.commit()
        logger.info(f"Login successful for user {user.id}")
        return FlowResult(200, body)

    def _login_with_code(self, req: CodeLogin):
        user = self.store.get_user_by_phone(req.phone)
        if user is None:
            raise NotRegistered()

        record = self._check_code(req.phone, req.code, PURPOSE_LOGIN)
        self._consume(record)
        return user

    def _login_with_password(self, req: PasswordLogin):
        if is_valid_phone_number(req.account):
            user = self.store.get_user_by_phone(req.account)
        else:
            user = self.store.get_user_by_username(req.account)

        if user is None:
            raise UserNotFound()
        if not password_is_set(user.password_hash):
            raise PasswordNotSet()
        if not self.hasher.verify(req.password, user.password_hash):
            raise IncorrectPassword()
        return user

    def register(self, req: RegisterRequest) -> FlowResult:
        if not req.agree_agreement:
            raise PreconditionFailed()

        record = self._check_code(req.phone, req.code, PURPOSE_REGISTER)
        user = self.store.get_user_by_phone(req.phone)

        if user is not None:
            # Registering a known phone logs the user in instead
            self._consume(record)
            self._backfill(user, req)
            body = self._token_body(user, existingUser=True)
            self.store.commit()
            logger.info(f"Register on existing phone, logged in user {user.id}")
            return FlowResult(200, body)

        if not req.username or not req.password:
            raise ValidationError()
        if not is_valid_password(req.password):
            raise ValidationError(PASSWORD_TOO_SHORT)
        if self.store.get_user_by_username(req.username) is not None:
            raise Conflict()

        password_hash = self.hasher.hash(req.password)
        self._consume(record)
        user = self.store.create_user(
            phone=req.phone,
            username=req.username,
            password_hash=password_hash,
            now=self.clock()
        )
        body = self._token_body(user)
        self.store.commit()
        logger.info(f"Registered new user {user.id}")
        return FlowResult(201, body)

    def _backfill(self, user, req: RegisterRequest):
        """Fill in a missing password or username on an existing account."""
        fields = {}
        if not password_is_set(user.password_hash) and is_valid_password(req.password):
            fields['password_hash'] = self.hasher.hash(req.password)
        if not user.username and req.username:
            if self.store.get_user_by_username(req.username) is None:
                fields['username'] = req.username
        if fields:
            self.store.update_user(user, self.clock(), **fields)
            logger.info(f"Backfilled {', '.join(sorted(fields))} for user {user.id}")

    def reset_password(self, req: ResetPasswordRequest) -> FlowResult:
        if not is_valid_password(req.new_password):
            raise ValidationError(PASSWORD_TOO_SHORT)

        user = self.store.get_user_by_phone(req.phone)
        if user is None:
            raise NotRegistered()

        record = self._check_code(req.phone, req.code, PURPOSE_RESET)
        password_hash = self.hasher.hash(req.new_password)
        self._consume(record)
        self.store.update_user(user, self.clock(), password_hash=password_hash)
        self.store.commit()

        logger.info(f"Password reset for user {user.id}")
        return FlowResult(200, {'message': 'Password updated.'})
