"""Core auth services: code lifecycle, credential checks and the flows."""

from phone_auth.services.auth_flows import AuthConfig, AuthFlows, FlowResult
from phone_auth.services.codes import CodeIssuer, CodeValidator, IssuedCode
from phone_auth.services.credential_store import CredentialStore
from phone_auth.services.passwords import Hasher, password_is_set
from phone_auth.services.tokens import TokenIssuer

__all__ = [
    'AuthConfig',
    'AuthFlows',
    'FlowResult',
    'CodeIssuer',
    'CodeValidator',
    'IssuedCode',
    'CredentialStore',
    'Hasher',
    'password_is_set',
    'TokenIssuer',
]
