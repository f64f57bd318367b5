"""Mnemonic-based authentication and session lifecycle for the account service."""

from .client import AccountClient
from .config import AuthConfig
from .crypto import (
    KeyMaterial,
    decrypt_data,
    derive_keys,
    encrypt_data,
    generate_mnemonic,
    sign_challenge,
    validate_mnemonic,
    verify_challenge,
)
from .errors import (
    AccountServiceError,
    AuthError,
    ChallengeRequestFailed,
    CryptoError,
    EncryptionError,
    InvalidMnemonic,
    LoginFailed,
    NotAuthenticated,
    OperationCancelled,
    OperationInProgress,
    RegistrationFailed,
    RestoreFetchFailed,
    SigningError,
)
from .lifecycle import SessionLifecycle
from .models import LoginData, RegistrationData, Session, UserProfile, UserRecord
from .protocol import SessionProtocol
from .store import InMemorySessionStore, SessionStore

__version__ = "0.1.0"

__all__ = [
    'AccountClient',
    'AuthConfig',
    'KeyMaterial',
    'derive_keys',
    'generate_mnemonic',
    'validate_mnemonic',
    'sign_challenge',
    'verify_challenge',
    'encrypt_data',
    'decrypt_data',
    'AuthError',
    'CryptoError',
    'InvalidMnemonic',
    'SigningError',
    'EncryptionError',
    'AccountServiceError',
    'ChallengeRequestFailed',
    'LoginFailed',
    'RegistrationFailed',
    'RestoreFetchFailed',
    'OperationInProgress',
    'OperationCancelled',
    'NotAuthenticated',
    'SessionLifecycle',
    'SessionProtocol',
    'SessionStore',
    'InMemorySessionStore',
    'LoginData',
    'RegistrationData',
    'Session',
    'UserProfile',
    'UserRecord',
]
