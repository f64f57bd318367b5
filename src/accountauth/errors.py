"""Typed errors raised by the authentication core.

Crypto errors abort a handshake before any network call. Network-stage
errors abort it with the previous session left in place.
"""

from typing import Optional


class AuthError(Exception):
    """Base class for every error raised by accountauth."""


class CryptoError(AuthError):
    """Local cryptographic or encoding failure."""


class InvalidMnemonic(CryptoError):
    """The phrase is not a valid BIP-39 English mnemonic."""


class SigningError(CryptoError):
    """The challenge could not be encoded for signing."""


class EncryptionError(CryptoError):
    """Encryption or authenticated decryption failed."""


class AccountServiceError(AuthError):
    """A call to the remote account service failed."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status_code = status_code


class ChallengeRequestFailed(AuthError):
    """The service did not issue a login or register challenge."""


class LoginFailed(AuthError):
    pass


class RegistrationFailed(AuthError):
    pass


class RestoreFetchFailed(AuthError):
    """Fetching user, bookmarks or progress for an existing session failed."""


class OperationInProgress(AuthError):
    """An operation of the same kind is already running."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} already in progress")
        self.operation = operation


class OperationCancelled(AuthError):
    """The transport was cancelled mid-operation; session state is unchanged."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} was cancelled")
        self.operation = operation


class NotAuthenticated(AuthError):
    """The operation needs an established session and there is none."""
