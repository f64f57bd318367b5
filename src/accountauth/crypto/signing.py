"""Ed25519 signatures over server-issued challenges."""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..errors import SigningError
from .encoding import base64url_to_bytes, bytes_to_base64url
from .keys import KeyMaterial


def _challenge_bytes(challenge: str) -> bytes:
    if not isinstance(challenge, str) or not challenge:
        raise SigningError("challenge must be a non-empty string")
    try:
        return challenge.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SigningError("challenge is not encodable as UTF-8") from e


def sign_challenge(keys: KeyMaterial, challenge: str) -> str:
    """Sign the UTF-8 challenge code; returns the signature as base64url."""
    signature = keys.private_key.sign(_challenge_bytes(challenge))
    return bytes_to_base64url(signature)


def verify_challenge(public_key: bytes, challenge: str, signature: str) -> bool:
    """Check a base64url signature against a raw Ed25519 public key."""
    try:
        verifier = Ed25519PublicKey.from_public_bytes(public_key)
        verifier.verify(base64url_to_bytes(signature), _challenge_bytes(challenge))
    except (InvalidSignature, ValueError, SigningError):
        return False
    return True
