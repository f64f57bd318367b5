"""Key derivation, challenge signing and payload encryption."""

from .encoding import base64url_to_bytes, bytes_to_base64, bytes_to_base64url
from .keys import KeyMaterial, derive_keys, generate_mnemonic, validate_mnemonic
from .payload import decrypt_data, encrypt_data
from .signing import sign_challenge, verify_challenge

__all__ = [
    'KeyMaterial',
    'derive_keys',
    'generate_mnemonic',
    'validate_mnemonic',
    'sign_challenge',
    'verify_challenge',
    'encrypt_data',
    'decrypt_data',
    'bytes_to_base64',
    'bytes_to_base64url',
    'base64url_to_bytes',
]
