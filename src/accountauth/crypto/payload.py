"""
AES-256-GCM encryption of device and profile metadata.

Payload format (compatible with the web client):
    base64(iv) "." base64(tag) "." base64(ciphertext)
"""

import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import EncryptionError
from .encoding import base64_to_bytes, bytes_to_base64

KEY_LENGTH_BYTES = 32
IV_LENGTH_BYTES = 16
TAG_LENGTH_BYTES = 16


def _check_seed(seed: bytes) -> None:
    if not isinstance(seed, (bytes, bytearray)) or len(seed) != KEY_LENGTH_BYTES:
        raise EncryptionError("seed must be exactly 256 bits")


def encrypt_data(plaintext: str, seed: bytes) -> str:
    """
    Encrypt a string under the symmetric seed.

    Args:
        plaintext: Text to encrypt
        seed: 32-byte seed from KeyMaterial or Session

    Returns:
        Encrypted payload string
    """
    _check_seed(seed)
    try:
        data = plaintext.encode("utf-8")
    except (AttributeError, UnicodeEncodeError) as e:
        raise EncryptionError("plaintext is not encodable as UTF-8") from e

    iv = os.urandom(IV_LENGTH_BYTES)
    sealed = AESGCM(bytes(seed)).encrypt(iv, data, None)
    ciphertext, tag = sealed[:-TAG_LENGTH_BYTES], sealed[-TAG_LENGTH_BYTES:]

    return ".".join(
        (bytes_to_base64(iv), bytes_to_base64(tag), bytes_to_base64(ciphertext))
    )


def decrypt_data(payload: str, seed: bytes) -> str:
    """
    Decrypt a payload produced by encrypt_data.

    Raises:
        EncryptionError on malformed payloads, a wrong seed or tampered data
    """
    _check_seed(seed)
    parts = payload.split(".") if isinstance(payload, str) else []
    if len(parts) != 3:
        raise EncryptionError("payload must have three dot-separated parts")

    try:
        iv, tag, ciphertext = (base64_to_bytes(p) for p in parts)
    except (binascii.Error, ValueError) as e:
        raise EncryptionError("payload is not valid base64") from e
    if len(iv) != IV_LENGTH_BYTES or len(tag) != TAG_LENGTH_BYTES:
        raise EncryptionError("payload has an invalid iv or tag length")

    try:
        plaintext = AESGCM(bytes(seed)).decrypt(iv, ciphertext + tag, None)
    except InvalidTag as e:
        raise EncryptionError("payload failed authentication") from e

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncryptionError("decrypted payload is not UTF-8") from e
