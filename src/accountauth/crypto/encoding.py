"""Base64 helpers matching the account service's encodings."""

import base64


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_to_bytes(data: str) -> bytes:
    return base64.b64decode(data, validate=True)


def bytes_to_base64url(data: bytes) -> str:
    """URL-safe base64 without padding, as used for public keys and signatures."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_to_bytes(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)
