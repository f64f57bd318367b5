"""
Deterministic key derivation from a BIP-39 mnemonic.

The same phrase always yields the same Ed25519 keypair and symmetric seed;
being able to reproduce them is what authenticates the user.
"""

from dataclasses import dataclass, field

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from mnemonic import Mnemonic

from ..errors import InvalidMnemonic

# PBKDF2 configuration (must match the web client)
PBKDF2_SALT = b"mnemonic"
PBKDF2_ITERATIONS = 2048
SEED_LENGTH_BYTES = 32  # 256 bits, used as both Ed25519 seed and AES key

VALID_STRENGTHS = (128, 160, 192, 224, 256)

_wordlist = Mnemonic("english")


@dataclass(frozen=True)
class KeyMaterial:
    """Keys derived from a mnemonic. Only public_key may leave the device."""
    public_key: bytes
    private_key: Ed25519PrivateKey = field(repr=False, compare=False)
    seed: bytes = field(repr=False)


def normalize_mnemonic(phrase: str) -> str:
    return " ".join(phrase.lower().split())


def validate_mnemonic(phrase: str) -> bool:
    """Check word list membership, word count and checksum."""
    if not isinstance(phrase, str):
        return False
    normalized = normalize_mnemonic(phrase)
    if not normalized:
        return False
    try:
        return _wordlist.check(normalized)
    except (ValueError, LookupError):
        return False


def generate_mnemonic(strength: int = 128) -> str:
    """Generate a fresh English mnemonic (128 bits -> 12 words, 256 -> 24)."""
    if strength not in VALID_STRENGTHS:
        raise ValueError(f"strength must be one of {VALID_STRENGTHS}")
    return _wordlist.generate(strength=strength)


def derive_keys(phrase: str) -> KeyMaterial:
    """
    Derive KeyMaterial from a mnemonic phrase.

    Args:
        phrase: BIP-39 English mnemonic

    Returns:
        KeyMaterial with a raw 32-byte public key

    Raises:
        InvalidMnemonic if the phrase fails word list or checksum validation
    """
    if not validate_mnemonic(phrase):
        raise InvalidMnemonic("mnemonic is not a valid BIP-39 phrase")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=SEED_LENGTH_BYTES,
        salt=PBKDF2_SALT,
        iterations=PBKDF2_ITERATIONS,
    )
    seed = kdf.derive(normalize_mnemonic(phrase).encode("utf-8"))

    private_key = Ed25519PrivateKey.from_private_bytes(seed)
    public_key = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return KeyMaterial(public_key=public_key, private_key=private_key, seed=seed)
