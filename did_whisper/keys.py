# did_whisper/keys.py
"""
Ed25519 (signing) -> Curve25519 (encryption) key conversion.

The mapping is one-way and deterministic: the same authentication key in a
DID document always yields the same sealed-box key pair.
"""

from nacl import bindings
from nacl.exceptions import CryptoError

from did_whisper.errors import InvalidKeyEncoding
from did_whisper.models import EncryptionKeyPair, SigningKeyPair

SIGN_PUBLIC_KEY_SIZE = bindings.crypto_sign_PUBLICKEYBYTES  # 32
SIGN_SECRET_KEY_SIZE = bindings.crypto_sign_SECRETKEYBYTES  # 64
BOX_PUBLIC_KEY_SIZE = bindings.crypto_box_PUBLICKEYBYTES    # 32
BOX_SECRET_KEY_SIZE = bindings.crypto_box_SECRETKEYBYTES    # 32


def to_encryption_public_key(signing_public_key: bytes) -> bytes:
    if not isinstance(signing_public_key, bytes) or len(signing_public_key) != SIGN_PUBLIC_KEY_SIZE:
        raise InvalidKeyEncoding(
            f"Ed25519 public key must be {SIGN_PUBLIC_KEY_SIZE} bytes, "
            f"got {_size(signing_public_key)}"
        )
    try:
        return bindings.crypto_sign_ed25519_pk_to_curve25519(signing_public_key)
    except CryptoError as e:
        # not a point on the curve
        raise InvalidKeyEncoding(f"Ed25519 public key rejected: {e}") from e


def to_encryption_secret_key(signing_secret_key: bytes) -> bytes:
    if not isinstance(signing_secret_key, bytes) or len(signing_secret_key) != SIGN_SECRET_KEY_SIZE:
        raise InvalidKeyEncoding(
            f"Ed25519 secret key must be {SIGN_SECRET_KEY_SIZE} bytes, "
            f"got {_size(signing_secret_key)}"
        )
    try:
        return bindings.crypto_sign_ed25519_sk_to_curve25519(signing_secret_key)
    except CryptoError as e:
        raise InvalidKeyEncoding(f"Ed25519 secret key rejected: {e}") from e


def to_encryption_key_pair(signing: SigningKeyPair) -> EncryptionKeyPair:
    """
    Public half is always derived; secret half only when the signing
    key pair carries its secret key.
    """
    secret_key = None
    if signing.secret_key is not None:
        secret_key = to_encryption_secret_key(signing.secret_key)

    return EncryptionKeyPair(
        key_id=signing.key_id,
        public_key=to_encryption_public_key(signing.public_key),
        secret_key=secret_key,
    )


def _size(value) -> str:
    try:
        return str(len(value))
    except TypeError:
        return type(value).__name__
