# did_whisper/sealed_box.py

from nacl import bindings
from nacl.exceptions import CryptoError
from nacl.public import PublicKey, SealedBox

from did_whisper.errors import DecryptionFailed, InvalidKeyEncoding
from did_whisper.keys import BOX_PUBLIC_KEY_SIZE, BOX_SECRET_KEY_SIZE

# ephemeral public key (32) + Poly1305 tag (16)
SEAL_OVERHEAD = bindings.crypto_box_SEALBYTES


def seal(plaintext: bytes, recipient_public_key: bytes) -> bytes:
    """
    Anonymous public-key encryption for a Curve25519 recipient.
    A fresh ephemeral key pair is generated per call; the result is
    len(plaintext) + SEAL_OVERHEAD bytes long.
    """
    if not isinstance(recipient_public_key, bytes) or len(recipient_public_key) != BOX_PUBLIC_KEY_SIZE:
        raise InvalidKeyEncoding(f"recipient public key must be {BOX_PUBLIC_KEY_SIZE} bytes")

    box = SealedBox(PublicKey(recipient_public_key))
    return bytes(box.encrypt(bytes(plaintext)))


def open(ciphertext: bytes, recipient_public_key: bytes, recipient_secret_key: bytes) -> bytes:
    """
    Reverse of seal(). Any failure (short input, wrong key, tampering)
    raises DecryptionFailed; no partial plaintext is returned.
    """
    if len(recipient_public_key) != BOX_PUBLIC_KEY_SIZE:
        raise InvalidKeyEncoding(f"recipient public key must be {BOX_PUBLIC_KEY_SIZE} bytes")
    if len(recipient_secret_key) != BOX_SECRET_KEY_SIZE:
        raise InvalidKeyEncoding(f"recipient secret key must be {BOX_SECRET_KEY_SIZE} bytes")

    if len(ciphertext) < SEAL_OVERHEAD:
        raise DecryptionFailed(
            f"ciphertext is {len(ciphertext)} bytes, shorter than the {SEAL_OVERHEAD}-byte seal"
        )

    try:
        return bindings.crypto_box_seal_open(bytes(ciphertext), recipient_public_key, recipient_secret_key)
    except CryptoError as e:
        raise DecryptionFailed("sealed box did not verify for this recipient") from e
