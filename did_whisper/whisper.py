# did_whisper/whisper.py
"""
Encrypt a message for a DID and decrypt messages addressed to a DID we own.

    produce:  resolve (ANY)   -> Ed25519 -> X25519 -> seal -> Envelope
    consume:  resolve (LOCAL) -> Ed25519 -> X25519 -> open -> plaintext
"""

import logging

from did_whisper import sealed_box
from did_whisper.encoding import b58decode, b58encode
from did_whisper.errors import DecryptionFailed, DecryptionKeyUnavailable, MalformedKeyId
from did_whisper.expiration import to_seconds
from did_whisper.models import EncryptionKeyPair, Envelope, Scope
from did_whisper.resolver import IdentityKeyResolver

logger = logging.getLogger(__name__)


def extract_did(key_id: str | None) -> str | None:
    """
    "did:example:abc#key-1" -> "did:example:abc".
    None when there is no DID in front of the first '#'.
    """
    if not isinstance(key_id, str):
        return None
    did = key_id.split("#", 1)[0]
    return did or None


def encrypt_message(message, keys: EncryptionKeyPair) -> bytes:
    if isinstance(message, str):
        message = message.encode("utf-8")
    elif not isinstance(message, (bytes, bytearray)):
        raise TypeError(f"message must be str or bytes, not {type(message).__name__}")
    return sealed_box.seal(message, keys.public_key)


def decrypt_message(cipher: bytes, keys: EncryptionKeyPair) -> bytes:
    if keys.secret_key is None:
        raise DecryptionKeyUnavailable(f"no secret key available for {keys.key_id}")
    return sealed_box.open(cipher, keys.public_key, keys.secret_key)


def decode_text(plaintext: bytes) -> str:
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionFailed("plaintext is not UTF-8 text") from e


class Whisper:
    """
    resolver: IdentityKeyResolver used for every call.
    store:    MessageStoreClient (only needed for save/send/fetch_and_consume).
    """

    def __init__(self, resolver: IdentityKeyResolver, store=None):
        self.resolver = resolver
        self.store = store

    # -----------------------------------------------------------
    # Sending side
    # -----------------------------------------------------------

    def produce(self, did: str, plaintext, expiration=None, key_id: str | None = None) -> Envelope:
        keys = self.resolver.resolve_encryption_key_pair(did, Scope.ANY, key_id)
        cipher = encrypt_message(plaintext, keys)
        logger.debug("Sealed %d-byte message for %s", len(cipher) - sealed_box.SEAL_OVERHEAD, keys.key_id)

        return Envelope(
            key_id=keys.key_id,
            expiration_seconds=to_seconds(expiration),
            cipher=b58encode(cipher),
        )

    def save(self, envelope: Envelope, url: str):
        return self._require_store().put(envelope, url)

    def send(self, did: str, plaintext, url: str, expiration=None):
        """produce() then save(); returns the store acknowledgment."""
        return self.save(self.produce(did, plaintext, expiration), url)

    # -----------------------------------------------------------
    # Receiving side
    # -----------------------------------------------------------

    def consume(self, did: str, ciphertext, key_id: str | None = None) -> bytes:
        """
        Open a message addressed to one of our own DIDs.
        ciphertext may be raw bytes or base58 text. Returns raw bytes;
        use consume_text() for messages produced from a str.
        """
        if isinstance(ciphertext, str):
            try:
                ciphertext = b58decode(ciphertext)
            except ValueError as e:
                raise DecryptionFailed(f"cipher is not base58: {e}") from e

        keys = self.resolver.resolve_encryption_key_pair(did, Scope.LOCAL, key_id)
        return decrypt_message(ciphertext, keys)

    def consume_text(self, did: str, ciphertext, key_id: str | None = None) -> str:
        return decode_text(self.consume(did, ciphertext, key_id))

    def consume_envelope(self, envelope: Envelope) -> bytes:
        did = extract_did(envelope.key_id)
        if did is None:
            raise MalformedKeyId(f"key id has no DID prefix: {envelope.key_id!r}")
        return self.consume(did, envelope.cipher, key_id=envelope.key_id)

    def fetch_and_consume(self, url: str) -> bytes:
        envelope = self._require_store().get(url)
        return self.consume_envelope(envelope)

    def _require_store(self):
        if self.store is None:
            raise RuntimeError("Whisper was created without a message store")
        return self.store
