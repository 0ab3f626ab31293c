# did_whisper/resolver.py

import logging
from typing import Protocol

from did_whisper.config import WHISPER_MODE
from did_whisper.encoding import b58decode
from did_whisper.errors import DocumentNotFound, InvalidKeyEncoding, KeyNotFound
from did_whisper.keys import to_encryption_key_pair
from did_whisper.models import AuthenticationEntry, EncryptionKeyPair, Scope, SigningKeyPair

logger = logging.getLogger(__name__)


class DocumentFetcher(Protocol):
    def fetch_document(self, did: str, location: str, mode: str) -> dict | None:
        """
        Return the DID document, or None when it does not exist.
        Transport failures raise ResolutionTransportError.
        """
        ...


# -----------------------------------------------------------
# Document parsing
# -----------------------------------------------------------

def _entry_from_key(key: dict) -> AuthenticationEntry | None:
    key_id = key.get("id")
    public_key = key.get("publicKeyBase58")
    if not isinstance(key_id, str) or not isinstance(public_key, str):
        return None

    secret_key = None
    private = key.get("privateKey")
    if isinstance(private, dict):
        secret_key = private.get("privateKeyBase58")
    elif isinstance(key.get("privateKeyBase58"), str):
        secret_key = key["privateKeyBase58"]

    return AuthenticationEntry(id=key_id, public_key=public_key, secret_key=secret_key)


def authentication_entries(doc: dict) -> list[AuthenticationEntry]:
    """
    Flatten doc["authentication"] into key entries, in document order.

    Accepts both:
      - [{"id": ..., "publicKeyBase58": ...}, ...]
      - [{"type": "...", "publicKey": [{"id": ..., "publicKeyBase58": ...}]}, ...]
    """
    auth = doc.get("authentication") if isinstance(doc, dict) else None
    if not isinstance(auth, list):
        return []

    entries = []
    for item in auth:
        if not isinstance(item, dict):
            continue
        keys = item.get("publicKey")
        if isinstance(keys, list):
            candidates = [k for k in keys if isinstance(k, dict)]
        else:
            candidates = [item]
        for key in candidates:
            entry = _entry_from_key(key)
            if entry is not None:
                entries.append(entry)
    return entries


def select_entry(doc: dict, key_id: str | None = None) -> AuthenticationEntry:
    entries = authentication_entries(doc)
    if not entries:
        raise KeyNotFound("DID document has no authentication keys")

    if key_id is None:
        return entries[0]

    for entry in entries:
        if entry.id == key_id:
            return entry
    raise KeyNotFound(f"authentication key {key_id} not found in DID document")


def decode_signing_key_pair(entry: AuthenticationEntry) -> SigningKeyPair:
    try:
        public_key = b58decode(entry.public_key)
    except ValueError as e:
        raise InvalidKeyEncoding(f"public key of {entry.id}: {e}") from e

    secret_key = None
    if entry.secret_key is not None:
        try:
            secret_key = b58decode(entry.secret_key)
        except ValueError as e:
            raise InvalidKeyEncoding(f"secret key of {entry.id}: {e}") from e

    return SigningKeyPair(key_id=entry.id, public_key=public_key, secret_key=secret_key)


# -----------------------------------------------------------
# Resolver
# -----------------------------------------------------------

class IdentityKeyResolver:
    """
    Turns a DID into the sealed-box key pair of its authentication key.
    Documents are fetched fresh on every call through the injected fetcher.
    """

    def __init__(self, fetcher: DocumentFetcher, mode: str = WHISPER_MODE):
        self.fetcher = fetcher
        self.mode = mode

    def fetch_document(self, did: str, scope: Scope) -> dict:
        doc = self.fetcher.fetch_document(did, Scope(scope).value, self.mode)
        if doc is None:
            raise DocumentNotFound(f"DID document not found: {did} (scope={Scope(scope).name})")
        logger.debug("Resolved DID document %s (scope=%s)", did, Scope(scope).name)
        return doc

    def resolve_signing_key_pair(self, did: str, scope: Scope, key_id: str | None = None) -> SigningKeyPair:
        doc = self.fetch_document(did, scope)
        return decode_signing_key_pair(select_entry(doc, key_id))

    def resolve_encryption_key_pair(
        self, did: str, scope: Scope, key_id: str | None = None
    ) -> EncryptionKeyPair:
        return to_encryption_key_pair(self.resolve_signing_key_pair(did, scope, key_id))
