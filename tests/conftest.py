# tests/conftest.py

import pytest
from nacl.signing import SigningKey

from did_whisper.encoding import b58encode
from did_whisper.resolver import IdentityKeyResolver

# RFC 8032, section 7.1, TEST 1
ALICE_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
ALICE_SIGN_PUBLIC = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")
ALICE_SIGN_SECRET = ALICE_SEED + ALICE_SIGN_PUBLIC

ALICE_DID = "did:example:alice"
ALICE_KEY_ID = ALICE_DID + "#key-1"


def make_document(did, key_id, public_key, secret_key=None, nested=True):
    key = {
        "id": key_id,
        "type": "Ed25519VerificationKey2018",
        "controller": did,
        "publicKeyBase58": b58encode(public_key),
    }
    if secret_key is not None:
        key["privateKey"] = {"privateKeyBase58": b58encode(secret_key)}

    if nested:
        auth = [{"type": "Ed25519SignatureAuthentication2018", "publicKey": [key]}]
    else:
        auth = [key]
    return {"@context": "https://w3id.org/did/v0.11", "id": did, "authentication": auth}


class StubFetcher:
    """
    In-memory document fetcher.
    local: documents we own (with secret keys); ledger: public documents.
    """

    def __init__(self, local=None, ledger=None):
        self.local = dict(local or {})
        self.ledger = dict(ledger or {})
        self.calls = []

    def fetch_document(self, did, location, mode):
        self.calls.append((did, location, mode))
        if location in ("local", "all") and did in self.local:
            return self.local[did]
        if location in ("ledger", "all"):
            return self.ledger.get(did)
        return None


@pytest.fixture(autouse=True)
def temp_whisper_dir(tmp_path, monkeypatch):
    """
    Point all data paths at a fresh temp directory per test.
    """
    import did_whisper.config as cfg
    monkeypatch.setattr(cfg, "BASE_DIR", tmp_path / "whisper_data")
    monkeypatch.setattr(cfg, "DOCS_DIR", tmp_path / "whisper_data" / "dids")
    monkeypatch.setattr(cfg, "DB_PATH", tmp_path / "whisper_data" / "whisper.db")

    import did_whisper.documents as docs_mod
    monkeypatch.setattr(docs_mod, "DOCS_DIR", tmp_path / "whisper_data" / "dids")

    import did_whisper.database as db_mod
    db_mod.close_db()

    yield tmp_path

    db_mod.close_db()


@pytest.fixture
def alice_local_doc():
    return make_document(ALICE_DID, ALICE_KEY_ID, ALICE_SIGN_PUBLIC, ALICE_SIGN_SECRET)


@pytest.fixture
def alice_public_doc():
    return make_document(ALICE_DID, ALICE_KEY_ID, ALICE_SIGN_PUBLIC)


@pytest.fixture
def fetcher(alice_local_doc, alice_public_doc):
    return StubFetcher(local={ALICE_DID: alice_local_doc}, ledger={ALICE_DID: alice_public_doc})


@pytest.fixture
def resolver(fetcher):
    return IdentityKeyResolver(fetcher, mode="test")


@pytest.fixture
def random_signing_key():
    """A fresh Ed25519 key: (public 32 bytes, secret 64 bytes)."""
    sk = SigningKey.generate()
    pk = bytes(sk.verify_key)
    return pk, bytes(sk) + pk
