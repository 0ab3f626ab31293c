# tests/test_keys.py

import pytest
from nacl import bindings
from nacl.signing import SigningKey

from did_whisper.errors import InvalidKeyEncoding
from did_whisper.keys import (
    to_encryption_key_pair,
    to_encryption_public_key,
    to_encryption_secret_key,
)
from did_whisper.models import SigningKeyPair

from conftest import ALICE_KEY_ID, ALICE_SEED, ALICE_SIGN_PUBLIC, ALICE_SIGN_SECRET


class TestTestVector:
    def test_seed_matches_public_key(self):
        assert bytes(SigningKey(ALICE_SEED).verify_key) == ALICE_SIGN_PUBLIC


class TestPublicKeyConversion:
    def test_size(self):
        assert len(to_encryption_public_key(ALICE_SIGN_PUBLIC)) == 32

    def test_deterministic(self):
        assert to_encryption_public_key(ALICE_SIGN_PUBLIC) == to_encryption_public_key(ALICE_SIGN_PUBLIC)

    def test_distinct_keys_distinct_output(self, random_signing_key):
        pk, _ = random_signing_key
        assert to_encryption_public_key(pk) != to_encryption_public_key(ALICE_SIGN_PUBLIC)

    @pytest.mark.parametrize("bad", [b"", b"\x01" * 31, b"\x01" * 33, ALICE_SIGN_SECRET])
    def test_wrong_length_rejected(self, bad):
        with pytest.raises(InvalidKeyEncoding):
            to_encryption_public_key(bad)

    def test_non_bytes_rejected(self):
        with pytest.raises(InvalidKeyEncoding):
            to_encryption_public_key(ALICE_SIGN_PUBLIC.hex())


class TestSecretKeyConversion:
    def test_size(self):
        assert len(to_encryption_secret_key(ALICE_SIGN_SECRET)) == 32

    def test_deterministic(self):
        assert to_encryption_secret_key(ALICE_SIGN_SECRET) == to_encryption_secret_key(ALICE_SIGN_SECRET)

    def test_halves_match(self, random_signing_key):
        pk, sk = random_signing_key
        curve_pk = to_encryption_public_key(pk)
        curve_sk = to_encryption_secret_key(sk)
        assert bindings.crypto_scalarmult_base(curve_sk) == curve_pk

    def test_alice_halves_match(self):
        curve_sk = to_encryption_secret_key(ALICE_SIGN_SECRET)
        assert bindings.crypto_scalarmult_base(curve_sk) == to_encryption_public_key(ALICE_SIGN_PUBLIC)

    @pytest.mark.parametrize("bad", [b"", ALICE_SEED, ALICE_SIGN_SECRET + b"\x00"])
    def test_wrong_length_rejected(self, bad):
        with pytest.raises(InvalidKeyEncoding):
            to_encryption_secret_key(bad)


class TestKeyPairConversion:
    def test_with_secret(self):
        pair = to_encryption_key_pair(SigningKeyPair(ALICE_KEY_ID, ALICE_SIGN_PUBLIC, ALICE_SIGN_SECRET))
        assert pair.key_id == ALICE_KEY_ID
        assert pair.public_key == to_encryption_public_key(ALICE_SIGN_PUBLIC)
        assert pair.secret_key == to_encryption_secret_key(ALICE_SIGN_SECRET)
        assert pair.can_decrypt

    def test_public_only(self):
        pair = to_encryption_key_pair(SigningKeyPair(ALICE_KEY_ID, ALICE_SIGN_PUBLIC))
        assert pair.public_key == to_encryption_public_key(ALICE_SIGN_PUBLIC)
        assert pair.secret_key is None
        assert not pair.can_decrypt
