"""Schnorr sign / verify properties."""

import pytest

from schnorrchain import (
    SECP256K1,
    ForeignGroupError,
    PreconditionError,
    Signature,
    generate_key_pair,
    hash_to_scalar,
    message_challenge,
    sign,
    verify,
)

from .conftest import TINY_GROUP

TRIALS = 25


def test_sign_then_verify_holds_for_random_keys_and_challenges():
    for _ in range(TRIALS):
        pair = generate_key_pair()
        c = SECP256K1.random_scalar()
        assert verify(c, sign(c, pair.private), pair.public)


def test_wrong_challenge_fails():
    pair = generate_key_pair()
    for _ in range(TRIALS):
        c = SECP256K1.random_scalar()
        c_other = SECP256K1.random_scalar()
        assert c != c_other
        assert not verify(c_other, sign(c, pair.private), pair.public)


def test_wrong_key_fails(key_a, key_b):
    c = hash_to_scalar(b"m")
    assert not verify(c, sign(c, key_a.private), key_b.public)


def test_tampered_signature_fails(key_a):
    c = hash_to_scalar(b"m")
    sig = sign(c, key_a.private)
    bumped = Signature(R=sig.R, S=sig.S + SECP256K1.one())
    moved = Signature(R=sig.R + SECP256K1.base, S=sig.S)
    assert not verify(c, bumped, key_a.public)
    assert not verify(c, moved, key_a.public)


def test_nonce_is_fresh_per_call(key_a):
    c = hash_to_scalar(b"same challenge")
    commitments = {sign(c, key_a.private).R for _ in range(TRIALS)}
    assert len(commitments) == TRIALS


def test_signature_fields_and_aliases(key_a):
    c = hash_to_scalar(b"m")
    sig = sign(c, key_a.private)
    assert sig.commitment is sig.R
    assert sig.response is sig.S
    assert sig.group == SECP256K1


def test_serialisation(key_a):
    c = hash_to_scalar(b"m")
    sig = sign(c, key_a.private)
    data = sig.to_bytes()
    assert len(data) == 65
    restored = Signature.from_bytes(data, SECP256K1)
    assert restored == sig
    assert verify(c, restored, key_a.public)
    with pytest.raises(PreconditionError):
        Signature.from_bytes(data[:-1], SECP256K1)


def test_worked_example(key_a, key_b):
    c = message_challenge("m", key_a.public + key_b.public)
    assert verify(c, sign(c, key_a.private), key_a.public)
    assert verify(c, sign(c, key_b.private), key_b.public)


def test_swapped_group(tiny_params):
    pair = generate_key_pair(tiny_params)
    c = hash_to_scalar(b"m", tiny_params)
    sig = sign(c, pair.private, tiny_params)
    assert sig.group == TINY_GROUP
    assert verify(c, sig, pair.public, tiny_params)
    assert len(sig.to_bytes()) == TINY_GROUP.point_bytes + TINY_GROUP.scalar_bytes


class TestPreconditions:
    def test_foreign_private_key(self):
        with pytest.raises(ForeignGroupError):
            sign(hash_to_scalar(b"m"), TINY_GROUP.scalar(3))

    def test_foreign_public_key(self, key_a):
        c = hash_to_scalar(b"m")
        sig = sign(c, key_a.private)
        with pytest.raises(ForeignGroupError):
            verify(c, sig, TINY_GROUP.base)

    def test_foreign_signature(self, tiny_params, key_a):
        pair = generate_key_pair(tiny_params)
        c = hash_to_scalar(b"m", tiny_params)
        sig = sign(c, pair.private, tiny_params)
        with pytest.raises(ForeignGroupError):
            verify(hash_to_scalar(b"m"), sig, key_a.public)

    def test_not_a_signature(self, key_a):
        with pytest.raises(PreconditionError):
            verify(hash_to_scalar(b"m"), (1, 2), key_a.public)

    def test_mixed_signature_components(self):
        with pytest.raises(ForeignGroupError):
            Signature(R=SECP256K1.base, S=TINY_GROUP.scalar(1))
