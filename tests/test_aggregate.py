"""Naive two-party and n-party aggregation."""

import pytest

from schnorrchain import (
    SECP256K1,
    AggregateResult,
    ForeignGroupError,
    PreconditionError,
    aggregate,
    aggregate_many,
    aggregate_public_keys,
    generate_key_pair,
    message_challenge,
    sign,
    verify,
)

from .conftest import TINY_GROUP


def _signed(c, *pairs):
    return [sign(c, p.private) for p in pairs]


def test_two_party_aggregate_verifies(key_a, key_b):
    Y = aggregate_public_keys([key_a.public, key_b.public])
    c = message_challenge(b"m", Y)
    sig_a, sig_b = _signed(c, key_a, key_b)

    result = aggregate(sig_a, sig_b, key_a.public, key_b.public)

    assert isinstance(result, AggregateResult)
    assert result.public_key == Y
    assert result.signature.R == sig_a.R + sig_b.R
    assert result.signature.S == sig_a.S + sig_b.S
    assert verify(c, result.signature, result.public_key)


def test_aggregate_is_commutative(key_a, key_b):
    c = message_challenge(b"m", key_a.public + key_b.public)
    sig_a, sig_b = _signed(c, key_a, key_b)
    assert aggregate(sig_a, sig_b, key_a.public, key_b.public) == aggregate(
        sig_b, sig_a, key_b.public, key_a.public
    )


def test_aggregate_fails_against_single_key(key_a, key_b):
    c = message_challenge(b"m", key_a.public + key_b.public)
    sig_a, sig_b = _signed(c, key_a, key_b)
    result = aggregate(sig_a, sig_b, key_a.public, key_b.public)
    assert not verify(c, result.signature, key_a.public)


def test_different_challenges_do_not_aggregate(key_a, key_b):
    Y = key_a.public + key_b.public
    c1 = message_challenge(b"m1", Y)
    c2 = message_challenge(b"m2", Y)
    result = aggregate(
        sign(c1, key_a.private), sign(c2, key_b.private),
        key_a.public, key_b.public,
    )
    assert not verify(c1, result.signature, result.public_key)
    assert not verify(c2, result.signature, result.public_key)


def test_n_party_aggregate_is_order_independent():
    pairs = [generate_key_pair() for _ in range(5)]
    publics = [p.public for p in pairs]
    c = message_challenge(b"five signers", aggregate_public_keys(publics))
    sigs = _signed(c, *pairs)

    forward = aggregate_many(sigs, publics)
    backward = aggregate_many(sigs[::-1], publics[::-1])

    assert forward == backward
    assert verify(c, forward.signature, forward.public_key)


def test_single_party_aggregate_is_identity(key_a):
    c = message_challenge(b"m", key_a.public)
    sig = sign(c, key_a.private)
    result = aggregate_many([sig], [key_a.public])
    assert result == AggregateResult(signature=sig, public_key=key_a.public)


def test_rogue_key_attack_is_not_prevented(key_a):
    # documented limitation: c = H(m ‖ Y) lets one party pick Y_B = Y' − Y_A
    attacker = generate_key_pair()
    rogue_public = attacker.public - key_a.public
    Y = aggregate_public_keys([key_a.public, rogue_public])
    assert Y == attacker.public

    c = message_challenge(b"forged", Y)
    forged = sign(c, attacker.private)
    assert verify(c, forged, Y)


class TestPreconditions:
    def test_empty_inputs(self):
        with pytest.raises(PreconditionError):
            aggregate_public_keys([])
        with pytest.raises(PreconditionError):
            aggregate_many([], [])

    def test_length_mismatch(self, key_a):
        c = message_challenge(b"m", key_a.public)
        with pytest.raises(PreconditionError):
            aggregate_many([sign(c, key_a.private)], [key_a.public, key_a.public])

    def test_foreign_public_key(self, key_a):
        c = message_challenge(b"m", key_a.public)
        sig = sign(c, key_a.private)
        with pytest.raises(ForeignGroupError):
            aggregate(sig, sig, key_a.public, TINY_GROUP.base)
        with pytest.raises(ForeignGroupError):
            aggregate_public_keys([key_a.public, TINY_GROUP.base])

    def test_not_a_signature(self, key_a):
        with pytest.raises(PreconditionError):
            aggregate(None, None, key_a.public, key_a.public)
        with pytest.raises(PreconditionError):
            aggregate_many([None], [SECP256K1.base])
