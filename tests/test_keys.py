"""Key generation and foreign-key conversion."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from schnorrchain import (
    SECP256K1,
    ForeignGroupError,
    KeyPair,
    PreconditionError,
    generate_ecdsa_key,
    generate_key_pair,
    hash_to_scalar,
    key_pair_from_ecdsa,
    key_pair_from_scalar,
)

from .conftest import TINY_GROUP


def test_generated_pair_satisfies_invariant(key_a):
    assert key_a.public == SECP256K1.base_mul(key_a.private)
    assert not key_a.private.is_zero()


def test_generated_pairs_are_distinct():
    assert generate_key_pair() != generate_key_pair()


def test_pair_in_swapped_group(tiny_params):
    pair = generate_key_pair(tiny_params)
    assert pair.public.group == TINY_GROUP
    assert pair.public == TINY_GROUP.base_mul(pair.private)


def test_mismatched_pair_is_rejected(key_a, key_b):
    with pytest.raises(PreconditionError):
        KeyPair(private=key_a.private, public=key_b.public)


def test_pair_across_groups_is_rejected(key_a):
    with pytest.raises(ForeignGroupError):
        KeyPair(private=key_a.private, public=TINY_GROUP.base)


def test_from_scalar_checks_group(key_a):
    with pytest.raises(ForeignGroupError):
        key_pair_from_scalar(TINY_GROUP.scalar(5))
    assert key_pair_from_scalar(key_a.private) == key_a


def test_repr_hides_private_key(key_a):
    assert "private" not in repr(key_a)


class TestEcdsaConversion:
    def test_hashes_private_integer(self):
        key = generate_ecdsa_key()
        d = key.private_numbers().private_value
        pair = key_pair_from_ecdsa(key)
        expected = hash_to_scalar(d.to_bytes((d.bit_length() + 7) // 8, "big"))
        assert pair.private == expected
        assert pair.public == SECP256K1.base_mul(expected)

    def test_deterministic(self):
        key = ec.generate_private_key(ec.SECP384R1())
        assert key_pair_from_ecdsa(key) == key_pair_from_ecdsa(key)

    def test_rejects_other_key_types(self):
        with pytest.raises(PreconditionError):
            key_pair_from_ecdsa(ed25519.Ed25519PrivateKey.generate())
