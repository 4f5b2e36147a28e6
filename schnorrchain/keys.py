"""
Identity primitives: key pairs and foreign-key conversion.

A ``KeyPair`` is ``(x, Y = x·G)``.  Private keys come straight from the
group's CSPRNG sampler; an entropy failure propagates as
``EntropyError`` and is never papered over.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import ec

from .config import DEFAULT_PARAMS, SchnorrParams
from .errors import PreconditionError
from .group import Point, Scalar
from .hash import hash_to_scalar


@dataclass(frozen=True)
class KeyPair:
    """Private scalar *x* and public point *Y = x·G*."""

    private: Scalar
    public: Point

    def __post_init__(self) -> None:
        group = self.private.group if isinstance(self.private, Scalar) else None
        if group is None:
            raise PreconditionError("private key must be a Scalar")
        group.check_point(self.public, "public key")
        if group.base_mul(self.private) != self.public:
            raise PreconditionError("public key does not match private key")

    def __repr__(self) -> str:
        return f"KeyPair(public={self.public!r})"


def key_pair_from_scalar(
    private: Scalar,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> KeyPair:
    """Build the pair for a known private scalar."""
    params.group.check_scalar(private, "private key")
    return KeyPair(private=private, public=params.group.base_mul(private))


def generate_key_pair(params: SchnorrParams = DEFAULT_PARAMS) -> KeyPair:
    """Fresh uniformly random key pair."""
    return key_pair_from_scalar(params.group.random_scalar(), params)


# ── foreign keys ────────────────────────────────────────────────────────
def generate_ecdsa_key() -> ec.EllipticCurvePrivateKey:
    """A fresh NIST P-256 ECDSA key, e.g. one held by a legacy system."""
    return ec.generate_private_key(ec.SECP256R1())


def key_pair_from_ecdsa(
    key: ec.EllipticCurvePrivateKey,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> KeyPair:
    """
    Map an ECDSA private key of any curve into this group.

    The private integer *d* is serialised big-endian (minimal length)
    and hashed:  x = H(d).  The result is a new, unrelated discrete log;
    knowledge of *d* is required to reproduce it, but ECDSA signatures
    made with *d* say nothing about *x*.
    """
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise PreconditionError(
            f"expected an EllipticCurvePrivateKey, got {type(key).__name__}"
        )
    d = key.private_numbers().private_value
    d_bytes = d.to_bytes((d.bit_length() + 7) // 8, "big")
    private = hash_to_scalar(d_bytes, params)
    if private.is_zero():
        raise PreconditionError("converted key reduced to zero")
    return key_pair_from_scalar(private, params)
