"""
Single-party Schnorr signing and verification.

    sign:    k ←$ Z_q,   R = k·G,   S = k + c·x
    verify:  S·G  ==  R + c·Y

The challenge *c* is supplied by the caller (see ``hash.py`` for how
this package derives it).  Note that the challenges used here hash the
message with the public key only, not with R; the consequences for
aggregation are documented in ``hash.py``.

Nonce discipline
----------------
A fresh *k* is drawn from the CSPRNG on every call.  Reusing *k* for two
different challenges under the same key reveals the key:

    x = (S₁ − S₂) / (c₁ − c₂)

so there is no deterministic, counter-based or caller-supplied nonce
path, and a failed signing attempt is never retried with the same *k*.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from .config import DEFAULT_PARAMS, SchnorrParams
from .errors import PreconditionError
from .group import Group, Point, Scalar


@dataclass(frozen=True)
class Signature:
    """
    Schnorr signature  (R, S).

    Not bound to a key: any (challenge, signature, public key) triple can
    be checked independently.
    """

    R: Point       # commitment  R = k · G
    S: Scalar      # response    S = k + c · x

    def __post_init__(self) -> None:
        if not isinstance(self.R, Point) or not isinstance(self.S, Scalar):
            raise PreconditionError("signature needs a Point R and a Scalar S")
        self.R.group.check_scalar(self.S, "signature response")

    @property
    def commitment(self) -> Point:
        return self.R

    @property
    def response(self) -> Scalar:
        return self.S

    @property
    def group(self) -> Group:
        return self.R.group

    def to_bytes(self) -> bytes:
        """Serialise as R ‖ S (65 bytes on secp256k1)."""
        return self.R.to_bytes() + self.S.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes, group: Group) -> Signature:
        size = group.point_bytes + group.scalar_bytes
        if len(data) != size:
            raise PreconditionError(f"expected {size} bytes, got {len(data)}")
        R = group.point_from_bytes(data[: group.point_bytes])
        S = group.scalar_from_bytes(data[group.point_bytes:])
        return cls(R=R, S=S)


def sign(
    challenge: Scalar,
    private_key: Scalar,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> Signature:
    """
    Sign *challenge* with *private_key*.

    Raises ``ForeignGroupError`` for elements of another group and
    ``EntropyError`` if no nonce can be drawn.
    """
    group = params.group
    group.check_scalar(challenge, "challenge")
    group.check_scalar(private_key, "private key")

    k = group.random_scalar()
    R = group.base_mul(k)
    S = k + challenge * private_key
    return Signature(R=R, S=S)


def verify(
    challenge: Scalar,
    signature: Signature,
    public_key: Point,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> bool:
    """
    Standard Schnorr verification:  S·G  ==  R + c·Y.

    Returns ``False`` for a signature that does not verify; raises only
    for malformed or foreign-group inputs.
    """
    group = params.group
    group.check_scalar(challenge, "challenge")
    if not isinstance(signature, Signature):
        raise PreconditionError(
            f"expected a Signature, got {type(signature).__name__}"
        )
    group.check_point(signature.R, "signature commitment")
    group.check_point(public_key, "public key")

    lhs = group.base_mul(signature.S)
    rhs = signature.R + (challenge * public_key)
    return hmac.compare_digest(lhs.to_bytes(), rhs.to_bytes())
