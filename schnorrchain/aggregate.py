"""
Naive key and signature aggregation.

Given two signatures over the **same** challenge *c*:

    S_A·G = R_A + c·Y_A
    S_B·G = R_B + c·Y_B

adding the equations gives

    (S_A + S_B)·G = (R_A + R_B) + c·(Y_A + Y_B)

i.e. ``(R_A + R_B, S_A + S_B)`` is an ordinary Schnorr signature for the
summed key.  No separate aggregate type is needed.

The aggregator cannot tell from its inputs whether both parties signed
the same challenge; that is the caller's responsibility.  Summation is
commutative and associative, so the n-party case is a fold.

This construction is vulnerable to rogue-key attacks (see ``hash.py``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .config import DEFAULT_PARAMS, SchnorrParams
from .errors import PreconditionError
from .group import Point
from .signing import Signature


@dataclass(frozen=True)
class AggregateResult:
    """Aggregate signature together with the aggregate public key."""

    signature: Signature
    public_key: Point


def aggregate(
    sig_a: Signature,
    sig_b: Signature,
    pub_a: Point,
    pub_b: Point,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> AggregateResult:
    """R = R_A + R_B,  S = S_A + S_B,  Y = Y_A + Y_B."""
    group = params.group
    for sig, what in ((sig_a, "first signature"), (sig_b, "second signature")):
        if not isinstance(sig, Signature):
            raise PreconditionError(f"{what} is not a Signature")
        group.check_point(sig.R, what)
    group.check_point(pub_a, "first public key")
    group.check_point(pub_b, "second public key")

    signature = Signature(R=sig_a.R + sig_b.R, S=sig_a.S + sig_b.S)
    return AggregateResult(signature=signature, public_key=pub_a + pub_b)


def aggregate_public_keys(
    public_keys: Sequence[Point],
    params: SchnorrParams = DEFAULT_PARAMS,
) -> Point:
    """
    Y = Σ Y_i.

    Computed before signing, since every party needs it for the shared
    challenge ``message_challenge(m, Y)``.
    """
    if not public_keys:
        raise PreconditionError("need at least one public key")
    return params.group.sum_points(
        [params.group.check_point(pk, "public key") for pk in public_keys]
    )


def aggregate_many(
    signatures: Sequence[Signature],
    public_keys: Sequence[Point],
    params: SchnorrParams = DEFAULT_PARAMS,
) -> AggregateResult:
    """Fold ``aggregate`` over n parties (order does not matter)."""
    if not signatures:
        raise PreconditionError("need at least one signature")
    if len(signatures) != len(public_keys):
        raise PreconditionError(
            f"{len(signatures)} signatures but {len(public_keys)} public keys"
        )
    if len(signatures) == 1:
        if not isinstance(signatures[0], Signature):
            raise PreconditionError("signature is not a Signature")
        params.group.check_point(signatures[0].R, "signature")
        return AggregateResult(
            signature=signatures[0],
            public_key=params.group.check_point(public_keys[0], "public key"),
        )

    result = aggregate(
        signatures[0], signatures[1], public_keys[0], public_keys[1], params,
    )
    for sig, pk in zip(signatures[2:], public_keys[2:]):
        result = aggregate(result.signature, sig, result.public_key, pk, params)
    return result
