"""
Challenge hashing for schnorrchain.

Every challenge in the package goes through ``hash_to_scalar`` so that
all signatures rest on the same hash assumption.  Structured inputs are
first serialised with ``encode_transcript``, which length-prefixes
variable-size items so that two different transcripts can never encode
to the same byte string.

Known limitation
----------------
``message_challenge`` computes  c = H(m ‖ Y)  over the *aggregated*
public key and does **not** include the commitment R.  Naive key
aggregation on top of it is therefore open to the rogue-key attack: a
participant who picks Y_B = Y' − Y_A after seeing Y_A can sign alone
for the "aggregate".  Closing this needs a committed-nonce, multi-round
protocol (MuSig-style), which changes the interaction model and is not
done here.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from .config import DEFAULT_PARAMS, SchnorrParams
from .errors import PreconditionError
from .group import Point, Scalar

Payload = Union[bytes, str]


# ── encoding ────────────────────────────────────────────────────────────
def _encode_item(item: Any, params: SchnorrParams) -> bytes:
    """
    Canonical encoding of a protocol element for hashing.

    Length-prefixing is used for variable-length items (bytes, str,
    lists) to ensure unambiguous parsing.
    """
    if isinstance(item, bytes):
        return len(item).to_bytes(4, "big") + item
    if isinstance(item, str):
        return _encode_item(item.encode("utf-8"), params)
    if isinstance(item, bool):
        raise PreconditionError("cannot encode bool into a transcript")
    if isinstance(item, int):
        if item < 0:
            raise PreconditionError("cannot encode negative int")
        if item >= 256 ** params.group.scalar_bytes:
            raise PreconditionError("int too wide for the scalar encoding")
        return item.to_bytes(params.group.scalar_bytes, "big")
    if isinstance(item, Scalar):
        return params.group.check_scalar(item).to_bytes()
    if isinstance(item, Point):
        return params.group.check_point(item).to_bytes()
    if isinstance(item, (list, tuple)):
        parts = b"".join(_encode_item(x, params) for x in item)
        return len(item).to_bytes(4, "big") + parts
    raise PreconditionError(
        f"cannot encode {type(item).__name__} into a transcript"
    )


def encode_transcript(*items: Any, params: SchnorrParams = DEFAULT_PARAMS) -> bytes:
    """Concatenate the canonical encodings of *items*."""
    return b"".join(_encode_item(x, params) for x in items)


def as_payload(payload: Payload) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    raise PreconditionError(
        f"payload must be bytes or str, got {type(payload).__name__}"
    )


# ── hash to scalar ──────────────────────────────────────────────────────
def hash_to_scalar(data: bytes, params: SchnorrParams = DEFAULT_PARAMS) -> Scalar:
    """
    H(data) reduced into Z_q.

    Deterministic; collision resistance is inherited from the configured
    hash function.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise PreconditionError(
            f"hash input must be bytes, got {type(data).__name__}"
        )
    h = params.new_hasher()
    h.update(data)
    return params.group.scalar_from_digest(h.digest())


def hash_transcript(*items: Any, params: SchnorrParams = DEFAULT_PARAMS) -> Scalar:
    """``hash_to_scalar`` over ``encode_transcript(*items)``."""
    return hash_to_scalar(encode_transcript(*items, params=params), params)


# ── challenges ──────────────────────────────────────────────────────────
def message_challenge(
    message: Payload,
    aggregate_key: Point,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> Scalar:
    r"""
    Multi-signature challenge  c = H(m ‖ Y).

    *aggregate_key* is the sum of all signers' public keys, known before
    anyone signs.  R is intentionally absent; see the module docstring.
    """
    return hash_transcript(as_payload(message), aggregate_key, params=params)


def layer_challenge(
    public_key: Point,
    payload: Payload,
    previous_payload: Optional[Payload] = None,
    previous_commitment: Optional[Point] = None,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> Scalar:
    r"""
    Delegation-layer challenge.

    Root layer:   c₀ = H(Y₀ ‖ payload₀)
    Layer i > 0:  cᵢ = H(Pᵢ ‖ payloadᵢ ‖ payloadᵢ₋₁ ‖ Rᵢ₋₁)

    Binding the predecessor's payload and commitment stops a token from
    being replayed against, or reordered into, a different transcript.
    """
    if (previous_payload is None) != (previous_commitment is None):
        raise PreconditionError(
            "previous_payload and previous_commitment go together"
        )
    if previous_payload is None:
        return hash_transcript(public_key, as_payload(payload), params=params)
    return hash_transcript(
        public_key,
        as_payload(payload),
        as_payload(previous_payload),
        previous_commitment,
        params=params,
    )
