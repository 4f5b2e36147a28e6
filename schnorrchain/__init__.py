"""
schnorrchain: Schnorr identities, naive multi-signatures and chained
delegation over a prime-order group.

- **Identity primitives**: key pairs, hash-to-scalar, conversion of a
  foreign ECDSA key into the group.
- **Schnorr sign / verify** over a caller-supplied challenge.
- **Aggregation**: summing signatures and keys made over one shared
  challenge gives a signature valid for the summed key.
- **Delegation chain** (experimental): each layer's key is the previous
  layer's signature response plus a fresh scalar; each challenge binds
  the predecessor's payload and commitment.

Security caveat: the multi-signature challenge  c = H(m ‖ Y)  does not
bind the commitments, so naive aggregation is open to rogue-key attacks.

Quick start
-----------
::

    from schnorrchain import (
        generate_key_pair, aggregate, aggregate_public_keys,
        message_challenge, sign, verify,
    )

    a, b = generate_key_pair(), generate_key_pair()
    Y = aggregate_public_keys([a.public, b.public])
    c = message_challenge(b"m", Y)

    result = aggregate(sign(c, a.private), sign(c, b.private),
                       a.public, b.public)
    assert verify(c, result.signature, result.public_key)
"""

__version__ = "0.1.0"

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    SchnorrChainError,
    PreconditionError,
    ForeignGroupError,
    EntropyError,
)

# ── group adapters ──────────────────────────────────────────────────────
from .group import Group, Scalar, Point
from .curve import SECP256K1, Secp256k1Group
from .modp import ModPGroup
from .config import SchnorrParams, DEFAULT_PARAMS

# ── hashing ─────────────────────────────────────────────────────────────
from .hash import (
    hash_to_scalar,
    hash_transcript,
    encode_transcript,
    message_challenge,
    layer_challenge,
)

# ── identity, signing, aggregation ──────────────────────────────────────
from .keys import (
    KeyPair,
    generate_key_pair,
    key_pair_from_scalar,
    key_pair_from_ecdsa,
    generate_ecdsa_key,
)
from .signing import Signature, sign, verify
from .aggregate import (
    AggregateResult,
    aggregate,
    aggregate_many,
    aggregate_public_keys,
)

# ── delegation ──────────────────────────────────────────────────────────
from .delegation import (
    LayerKey,
    DelegationToken,
    DelegationChain,
    derive_next_layer_key,
    build_delegation_token,
    token_challenge,
    verify_token,
)

__all__ = [
    "__version__",
    # errors
    "SchnorrChainError", "PreconditionError", "ForeignGroupError",
    "EntropyError",
    # groups
    "Group", "Scalar", "Point", "SECP256K1", "Secp256k1Group", "ModPGroup",
    "SchnorrParams", "DEFAULT_PARAMS",
    # hashing
    "hash_to_scalar", "hash_transcript", "encode_transcript",
    "message_challenge", "layer_challenge",
    # identity
    "KeyPair", "generate_key_pair", "key_pair_from_scalar",
    "key_pair_from_ecdsa", "generate_ecdsa_key",
    # signing
    "Signature", "sign", "verify",
    # aggregation
    "AggregateResult", "aggregate", "aggregate_many", "aggregate_public_keys",
    # delegation
    "LayerKey", "DelegationToken", "DelegationChain",
    "derive_next_layer_key", "build_delegation_token",
    "token_challenge", "verify_token",
]
