"""
Chained delegation tokens.

Each layer's signing key mixes the previous layer's signature response
*S* with a fresh scalar contributed by the new layer:

    xᵢ = Sᵢ₋₁ + x_freshᵢ
    Pᵢ = Sᵢ₋₁·G + Y_freshᵢ

and each layer signs a challenge that binds its own key and payload to
the predecessor's payload and commitment:

    c₀ = H(Y₀ ‖ payload₀)
    cᵢ = H(Pᵢ ‖ payloadᵢ ‖ payloadᵢ₋₁ ‖ Rᵢ₋₁)

Checking one layer is a single Schnorr verification.  End-to-end
assurance comes from ``DelegationChain.verify``, which re-derives every
challenge and every layer key from the token sequence.

.. warning::
   Experimental.  Sᵢ₋₁ is part of a published signature, so it adds no
   secrecy to xᵢ; the security of reusing signature material as key
   material has not been analysed.  Do not treat this as a vetted
   primitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .config import DEFAULT_PARAMS, SchnorrParams
from .errors import PreconditionError
from .group import Point, Scalar
from .hash import Payload, as_payload, layer_challenge
from .keys import KeyPair, generate_key_pair
from .log import get_logger
from .signing import Signature, sign, verify

log = get_logger(__name__)


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class LayerKey:
    """Signing key of a delegation layer:  (Sᵢ₋₁ + x_fresh,  Pᵢ)."""

    private: Scalar
    public: Point

    def __repr__(self) -> str:
        return f"LayerKey(public={self.public!r})"


@dataclass(frozen=True)
class DelegationToken:
    """
    One signed layer of a delegation chain.

    ``contribution`` is the fresh public key Y_fresh mixed into this
    layer's key; it is ``None`` for the root layer.
    """

    payload: bytes
    signature: Signature
    public_key: Point
    contribution: Optional[Point] = None

    def __post_init__(self) -> None:
        if not isinstance(self.payload, bytes):
            raise PreconditionError("token payload must be bytes")
        if not isinstance(self.signature, Signature):
            raise PreconditionError("token signature must be a Signature")
        group = self.signature.group
        group.check_point(self.public_key, "token public key")
        if self.contribution is not None:
            group.check_point(self.contribution, "token contribution")

    @property
    def commitment(self) -> Point:
        return self.signature.R

    @property
    def is_root(self) -> bool:
        return self.contribution is None


# ── primitives ──────────────────────────────────────────────────────────

def derive_next_layer_key(
    prev_signature: Signature,
    fresh_scalar: Scalar,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> LayerKey:
    """xᵢ = Sᵢ₋₁ + x_fresh,   Pᵢ = Sᵢ₋₁·G + x_fresh·G."""
    group = params.group
    if not isinstance(prev_signature, Signature):
        raise PreconditionError("previous signature must be a Signature")
    group.check_scalar(prev_signature.S, "previous signature response")
    group.check_scalar(fresh_scalar, "fresh scalar")

    private = prev_signature.S + fresh_scalar
    public = group.base_mul(prev_signature.S) + group.base_mul(fresh_scalar)
    return LayerKey(private=private, public=public)


def build_delegation_token(
    payload: Payload,
    challenge: Scalar,
    private_key: Scalar,
    *,
    contribution: Optional[Point] = None,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> DelegationToken:
    """Sign *challenge* and wrap it with the payload and public key."""
    signature = sign(challenge, private_key, params)
    return DelegationToken(
        payload=as_payload(payload),
        signature=signature,
        public_key=params.group.base_mul(private_key),
        contribution=contribution,
    )


def token_challenge(
    token: DelegationToken,
    previous: Optional[DelegationToken] = None,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> Scalar:
    """Rebuild the challenge a token was signed over."""
    if previous is None:
        return layer_challenge(token.public_key, token.payload, params=params)
    return layer_challenge(
        token.public_key,
        token.payload,
        previous.payload,
        previous.commitment,
        params=params,
    )


def verify_token(
    token: DelegationToken,
    previous: Optional[DelegationToken] = None,
    params: SchnorrParams = DEFAULT_PARAMS,
) -> bool:
    """Single-layer check: one Schnorr verification, no chain walk."""
    c = token_challenge(token, previous, params)
    return verify(c, token.signature, token.public_key, params)


# ── chain ───────────────────────────────────────────────────────────────

class DelegationChain:
    """
    Append-only sequence of delegation tokens.

    The chain holds no private keys: extending it needs only the last
    token's (public) response *S* and the new layer's fresh scalar.
    """

    def __init__(
        self,
        tokens: Iterable[DelegationToken] = (),
        params: SchnorrParams = DEFAULT_PARAMS,
    ) -> None:
        self._params = params
        self._tokens: List[DelegationToken] = []
        for t in tokens:
            if not isinstance(t, DelegationToken):
                raise PreconditionError("chain entries must be DelegationTokens")
            params.group.check_point(t.public_key, "token public key")
            self._tokens.append(t)

    # ── factories ──────────────────────────────────────────────────────

    @classmethod
    def start(
        cls,
        root: KeyPair,
        payload: Payload,
        params: SchnorrParams = DEFAULT_PARAMS,
    ) -> DelegationChain:
        """Sign the root layer with *root*:  c₀ = H(Y₀ ‖ payload₀)."""
        if not isinstance(root, KeyPair):
            raise PreconditionError("root must be a KeyPair")
        c0 = layer_challenge(root.public, payload, params=params)
        token = build_delegation_token(payload, c0, root.private, params=params)
        log.debug("started delegation chain")
        return cls([token], params)

    # ── growth ─────────────────────────────────────────────────────────

    def extend(
        self,
        payload: Payload,
        fresh: Union[KeyPair, Scalar, None] = None,
    ) -> DelegationToken:
        """
        Append a layer keyed by  S_head + x_fresh  and return its token.

        *fresh* defaults to a newly generated key pair.
        """
        if not self._tokens:
            raise PreconditionError("chain has no root layer; use start()")
        if fresh is None:
            fresh = generate_key_pair(self._params)
        fresh_scalar = fresh.private if isinstance(fresh, KeyPair) else fresh

        prev = self._tokens[-1]
        layer = derive_next_layer_key(prev.signature, fresh_scalar, self._params)
        c = layer_challenge(
            layer.public, payload, prev.payload, prev.commitment,
            params=self._params,
        )
        token = build_delegation_token(
            payload,
            c,
            layer.private,
            contribution=self._params.group.base_mul(fresh_scalar),
            params=self._params,
        )
        self._tokens.append(token)
        log.debug("extended delegation chain to layer %d", len(self._tokens) - 1)
        return token

    # ── verification ───────────────────────────────────────────────────

    def _layer_index(self, index: int) -> int:
        if not -len(self._tokens) <= index < len(self._tokens):
            raise IndexError(f"no layer {index} in a chain of {len(self)}")
        return index % len(self._tokens)

    def challenge_for(self, index: int) -> Scalar:
        """Rebuild the challenge of layer *index*; negative counts from the head."""
        index = self._layer_index(index)
        token = self._tokens[index]
        previous = self._tokens[index - 1] if index > 0 else None
        return token_challenge(token, previous, self._params)

    def verify_layer(self, index: int) -> bool:
        """Verify one layer against its reconstructed challenge."""
        index = self._layer_index(index)
        token = self._tokens[index]
        c = self.challenge_for(index)
        return verify(c, token.signature, token.public_key, self._params)

    def verify(self) -> bool:
        """
        End-to-end check of the whole chain.

        Every layer must verify, the root must carry no contribution,
        and every later layer key must equal  Sᵢ₋₁·G + Y_freshᵢ.
        """
        if not self._tokens:
            return False
        group = self._params.group
        for i, token in enumerate(self._tokens):
            if i == 0:
                if not token.is_root:
                    log.debug("root layer carries a contribution")
                    return False
            else:
                if token.contribution is None:
                    log.debug("layer %d has no contribution", i)
                    return False
                prev = self._tokens[i - 1]
                expected = group.base_mul(prev.signature.S) + token.contribution
                if expected != token.public_key:
                    log.debug("layer %d key is not derived from layer %d", i, i - 1)
                    return False
            if not self.verify_layer(i):
                log.debug("layer %d signature does not verify", i)
                return False
        return True

    # ── accessors ──────────────────────────────────────────────────────

    @property
    def tokens(self) -> Tuple[DelegationToken, ...]:
        return tuple(self._tokens)

    @property
    def head(self) -> DelegationToken:
        if not self._tokens:
            raise PreconditionError("empty chain")
        return self._tokens[-1]

    @property
    def root_public_key(self) -> Point:
        if not self._tokens:
            raise PreconditionError("empty chain")
        return self._tokens[0].public_key

    @property
    def params(self) -> SchnorrParams:
        return self._params

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[DelegationToken]:
        return iter(tuple(self._tokens))

    def __getitem__(self, index: int) -> DelegationToken:
        return self._tokens[index]

    def __repr__(self) -> str:
        return (
            f"DelegationChain(layers={len(self._tokens)}, "
            f"group={self._params.group.name})"
        )
