"""
Schnorr group: the order-q subgroup of Z_p* for a safe prime p = 2q + 1.

Pure Python, built on ``pow``.  Useful when a second, independent group
is needed (tests, or cross-checking that nothing is curve-specific).
The group law is written additively to match ``Point``: "addition" is
multiplication mod p and "scalar multiplication" is exponentiation.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import PreconditionError
from .group import Group


@dataclass(frozen=True)
class ModPGroup(Group):
    """Quadratic-residue subgroup of Z_p* with generator *g* of order *q*."""

    p: int
    q: int
    g: int

    def __post_init__(self) -> None:
        if self.p != 2 * self.q + 1:
            raise PreconditionError("p must be a safe prime 2q + 1")
        if not 1 < self.g < self.p:
            raise PreconditionError("generator out of range")
        if pow(self.g, self.q, self.p) != 1:
            raise PreconditionError("generator does not have order q")

    @property
    def name(self) -> str:
        return f"modp{self.p.bit_length()}"

    @property
    def order(self) -> int:
        return self.q

    @property
    def point_bytes(self) -> int:
        return (self.p.bit_length() + 7) // 8

    # representation hooks ---------------------------------------------------
    def _base_raw(self) -> int:
        return self.g

    def _identity_raw(self) -> int:
        return 1

    def _is_identity_raw(self, raw: int) -> bool:
        return raw == 1

    def _add_raw(self, a: int, b: int) -> int:
        return (a * b) % self.p

    def _neg_raw(self, a: int) -> int:
        return pow(a, -1, self.p)

    def _mul_raw(self, a: int, k: int) -> int:
        return pow(a, k, self.p)

    def _encode_raw(self, a: int) -> bytes:
        return a.to_bytes(self.point_bytes, "big")

    def _decode_raw(self, data: bytes) -> int:
        if len(data) != self.point_bytes:
            raise PreconditionError(
                f"need {self.point_bytes} bytes, got {len(data)}"
            )
        v = int.from_bytes(data, "big")
        # subgroup membership: v^q == 1  (Euler criterion for QR)
        if not 1 < v < self.p or pow(v, self.q, self.p) != 1:
            raise PreconditionError(f"not an element of {self.name}")
        return v
