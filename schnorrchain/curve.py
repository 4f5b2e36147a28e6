"""
secp256k1 Group Adapter via libsecp256k1.

Every expensive group operation (scalar multiplication, point addition)
is delegated to the C library ``coincurve``, which wraps Bitcoin Core's
libsecp256k1.  Scalar arithmetic stays in pure Python (``group.Scalar``).

Install
-------
    pip install coincurve>=18.0.0

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
- SEC 1 v2 §2.3.3  point compression
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .errors import PreconditionError
from .group import Group, Point

# ── secp256k1 constants ─────────────────────────────────────────────────
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
SCALAR_BYTES = 32
COMPRESSED_BYTES = 33
UNCOMPRESSED_BYTES = 65

_G = _SK(b"\x00" * 31 + b"\x01").public_key


@dataclass(frozen=True)
class Secp256k1Group(Group):
    """
    The secp256k1 group.

    The identity (point at infinity) is represented by ``None`` rather
    than a ``coincurve.PublicKey``; libsecp256k1 cannot serialise it, so
    the shared ``Point`` layer encodes it as 33 zero bytes.
    """

    @property
    def name(self) -> str:
        return "secp256k1"

    @property
    def order(self) -> int:
        return ORDER

    @property
    def point_bytes(self) -> int:
        return COMPRESSED_BYTES

    # representation hooks ---------------------------------------------------
    def _base_raw(self) -> _PK:
        return _G

    def _identity_raw(self) -> Optional[_PK]:
        return None

    def _is_identity_raw(self, raw: Optional[_PK]) -> bool:
        return raw is None

    def _add_raw(self, a: _PK, b: _PK) -> Optional[_PK]:
        # P + (-P) = O; libsecp256k1 refuses to return infinity
        if a.format() == self._neg_raw(b).format():
            return None
        return _PK.combine_keys([a, b])

    def _neg_raw(self, a: _PK) -> _PK:
        raw = bytearray(a.format(compressed=True))
        raw[0] ^= 0x01            # 0x02 ↔ 0x03 flip parity
        return _PK(bytes(raw))

    def _mul_raw(self, a: _PK, k: int) -> _PK:
        copy = _PK(a.format())
        return copy.multiply(k.to_bytes(SCALAR_BYTES, "big"))

    def _base_mul_raw(self, k: int) -> _PK:
        return _SK(k.to_bytes(SCALAR_BYTES, "big")).public_key

    def _encode_raw(self, a: _PK) -> bytes:
        return a.format(compressed=True)

    def _decode_raw(self, data: bytes) -> _PK:
        """SEC 1 compressed (33 B) or uncompressed (65 B)."""
        if len(data) not in (COMPRESSED_BYTES, UNCOMPRESSED_BYTES):
            raise PreconditionError(
                f"expected {COMPRESSED_BYTES} or {UNCOMPRESSED_BYTES} "
                f"bytes, got {len(data)}"
            )
        try:
            return _PK(data)
        except (ValueError, TypeError) as exc:
            raise PreconditionError("not a point on secp256k1") from exc

    # utility ----------------------------------------------------------------
    def sum_points(self, points: List[Point]) -> Point:
        """Multi-point addition in a single libsecp256k1 call."""
        points = [self.check_point(p) for p in points]
        real = [p for p in points if not p.is_identity()]
        if not real:
            return self.identity()
        if len(real) == 1:
            return real[0]
        try:
            return Point(_PK.combine_keys([p._raw for p in real]), self)
        except ValueError:
            # the sum is the point at infinity
            return super().sum_points(real)


SECP256K1 = Secp256k1Group()
