"""
Group Adapter interface and the opaque element types built on it.

A ``Group`` describes a prime-order group with a fixed base point.  It
hands out two value types:

- ``Scalar``: element of Z_q, where *q* is the group order (private
  keys, nonces, challenges, signature responses).
- ``Point``: group element (public keys, signature commitments).

Both carry a reference to the group that created them.  Arithmetic
between elements of different groups raises ``ForeignGroupError``
instead of silently producing garbage.

Concrete groups only implement a handful of ``_raw`` hooks over their
own element representation; identity handling, encoding of the
identity, scalar reduction and random sampling are shared here.
"""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from typing import Any, Iterable

from .errors import EntropyError, ForeignGroupError, PreconditionError


# ── Group Adapter ───────────────────────────────────────────────────────
class Group(ABC):
    """Prime-order group with a fixed base point *G*."""

    # descriptor -------------------------------------------------------------
    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def order(self) -> int:
        ...

    @property
    @abstractmethod
    def point_bytes(self) -> int:
        """Width of a serialised point."""

    @property
    def scalar_bytes(self) -> int:
        return (self.order.bit_length() + 7) // 8

    # representation hooks ---------------------------------------------------
    @abstractmethod
    def _base_raw(self) -> Any:
        ...

    @abstractmethod
    def _identity_raw(self) -> Any:
        ...

    @abstractmethod
    def _is_identity_raw(self, raw: Any) -> bool:
        ...

    @abstractmethod
    def _add_raw(self, a: Any, b: Any) -> Any:
        """a + b for two non-identity elements."""

    @abstractmethod
    def _neg_raw(self, a: Any) -> Any:
        ...

    @abstractmethod
    def _mul_raw(self, a: Any, k: int) -> Any:
        """k · a for a non-identity element and 0 < k < q."""

    @abstractmethod
    def _encode_raw(self, a: Any) -> bytes:
        ...

    @abstractmethod
    def _decode_raw(self, data: bytes) -> Any:
        """Parse a non-identity element; raise ``PreconditionError``."""

    def _base_mul_raw(self, k: int) -> Any:
        return self._mul_raw(self._base_raw(), k)

    # scalars ----------------------------------------------------------------
    def scalar(self, value: int) -> Scalar:
        return Scalar(value, self)

    def zero(self) -> Scalar:
        return Scalar(0, self)

    def one(self) -> Scalar:
        return Scalar(1, self)

    def random_scalar(self) -> Scalar:
        """
        Uniform in [1, q-1] from the OS CSPRNG.

        Raises ``EntropyError`` if the OS cannot provide randomness.
        There is deliberately no fallback generator.
        """
        try:
            value = secrets.randbelow(self.order - 1) + 1
        except (OSError, NotImplementedError) as exc:
            raise EntropyError("secure random source unavailable") from exc
        return Scalar(value, self)

    def scalar_from_bytes(self, data: bytes) -> Scalar:
        """Strict decoding: exact width, value below the order."""
        if len(data) != self.scalar_bytes:
            raise PreconditionError(
                f"need {self.scalar_bytes} bytes, got {len(data)}"
            )
        v = int.from_bytes(data, "big")
        if v >= self.order:
            raise PreconditionError("scalar out of range")
        return Scalar(v, self)

    def scalar_from_digest(self, digest: bytes) -> Scalar:
        """Hash-output safe: reduce arbitrary length modulo *q*."""
        return Scalar(int.from_bytes(digest, "big"), self)

    # points -----------------------------------------------------------------
    @property
    def base(self) -> Point:
        """Standard base point *G*."""
        return Point(self._base_raw(), self)

    def identity(self) -> Point:
        return Point(self._identity_raw(), self)

    def base_mul(self, k: Scalar) -> Point:
        """Compute *k · G*."""
        self.check_scalar(k)
        if k.is_zero():
            return self.identity()
        return Point(self._base_mul_raw(k.value), self)

    def point_from_bytes(self, data: bytes) -> Point:
        if len(data) == self.point_bytes and not any(data):
            return self.identity()
        return Point(self._decode_raw(data), self)

    def sum_points(self, points: Iterable[Point]) -> Point:
        total = self.identity()
        for p in points:
            total = total + p
        return total

    # membership -------------------------------------------------------------
    def owns(self, element: Any) -> bool:
        group = getattr(element, "group", None)
        return group is self or group == self

    def check_scalar(self, value: Any, what: str = "scalar") -> Scalar:
        if not isinstance(value, Scalar):
            raise PreconditionError(
                f"{what} must be a Scalar, got {type(value).__name__}"
            )
        if not self.owns(value):
            raise ForeignGroupError(
                f"{what} belongs to {value.group.name}, expected {self.name}"
            )
        return value

    def check_point(self, value: Any, what: str = "point") -> Point:
        if not isinstance(value, Point):
            raise PreconditionError(
                f"{what} must be a Point, got {type(value).__name__}"
            )
        if not self.owns(value):
            raise ForeignGroupError(
                f"{what} belongs to {value.group.name}, expected {self.name}"
            )
        return value


def _same_group(a: Group, b: Group) -> None:
    if a is not b and a != b:
        raise ForeignGroupError(f"cannot mix {a.name} and {b.name} elements")


# ── Scalar  (Z_q arithmetic, pure Python) ───────────────────────────────
class Scalar:
    """Element of the scalar field  Z_q  of a ``Group``."""

    __slots__ = ("_v", "_group")

    def __init__(self, value: int, group: Group) -> None:
        self._group = group
        self._v = value % group.order

    @property
    def group(self) -> Group:
        return self._group

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes(self._group.scalar_bytes, "big")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    # arithmetic -------------------------------------------------------------
    def __add__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        _same_group(self._group, o._group)
        return Scalar(self._v + o._v, self._group)

    def __radd__(self, o):
        if isinstance(o, int) and o == 0:
            return self                       # for sum()
        return NotImplemented

    def __sub__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        _same_group(self._group, o._group)
        return Scalar(self._v - o._v, self._group)

    def __mul__(self, o):
        if isinstance(o, Scalar):
            _same_group(self._group, o._group)
            return Scalar(self._v * o._v, self._group)
        if isinstance(o, Point):
            return o._smul(self)
        return NotImplemented

    def __rmul__(self, o):
        if isinstance(o, int):
            return Scalar(o * self._v, self._group)
        return NotImplemented

    def __neg__(self) -> Scalar:
        return Scalar(-self._v, self._group)

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, Scalar):
            return self._group == o._group and self._v == o._v
        return False

    def __hash__(self) -> int:
        return hash(self._v)

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        h = hex(self._v)
        short = f"0x{h[2:10]}…" if len(h) > 14 else h
        return f"Scalar({self._group.name}, {short})"


# ── Point  (group element, opaque representation) ───────────────────────
class Point:
    """
    Element of a ``Group``.

    The representation is whatever the group adapter uses internally
    (a libsecp256k1 key object, a residue mod p, …); callers only ever
    use the arithmetic operators, equality and ``to_bytes``.
    """

    __slots__ = ("_raw", "_group")

    def __init__(self, raw: Any, group: Group) -> None:
        self._raw = raw
        self._group = group

    @property
    def group(self) -> Group:
        return self._group

    def is_identity(self) -> bool:
        return self._group._is_identity_raw(self._raw)

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        if self.is_identity():
            return b"\x00" * self._group.point_bytes
        return self._group._encode_raw(self._raw)

    # group operations -------------------------------------------------------
    def _smul(self, s: Scalar) -> Point:
        """Scalar multiplication  s · self."""
        _same_group(self._group, s._group)
        if self.is_identity() or s.is_zero():
            return self._group.identity()
        if self._raw is self._group._base_raw():
            return Point(self._group._base_mul_raw(s.value), self._group)
        return Point(self._group._mul_raw(self._raw, s.value), self._group)

    def __neg__(self) -> Point:
        if self.is_identity():
            return self
        return Point(self._group._neg_raw(self._raw), self._group)

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        _same_group(self._group, o._group)
        if self.is_identity():
            return o
        if o.is_identity():
            return self
        return Point(self._group._add_raw(self._raw, o._raw), self._group)

    def __sub__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        return self + (-o)

    def __rmul__(self, s) -> Point:
        if isinstance(s, Scalar):
            return self._smul(s)
        if isinstance(s, int):
            return self._smul(Scalar(s, self._group))
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        return self._group == o._group and self.to_bytes() == o.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        if self.is_identity():
            return f"Point({self._group.name}, ∞)"
        return f"Point({self._group.name}, {self.to_bytes()[:8].hex()}…)"

