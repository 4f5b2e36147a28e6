"""
Immutable protocol parameters: which group, which hash.

Every primitive takes a ``params`` keyword argument.  Nothing in the
package reads or writes module-level mutable state; swapping the group
for a test means building another ``SchnorrParams`` and passing it in.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Optional

from .curve import SECP256K1
from .errors import PreconditionError
from .group import Group, Point

DEFAULT_HASH = "sha256"
DEFAULT_DOMAIN_TAG = b"schnorrchain/v1/challenge"


@dataclass(frozen=True)
class SchnorrParams:
    """
    Group descriptor plus hash function.

    Attributes
    ----------
    group : Group
        Prime-order group all keys and signatures live in.
    hash_name : str
        Fixed-output ``hashlib`` algorithm used for every challenge.
    domain_tag : bytes or None
        BIP-340 style tag, ``H(H(tag) ‖ H(tag) ‖ data)``.  ``None``
        hashes the data directly.
    """

    group: Group = SECP256K1
    hash_name: str = DEFAULT_HASH
    domain_tag: Optional[bytes] = DEFAULT_DOMAIN_TAG

    def __post_init__(self) -> None:
        if not isinstance(self.group, Group):
            raise PreconditionError("group must be a Group adapter")
        try:
            sample = hashlib.new(self.hash_name)
        except (ValueError, TypeError) as exc:
            raise PreconditionError(
                f"unknown hash function {self.hash_name!r}"
            ) from exc
        if sample.digest_size == 0:
            # shake_128 / shake_256 have no fixed output size
            raise PreconditionError(
                f"{self.hash_name!r} is not a fixed-output-size hash"
            )
        if self.domain_tag is not None and not isinstance(self.domain_tag, bytes):
            raise PreconditionError("domain_tag must be bytes or None")

    @property
    def base(self) -> Point:
        return self.group.base

    def new_hasher(self):
        """Hash context pre-loaded with the tag prefix, if any."""
        h = hashlib.new(self.hash_name)
        if self.domain_tag is not None:
            tag_hash = hashlib.new(self.hash_name, self.domain_tag).digest()
            h.update(tag_hash)
            h.update(tag_hash)
        return h


DEFAULT_PARAMS = SchnorrParams()
