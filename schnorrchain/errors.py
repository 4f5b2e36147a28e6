"""
Error taxonomy for schnorrchain.

Three kinds of failure are distinguished:

- **Precondition violations**: malformed input, or an element that
  belongs to a different group than the one configured.
- **Entropy failure**: the OS cannot supply secure randomness for a
  key or nonce.  Fatal; never retried, never replaced by a weaker
  source.
- **Verification failure** is *not* an error: ``verify`` returns
  ``False``.
"""

from __future__ import annotations


class SchnorrChainError(Exception):
    """Base class for every error raised by this package."""


class PreconditionError(SchnorrChainError, ValueError):
    """Input is malformed or violates a documented precondition."""


class ForeignGroupError(PreconditionError):
    """A scalar or point from another group was passed in."""


class EntropyError(SchnorrChainError, RuntimeError):
    """Secure randomness could not be obtained."""
