"""Exception hierarchy for merkstamp.

Core errors (digest and proof structure) are raised by ``merkstamp.merkle``.
Boundary errors are raised only by the collaborators that touch files or the
network (``merkstamp.hashing`` and ``merkstamp.client``).
"""
from __future__ import annotations


class MerkstampError(Exception):
    """Base class for every error surfaced to the CLI."""


# --- core ---

class InvalidLengthError(MerkstampError, ValueError):
    """Raw digest bytes were not exactly 32 bytes long."""


class ParseError(MerkstampError, ValueError):
    """A digest string was not 64 hexadecimal characters."""


class MalformedProofError(MerkstampError, ValueError):
    """A serialized proof is structurally invalid."""


class VerificationMismatchError(MerkstampError):
    """Proof derived a root different from the expected one."""

    def __init__(self, derived, expected):
        self.derived = derived
        self.expected = expected
        super().__init__(f"Derived root {derived.to_hex()} does not match expected root {expected.to_hex()}")


# --- boundary ---

class NotFoundError(MerkstampError):
    """Proof was never posted or has expired on the server."""


class NotYetAnchoredError(MerkstampError):
    """Proof exists but will only be published with the next Merkle root."""


class ServerError(MerkstampError):
    """Unexpected HTTP status, transport failure or response body."""


class LeafSourceError(MerkstampError):
    """File to be hashed could not be read."""


class ProofSourceError(MerkstampError):
    """Local proof file could not be read."""


__all__ = [
    "MerkstampError",
    "InvalidLengthError",
    "ParseError",
    "MalformedProofError",
    "VerificationMismatchError",
    "NotFoundError",
    "NotYetAnchoredError",
    "ServerError",
    "LeafSourceError",
    "ProofSourceError",
]
