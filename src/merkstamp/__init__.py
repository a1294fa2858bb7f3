"""merkstamp: create and verify Merkle timestamp proofs.

The proof core (``merkstamp.merkle``) is pure computation. File hashing,
HTTP fetch/submit and the CLI sit around it and are the only parts that
touch the outside world.
"""
from .errors import (  # noqa: F401
    InvalidLengthError,
    MalformedProofError,
    MerkstampError,
    NotFoundError,
    NotYetAnchoredError,
    ParseError,
    VerificationMismatchError,
)
from .merkle import Digest, Operation, Proof, Relation, derive, verify  # noqa: F401

__version__ = "0.1.0"
