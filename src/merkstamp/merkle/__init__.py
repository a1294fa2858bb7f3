"""Merkle proof core: digests, proof operations, derivation and verification.

Pure computation only; nothing in this package performs I/O.
"""
from .digest import DIGEST_SIZE, Digest  # noqa: F401
from .proof import Operation, Proof, Relation, VerificationResult, derive, verify  # noqa: F401
from .tree import build_merkle_tree, inclusion_proof, merkle_root  # noqa: F401
