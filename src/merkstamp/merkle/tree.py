"""Producer-side helpers for building test fixtures and sample proofs.

Nodes are combined pairwise with ``H(left || right)``. A level with an odd
number of nodes carries its last node up by hashing it with itself.
"""
from __future__ import annotations

from typing import List, Sequence

from .digest import Digest
from .proof import Operation, Proof, Relation


def _parent_level(nodes: Sequence[Digest]) -> List[Digest]:
    padded = list(nodes)
    if len(padded) % 2:
        padded.append(padded[-1])
    return [Digest.hash(a.raw + b.raw) for a, b in zip(padded[::2], padded[1::2])]


def build_merkle_tree(leaves: Sequence[Digest]) -> List[List[Digest]]:
    if not leaves:
        raise ValueError("Cannot build a Merkle tree without leaves")
    levels = [list(leaves)]
    while len(levels[-1]) != 1:
        levels.append(_parent_level(levels[-1]))
    return levels


def merkle_root(leaves: Sequence[Digest]) -> Digest:
    return build_merkle_tree(leaves)[-1][0]


def inclusion_proof(leaf_index: int, leaves: Sequence[Digest]) -> Proof:
    if not 0 <= leaf_index < len(leaves):
        raise IndexError(f"Leaf index {leaf_index} out of range for {len(leaves)} leaves")
    ops = []
    position = leaf_index
    for nodes in build_merkle_tree(leaves)[:-1]:
        partner = min(position ^ 1, len(nodes) - 1)
        relation = Relation.LEFT if position & 1 else Relation.RIGHT
        ops.append(Operation(nodes[partner], relation))
        position >>= 1
    return Proof.of(ops)


__all__ = ["build_merkle_tree", "merkle_root", "inclusion_proof"]
