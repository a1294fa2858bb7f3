"""Merkle inclusion proofs: operations, serialization, derivation and verification.

A proof is an ordered list of operations. Each operation carries a sibling
digest and a relation telling on which side of the running accumulator the
sibling is concatenated before re-hashing:

  * ``LEFT``  -> ``H(sibling || acc)``
  * ``RIGHT`` -> ``H(acc || sibling)``

Two encodings are supported.

Binary (``Proof.to_bytes``)::

    b"MKPF" | version:u8 | count:u32be | count * (tag:u8 | sibling:32 bytes)

with tag ``0x00`` for LEFT and ``0x01`` for RIGHT.

Text (``Proof.serialize``)::

    {"version":1,"count":N,"operations":[{"relation":"left","sibling":"<hex>"},...]}

``Proof.parse`` accepts either form and rejects anything that is not exactly
one well-formed proof (unknown version, count mismatch, bad sibling, unknown
relation, truncation, trailing bytes).
"""
from __future__ import annotations

import enum
import json
import struct
from dataclasses import dataclass
from typing import Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..errors import MalformedProofError, VerificationMismatchError
from .digest import DIGEST_SIZE, Digest

MAGIC = b"MKPF"
VERSION = 1
_HEADER = struct.Struct(">4sBI")
_OP_SIZE = 1 + DIGEST_SIZE


class Relation(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def tag(self) -> int:
        return _TAGS[self]

    @classmethod
    def from_tag(cls, tag: int) -> Relation:
        for rel, t in _TAGS.items():
            if t == tag:
                return rel
        raise MalformedProofError(f"Unknown relation tag 0x{tag:02x}")


_TAGS = {Relation.LEFT: 0x00, Relation.RIGHT: 0x01}


@dataclass(frozen=True)
class Operation:
    sibling: Digest
    relation: Relation

    def __post_init__(self):
        if not isinstance(self.sibling, Digest):
            raise TypeError("Operation sibling must be a Digest")
        # accept "left"/"right" strings as a convenience
        object.__setattr__(self, "relation", Relation(self.relation))

    def apply(self, accumulator: Digest) -> Digest:
        if self.relation is Relation.LEFT:
            return Digest.hash(self.sibling.raw + accumulator.raw)
        return Digest.hash(accumulator.raw + self.sibling.raw)


# --- text form schema ---

def _unique_keys(pairs):
    obj = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"duplicate key {key!r}")
        obj[key] = value
    return obj


class OperationDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    relation: Literal["left", "right"]
    sibling: str = Field(pattern=r"^[0-9a-fA-F]{64}$")


class ProofDoc(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    version: Literal[1]
    count: int = Field(ge=0)
    operations: list[OperationDoc]

    @field_validator("version", "count", mode="before")
    @classmethod
    def _plain_int(cls, v):
        # bool is an int subclass; 1.0 and true are not version 1
        if type(v) is not int:
            raise ValueError(f"expected an integer, got {type(v).__name__}")
        return v

    @model_validator(mode="after")
    def _count_matches(self):
        if self.count != len(self.operations):
            raise ValueError(f"declared {self.count} operations, found {len(self.operations)}")
        return self


@dataclass(frozen=True)
class Proof:
    operations: tuple[Operation, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "operations", tuple(self.operations))

    @classmethod
    def of(cls, operations: Iterable[Operation]) -> Proof:
        return cls(tuple(operations))

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self):
        return iter(self.operations)

    def derive(self, leaf: Digest) -> Digest:
        return derive(self, leaf)

    # --- serialization ---

    def to_doc(self) -> ProofDoc:
        return ProofDoc(
            version=VERSION,
            count=len(self.operations),
            operations=[
                OperationDoc(relation=op.relation.value, sibling=op.sibling.to_hex())
                for op in self.operations
            ],
        )

    def serialize(self) -> str:
        return self.to_doc().model_dump_json()

    def to_bytes(self) -> bytes:
        parts = [_HEADER.pack(MAGIC, VERSION, len(self.operations))]
        for op in self.operations:
            parts.append(bytes([op.relation.tag]))
            parts.append(op.sibling.raw)
        return b"".join(parts)

    @classmethod
    def parse(cls, data: Union[str, bytes, bytearray, memoryview]) -> Proof:
        if isinstance(data, str):
            return cls._parse_text(data)
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = bytes(data)
            if data.startswith(MAGIC):
                return cls._parse_binary(data)
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedProofError("Proof is neither binary nor UTF-8 text") from e
            return cls._parse_text(text)
        raise TypeError(f"Cannot parse proof from {type(data).__name__}")

    @classmethod
    def _parse_text(cls, text: str) -> Proof:
        try:
            obj = json.loads(text, object_pairs_hook=_unique_keys)
        except ValueError as e:
            raise MalformedProofError(f"Invalid proof document: {e}") from e
        try:
            doc = ProofDoc.model_validate(obj)
        except ValidationError as e:
            raise MalformedProofError(f"Invalid proof document: {e.errors()[0]['msg']}") from e
        return cls.of(
            Operation(Digest.from_hex(op.sibling), Relation(op.relation))
            for op in doc.operations
        )

    @classmethod
    def _parse_binary(cls, data: bytes) -> Proof:
        if len(data) < _HEADER.size:
            raise MalformedProofError("Proof header truncated")
        magic, version, count = _HEADER.unpack_from(data)
        if version != VERSION:
            raise MalformedProofError(f"Unsupported proof version {version}")
        expected = _HEADER.size + count * _OP_SIZE
        if len(data) < expected:
            raise MalformedProofError(
                f"Proof truncated: {count} operations need {expected} bytes, got {len(data)}"
            )
        if len(data) > expected:
            raise MalformedProofError(f"{len(data) - expected} trailing bytes after proof")
        ops = []
        offset = _HEADER.size
        for _ in range(count):
            rel = Relation.from_tag(data[offset])
            ops.append(Operation(Digest(data[offset + 1 : offset + _OP_SIZE]), rel))
            offset += _OP_SIZE
        return cls.of(ops)


def derive(proof: Proof, leaf: Digest) -> Digest:
    """Fold ``leaf`` through the proof operations in order and return the root."""
    acc = leaf
    for op in proof.operations:
        acc = op.apply(acc)
    return acc


@dataclass(frozen=True)
class VerificationResult:
    included: bool
    root: Digest
    expected: Digest

    def __bool__(self) -> bool:
        return self.included

    def raise_for_mismatch(self) -> VerificationResult:
        if not self.included:
            raise VerificationMismatchError(self.root, self.expected)
        return self


def verify(leaf: Digest, proof: Proof, expected_root: Digest) -> VerificationResult:
    """Check that ``proof`` places ``leaf`` under ``expected_root``.

    A structurally valid proof that leads elsewhere is a normal outcome and is
    reported with ``included=False``; call ``raise_for_mismatch`` to turn it into
    a ``VerificationMismatchError``.
    """
    root = derive(proof, leaf)
    return VerificationResult(included=root.equals(expected_root), root=root, expected=expected_root)


__all__ = [
    "MAGIC",
    "VERSION",
    "Relation",
    "Operation",
    "Proof",
    "ProofDoc",
    "OperationDoc",
    "VerificationResult",
    "derive",
    "verify",
]
