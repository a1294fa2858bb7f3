from __future__ import annotations

import hashlib
import hmac
import re

from ..errors import InvalidLengthError, ParseError

DIGEST_SIZE = 32
_HEX_RE = re.compile(r"[0-9a-fA-F]{64}")


def _h(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


class Digest:
    """Immutable 32-byte SHA-256 digest."""

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes):
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise TypeError(f"Digest expects bytes, got {type(raw).__name__}")
        raw = bytes(raw)
        if len(raw) != DIGEST_SIZE:
            raise InvalidLengthError(f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name, value):
        raise AttributeError("Digest is immutable")

    def __reduce__(self):
        return (Digest, (self._raw,))

    @classmethod
    def from_bytes(cls, raw: bytes) -> Digest:
        return cls(raw)

    @classmethod
    def from_hex(cls, s: str) -> Digest:
        if not isinstance(s, str) or not _HEX_RE.fullmatch(s):
            raise ParseError(f"Expected 64 hexadecimal characters, got {s!r}")
        return cls(bytes.fromhex(s))

    @classmethod
    def hash(cls, data: bytes) -> Digest:
        return cls(_h(data))

    @property
    def raw(self) -> bytes:
        return self._raw

    def to_hex(self) -> str:
        return self._raw.hex()

    def equals(self, other: Digest) -> bool:
        return hmac.compare_digest(self._raw, other._raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __eq__(self, other):
        if not isinstance(other, Digest):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash(self._raw)

    def __repr__(self):
        return f"Digest({self.to_hex()})"

    def __str__(self):
        return self.to_hex()


__all__ = ["Digest", "DIGEST_SIZE"]
