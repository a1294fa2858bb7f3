"""Leaf acquisition: parse a hex digest or stream-hash a local file."""
from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

from .errors import LeafSourceError
from .merkle.digest import Digest
from .settings import settings

SHA256_HEX_RE = re.compile(r"[0-9a-fA-F]{64}")


def is_hex_digest(value: str) -> bool:
    return SHA256_HEX_RE.fullmatch(value) is not None


def hash_file(path: str | Path, chunk_size: int | None = None) -> Digest:
    """SHA-256 a file in fixed-size chunks without loading it whole."""
    chunk_size = chunk_size or settings.read_chunk_size
    h = hashlib.sha256()
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(chunk_size), b""):
                h.update(chunk)
    except OSError as e:
        raise LeafSourceError(f"Unable to read file {str(path)!r}: {e.strerror or e}") from e
    digest = Digest.from_bytes(h.digest())
    logging.debug("Hashed %s -> %s", path, digest.to_hex())
    return digest


def resolve_leaf(hash_or_path: str) -> Digest:
    """Return the digest named by a 64-char hex string, or the hash of a file."""
    if is_hex_digest(hash_or_path):
        return Digest.from_hex(hash_or_path)
    return hash_file(hash_or_path)


__all__ = ["hash_file", "resolve_leaf", "is_hex_digest"]
