import hashlib

import pytest

from merkstamp.errors import LeafSourceError
from merkstamp.hashing import hash_file, is_hex_digest, resolve_leaf


def test_hash_file_streams_in_chunks(tmp_path):
    payload = b"0123456789" * 1000
    p = tmp_path / "doc.bin"
    p.write_bytes(payload)
    assert hash_file(p, chunk_size=7).raw == hashlib.sha256(payload).digest()
    assert hash_file(str(p)).raw == hashlib.sha256(payload).digest()


def test_resolve_leaf_hex_or_path(tmp_path):
    hx = hashlib.sha256(b"test").hexdigest()
    assert is_hex_digest(hx)
    assert is_hex_digest(hx.upper())
    assert not is_hex_digest(hx[:-1])
    assert resolve_leaf(hx).to_hex() == hx
    p = tmp_path / "f.txt"
    p.write_bytes(b"test")
    assert resolve_leaf(str(p)).to_hex() == hx


def test_missing_file_raises(tmp_path):
    with pytest.raises(LeafSourceError):
        resolve_leaf(str(tmp_path / "missing.txt"))
    with pytest.raises(LeafSourceError):
        hash_file(tmp_path)
