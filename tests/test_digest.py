import hashlib

import pytest

from merkstamp.errors import InvalidLengthError, ParseError
from merkstamp.merkle.digest import Digest


def test_hash_matches_sha256():
    d = Digest.hash(b"test")
    assert d.raw == hashlib.sha256(b"test").digest()
    assert d.to_hex() == "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"


def test_from_bytes_requires_32_bytes():
    for bad in (b"", b"\x00" * 31, b"\x00" * 33):
        with pytest.raises(InvalidLengthError):
            Digest.from_bytes(bad)
    assert Digest.from_bytes(b"\x01" * 32).raw == b"\x01" * 32


def test_from_hex_rejects_short_empty_and_non_hex():
    for bad in ("abc", "", "g" * 64, "a" * 63, "a" * 65, "a" * 64 + "\n", " " + "a" * 63):
        with pytest.raises(ParseError):
            Digest.from_hex(bad)


def test_hex_is_lowercase_zero_padded():
    d = Digest.from_hex("00" * 31 + "0A")
    assert d.to_hex() == "00" * 31 + "0a"
    assert len(d.to_hex()) == 64
    assert Digest.from_hex(d.to_hex()) == d


def test_equality_and_hashing():
    a = Digest.hash(b"a")
    assert a == Digest.from_bytes(hashlib.sha256(b"a").digest())
    assert a.equals(Digest.hash(b"a"))
    assert a != Digest.hash(b"b")
    assert len({a, Digest.hash(b"a")}) == 1


def test_digest_errors_are_value_errors():
    with pytest.raises(ValueError):
        Digest.from_hex("xyz")
    with pytest.raises(ValueError):
        Digest.from_bytes(b"short")


def test_digest_is_immutable():
    d = Digest.hash(b"x")
    with pytest.raises(AttributeError):
        d._raw = b"\x00" * 32


def test_digest_copies_and_pickles():
    import copy
    import pickle

    d = Digest.hash(b"a")
    assert copy.copy(d) == d
    assert copy.deepcopy(d) == d
    restored = pickle.loads(pickle.dumps(d))
    assert restored == d and isinstance(restored, Digest)


def test_from_bytes_rejects_non_bytes():
    for bad in (32, "a" * 32, None, [0] * 32):
        with pytest.raises(TypeError):
            Digest.from_bytes(bad)
    assert Digest.from_bytes(bytearray(32)) == Digest.from_bytes(memoryview(bytes(32)))
