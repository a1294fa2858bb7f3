from __future__ import annotations

from .merkle.digest import Digest

ROOT_FORMATS = ("hex", "decimal", "binary")


def format_root(root: Digest, fmt: str = "hex") -> str:
    """Render a root digest as hex, or as a big-endian integer in decimal or binary."""
    if fmt == "hex":
        return root.to_hex()
    value = int.from_bytes(root.raw, "big")
    if fmt == "decimal":
        return str(value)
    if fmt == "binary":
        return format(value, "b")
    raise ValueError(f"Unknown root format {fmt!r}; expected one of {', '.join(ROOT_FORMATS)}")


__all__ = ["format_root", "ROOT_FORMATS"]
