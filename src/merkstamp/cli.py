from __future__ import annotations

import argparse
import logging
import sys

from .client.server import load_proof, submit_stamp
from .errors import MerkstampError
from .hashing import resolve_leaf
from .merkle.digest import Digest
from .merkle.proof import derive, verify
from .render import ROOT_FORMATS, format_root
from .settings import settings


def cmd_verify(args: argparse.Namespace) -> int:
    leaf = resolve_leaf(args.hash_or_filepath)
    expected = Digest.from_hex(args.root) if args.root else None
    proof = load_proof(args.proof, timeout=args.timeout)
    if expected is None:
        root = derive(proof, leaf)
        print(f"ROOT HASH DERIVED FROM PROOF AND LEAF HASH:\n{format_root(root, args.root_format)}")
        return 0
    result = verify(leaf, proof, expected)
    print(f"ROOT HASH DERIVED FROM PROOF AND LEAF HASH:\n{format_root(result.root, args.root_format)}")
    if result.included:
        print("INCLUDED")
        return 0
    print("NOT INCLUDED", file=sys.stderr)
    return 2


def cmd_stamp(args: argparse.Namespace) -> int:
    # one input at a time: hash, submit, print
    for item in args.inputs:
        print(submit_stamp(resolve_leaf(item), args.server, timeout=args.timeout))
    return 0


def cmd_help(args: argparse.Namespace) -> int:
    args.parser.print_help()
    return 0


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors on a single stderr line."""

    def error(self, message):
        self.exit(1, f"{self.prog}: {message}\n")


def _add_common(p: argparse.ArgumentParser, defaults: bool) -> None:
    # subcommand copies use SUPPRESS so they never overwrite values given before the subcommand
    def d(value):
        return value if defaults else argparse.SUPPRESS

    p.add_argument("--server", default=d(settings.server), help=f"Stamping server (default: {settings.server})")
    p.add_argument("--timeout", type=float, default=d(settings.http_timeout), help="HTTP timeout in seconds")
    p.add_argument("-v", "--verbose", action="store_true", default=d(False), help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="merkstamp",
        description="Create and verify Merkle timestamp proofs",
    )
    _add_common(p, defaults=True)
    common = _Parser(add_help=False)
    _add_common(common, defaults=False)
    p.set_defaults(func=cmd_help, parser=p)
    sub = p.add_subparsers(dest="cmd")

    p_verify = sub.add_parser("verify", parents=[common], help="Derive the Merkle root for a hash or file from a proof")
    p_verify.add_argument("hash_or_filepath", help="64-char hex SHA-256 digest or path of a file to hash")
    p_verify.add_argument("proof", help="Proof file or http(s) URL")
    p_verify.add_argument("--root", help="Expected (anchored) root in hex; report inclusion against it")
    p_verify.add_argument(
        "--root-format",
        dest="root_format",
        choices=ROOT_FORMATS,
        default=settings.root_format,
        help="Rendering of the derived root (default: %(default)s)",
    )
    p_verify.set_defaults(func=cmd_verify)

    p_stamp = sub.add_parser("stamp", parents=[common], help="Submit hashes or files for timestamping")
    p_stamp.add_argument("inputs", nargs="+", metavar="filepath-or-hash")
    p_stamp.set_defaults(func=cmd_stamp)

    p_help = sub.add_parser("help", help="Show this message")
    p_help.set_defaults(func=cmd_help)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except MerkstampError as e:
        logging.debug("Command %s failed", args.cmd, exc_info=True)
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
