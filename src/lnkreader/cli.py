"""CLI entry point: ``lnkreader parse``."""

import argparse
import json
import sys
from pathlib import Path

from ._constants import ANSI_CODEPAGE
from ._util import text_codec
from .errors import DecodeError
from .parser import decode
from .report import format_lnk, to_dict


def _codepage(val: str) -> str:
    """Validate a ``--codepage`` value; it must name a text encoding."""
    try:
        return text_codec(val)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _parse_one(path: Path, args: argparse.Namespace) -> bool:
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        print(f"[-] {path}: not found", file=sys.stderr)
        return False
    except OSError as exc:
        print(f"[-] {path}: read failure ({exc.strerror or exc})", file=sys.stderr)
        return False

    try:
        link = decode(data, codepage=args.codepage)
    except DecodeError as exc:
        print(f"[-] {path}: {exc}", file=sys.stderr)
        return False

    if args.json:
        print(json.dumps({"file": str(path), **to_dict(link)}, indent=2))
    else:
        header = f"FILE: {path}"
        print(f"\n{'=' * 70}")
        print(header)
        print(f"{'=' * 70}")
        print(format_lnk(link))
        print()
    return True


def _cmd_parse(args: argparse.Namespace) -> int:
    failed = 0
    for name in args.files:
        if not _parse_one(Path(name), args):
            failed += 1
    total = len(args.files)
    if not failed:
        print(f"[+] Decoded {total} file(s)", file=sys.stderr)
    elif total > 1:
        print(f"[-] {failed} of {total} file(s) failed", file=sys.stderr)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="lnkreader",
        description="Decode Windows .lnk files (MS-SHLLINK)",
    )
    sub = parser.add_subparsers(dest="command")

    # -- parse --
    pp = sub.add_parser("parse", help="Decode and display .lnk file(s)")
    pp.add_argument("files", nargs="+", help="LNK file(s) to decode")
    pp.add_argument("--json", action="store_true", help="Output as JSON")
    pp.add_argument(
        "--codepage",
        type=_codepage,
        default=ANSI_CODEPAGE,
        metavar="CP",
        help=f"Encoding of non-Unicode strings (default: {ANSI_CODEPAGE})",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "parse" and _cmd_parse(args):
        sys.exit(1)


if __name__ == "__main__":
    main()
