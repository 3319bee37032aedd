"""
exorg — narzędzie CLI do eksportu bloków źródłowych z dokumentów org.

Użycie:
  exorg <komenda> [opcje]

Komendy:
  tangle   Eksportuje bloki źródłowe (wg języka, nazwy lub :tangle) do plików.
  blocks   Listuje bloki źródłowe dokumentu (z rozwiniętymi #+INCLUDE).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from exorg.commands import tangle as cmd_tangle
from exorg.commands import blocks as cmd_blocks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exorg",
        description="exorg — eksport bloków źródłowych z dokumentów org.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="exorg 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_tangle.add_parser(subparsers)
    cmd_blocks.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
