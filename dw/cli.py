"""
dw — narzędzie CLI DocWeave (składanie dokumentacji z fragmentami kodu).

Użycie:
  dw <komenda> [opcje]

Komendy:
  render     Waliduje i składa drzewo dokumentów do katalogu wyjściowego.
  validate   Sprawdza dyrektywy transkluzji i linki między dokumentami.
  regions    Listuje regiony (tag:start / tag:end) w pliku źródłowym.
  show       Pokazuje bloki sparsowanego dokumentu.
"""

from __future__ import annotations

import argparse
import os
import sys

# Windows: terminal może używać cp1252 — wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from dw._log import setup_logging
from dw.commands import regions as cmd_regions
from dw.commands import render as cmd_render
from dw.commands import show as cmd_show
from dw.commands import validate as cmd_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dw",
        description="DocWeave — składanie dokumentacji z fragmentami kodu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="dw 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Więcej logów (-v INFO, -vv DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_render.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_regions.add_parser(subparsers)
    cmd_show.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, os.getenv("DW_LOG_LEVEL", "WARNING").upper())
    args.func(args)


if __name__ == "__main__":
    main()
