"""Komenda: dw validate — sprawdza dyrektywy i linki bez zapisu wyników."""

from __future__ import annotations

import argparse
import json
import sys

from rich.markup import escape

from data_model import ConfigurationError
from dw.commands._common import (
    EXIT_CONFIG,
    EXIT_ISSUES,
    add_tree_arguments,
    console,
    err_console,
    open_tree,
    print_report,
    print_warnings,
    write_report,
)
from validator import DocumentValidator


def run(args: argparse.Namespace) -> None:
    try:
        tree = open_tree(args)
    except ConfigurationError as e:
        err_console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_CONFIG)

    validator = DocumentValidator(
        tree.index,
        tree.locator,
        tree.settings.sentinel,
        check_external=args.check_external,
        external_timeout=args.timeout,
    )
    report = validator.validate_all()

    if args.report:
        write_report(report, args.report)

    # --- Wyjście JSON (opcjonalnie) --------------------------------------
    if args.json_output:
        out = {
            "is_valid": report.is_valid,
            "documents": report.documents,
            "directives": report.directives,
            "links": report.links,
            "issues": report.to_json(),
            "warnings": report.warnings,
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        print_warnings(report)
        if report.is_valid:
            console.print(
                f"[green]OK[/green]  {report.documents} dokument(ów), "
                f"{report.directives} dyrektyw, {report.links} linków — bez błędów."
            )
        else:
            print_report(report)

    if not report.is_valid:
        sys.exit(EXIT_ISSUES)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Sprawdza dyrektywy transkluzji i linki między dokumentami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje wszystkie dokumenty i zbiera wszystkie błędy w jednym przebiegu:

  ParseError           niepoprawna linia dyrektywy
  FileNotFoundError    plik źródłowy nie istnieje
  RegionNotFoundError  brak regionu lub niesparowane znaczniki start/end
  DanglingLinkError    link do nieistniejącego dokumentu

Przykłady:
  dw validate docs ../app/src/main/java
  dw validate docs src --json-output
  dw validate docs src --check-external --timeout 5
        """,
    )
    add_tree_arguments(p)
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON na stdout.",
    )
    p.add_argument(
        "--check-external",
        action="store_true",
        help="Sprawdź dostępność linków http(s) (tylko ostrzeżenia).",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        metavar="SEK",
        help="Limit czasu zapytania dla --check-external (domyślnie: 10).",
    )
    p.set_defaults(func=run)
