"""Komenda: dw render — walidacja i składanie drzewa dokumentów do katalogu wyjściowego."""

from __future__ import annotations

import argparse
import pathlib

from rich.markup import escape

from assembler import render_tree
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


def _check_out_dir(out_dir: pathlib.Path, docs_root: pathlib.Path) -> None:
    out = out_dir.resolve()
    docs = docs_root.resolve()
    if out == docs or out.is_relative_to(docs):
        raise ConfigurationError(
            f"Katalog wyjściowy nie może leżeć w katalogu dokumentów: {out_dir}"
        )
    if out.exists() and not out.is_dir():
        raise ConfigurationError(f"Ścieżka wyjściowa nie jest katalogiem: {out_dir}")


def run(args: argparse.Namespace) -> None:
    out_dir = pathlib.Path(args.out_dir)

    try:
        tree = open_tree(args)
        _check_out_dir(out_dir, tree.docs_root)
    except ConfigurationError as e:
        err_console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_CONFIG)

    # --- Walidacja -------------------------------------------------------
    validator = DocumentValidator(tree.index, tree.locator, tree.settings.sentinel)
    report = validator.validate_all()

    # --- Składanie -------------------------------------------------------
    # Błędne dyrektywy zostają w wyniku dosłownie; reszta jest podstawiona.
    rendered = render_tree(
        tree.docs_root,
        out_dir,
        tree.locator,
        tree.index,
        tree.settings.sentinel,
        copy_assets=not args.no_assets,
    )

    if args.report:
        write_report(report, args.report)

    print_warnings(report)
    if not report.is_valid:
        print_report(report)
        raise SystemExit(EXIT_ISSUES)

    resolved = sum(r.resolved for r in rendered)
    console.print(
        f"[green]OK[/green]  {len(rendered)} dokument(ów), "
        f"{resolved} fragment(ów) wstawionych → [bold]{escape(str(out_dir))}[/bold]"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "render",
        help="Składa dokumenty: dyrektywy → fragmenty kodu, zapis do katalogu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje wszystkie dokumenty (dyrektywy + linki), a następnie zapisuje je do
katalogu wyjściowego z fragmentami kodu wstawionymi w miejsce dyrektyw.

Kod wyjścia: 0 — sukces, 1 — błędy walidacji (raport na stderr),
2 — błąd konfiguracji (np. brak katalogu dokumentów).

Przykłady:
  dw render docs ../app/src/main/java build/docs
  dw render docs src build/docs --source-root ../shared/src
  dw render docs src build/docs --report raport.json
        """,
    )
    add_tree_arguments(p)
    p.add_argument(
        "out_dir",
        metavar="KATALOG_WYJŚCIOWY",
        help="Katalog, do którego zapisywane są złożone dokumenty.",
    )
    p.add_argument(
        "--no-assets",
        action="store_true",
        help="Nie kopiuj plików innych niż dokumenty (obrazy itp.).",
    )
    p.set_defaults(func=run)
