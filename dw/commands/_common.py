"""Wspólne elementy komend render / validate: argumenty, przygotowanie drzewa, raport."""

from __future__ import annotations

import argparse
import json
import pathlib
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from data_model import ConfigurationError
from dw._config import Settings, load_settings
from locator import FragmentLocator
from validator import DocumentIndex, ValidationReport

console = Console()
err_console = Console(stderr=True)

EXIT_ISSUES = 1
EXIT_CONFIG = 2

KIND_STYLE: dict[str, str] = {
    "FileNotFoundError":   "red",
    "RegionNotFoundError": "magenta",
    "ParseError":          "yellow",
    "DanglingLinkError":   "cyan",
}


@dataclass(slots=True)
class Tree:
    settings: Settings
    docs_root: pathlib.Path
    index: DocumentIndex
    locator: FragmentLocator


# ---------------------------------------------------------------------------
# Argumenty
# ---------------------------------------------------------------------------

def add_tree_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "docs_root",
        metavar="KATALOG_DOCS",
        help="Korzeń drzewa dokumentów Markdown.",
    )
    p.add_argument(
        "source_root",
        metavar="KATALOG_ŹRÓDEŁ",
        help="Korzeń drzewa źródeł, z którego wstawiane są fragmenty.",
    )
    p.add_argument(
        "--source-root",
        dest="extra_roots",
        action="append",
        default=[],
        metavar="KATALOG",
        help="Dodatkowy korzeń źródeł (można podać wielokrotnie; przeszukiwane po kolei).",
    )
    p.add_argument(
        "--comment-syntax",
        metavar="PLIK.json",
        default=None,
        help='Tabela składni komentarzy {".ext": ["open", "close"]} (domyślnie: DW_COMMENT_SYNTAX).',
    )
    p.add_argument(
        "--sentinel",
        metavar="TOKEN",
        default=None,
        help='Token dyrektywy transkluzji (domyślnie: DW_SENTINEL lub "@include").',
    )
    p.add_argument(
        "--report",
        metavar="PLIK.json",
        default=None,
        help="Zapisz raport walidacji (JSON) do pliku.",
    )


# ---------------------------------------------------------------------------
# Przygotowanie drzewa
# ---------------------------------------------------------------------------

def open_tree(args: argparse.Namespace) -> Tree:
    """
    Wczytuje konfigurację, indeks dokumentów i lokator.

    Raises:
        ConfigurationError: brak korzenia docs / źródeł, błędna konfiguracja.
    """
    settings = load_settings(sentinel=args.sentinel, comment_syntax=args.comment_syntax)

    docs_root = pathlib.Path(args.docs_root)
    source_roots = [pathlib.Path(r) for r in [args.source_root, *args.extra_roots]]
    for root in source_roots:
        if not root.is_dir():
            raise ConfigurationError(f"Katalog źródeł nie istnieje: {root}")

    index = DocumentIndex.from_root(docs_root, settings.doc_extensions)
    locator = FragmentLocator(source_roots, settings.comment_table)
    return Tree(settings, docs_root, index, locator)


# ---------------------------------------------------------------------------
# Raport
# ---------------------------------------------------------------------------

def print_report(report: ValidationReport, out: Console = err_console) -> None:
    """Jedna linia na błąd, pogrupowane po dokumencie."""
    for doc, issues in report.by_document().items():
        out.print(f"[bold]{escape(doc)}[/bold]")
        for issue in issues:
            style = KIND_STYLE.get(issue.kind, "white")
            out.print(
                f"  {issue.line:>5}  [{style}]{issue.kind}[/{style}]  {escape(issue.detail)}",
                highlight=False,
                soft_wrap=True,
            )
    out.print(
        f"[red]BŁĄD[/red]  {len(report.issues)} błąd(ów) w "
        f"{len(report.by_document())} dokument(ach)."
    )


def print_warnings(report: ValidationReport, out: Console = err_console) -> None:
    if report.warnings:
        out.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            out.print(f"  [yellow]·[/yellow] {escape(w)}", highlight=False)


def write_report(report: ValidationReport, path: str) -> None:
    pathlib.Path(path).write_text(
        json.dumps(report.to_json(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    console.print(f"[green]Raport:[/green] {path}")
