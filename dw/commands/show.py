"""Komenda: dw show — tabela bloków sparsowanego dokumentu."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model import (
    ConfigurationError,
    DirectiveBlock,
    Document,
    FenceBlock,
    LiteralBlock,
    ParseError,
)
from dw._config import load_settings
from dw.commands._common import EXIT_CONFIG, EXIT_ISSUES, err_console
from md_parser import parse_document, read_document

console = Console(width=160)

TYPE_STYLE: dict[str, str] = {
    "literal":   "dim",
    "directive": "bold green",
    "fence":     "cyan",
}


def _first_line(text: str, max_len: int = 80) -> str:
    line = text.strip().split("\n", 1)[0].rstrip("\r")
    return line if len(line) <= max_len else line[:max_len] + "…"


def _rows(document: Document) -> list[tuple[int, str, str, str]]:
    """(linia, typ, wcięcie w bloku kodu, opis)"""
    rows: list[tuple[int, str, str, str]] = []
    for block in document.blocks:
        match block:
            case LiteralBlock(text=text, line=line):
                rows.append((line, "literal", "", _first_line(text)))
            case DirectiveBlock(directive=d, line=line):
                rows.append((line, "directive", "", d.label))
            case FenceBlock(opening=opening, body=body, line=line):
                rows.append((line, "fence", "", _first_line(opening)))
                for inner in body:
                    if isinstance(inner, DirectiveBlock):
                        rows.append((inner.line, "directive", "  ", inner.directive.label))
                    else:
                        rows.append((inner.line, "literal", "  ", _first_line(inner.text)))
    return rows


def run(args: argparse.Namespace) -> None:
    path = pathlib.Path(args.document)
    if not path.is_file():
        err_console.print(f"[red]Plik nie istnieje:[/red] {escape(str(path))}")
        raise SystemExit(EXIT_CONFIG)

    try:
        settings = load_settings(sentinel=args.sentinel)
    except ConfigurationError as e:
        err_console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_CONFIG)

    errors: list[ParseError] = []
    document = parse_document(read_document(path), path.name, settings.sentinel, errors=errors)

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("LINIA", justify="right", no_wrap=True, style="dim")
    table.add_column("TYP",   no_wrap=True)
    table.add_column("TREŚĆ", no_wrap=False, max_width=90)

    for line, kind, indent, text in _rows(document):
        style = TYPE_STYLE[kind]
        table.add_row(str(line), f"{indent}[{style}]{kind}[/{style}]", escape(text))

    console.print()
    console.print(table)
    directives = sum(1 for _ in document.directives())
    console.print(f"  [dim]{len(document.blocks)} bloków, {directives} dyrektyw[/dim]\n")

    if errors:
        err_console.print("[red]Błędne dyrektywy:[/red]")
        for e in errors:
            err_console.print(f"  {e.line:>5}  {escape(str(e))}", highlight=False)
        raise SystemExit(EXIT_ISSUES)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "show",
        help="Pokazuje bloki dokumentu (literały, dyrektywy, bloki kodu).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Parsuje dokument Markdown i wyświetla tabelę bloków w kolejności dokumentu.

Przykłady:
  dw show docs/krok-3-function-calling.md
  dw show docs/krok-3.md --sentinel include::
        """,
    )
    p.add_argument(
        "document",
        metavar="PLIK.md",
        help="Ścieżka do dokumentu Markdown.",
    )
    p.add_argument(
        "--sentinel",
        metavar="TOKEN",
        default=None,
        help='Token dyrektywy (domyślnie: DW_SENTINEL lub "@include").',
    )
    p.set_defaults(func=run)
