"""Komenda: dw regions — lista regionów i problemów ze znacznikami w pliku źródłowym."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from data_model import ConfigurationError, DocWeaveError
from dw._config import load_settings
from dw.commands._common import EXIT_CONFIG, EXIT_ISSUES, err_console
from locator import FragmentLocator

console = Console()


def run(args: argparse.Namespace) -> None:
    path = pathlib.Path(args.source_file)
    if not path.is_file():
        err_console.print(f"[red]Plik nie istnieje:[/red] {escape(str(path))}")
        raise SystemExit(EXIT_CONFIG)

    try:
        settings = load_settings(comment_syntax=args.comment_syntax)
    except ConfigurationError as e:
        err_console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_CONFIG)

    locator = FragmentLocator([path.parent], settings.comment_table)
    try:
        scan = locator.scan(path.name)
    except (DocWeaveError, OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Błąd odczytu:[/red] {escape(str(e))}")
        raise SystemExit(EXIT_CONFIG)

    if scan.regions:
        table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
        table.add_column("TAG",    style="bold cyan", no_wrap=True)
        table.add_column("START",  justify="right", style="dim")
        table.add_column("END",    justify="right", style="dim")
        table.add_column("LINIE",  justify="right")

        for region in sorted(scan.regions.values(), key=lambda r: r.start_line):
            table.add_row(
                region.tag,
                str(region.start_line),
                str(region.end_line),
                str(region.size),
            )
        console.print(table)
        console.print(f"  [dim]{len(scan.regions)} region(ów)[/dim]")
    else:
        console.print("[yellow]Brak regionów.[/yellow]")

    if scan.problems:
        err_console.print("[red]Problemy ze znacznikami:[/red]")
        for p in sorted(scan.problems, key=lambda p: p.line):
            err_console.print(f"  {p.line:>5}  {escape(p.message)}", highlight=False)
        raise SystemExit(EXIT_ISSUES)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "regions",
        help="Listuje regiony (tag:start / tag:end) w pliku źródłowym.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Wyszukuje w pliku źródłowym pary znaczników `tag:start` / `tag:end`
zapisanych w komentarzach języka pliku i zgłasza problemy:
start bez end, end bez start, powtórzony tag.

Przykłady:
  dw regions src/main/java/com/example/BookingTools.java
  dw regions schema.sql --comment-syntax komentarze.json
        """,
    )
    p.add_argument(
        "source_file",
        metavar="PLIK",
        help="Ścieżka do pliku źródłowego.",
    )
    p.add_argument(
        "--comment-syntax",
        metavar="PLIK.json",
        default=None,
        help="Tabela składni komentarzy (domyślnie: DW_COMMENT_SYNTAX).",
    )
    p.set_defaults(func=run)
