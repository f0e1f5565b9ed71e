"""
locator — lokator fragmentów kodu dla dyrektyw transkluzji.

Interfejs publiczny:
    FragmentLocator      — plik/region → tekst (z cache na czas przebiegu)
    CommentSyntax        — para ograniczników komentarza (open, close)
    load_comment_table   — tabela {".ext": CommentSyntax} z pliku JSON
    scan_regions         — parowanie znaczników `tag:start` / `tag:end`

Typowe użycie:
    from locator import FragmentLocator

    locator = FragmentLocator(["../app/src/main/java"])
    text    = locator.resolve("com/example/Booking.java", "fragmentA")
"""

from .comment_syntax import (
    DEFAULT_COMMENT_TABLE,
    CommentSyntax,
    comment_table_from_dict,
    load_comment_table,
    syntaxes_for,
)
from .fragment_locator import FragmentLocator, split_source, strip_common_indent
from .regions import MarkerProblem, RegionScan, match_marker, scan_regions

__all__ = [
    "DEFAULT_COMMENT_TABLE",
    "CommentSyntax",
    "FragmentLocator",
    "MarkerProblem",
    "RegionScan",
    "comment_table_from_dict",
    "load_comment_table",
    "match_marker",
    "scan_regions",
    "split_source",
    "strip_common_indent",
    "syntaxes_for",
]
