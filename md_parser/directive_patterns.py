"""
md_parser/directive_patterns.py — wzorce regex dla linii Markdown.

  directive_line_re(sentinel) — linia zaczynająca się od sentinela
  FENCE_OPEN_RE / is_fence_close — granice bloków kodu ``` / ~~~
  LINE_RANGE_RE / TAG_RE — dozwolone sufiksy regionu

Zakończenia linii są zachowywane: iter_lines dzieli wyłącznie po "\n",
więc "\r\n" i brak końcowego "\n" przechodzą bez zmian.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterator

DEFAULT_SENTINEL = "@include"

# Linia tekstu razem z zakończeniem; ostatnia może nie mieć "\n".
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")

# Płot otwierający: ```java, ~~~, ```` … (dowolne wcięcie — listy zagnieżdżone)
FENCE_OPEN_RE = re.compile(r"^[ \t]*(?P<fence>`{3,}|~{3,})(?P<info>[^`]*)$")

_FENCE_CLOSE_RE = re.compile(r"^[ \t]*(?P<fence>`{3,}|~{3,})[ \t]*$")

# Sufiks regionu: "12" / "12-30" → zakres linii, inaczej nazwa tagu.
LINE_RANGE_RE = re.compile(r"^(?P<start>\d+)(?:-(?P<end>\d+))?$")
TAG_RE = re.compile(r"^[A-Za-z_][\w.-]*$")


@functools.cache
def directive_line_re(sentinel: str) -> re.Pattern[str]:
    """
    Wzorzec linii, która *próbuje* być dyrektywą: wcięcie + sentinel +
    (białe znaki + reszta | koniec linii). Poprawność reszty sprawdza parser.
    """
    return re.compile(
        r"^(?P<indent>[ \t]*)" + re.escape(sentinel) + r"(?:[ \t]+(?P<rest>.*))?$"
    )


def split_newline(line: str) -> tuple[str, str]:
    """Rozdziela linię na (treść, zakończenie)."""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """(numer 1-based, linia z zakończeniem) — konkatenacja linii == text."""
    for lineno, m in enumerate(_LINE_RE.finditer(text), start=1):
        yield lineno, m.group()


def is_fence_close(content: str, opening_fence: str) -> bool:
    """Czy linia zamyka płot otwarty przez `opening_fence` (ten sam znak, >= długość)."""
    m = _FENCE_CLOSE_RE.match(content)
    if m is None:
        return False
    fence = m.group("fence")
    return fence[0] == opening_fence[0] and len(fence) >= len(opening_fence)
