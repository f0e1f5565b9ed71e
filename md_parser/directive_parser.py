"""
md_parser/directive_parser.py — parsowanie dokumentu Markdown do bloków.

Publiczne API:
  parse_directive(content, sentinel, line)   -> (indent, TranscludeDirective) | None
  parse_document(text, path, sentinel, errors=None) -> Document

Gramatyka dyrektywy (linia w całości):
  [wcięcie] SENTINEL "ścieżka[:region]"
  [wcięcie] SENTINEL "ścieżka":region

Region: "N" lub "N-M" → LineRange, w pozostałych przypadkach nazwa tagu.
"""

from __future__ import annotations

import logging
from pathlib import Path

from data_model import (
    DirectiveBlock,
    Document,
    FenceBlock,
    LineRange,
    LiteralBlock,
    ParseError,
    RegionRef,
    TranscludeDirective,
)

from .directive_patterns import (
    DEFAULT_SENTINEL,
    FENCE_OPEN_RE,
    LINE_RANGE_RE,
    TAG_RE,
    directive_line_re,
    is_fence_close,
    iter_lines,
    split_newline,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pojedyncza dyrektywa
# ---------------------------------------------------------------------------

def _parse_region(suffix: str, line: int | None, content: str) -> RegionRef:
    m = LINE_RANGE_RE.match(suffix)
    if m is not None:
        start = int(m.group("start"))
        end = int(m.group("end") or start)
        if start < 1 or end < start:
            raise ParseError(
                f"Nieprawidłowy zakres linii '{suffix}' (oczekiwano N-M, 1 <= N <= M).",
                line, content,
            )
        return LineRange(start, end)
    if not TAG_RE.match(suffix):
        raise ParseError(f"Nieprawidłowa nazwa regionu: '{suffix}'", line, content)
    return suffix


def parse_directive(
    content: str,
    sentinel: str = DEFAULT_SENTINEL,
    line: int | None = None,
) -> tuple[str, TranscludeDirective] | None:
    """
    Parsuje linię (bez zakończenia). Zwraca (wcięcie, dyrektywa) albo None,
    gdy linia nie zaczyna się od sentinela.

    Raises:
        ParseError: linia zaczyna się od sentinela, ale reszta jest błędna.
    """
    m = directive_line_re(sentinel).match(content)
    if m is None:
        return None

    indent = m.group("indent")
    rest = (m.group("rest") or "").strip()

    if not rest:
        raise ParseError("Dyrektywa bez ścieżki.", line, content)
    if not rest.startswith('"'):
        raise ParseError("Ścieżka dyrektywy musi być w cudzysłowie.", line, content)

    close = rest.find('"', 1)
    if close == -1:
        raise ParseError("Niezamknięty cudzysłów w ścieżce dyrektywy.", line, content)

    quoted = rest[1:close]
    after = rest[close + 1:].strip()

    region: RegionRef | None = None
    if after:
        if not after.startswith(":"):
            raise ParseError(f"Nieoczekiwany tekst po ścieżce: '{after}'", line, content)
        path = quoted
        region = _parse_region(after[1:], line, content)
    elif ":" in quoted:
        path, _, suffix = quoted.rpartition(":")
        region = _parse_region(suffix, line, content)
    else:
        path = quoted

    path = path.strip()
    if not path:
        raise ParseError("Pusta ścieżka w dyrektywie.", line, content)

    return indent, TranscludeDirective(source_path=path, region=region)


# ---------------------------------------------------------------------------
# Cały dokument
# ---------------------------------------------------------------------------

def read_document(path: str | Path) -> str:
    """Tekst dokumentu bez translacji zakończeń linii ("\r\n" zostaje)."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


class _BlockBuilder:
    """Akumuluje literały i emituje bloki w kolejności dokumentu."""

    def __init__(self) -> None:
        self.blocks: list = []
        self._literal: list[str] = []
        self._literal_line = 0

    def add_literal(self, lineno: int, line: str) -> None:
        if not self._literal:
            self._literal_line = lineno
        self._literal.append(line)

    def flush(self) -> None:
        if self._literal:
            self.blocks.append(LiteralBlock("".join(self._literal), self._literal_line))
            self._literal = []

    def add(self, block) -> None:
        self.flush()
        self.blocks.append(block)


def parse_document(
    text: str,
    path: str | Path = "",
    sentinel: str = DEFAULT_SENTINEL,
    errors: list[ParseError] | None = None,
) -> Document:
    """
    Parsuje tekst dokumentu do Document.

    Bez `errors` pierwsza błędna dyrektywa rzuca ParseError. Z listą `errors`
    każda błędna dyrektywa jest do niej dopisywana, a jej linia zostaje
    literałem — walidator zbiera wtedy wszystkie błędy w jednym przebiegu.
    """
    doc_path = Path(path).as_posix() if path else ""

    top = _BlockBuilder()
    fence: _BlockBuilder | None = None
    fence_open = ""
    fence_mark = ""
    fence_line = 0

    for lineno, line in iter_lines(text):
        content, newline = split_newline(line)
        current = fence if fence is not None else top

        if fence is not None and is_fence_close(content, fence_mark):
            fence.flush()
            top.add(FenceBlock(fence_open, line, tuple(fence.blocks), fence_line))
            fence = None
            continue

        if fence is None:
            m = FENCE_OPEN_RE.match(content)
            if m is not None:
                top.flush()
                fence = _BlockBuilder()
                fence_open, fence_mark, fence_line = line, m.group("fence"), lineno
                continue

        try:
            parsed = parse_directive(content, sentinel, lineno)
        except ParseError as exc:
            if errors is None:
                raise
            errors.append(exc)
            current.add_literal(lineno, line)
            continue

        if parsed is None:
            current.add_literal(lineno, line)
            continue

        indent, directive = parsed
        current.add(DirectiveBlock(directive, lineno, indent, content, newline))

    if fence is not None:
        # Niezamknięty płot do końca pliku — treść zostaje, zamknięcia brak.
        fence.flush()
        top.add(FenceBlock(fence_open, "", tuple(fence.blocks), fence_line))
    top.flush()

    document = Document(path=doc_path, blocks=tuple(top.blocks))
    logger.debug("Sparsowano %s: %d bloków", doc_path or "<tekst>", len(document.blocks))
    return document
