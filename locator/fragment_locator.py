"""
locator/fragment_locator.py — rozwiązywanie odwołań do fragmentów kodu.

FragmentLocator.resolve(source_path, region=None) -> str

  region=None      — cała zawartość pliku (bez końcowego "\n")
  region="tag"     — tekst ściśle między `tag:start` i `tag:end`,
                     bez linii-znaczników innych tagów, po zdjęciu
                     wspólnego wcięcia
  region=LineRange — wskazane linie (1-based, domknięte), po zdjęciu
                     wspólnego wcięcia

Pliki źródłowe są niezmienne w trakcie przebiegu, więc wyniki i odczyty
plików są cache'owane na czas życia lokatora.
"""

from __future__ import annotations

import logging
import os
import pathlib
from collections.abc import Mapping, Sequence

from data_model import (
    LineRange,
    RegionNotFoundError,
    RegionRef,
    SourceFileNotFoundError,
    TranscludeDirective,
)

from .comment_syntax import DEFAULT_COMMENT_TABLE, CommentSyntax, syntaxes_for
from .regions import RegionScan, scan_regions

logger = logging.getLogger(__name__)


def split_source(text: str) -> list[str]:
    """Linie pliku bez zakończeń; "\r\n" normalizowane, końcowy "\n" pomijany."""
    text = text.replace("\r\n", "\n")
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n") if text else []


def strip_common_indent(lines: Sequence[str]) -> str:
    """Zdejmuje wyłącznie wcięcie wspólne dla wszystkich niepustych linii.

    Linie z samych białych znaków tracą tylko ten sam prefiks (o ile go mają).
    """
    indents = [line[:len(line) - len(line.lstrip())] for line in lines if line.strip()]
    margin = os.path.commonprefix(indents) if indents else ""
    width = len(margin)
    return "\n".join(line[width:] if line.startswith(margin) else line for line in lines)


class FragmentLocator:
    """
    Lokator fragmentów dla jednego przebiegu (render / validate).

    Użycie:
        locator = FragmentLocator(["src/main/java"], comment_table)
        text    = locator.resolve("Booking.java", "fragmentA")
    """

    def __init__(
        self,
        source_roots: Sequence[str | pathlib.Path],
        comment_table: Mapping[str, CommentSyntax] | None = None,
    ) -> None:
        self._roots = [pathlib.Path(r).resolve() for r in source_roots]
        self._table = dict(DEFAULT_COMMENT_TABLE if comment_table is None else comment_table)

        self._files: dict[str, tuple[pathlib.Path, list[str]]] = {}
        self._scans: dict[str, RegionScan] = {}
        self._cache: dict[tuple[str, RegionRef | None], str] = {}

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def locate(self, source_path: str) -> pathlib.Path:
        """
        Zwraca ścieżkę pliku w pierwszym korzeniu, który go zawiera.

        Raises:
            SourceFileNotFoundError: brak pliku, ścieżka absolutna
                                     lub wychodząca poza wszystkie korzenie.
        """
        if pathlib.PurePosixPath(source_path).is_absolute() or pathlib.Path(source_path).is_absolute():
            raise SourceFileNotFoundError(
                f"Ścieżka źródła musi być względna: {source_path}", source_path
            )

        escaped = 0
        for root in self._roots:
            candidate = (root / source_path).resolve()
            if not candidate.is_relative_to(root):
                escaped += 1
                continue
            if candidate.is_file():
                return candidate

        if escaped == len(self._roots):
            raise SourceFileNotFoundError(
                f"Ścieżka wychodzi poza korzenie źródeł: {source_path}", source_path
            )
        raise SourceFileNotFoundError(
            f"Plik źródłowy nie istnieje: {source_path}", source_path
        )

    def resolve(self, source_path: str, region: RegionRef | None = None) -> str:
        key = (source_path, region)
        if key in self._cache:
            logger.debug("Cache: %s", key)
            return self._cache[key]

        _, lines = self._read(source_path)
        match region:
            case None:
                text = "\n".join(lines)
            case LineRange(start=start, end=end):
                if end > len(lines):
                    raise RegionNotFoundError(
                        f"Zakres linii {region} poza plikiem {source_path} "
                        f"({len(lines)} linii).",
                        source_path, str(region),
                    )
                text = strip_common_indent(lines[start - 1:end])
            case _:
                text = self._resolve_tag(source_path, lines, region)

        self._cache[key] = text
        return text

    def resolve_directive(self, directive: TranscludeDirective) -> str:
        return self.resolve(directive.source_path, directive.region)

    def scan(self, source_path: str) -> RegionScan:
        """Regiony i problemy ze znacznikami w pliku (cache per plik)."""
        if source_path not in self._scans:
            path, lines = self._read(source_path)
            self._scans[source_path] = scan_regions(lines, syntaxes_for(path, self._table))
        return self._scans[source_path]

    # ------------------------------------------------------------------
    # Wnętrze
    # ------------------------------------------------------------------

    def _read(self, source_path: str) -> tuple[pathlib.Path, list[str]]:
        if source_path not in self._files:
            path = self.locate(source_path)
            lines = split_source(path.read_text(encoding="utf-8"))
            self._files[source_path] = (path, lines)
            logger.debug("Wczytano %s (%d linii)", path, len(lines))
        return self._files[source_path]

    def _resolve_tag(
        self,
        source_path: str,
        lines: list[str],
        tag: str,
    ) -> str:
        scan = self.scan(source_path)
        found = scan.regions.get(tag)
        if found is None:
            problems = scan.problems_for(tag)
            if problems:
                detail = "; ".join(f"linia {p.line}: {p.message}" for p in problems)
                raise RegionNotFoundError(
                    f"Niesparowane znaczniki regionu '{tag}' w {source_path}: {detail}",
                    source_path, tag,
                )
            raise RegionNotFoundError(
                f"Brak regionu '{tag}' w {source_path}.", source_path, tag
            )

        body = [
            lines[i - 1]
            for i in range(found.start_line + 1, found.end_line)
            if i not in scan.marker_lines
        ]
        return strip_common_indent(body)
