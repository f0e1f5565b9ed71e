"""
locator/regions.py — wyszukiwanie znaczników regionów w pliku źródłowym.

Znacznik to linia-komentarz, której wnętrze (po zdjęciu ogranicznika
komentarza i białych znaków) ma postać `tag:start` albo `tag:end`.

scan_regions zwraca sparowane regiony oraz problemy:
  - start bez end
  - end bez start
  - powtórzony start tego samego tagu (zagnieżdżenie lub drugi region)

Tag, który ma choć jeden problem, nie trafia do `regions`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from data_model import Region

from .comment_syntax import CommentSyntax

_MARKER_RE = re.compile(r"^(?P<tag>[A-Za-z_][\w.-]*):(?P<kind>start|end)$")


@dataclass(frozen=True, slots=True)
class MarkerProblem:
    tag: str
    line: int
    message: str


@dataclass(slots=True)
class RegionScan:
    regions: dict[str, Region] = field(default_factory=dict)
    problems: list[MarkerProblem] = field(default_factory=list)
    marker_lines: set[int] = field(default_factory=set)

    def problems_for(self, tag: str) -> list[MarkerProblem]:
        return [p for p in self.problems if p.tag == tag]


def match_marker(content: str, syntaxes: Sequence[CommentSyntax]) -> tuple[str, str] | None:
    """Zwraca (tag, "start"|"end") dla linii-znacznika, inaczej None."""
    stripped = content.strip()
    for syntax in syntaxes:
        if not stripped.startswith(syntax.open):
            continue
        inner = stripped[len(syntax.open):]
        if syntax.close:
            if not inner.endswith(syntax.close):
                continue
            inner = inner[: -len(syntax.close)]
        m = _MARKER_RE.match(inner.strip())
        if m is not None:
            return m.group("tag"), m.group("kind")
    return None


def scan_regions(lines: Sequence[str], syntaxes: Sequence[CommentSyntax]) -> RegionScan:
    """Skanuje linie pliku (bez zakończeń) i paruje znaczniki start/end."""
    scan = RegionScan()
    open_starts: dict[str, int] = {}

    for lineno, content in enumerate(lines, start=1):
        marker = match_marker(content, syntaxes)
        if marker is None:
            continue
        tag, kind = marker
        scan.marker_lines.add(lineno)

        if kind == "start":
            if tag in open_starts or tag in scan.regions:
                scan.problems.append(MarkerProblem(
                    tag, lineno,
                    f"Powtórzony znacznik '{tag}:start' (region '{tag}' już istnieje).",
                ))
            else:
                open_starts[tag] = lineno
        elif tag in open_starts:
            scan.regions[tag] = Region(tag, open_starts.pop(tag), lineno)
        else:
            scan.problems.append(MarkerProblem(
                tag, lineno, f"Znacznik '{tag}:end' bez odpowiadającego '{tag}:start'.",
            ))

    for tag, lineno in open_starts.items():
        scan.problems.append(MarkerProblem(
            tag, lineno, f"Znacznik '{tag}:start' bez odpowiadającego '{tag}:end'.",
        ))

    # Tag z jakimkolwiek problemem (powtórzenie, zbędny end) nie tworzy regionu.
    for tag in {p.tag for p in scan.problems}:
        scan.regions.pop(tag, None)

    return scan
