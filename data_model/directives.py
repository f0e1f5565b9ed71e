"""
data_model/directives.py — dyrektywa transkluzji i odwołanie do regionu.

TranscludeDirective odpowiada jednej linii `SENTINEL "ścieżka[:region]"`.
Region to albo nazwa tagu (str), albo zakres linii (LineRange).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineRange:
    """Zakres linii pliku źródłowego, 1-based, obustronnie domknięty."""

    start: int
    end: int

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


# Tag regionu (np. "fragmentA") albo zakres linii.
type RegionRef = str | LineRange


@dataclass(frozen=True, slots=True)
class TranscludeDirective:
    source_path: str               # ścieżka względna wobec korzenia źródeł
    region: RegionRef | None = None

    @property
    def label(self) -> str:
        """Postać czytelna dla raportu: "Booking.java:fragmentA"."""
        if self.region is None:
            return self.source_path
        return f"{self.source_path}:{self.region}"
