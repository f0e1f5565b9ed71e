"""
validator/types.py — rodzaje błędów i struktury raportu walidacji.

ValidationIssue — pojedynczy błąd: dokument, linia, rodzaj, szczegóły.
ValidationReport — wynik walidacji całego zbioru dokumentów: is_valid,
    issues, warnings (np. niedostępne linki zewnętrzne) i liczniki.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import StrEnum

from data_model import (
    DanglingLinkError,
    ParseError,
    RegionNotFoundError,
)


class ErrorKind(StrEnum):
    """Rodzaje błędów raportu (wartości trafiają do raportu JSON)."""

    FILE_NOT_FOUND   = "FileNotFoundError"
    REGION_NOT_FOUND = "RegionNotFoundError"
    PARSE            = "ParseError"
    DANGLING_LINK    = "DanglingLinkError"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    Pojedynczy błąd walidacji.

    - document_path: ścieżka dokumentu względem korzenia docs
    - line:          1-based numer linii dyrektywy / linku
    - kind:          ErrorKind
    - detail:        czytelny opis błędu
    """

    document_path: str
    line: int
    kind: ErrorKind
    detail: str

    def to_dict(self) -> dict[str, object]:
        return {
            "documentPath": self.document_path,
            "line": self.line,
            "errorKind": str(self.kind),
            "detail": self.detail,
        }


def issue_from_exception(document_path: str, line: int, exc: Exception) -> ValidationIssue:
    """Mapuje wyjątek rozwiązywania dyrektywy / linku na wpis raportu."""
    match exc:
        case ParseError():
            kind = ErrorKind.PARSE
        case RegionNotFoundError():
            kind = ErrorKind.REGION_NOT_FOUND
        case DanglingLinkError():
            kind = ErrorKind.DANGLING_LINK
        case _:
            # SourceFileNotFoundError i inne błędy odczytu pliku źródłowego
            kind = ErrorKind.FILE_NOT_FOUND
    return ValidationIssue(document_path, line, kind, str(exc))


def unreadable_document_issue(document_path: str, exc: OSError | UnicodeDecodeError) -> ValidationIssue:
    """Dokument, którego nie da się odczytać jako UTF-8, to błąd parsowania od linii 1."""
    return ValidationIssue(
        document_path, 1, ErrorKind.PARSE, f"Nie można odczytać dokumentu: {exc}"
    )


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik walidacji zbioru dokumentów.

    - issues:     błędy (każdy psuje wynik)
    - warnings:   ostrzeżenia (nie wpływają na is_valid)
    - documents:  liczba sprawdzonych dokumentów
    - directives: liczba dyrektyw transkluzji
    - links:      liczba sprawdzonych linków wewnętrznych
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    documents: int = 0
    directives: int = 0
    links: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def by_document(self) -> dict[str, list[ValidationIssue]]:
        """Błędy pogrupowane po dokumencie, w kolejności linii."""
        grouped: dict[str, list[ValidationIssue]] = defaultdict(list)
        for issue in self.issues:
            grouped[issue.document_path].append(issue)
        return {
            path: sorted(items, key=lambda i: i.line)
            for path, items in sorted(grouped.items())
        }

    def to_json(self) -> list[dict[str, object]]:
        return [issue.to_dict() for issues in self.by_document().values() for issue in issues]
