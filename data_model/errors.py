"""
data_model/errors.py — wyjątki DocWeave.

Błędy pojedynczej dyrektywy / linku (ParseError, RegionNotFoundError,
SourceFileNotFoundError, DanglingLinkError) walidator zamienia na wpisy
raportu. Tylko ConfigurationError przerywa przebieg.
"""

from __future__ import annotations


class DocWeaveError(Exception):
    """Bazowy wyjątek narzędzia."""


class ParseError(DocWeaveError):
    """Niepoprawna linia dyrektywy (pusta ścieżka, niezamknięty cudzysłów…)."""

    def __init__(self, message: str, line: int | None = None, text: str = "") -> None:
        super().__init__(message)
        self.line = line
        self.text = text


class RegionNotFoundError(DocWeaveError):
    """Brak regionu lub niesparowane znaczniki start/end."""

    def __init__(self, message: str, source_path: str = "", region: str = "") -> None:
        super().__init__(message)
        self.source_path = source_path
        self.region = region


class SourceFileNotFoundError(DocWeaveError, FileNotFoundError):
    """Plik źródłowy nie istnieje w żadnym z korzeni źródeł."""

    def __init__(self, message: str, source_path: str = "") -> None:
        super().__init__(message)
        self.source_path = source_path


class DanglingLinkError(DocWeaveError):
    """Link między dokumentami wskazuje na nieistniejący dokument."""

    def __init__(self, message: str, target: str = "") -> None:
        super().__init__(message)
        self.target = target


class ConfigurationError(DocWeaveError):
    """Błąd krytyczny: brak korzenia docs/źródeł, zła tabela komentarzy itp."""
