"""
validator/document_index.py — indeks zbioru dokumentów Markdown.

DocumentIndex zbiera ścieżki względne (POSIX) wszystkich dokumentów pod
korzeniem docs i odpowiada na pytanie, czy cel linku z danego dokumentu
istnieje w zbiorze. Pliki i katalogi ukryte (".git", ".history") pomijamy.
"""

from __future__ import annotations

import pathlib
import posixpath
from collections.abc import Iterable, Iterator
from urllib.parse import unquote

from data_model import ConfigurationError

DEFAULT_DOC_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")


def is_hidden(rel: str) -> bool:
    return any(part.startswith(".") for part in pathlib.PurePosixPath(rel).parts)


class DocumentIndex:
    """
    Indeks dokumentów pod korzeniem docs.

    Atrybuty publiczne:
      root       — korzeń docs (pathlib.Path)
      extensions — rozszerzenia uznawane za dokumenty
    """

    def __init__(
        self,
        root: pathlib.Path,
        documents: Iterable[str],
        extensions: Iterable[str] = DEFAULT_DOC_EXTENSIONS,
    ) -> None:
        self.root = root
        self.extensions: tuple[str, ...] = tuple(e.lower() for e in extensions)
        self._documents: list[str] = sorted(documents)
        self._set: frozenset[str] = frozenset(self._documents)

    def __iter__(self) -> Iterator[str]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, rel: object) -> bool:
        return rel in self._set

    # ------------------------------------------------------------------
    # Linki
    # ------------------------------------------------------------------

    def is_document_target(self, target_path: str) -> bool:
        """Czy cel (bez kotwicy) ma rozszerzenie dokumentu."""
        return pathlib.PurePosixPath(target_path).suffix.lower() in self.extensions

    def resolve_target(self, target_path: str, from_document: str) -> str:
        """
        Normalizuje cel linku do ścieżki względnej wobec korzenia docs.
        "/x.md" liczy się od korzenia, reszta od katalogu dokumentu.
        """
        target_path = unquote(target_path)
        if target_path.startswith("/"):
            joined = target_path.lstrip("/")
        else:
            joined = posixpath.join(posixpath.dirname(from_document), target_path)
        return posixpath.normpath(joined)

    def exists(self, target_path: str, from_document: str) -> bool:
        resolved = self.resolve_target(target_path, from_document)
        return not resolved.startswith("..") and resolved in self._set

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def from_root(
        cls,
        root: str | pathlib.Path,
        extensions: Iterable[str] = DEFAULT_DOC_EXTENSIONS,
    ) -> "DocumentIndex":
        """
        Skanuje korzeń docs.

        Raises:
            ConfigurationError: korzeń nie istnieje lub nie jest katalogiem.
        """
        root = pathlib.Path(root)
        if not root.is_dir():
            raise ConfigurationError(f"Katalog dokumentów nie istnieje: {root}")

        exts = tuple(e.lower() for e in extensions)
        documents = [
            p.relative_to(root).as_posix()
            for p in root.rglob("*")
            if p.is_file() and p.suffix.lower() in exts
        ]
        return cls(root, [d for d in documents if not is_hidden(d)], exts)
