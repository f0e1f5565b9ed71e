"""
data_model/documents.py — model dokumentu Markdown po sparsowaniu.

Document to uporządkowana sekwencja bloków:
  LiteralBlock   — dosłowny tekst (z zakończeniami linii)
  DirectiveBlock — pojedyncza linia dyrektywy transkluzji
  FenceBlock     — blok kodu ``` … ``` (linie płotu zachowane dosłownie),
                   wewnątrz literały i dyrektywy

Wszystkie struktury są niemutowalne; Assembler tylko je czyta.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .directives import TranscludeDirective


@dataclass(frozen=True, slots=True)
class LiteralBlock:
    text: str            # tekst dosłowny, razem z "\n" / "\r\n"
    line: int            # 1-based numer pierwszej linii


@dataclass(frozen=True, slots=True)
class DirectiveBlock:
    directive: TranscludeDirective
    line: int            # 1-based numer linii dyrektywy
    indent: str          # wiodące białe znaki linii dyrektywy
    raw: str             # linia dyrektywy bez zakończenia
    newline: str         # "\n", "\r\n" albo "" (ostatnia linia bez końca)

    @property
    def verbatim(self) -> str:
        return self.raw + self.newline


type InnerBlock = LiteralBlock | DirectiveBlock


@dataclass(frozen=True, slots=True)
class FenceBlock:
    opening: str                     # linia otwierająca płot, dosłownie
    closing: str                     # linia zamykająca; "" gdy brak zamknięcia
    body: tuple[InnerBlock, ...]
    line: int                        # 1-based numer linii otwierającej


type Block = LiteralBlock | DirectiveBlock | FenceBlock


@dataclass(frozen=True, slots=True)
class Document:
    path: str                        # ścieżka względna (POSIX) w drzewie docs
    blocks: tuple[Block, ...]

    def directives(self) -> Iterator[DirectiveBlock]:
        """Wszystkie dyrektywy w kolejności dokumentu, także z wnętrza płotów."""
        for block in self.blocks:
            if isinstance(block, DirectiveBlock):
                yield block
            elif isinstance(block, FenceBlock):
                for inner in block.body:
                    if isinstance(inner, DirectiveBlock):
                        yield inner

    def literal_blocks(self) -> Iterator[LiteralBlock]:
        """Literały spoza bloków kodu — tylko w nich szukamy linków."""
        for block in self.blocks:
            if isinstance(block, LiteralBlock):
                yield block


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    path: str
    text: str
    resolved: int = 0                # liczba podstawionych dyrektyw
    unresolved: int = 0              # dyrektywy pozostawione dosłownie


@dataclass(frozen=True, slots=True)
class Region:
    """Nazwany region pliku źródłowego (numery linii znaczników, 1-based)."""

    tag: str
    start_line: int
    end_line: int

    @property
    def size(self) -> int:
        return self.end_line - self.start_line - 1
