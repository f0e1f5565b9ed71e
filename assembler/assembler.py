"""
assembler/assembler.py — podstawianie fragmentów w miejsce dyrektyw.

Publiczne API:
  render_directive(block, text)                 -> str
  assemble(document, locator, errors=None)      -> RenderedDocument
  render_tree(docs_root, out_dir, locator, ...) -> list[RenderedDocument]

Transkluzja to czyste podstawienie: kolejność bloków się nie zmienia,
linie płotów i wcięcie linii dyrektywy są zachowane. Dyrektywa, której
lokator nie rozwiąże, zostaje w wyniku dosłownie, a błąd trafia do `errors`.
"""

from __future__ import annotations

import logging
import pathlib
import shutil
from collections.abc import Iterable

from data_model import (
    DirectiveBlock,
    DocWeaveError,
    Document,
    FenceBlock,
    LiteralBlock,
    RenderedDocument,
)
from locator import FragmentLocator
from md_parser import DEFAULT_SENTINEL, parse_document, read_document
from validator.document_index import is_hidden
from validator.types import ValidationIssue, issue_from_exception, unreadable_document_issue

logger = logging.getLogger(__name__)


def render_directive(block: DirectiveBlock, text: str) -> str:
    """Fragment z wcięciem linii dyrektywy (puste linie bez wcięcia) + jej zakończenie."""
    if not text:
        # Pusty region lub pusty plik: linia dyrektywy znika.
        return ""
    if block.indent:
        text = "\n".join(
            block.indent + line if line.strip() else line
            for line in text.split("\n")
        )
    newline = block.newline
    if newline == "\r\n":
        text = text.replace("\n", "\r\n")
    return text + newline


class _Renderer:
    def __init__(
        self,
        document: Document,
        locator: FragmentLocator,
        errors: list[ValidationIssue] | None,
    ) -> None:
        self.document = document
        self.locator = locator
        self.errors = errors
        self.parts: list[str] = []
        self.resolved = 0
        self.unresolved = 0

    def directive(self, block: DirectiveBlock) -> None:
        try:
            text = self.locator.resolve_directive(block.directive)
        except (DocWeaveError, OSError, UnicodeDecodeError) as exc:
            self.unresolved += 1
            self.parts.append(block.verbatim)
            if self.errors is not None:
                self.errors.append(issue_from_exception(self.document.path, block.line, exc))
            logger.debug("Nierozwiązana dyrektywa %s:%d: %s", self.document.path, block.line, exc)
            return
        self.resolved += 1
        self.parts.append(render_directive(block, text))

    def run(self) -> RenderedDocument:
        for block in self.document.blocks:
            if isinstance(block, LiteralBlock):
                self.parts.append(block.text)
            elif isinstance(block, DirectiveBlock):
                self.directive(block)
            elif isinstance(block, FenceBlock):
                self.parts.append(block.opening)
                for inner in block.body:
                    if isinstance(inner, DirectiveBlock):
                        self.directive(inner)
                    else:
                        self.parts.append(inner.text)
                self.parts.append(block.closing)

        return RenderedDocument(
            path=self.document.path,
            text="".join(self.parts),
            resolved=self.resolved,
            unresolved=self.unresolved,
        )


def assemble(
    document: Document,
    locator: FragmentLocator,
    errors: list[ValidationIssue] | None = None,
) -> RenderedDocument:
    """Składa dokument; nie przerywa na pierwszym błędzie (patrz moduł)."""
    return _Renderer(document, locator, errors).run()


# ---------------------------------------------------------------------------
# Całe drzewo dokumentów
# ---------------------------------------------------------------------------

def render_tree(
    docs_root: pathlib.Path,
    out_dir: pathlib.Path,
    locator: FragmentLocator,
    documents: Iterable[str],
    sentinel: str = DEFAULT_SENTINEL,
    copy_assets: bool = True,
    errors: list[ValidationIssue] | None = None,
) -> list[RenderedDocument]:
    """
    Renderuje każdy dokument (ścieżki względne wobec docs_root) do tej samej
    ścieżki względnej w out_dir. Pozostałe pliki drzewa docs kopiuje bez zmian.
    """
    documents = list(documents)
    rendered: list[RenderedDocument] = []

    for rel in documents:
        src = docs_root / rel
        try:
            source_text = read_document(src)
        except (OSError, UnicodeDecodeError) as exc:
            # Dokument spoza UTF-8 trafia do wyniku bez zmian.
            logger.warning("Nie można odczytać %s: %s", rel, exc)
            if errors is not None:
                errors.append(unreadable_document_issue(rel, exc))
            if isinstance(exc, UnicodeDecodeError):
                dst = out_dir / rel
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, dst)
            continue
        # Błędy parsowania raportuje walidator; tutaj linie zostają literałami.
        document = parse_document(source_text, rel, sentinel, errors=[])
        result = assemble(document, locator, errors)

        dst = out_dir / rel
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_text(result.text, encoding="utf-8", newline="")
        logger.info("Zapisano %s (%d dyrektyw)", dst, result.resolved)
        rendered.append(result)

    if copy_assets:
        doc_set = set(documents)
        for src in sorted(docs_root.rglob("*")):
            if not src.is_file():
                continue
            rel = src.relative_to(docs_root).as_posix()
            if rel in doc_set or is_hidden(rel) or src.resolve().is_relative_to(out_dir.resolve()):
                continue
            dst = out_dir / rel
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
            logger.debug("Skopiowano zasób %s", rel)

    return rendered
