"""
validator/document_validator.py — walidacja zbioru dokumentów przed składaniem.

DocumentValidator.validate_all() -> ValidationReport

Etapy (dla każdego dokumentu, bez przerywania na pierwszym błędzie):
  A — parsowanie dyrektyw     (ParseError dla każdej błędnej linii)
  B — rozwiązywanie dyrektyw  (FileNotFoundError / RegionNotFoundError)
  C — linki wewnętrzne        (DanglingLinkError dla celu spoza zbioru)
  D — linki zewnętrzne        (opcjonalnie, tylko ostrzeżenia)
"""

from __future__ import annotations

import logging

from data_model import (
    DanglingLinkError,
    DocWeaveError,
    Document,
    ParseError,
)
from locator import FragmentLocator
from md_parser import DEFAULT_SENTINEL, extract_all_links, parse_document, read_document

from .document_index import DocumentIndex
from .external_links import check_external_links
from .types import ValidationReport, issue_from_exception, unreadable_document_issue

logger = logging.getLogger(__name__)


class DocumentValidator:
    """
    Walidator dokumentów względem drzewa źródeł i zbioru dokumentów.

    Użycie:
        index     = DocumentIndex.from_root("docs")
        locator   = FragmentLocator(["src"])
        validator = DocumentValidator(index, locator)
        report    = validator.validate_all()
    """

    def __init__(
        self,
        index: DocumentIndex,
        locator: FragmentLocator,
        sentinel: str = DEFAULT_SENTINEL,
        check_external: bool = False,
        external_timeout: float = 10.0,
    ) -> None:
        self._index = index
        self._locator = locator
        self._sentinel = sentinel
        self._check_external = check_external
        self._external_timeout = external_timeout

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate_all(self) -> ValidationReport:
        report = ValidationReport()
        external: list[tuple[str, int, str]] = []

        for rel in self._index:
            try:
                text = read_document(self._index.root / rel)
            except (OSError, UnicodeDecodeError) as exc:
                report.issues.append(unreadable_document_issue(rel, exc))
                report.documents += 1
                continue
            self.validate_text(text, rel, report, external)

        if self._check_external and external:
            report.warnings.extend(check_external_links(external, self._external_timeout))

        logger.info(
            "Walidacja: %d dokumentów, %d dyrektyw, %d linków, %d błędów",
            report.documents, report.directives, report.links, len(report.issues),
        )
        return report

    def validate_text(
        self,
        text: str,
        path: str,
        report: ValidationReport | None = None,
        external: list[tuple[str, int, str]] | None = None,
    ) -> ValidationReport:
        """Waliduje jeden dokument, dopisując wyniki do `report`."""
        if report is None:
            report = ValidationReport()

        # A — parsowanie
        parse_errors: list[ParseError] = []
        document = parse_document(text, path, self._sentinel, errors=parse_errors)
        for exc in parse_errors:
            report.issues.append(issue_from_exception(path, exc.line or 0, exc))

        # B — dyrektywy
        self._stage_directives(document, report)

        # C — linki
        self._stage_links(document, report, external)

        report.documents += 1
        return report

    # ------------------------------------------------------------------
    # Stage B — dyrektywy
    # ------------------------------------------------------------------

    def _stage_directives(self, document: Document, report: ValidationReport) -> None:
        for block in document.directives():
            report.directives += 1
            try:
                self._locator.resolve_directive(block.directive)
            except (DocWeaveError, OSError, UnicodeDecodeError) as exc:
                report.issues.append(issue_from_exception(document.path, block.line, exc))

    # ------------------------------------------------------------------
    # Stage C — linki wewnętrzne
    # ------------------------------------------------------------------

    def _stage_links(
        self,
        document: Document,
        report: ValidationReport,
        external: list[tuple[str, int, str]] | None,
    ) -> None:
        for link in extract_all_links(document.literal_blocks()):
            if link.is_external:
                if external is not None and link.target.startswith(("http://", "https://")):
                    external.append((document.path, link.line, link.target))
                continue
            if link.is_anchor or not self._index.is_document_target(link.path):
                continue

            report.links += 1
            if not self._index.exists(link.path, document.path):
                exc = DanglingLinkError(
                    f"Link do nieistniejącego dokumentu: {link.target} "
                    f"(→ {self._index.resolve_target(link.path, document.path)})",
                    link.target,
                )
                report.issues.append(issue_from_exception(document.path, link.line, exc))
