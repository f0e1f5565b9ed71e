"""
validator — walidator dokumentów: dyrektywy transkluzji i linki między stronami.

Interfejs publiczny:
    DocumentIndex      — zbiór dokumentów pod korzeniem docs
    DocumentValidator  — walidacja wszystkich dokumentów (bez fail-fast)
    ValidationReport, ValidationIssue, ErrorKind — typy raportu

Typowe użycie:
    from locator import FragmentLocator
    from validator import DocumentIndex, DocumentValidator

    index     = DocumentIndex.from_root("docs")
    validator = DocumentValidator(index, FragmentLocator(["src"]))

    report = validator.validate_all()
    if not report.is_valid:
        for doc, issues in report.by_document().items():
            for i in issues:
                print(doc, i.line, i.kind, i.detail)
"""

from .types import (
    ErrorKind,
    ValidationIssue,
    ValidationReport,
    issue_from_exception,
    unreadable_document_issue,
)
from .document_index import DEFAULT_DOC_EXTENSIONS, DocumentIndex, is_hidden
from .document_validator import DocumentValidator
from .external_links import check_external_links, probe_url

__all__ = [
    "ErrorKind",
    "ValidationIssue",
    "ValidationReport",
    "issue_from_exception",
    "unreadable_document_issue",
    "DEFAULT_DOC_EXTENSIONS",
    "DocumentIndex",
    "is_hidden",
    "DocumentValidator",
    "check_external_links",
    "probe_url",
]
