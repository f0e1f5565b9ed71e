"""Testy walidatora dokumentów i raportu."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
import requests

from data_model import ConfigurationError
from locator import FragmentLocator
from validator import (
    DocumentIndex,
    DocumentValidator,
    ErrorKind,
    ValidationReport,
    probe_url,
)

from conftest import write


def _validator(docs_root, src_root, **kwargs) -> DocumentValidator:
    return DocumentValidator(DocumentIndex.from_root(docs_root), FragmentLocator([src_root]), **kwargs)


def test_valid_tree_has_empty_report(docs_root, src_root):
    report = _validator(docs_root, src_root).validate_all()
    assert report.is_valid
    assert report.issues == []
    assert report.documents == 2
    assert report.directives == 1
    assert report.links == 2


def test_all_failures_are_collected(docs_root, src_root):
    write(docs_root, "step-3.md", (
        '@include "Missing.java"\n'          # 1
        '@include "Booking.src:nope"\n'      # 2
        '@include "unterminated\n'           # 3
        '@include "Booking.src:fragmentA"\n' # 4
        "[dalej](step-4.md)\n"               # 5
        "[wstecz](step-2.md)\n"              # 6
    ))
    report = _validator(docs_root, src_root).validate_all()

    issues = report.by_document()["step-3.md"]
    assert [(i.line, i.kind) for i in issues] == [
        (1, ErrorKind.FILE_NOT_FOUND),
        (2, ErrorKind.REGION_NOT_FOUND),
        (3, ErrorKind.PARSE),
        (5, ErrorKind.DANGLING_LINK),
    ]
    assert not report.is_valid
    assert report.directives == 4


def test_missing_file_gives_exactly_one_entry_naming_path(docs_root, src_root):
    write(docs_root, "a.md", '@include "gone/Tools.java:x"\n@include "Booking.src:fragmentA"\n')
    report = _validator(docs_root, src_root).validate_all()

    not_found = [i for i in report.issues if i.kind == ErrorKind.FILE_NOT_FOUND]
    assert len(not_found) == 1
    assert "gone/Tools.java" in not_found[0].detail
    assert len(report.issues) == 1


def test_relative_links_between_directories(docs_root, src_root):
    write(docs_root, "guide/a.md", "[start](../index.md) [obok](b.md) [root](/step-2.md)\n")
    write(docs_root, "guide/b.md", "[brak](../guide/c.md)\n")
    report = _validator(docs_root, src_root).validate_all()

    assert [(i.document_path, i.line) for i in report.issues] == [("guide/b.md", 1)]
    assert "guide/c.md" in report.issues[0].detail


def test_non_document_and_fenced_links_are_not_checked(docs_root, src_root):
    write(docs_root, "c.md", (
        "![diagram](img/missing.png)\n"
        "[http](https://example.com/x.md)\n"
        "```\n"
        "[w kodzie](nope.md)\n"
        "```\n"
    ))
    report = _validator(docs_root, src_root).validate_all()
    assert report.is_valid


def test_report_json_shape(docs_root, src_root):
    write(docs_root, "z.md", '@include "Missing.java"\n')
    write(docs_root, "a.md", "[x](missing.md)\n")
    report = _validator(docs_root, src_root).validate_all()

    data = report.to_json()
    assert [d["documentPath"] for d in data] == ["a.md", "z.md"]
    assert data[0] == {
        "documentPath": "a.md",
        "line": 1,
        "errorKind": "DanglingLinkError",
        "detail": data[0]["detail"],
    }
    assert data[1]["errorKind"] == "FileNotFoundError"


def test_custom_sentinel(docs_root, src_root):
    write(docs_root, "s.md", '::embed "Missing.java"\n@include "also-ignored"\n')
    report = _validator(docs_root, src_root, sentinel="::embed").validate_all()
    assert [(i.document_path, i.kind) for i in report.issues] == [
        ("s.md", ErrorKind.FILE_NOT_FOUND),
    ]
    # step-2.md używa "@include" — przy innym sentinelu to zwykły tekst
    assert report.directives == 1


def test_missing_docs_root_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        DocumentIndex.from_root(tmp_path / "nie-ma")


def test_document_index_skips_hidden(docs_root):
    write(docs_root, ".history/old.md", "x")
    index = DocumentIndex.from_root(docs_root)
    assert list(index) == ["index.md", "step-2.md"]
    assert "index.md" in index
    assert len(index) == 2


# ---------------------------------------------------------------------------
# Linki zewnętrzne
# ---------------------------------------------------------------------------

def test_external_links_become_warnings(docs_root, src_root):
    write(docs_root, "ext.md", "[docs](https://docs.example.com/tools)\n")
    with patch(
        "validator.document_validator.check_external_links",
        return_value=["ext.md:1: https://docs.example.com/tools — HTTP 404"],
    ) as check:
        report = _validator(docs_root, src_root, check_external=True).validate_all()

    check.assert_called_once()
    (links, _timeout), _ = check.call_args
    assert links == [("ext.md", 1, "https://docs.example.com/tools")]
    assert report.is_valid
    assert report.warnings == ["ext.md:1: https://docs.example.com/tools — HTTP 404"]


def test_external_links_not_probed_by_default(docs_root, src_root):
    write(docs_root, "ext.md", "[docs](https://docs.example.com/tools)\n")
    with patch("validator.document_validator.check_external_links") as check:
        _validator(docs_root, src_root).validate_all()
    check.assert_not_called()


def test_probe_url_statuses():
    session = Mock()
    session.head.return_value = Mock(status_code=200)
    assert probe_url("https://ok", session=session) is None

    session.head.return_value = Mock(status_code=404)
    assert probe_url("https://missing", session=session) == "HTTP 404"


def test_probe_url_falls_back_to_get():
    session = Mock()
    session.head.return_value = Mock(status_code=405)
    session.get.return_value = Mock(status_code=200)
    assert probe_url("https://no-head", session=session) is None
    session.get.assert_called_once()


def test_probe_url_connection_error():
    session = Mock()
    session.head.side_effect = requests.ConnectionError("boom")
    assert probe_url("https://down", session=session) == "błąd połączenia: ConnectionError"


def test_report_grouping_is_sorted():
    report = ValidationReport()
    assert report.is_valid
    assert report.by_document() == {}
