"""Testy lokatora fragmentów, regionów i tabeli składni komentarzy."""

from __future__ import annotations

import json

import pytest

from data_model import (
    ConfigurationError,
    LineRange,
    RegionNotFoundError,
    SourceFileNotFoundError,
    TranscludeDirective,
)
from locator import (
    DEFAULT_COMMENT_TABLE,
    CommentSyntax,
    FragmentLocator,
    comment_table_from_dict,
    load_comment_table,
    scan_regions,
)

from conftest import BOOKING_JAVA, write

JAVA = "dev/example/BookingTools.java"


# ---------------------------------------------------------------------------
# Regiony
# ---------------------------------------------------------------------------

def test_tag_region_is_dedented(src_root):
    locator = FragmentLocator([src_root])
    assert locator.resolve(JAVA, "tools") == (
        "@Tool\n"
        "public String cancelBooking(String number) {\n"
        "    return service.cancel(number);\n"
        "}"
    )


def test_nested_markers_are_dropped(src_root):
    locator = FragmentLocator([src_root])
    assert locator.resolve(JAVA, "outer") == "int a;\nint b;"
    assert locator.resolve(JAVA, "inner") == "int b;"


def test_full_file_without_trailing_newline(src_root):
    locator = FragmentLocator([src_root])
    assert locator.resolve(JAVA) == BOOKING_JAVA[:-1]


def test_xml_comment_markers(src_root):
    text = FragmentLocator([src_root]).resolve("pom.xml", "deps")
    assert text.splitlines()[0] == "<dependency>"
    assert "  <artifactId>langchain4j</artifactId>" in text


def test_unknown_extension_matches_any_known_syntax(src_root):
    assert FragmentLocator([src_root]).resolve("Booking.src", "fragmentA") == "int x;"


@pytest.mark.parametrize("body, expected", [
    ("  a\n  b\n", "a\nb"),
    ("  a\n    b\n", "a\n  b"),
    ("\ta\n\t\tb\n", "a\n\tb"),
    ("    a\n\n    b\n", "a\n\nb"),
    ("  a\n      \n  b\n", "a\n    \nb"),
])
def test_only_common_indent_is_stripped(tmp_path, body, expected):
    write(tmp_path, "R.java", f"// r:start\n{body}// r:end\n")
    assert FragmentLocator([tmp_path]).resolve("R.java", "r") == expected


def test_line_range(src_root):
    locator = FragmentLocator([src_root])
    assert locator.resolve(JAVA, LineRange(5, 6)) == (
        "@Tool\npublic String cancelBooking(String number) {"
    )


def test_line_range_out_of_file(src_root):
    with pytest.raises(RegionNotFoundError):
        FragmentLocator([src_root]).resolve("Booking.src", LineRange(2, 40))


def test_missing_tag(src_root):
    with pytest.raises(RegionNotFoundError) as info:
        FragmentLocator([src_root]).resolve(JAVA, "nope")
    assert info.value.region == "nope"


def test_start_without_end_is_region_error(tmp_path):
    write(tmp_path, "A.java", "// a:start\nint x;\n")
    with pytest.raises(RegionNotFoundError, match="a:start"):
        FragmentLocator([tmp_path]).resolve("A.java", "a")


def test_duplicated_tag_is_region_error(tmp_path):
    write(tmp_path, "A.java", "// a:start\n1\n// a:end\n// a:start\n2\n// a:end\n")
    with pytest.raises(RegionNotFoundError):
        FragmentLocator([tmp_path]).resolve("A.java", "a")


@pytest.mark.parametrize("body", [
    "// a:end\n// a:start\nx\n// a:end\n",
    "// a:start\nx\n// a:end\n// a:end\n",
])
def test_stray_end_marker_is_region_error(tmp_path, body):
    write(tmp_path, "A.java", body)
    locator = FragmentLocator([tmp_path])
    with pytest.raises(RegionNotFoundError, match="a:end"):
        locator.resolve("A.java", "a")
    assert "a" not in locator.scan("A.java").regions


# ---------------------------------------------------------------------------
# Pliki i korzenie
# ---------------------------------------------------------------------------

def test_missing_file(src_root):
    with pytest.raises(SourceFileNotFoundError) as info:
        FragmentLocator([src_root]).resolve("Missing.java")
    assert isinstance(info.value, FileNotFoundError)
    assert info.value.source_path == "Missing.java"


@pytest.mark.parametrize("path", ["../outside.java", "/etc/passwd"])
def test_paths_outside_root_are_rejected(src_root, path):
    write(src_root.parent, "outside.java", "x")
    with pytest.raises(SourceFileNotFoundError):
        FragmentLocator([src_root]).resolve(path)


def test_roots_are_searched_in_order(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    write(first, "A.java", "first")
    write(second, "A.java", "second")
    write(second, "B.java", "only second")
    locator = FragmentLocator([first, second])
    assert locator.resolve("A.java") == "first"
    assert locator.resolve("B.java") == "only second"


def test_path_escaping_one_root_is_tried_in_the_next(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    write(first, "A.java", "a")
    write(second, "B.java", "b")
    # "../two/B.java" wychodzi poza "one", ale w "two" wskazuje na B.java
    locator = FragmentLocator([first, second])
    assert locator.resolve("../two/B.java") == "b"


def test_resolving_twice_is_identical_and_cached(src_root):
    locator = FragmentLocator([src_root])
    directive = TranscludeDirective(JAVA, "tools")
    first = locator.resolve_directive(directive)

    # Pliki są niezmienne w trakcie przebiegu — drugi odczyt idzie z cache.
    (src_root / JAVA).write_text("// tools:start\nzmienione\n// tools:end\n", encoding="utf-8")
    assert locator.resolve_directive(directive) == first


def test_crlf_source_is_normalized(tmp_path):
    write(tmp_path, "W.java", "// w:start\r\n  a\r\n  b\r\n// w:end\r\n")
    assert FragmentLocator([tmp_path]).resolve("W.java", "w") == "a\nb"


# ---------------------------------------------------------------------------
# Skanowanie znaczników
# ---------------------------------------------------------------------------

def test_scan_regions_reports_problems():
    lines = ["# a:end", "# b:start", "x", "# b:end", "# c:start"]
    scan = scan_regions(lines, [CommentSyntax("#")])
    assert set(scan.regions) == {"b"}
    assert scan.regions["b"].start_line == 2
    assert scan.regions["b"].size == 1
    assert sorted((p.tag, p.line) for p in scan.problems) == [("a", 1), ("c", 5)]


def test_marker_requires_exact_inner_text():
    lines = ["// a:start here", "// a:end"]
    scan = scan_regions(lines, [CommentSyntax("//")])
    assert scan.regions == {}
    assert [p.tag for p in scan.problems] == ["a"]


# ---------------------------------------------------------------------------
# Tabela składni komentarzy
# ---------------------------------------------------------------------------

def test_comment_table_override_and_extension():
    table = comment_table_from_dict({".foo": [";;"], ".java": ["/*", "*/"]})
    assert table[".foo"] == CommentSyntax(";;")
    assert table[".java"] == CommentSyntax("/*", "*/")
    assert table[".py"] == DEFAULT_COMMENT_TABLE[".py"]


@pytest.mark.parametrize("raw", [
    {"foo": ["#"]},
    {".x": []},
    {".x": ["", ""]},
    {".x": ["#", "", "extra"]},
    {".x": "#"},
])
def test_invalid_comment_table(raw):
    with pytest.raises(ConfigurationError):
        comment_table_from_dict(raw)


def test_load_comment_table_file(tmp_path):
    path = write(tmp_path, "syntax.json", json.dumps({".lisp": [";"]}))
    table = load_comment_table(path)
    write(tmp_path, "src/a.lisp", "; r:start\n(+ 1 2)\n; r:end\n")
    assert FragmentLocator([tmp_path / "src"], table).resolve("a.lisp", "r") == "(+ 1 2)"


def test_load_comment_table_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_comment_table(tmp_path / "missing.json")
    bad = write(tmp_path, "bad.json", "{nie json")
    with pytest.raises(ConfigurationError):
        load_comment_table(bad)
