"""Testy wyciągania linków z literałów."""

from __future__ import annotations

from data_model import LiteralBlock
from md_parser import Link, extract_all_links, extract_links, parse_document


def _targets(text: str, line: int = 1) -> list[str]:
    return [link.target for link in extract_links(LiteralBlock(text, line))]


def test_inline_links_and_external_flag():
    links = extract_links(LiteralBlock("See [next](step-2.md) and [site](https://example.com).\n", 1))
    assert [link.target for link in links] == ["step-2.md", "https://example.com"]
    assert not links[0].is_external
    assert links[1].is_external


def test_links_inside_code_spans_are_ignored():
    assert _targets("Użyj `[x](y.md)` dosłownie.\n") == []


def test_reference_definition_and_anchor_path():
    (link,) = extract_links(LiteralBlock("[next]: ../intro.md#top\n", 1))
    assert link.target == "../intro.md#top"
    assert link.path == "../intro.md"


def test_html_anchor():
    assert _targets('<a href="step-3.md">Dalej</a>\n') == ["step-3.md"]


def test_angle_bracket_target_and_title():
    assert _targets('[x](<my doc.md>) i [y](z.md "Tytuł")\n') == ["my doc.md", "z.md"]


def test_line_numbers_follow_block_start():
    links = extract_links(LiteralBlock("pierwsza\n[a](a.md)\n", 10))
    assert links == [Link(11, "a.md")]


def test_anchor_only_link():
    (link,) = extract_links(LiteralBlock("[góra](#top)\n", 1))
    assert link.is_anchor
    assert not link.is_external


def test_links_in_fenced_code_are_not_collected():
    doc = parse_document("[a](a.md)\n```\n[b](b.md)\n```\n")
    assert [link.target for link in extract_all_links(doc.literal_blocks())] == ["a.md"]
