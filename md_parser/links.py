"""md_parser/links.py — wyciąganie linków z literałów dokumentu Markdown."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from data_model import LiteralBlock

from .directive_patterns import iter_lines

# [tekst](cel "tytuł") oraz ![alt](obraz.png)
_INLINE_LINK_RE = re.compile(
    r"!?\[(?P<text>[^\]]*)\]\((?P<target><[^>]*>|[^)\s]+)(?:\s+\"[^\"]*\")?\)"
)

# [id]: cel  (definicja linku referencyjnego)
_REF_DEF_RE = re.compile(r"^[ ]{0,3}\[(?P<id>[^\]]+)\]:[ \t]*(?P<target><[^>]*>|\S+)")

# Fragmenty kodu inline — linki w nich nie są linkami.
_CODE_SPAN_RE = re.compile(r"(`+)[^`]*?\1")


@dataclass(frozen=True, slots=True)
class Link:
    line: int            # 1-based numer linii w dokumencie
    target: str          # cel linku, bez nawiasów <>

    @property
    def is_external(self) -> bool:
        # len(scheme) > 1: "C:\..." to nie schemat URL
        return len(urlparse(self.target).scheme) > 1

    @property
    def is_anchor(self) -> bool:
        return self.target.startswith("#")

    @property
    def path(self) -> str:
        """Cel bez kotwicy i query: "krok-2.md#sekcja" → "krok-2.md"."""
        return re.split(r"[#?]", self.target, maxsplit=1)[0]


def _clean(target: str) -> str:
    target = target.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()
    return target


def _html_hrefs(content: str) -> Iterator[str]:
    if "<a" not in content.lower():
        return
    soup = BeautifulSoup(content, "html.parser")
    for a in soup.find_all("a", href=True):
        yield str(a["href"])


def extract_links(block: LiteralBlock) -> list[Link]:
    """Linki z jednego literału, w kolejności wystąpienia."""
    links: list[Link] = []
    for offset, line in iter_lines(block.text):
        lineno = block.line + offset - 1
        content = _CODE_SPAN_RE.sub("", line.rstrip("\r\n"))

        m = _REF_DEF_RE.match(content)
        if m is not None:
            links.append(Link(lineno, _clean(m.group("target"))))
            continue

        for m in _INLINE_LINK_RE.finditer(content):
            links.append(Link(lineno, _clean(m.group("target"))))

        for href in _html_hrefs(content):
            links.append(Link(lineno, _clean(href)))

    return [link for link in links if link.target]


def extract_all_links(blocks: Iterable[LiteralBlock]) -> list[Link]:
    links: list[Link] = []
    for block in blocks:
        links.extend(extract_links(block))
    return links
