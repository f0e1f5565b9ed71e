"""
md_parser — parser dokumentów Markdown z dyrektywami transkluzji.

Interfejs publiczny:
    parse_document   — tekst → Document (literały, dyrektywy, bloki kodu)
    parse_directive  — pojedyncza linia → (wcięcie, TranscludeDirective) | None
    extract_links    — linki z literału (Markdown inline/ref + <a href>)
    DEFAULT_SENTINEL — domyślny token dyrektywy ("@include")
"""

from .directive_patterns import DEFAULT_SENTINEL
from .directive_parser import parse_directive, parse_document, read_document
from .links import Link, extract_all_links, extract_links

__all__ = [
    "DEFAULT_SENTINEL",
    "Link",
    "extract_all_links",
    "extract_links",
    "parse_directive",
    "parse_document",
    "read_document",
]
