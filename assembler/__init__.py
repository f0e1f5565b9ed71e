"""
assembler — składanie dokumentów: dyrektywy → dosłowny tekst fragmentów.

Interfejs publiczny:
    assemble          — Document + FragmentLocator → RenderedDocument
    render_directive  — fragment z wcięciem/zakończeniem linii dyrektywy
    render_tree       — zapis całego drzewa docs do katalogu wyjściowego
"""

from .assembler import assemble, render_directive, render_tree

__all__ = [
    "assemble",
    "render_directive",
    "render_tree",
]
