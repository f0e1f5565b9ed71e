"""Konfiguracja DocWeave — zmienne środowiskowe z wartościami domyślnymi."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from data_model import ConfigurationError
from locator import DEFAULT_COMMENT_TABLE, CommentSyntax, load_comment_table
from md_parser import DEFAULT_SENTINEL
from validator import DEFAULT_DOC_EXTENSIONS


@dataclass(frozen=True, slots=True)
class Settings:
    sentinel: str = DEFAULT_SENTINEL
    comment_syntax_file: str | None = None
    doc_extensions: tuple[str, ...] = DEFAULT_DOC_EXTENSIONS
    comment_table: Mapping[str, CommentSyntax] = field(
        default_factory=lambda: dict(DEFAULT_COMMENT_TABLE)
    )


def _split_extensions(raw: str) -> tuple[str, ...]:
    exts = [e.strip().lower() for e in raw.split(",") if e.strip()]
    return tuple(e if e.startswith(".") else f".{e}" for e in exts)


def load_settings(
    env: Mapping[str, str] | None = None,
    sentinel: str | None = None,
    comment_syntax: str | None = None,
) -> Settings:
    """
    Buduje Settings: flagi CLI > zmienne środowiskowe > domyślne.

      DW_SENTINEL        token dyrektywy (domyślnie "@include")
      DW_COMMENT_SYNTAX  plik JSON z tabelą składni komentarzy
      DW_DOC_EXTENSIONS  rozszerzenia dokumentów (".md,.markdown")

    Raises:
        ConfigurationError: pusty sentinel lub błędny plik składni komentarzy.
    """
    env = os.environ if env is None else env

    sentinel = sentinel or env.get("DW_SENTINEL", DEFAULT_SENTINEL)
    if not sentinel.strip() or any(c.isspace() for c in sentinel):
        raise ConfigurationError(f"Nieprawidłowy sentinel dyrektywy: '{sentinel}'")

    comment_file = comment_syntax or env.get("DW_COMMENT_SYNTAX") or None
    table = (
        load_comment_table(comment_file)
        if comment_file
        else dict(DEFAULT_COMMENT_TABLE)
    )

    extensions = _split_extensions(env.get("DW_DOC_EXTENSIONS", "")) or DEFAULT_DOC_EXTENSIONS

    return Settings(
        sentinel=sentinel,
        comment_syntax_file=comment_file,
        doc_extensions=extensions,
        comment_table=table,
    )
