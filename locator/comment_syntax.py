"""
locator/comment_syntax.py — tabela składni komentarzy {rozszerzenie → (open, close)}.

Znaczniki regionów są komentarzami w języku pliku źródłowego, np.:
    // fragmentA:start          (.java, .kt, .js …)
    # fragmentA:start           (.py, .yaml …)
    <!-- fragmentA:start -->    (.xml, .html …)

Tabelę domyślną można nadpisać/rozszerzyć plikiem JSON:
    {".java": ["//", ""], ".xml": ["<!--", "-->"]}
Plik jest walidowany schematem JSON (jsonschema).
"""

from __future__ import annotations

import json
import pathlib
from collections.abc import Mapping
from dataclasses import dataclass

import jsonschema

from data_model import ConfigurationError


@dataclass(frozen=True, slots=True)
class CommentSyntax:
    open: str
    close: str = ""


_LINE = CommentSyntax("//")
_HASH = CommentSyntax("#")
_DASH = CommentSyntax("--")
_XML  = CommentSyntax("<!--", "-->")
_CSS  = CommentSyntax("/*", "*/")

DEFAULT_COMMENT_TABLE: dict[str, CommentSyntax] = {
    **dict.fromkeys(
        [".java", ".kt", ".kts", ".groovy", ".gradle", ".scala", ".js", ".jsx",
         ".ts", ".tsx", ".c", ".h", ".cpp", ".hpp", ".cs", ".go", ".rs",
         ".swift", ".dart"],
        _LINE,
    ),
    **dict.fromkeys(
        [".py", ".sh", ".bash", ".yaml", ".yml", ".properties", ".toml", ".rb",
         ".conf", ".cfg", ".ini", ".r", ".dockerfile"],
        _HASH,
    ),
    **dict.fromkeys([".sql", ".lua", ".hs"], _DASH),
    **dict.fromkeys([".xml", ".html", ".htm", ".md", ".vue", ".svg"], _XML),
    ".css": _CSS,
}

COMMENT_TABLE_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "patternProperties": {
        r"^\.[A-Za-z0-9_+-]+$": {
            "type": "array",
            "prefixItems": [
                {"type": "string", "minLength": 1},
                {"type": "string"},
            ],
            "minItems": 1,
            "maxItems": 2,
        },
    },
    "additionalProperties": False,
}


def comment_table_from_dict(raw: Mapping, base: Mapping[str, CommentSyntax] | None = None) -> dict[str, CommentSyntax]:
    """
    Waliduje słownik {".ext": [open, close]} i łączy go z tabelą bazową.

    Raises:
        ConfigurationError: słownik nie spełnia COMMENT_TABLE_SCHEMA.
    """
    validator = jsonschema.Draft202012Validator(COMMENT_TABLE_SCHEMA)
    problems = [
        f"/{'/'.join(str(p) for p in e.absolute_path)}: {e.message}"
        for e in validator.iter_errors(raw)
    ]
    if problems:
        raise ConfigurationError(
            "Nieprawidłowa tabela składni komentarzy: " + "; ".join(problems)
        )

    table = dict(DEFAULT_COMMENT_TABLE if base is None else base)
    for ext, pair in raw.items():
        close = pair[1] if len(pair) > 1 else ""
        table[ext.lower()] = CommentSyntax(pair[0], close)
    return table


def load_comment_table(path: str | pathlib.Path) -> dict[str, CommentSyntax]:
    """Ładuje tabelę z pliku JSON (nadpisuje wpisy domyślne)."""
    path = pathlib.Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Brak pliku składni komentarzy: {path}") from None
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Błąd parsowania JSON w {path}: {exc}") from exc
    return comment_table_from_dict(raw)


def syntaxes_for(path: str | pathlib.PurePath, table: Mapping[str, CommentSyntax]) -> list[CommentSyntax]:
    """
    Składnie komentarzy dla pliku. Nieznane rozszerzenie → wszystkie
    składnie z tabeli (znaczniki rozpoznawane w dowolnej z nich).
    """
    suffix = pathlib.PurePath(path).suffix.lower()
    if suffix in table:
        return [table[suffix]]
    return list(dict.fromkeys(table.values()))
