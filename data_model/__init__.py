"""
data_model — struktury danych DocWeave.

Użycie:
  from data_model import Document, TranscludeDirective, ParseError, ...

Moduły:
  directives — TranscludeDirective, LineRange, RegionRef
  documents  — LiteralBlock, DirectiveBlock, FenceBlock, Document,
               RenderedDocument, Region
  errors     — DocWeaveError, ParseError, RegionNotFoundError,
               SourceFileNotFoundError, DanglingLinkError, ConfigurationError
"""

from .directives import (
    LineRange,
    RegionRef,
    TranscludeDirective,
)
from .documents import (
    Block,
    DirectiveBlock,
    Document,
    FenceBlock,
    InnerBlock,
    LiteralBlock,
    Region,
    RenderedDocument,
)
from .errors import (
    ConfigurationError,
    DanglingLinkError,
    DocWeaveError,
    ParseError,
    RegionNotFoundError,
    SourceFileNotFoundError,
)

__all__ = [
    # directives
    "LineRange",
    "RegionRef",
    "TranscludeDirective",
    # documents
    "Block",
    "DirectiveBlock",
    "Document",
    "FenceBlock",
    "InnerBlock",
    "LiteralBlock",
    "Region",
    "RenderedDocument",
    # errors
    "ConfigurationError",
    "DanglingLinkError",
    "DocWeaveError",
    "ParseError",
    "RegionNotFoundError",
    "SourceFileNotFoundError",
]
