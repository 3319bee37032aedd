"""
data_model — struktury danych exorg.

Użycie:
  from data_model import Block, Document, SelectionRequest, TangleError, ...

Moduły:
  blocks    — Origin, Block, IncludeKind, IncludeDirective, Prose, Document
  selection — SelectionMode, SelectionRequest, Fragment, OutputGroup
  errors    — ErrorCode, TangleError i wyjątki dla każdego rodzaju błędu
"""

from .blocks import (
    Origin,
    Block,
    IncludeKind,
    IncludeDirective,
    Prose,
    DocumentItem,
    Document,
)
from .selection import (
    SelectionMode,
    SelectionRequest,
    Fragment,
    OutputGroup,
)
from .errors import (
    ErrorCode,
    TangleError,
    UnterminatedBlock,
    OrphanedName,
    MalformedDirective,
    IncludeNotFound,
    IncludeCycle,
    IncludeDepthExceeded,
    NoMatchingBlock,
    AmbiguousBlockName,
    UnsatisfiableDependencies,
    FilenameInferenceFailure,
)

__all__ = [
    # blocks
    "Origin",
    "Block",
    "IncludeKind",
    "IncludeDirective",
    "Prose",
    "DocumentItem",
    "Document",
    # selection
    "SelectionMode",
    "SelectionRequest",
    "Fragment",
    "OutputGroup",
    # errors
    "ErrorCode",
    "TangleError",
    "UnterminatedBlock",
    "OrphanedName",
    "MalformedDirective",
    "IncludeNotFound",
    "IncludeCycle",
    "IncludeDepthExceeded",
    "NoMatchingBlock",
    "AmbiguousBlockName",
    "UnsatisfiableDependencies",
    "FilenameInferenceFailure",
]
