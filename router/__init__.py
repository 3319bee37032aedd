"""
router — wybór bloków, grupowanie i składanie plików wyjściowych.

Publiczne API:
  select(document, request)              → list[OutputGroup]
  complete_name(name, candidates)        → pełna nazwa bloku
  assemble(groups, request, stem, ...)   → {nazwa_pliku: treść}
  output_filename(group, request, ...)   → nazwa pliku dla jednej grupy
  extension_for(language, declared)      → ".py" | UNKNOWN
  EXTENSIONS                             statyczna tabela język → rozszerzenie
  export_document(path, request, ...)    → ExportResult (cały potok)
"""

from .selector import select, complete_name, blocks_of
from .extensions import EXTENSIONS, UNKNOWN, extension_for
from .assembler import FRAGMENT_SEPARATOR, assemble, normalize_target, output_filename
from .export import ExportResult, export_document, export_parsed

__all__ = [
    "select",
    "complete_name",
    "blocks_of",
    "EXTENSIONS",
    "UNKNOWN",
    "extension_for",
    "FRAGMENT_SEPARATOR",
    "assemble",
    "normalize_target",
    "output_filename",
    "ExportResult",
    "export_document",
    "export_parsed",
]
