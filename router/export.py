"""
router/export.py — jedno wywołanie eksportu: plik → {nazwa: treść}.

  document = load_document(path)              (tokenizer + parser + include)
  groups   = select(document, request)        (router)
  files    = assemble(groups, request, ...)   (output assembler)

ExportResult przekazuje dalej także dokument i grupy — z nich korzystają
zewnętrzni konsumenci (serializator notatnika, renderer PDF).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from data_model.blocks import Document
from data_model.selection import OutputGroup, SelectionRequest
from org_parser.parser import OrphanPolicy
from org_parser.resolver import DEFAULT_MAX_DEPTH, IncludeResolver
from .assembler import assemble
from .selector import select


@dataclass(slots=True)
class ExportResult:
    document: Document
    groups:   list[OutputGroup]
    files:    dict[str, str] = field(default_factory=dict)

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.document.warnings


def export_document(
    path: str | Path,
    request: SelectionRequest,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    orphan_policy: OrphanPolicy = OrphanPolicy.WARN,
) -> ExportResult:
    document = IncludeResolver(max_depth, orphan_policy).load(path)
    return export_parsed(document, request)


def export_parsed(document: Document, request: SelectionRequest) -> ExportResult:
    """Jak export_document, dla dokumentu już rozwiniętego."""
    groups = select(document, request)
    files = assemble(
        groups,
        request,
        stem=document.stem,
        declared=document.languages,
    )
    return ExportResult(document=document, groups=groups, files=files)
