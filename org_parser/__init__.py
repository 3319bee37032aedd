"""
org_parser — parser dokumentów org (podzbiór) dla exorg.

Publiczne API:
  Tokenizer(text, path)                      strumień zdarzeń (wielokrotnego użytku)
  parse_document(text, path, orphan_policy)  → Document (bez rozwijania include)
  IncludeResolver(max_depth, orphan_policy)  rozwijanie #+INCLUDE
  load_document(path, ...)                   → Document z rozwiniętymi include
  parse_header_args(raw)                     → HeaderArgs
  OrphanPolicy                               warn | error | ignore
"""

from .tokenizer import (
    Tokenizer,
    tokenize,
    Header,
    BeginBlock,
    EndBlock,
    Include,
    Dependencies,
    LanguageDecl,
    PlainLine,
)
from .header_args import HeaderArgs, parse_header_args, parse_include_spec
from .parser import BlockParser, OrphanPolicy, parse_document
from .resolver import DEFAULT_MAX_DEPTH, IncludeResolver, load_document

__all__ = [
    "Tokenizer",
    "tokenize",
    "Header",
    "BeginBlock",
    "EndBlock",
    "Include",
    "Dependencies",
    "LanguageDecl",
    "PlainLine",
    "HeaderArgs",
    "parse_header_args",
    "parse_include_spec",
    "BlockParser",
    "OrphanPolicy",
    "parse_document",
    "DEFAULT_MAX_DEPTH",
    "IncludeResolver",
    "load_document",
]
