"""
org_parser/parser.py — składanie bloków ze strumienia zdarzeń.

Architektura:
  Tokenizer → zdarzenia → BlockParser → Document (Block | IncludeDirective | Prose)

Rejestr oczekującej nazwy (jedno miejsce):
  #+NAME: ustawia nazwę, #+DEPS: ustawia zależności; oba zużywa następny
  #+BEGIN_SRC albo #+INCLUDE: … src <lang>. Nazwa, która nie trafi do żadnego
  bloku, jest osierocona — obsługa zależy od OrphanPolicy.

Publiczne API:
  parse_document(text, path, orphan_policy) -> Document
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from enum import StrEnum

from data_model.blocks import (
    Block,
    Document,
    DocumentItem,
    IncludeKind,
    Origin,
    Prose,
)
from data_model.errors import OrphanedName
from .header_args import (
    parse_dependencies,
    parse_header_args,
    parse_include_spec,
    parse_language_decl,
)
from .tokenizer import (
    BeginBlock,
    Dependencies,
    EndBlock,
    Event,
    Header,
    Include,
    LanguageDecl,
    PlainLine,
    Tokenizer,
)


class OrphanPolicy(StrEnum):
    """Co zrobić z #+NAME:, który nie poprzedza żadnego bloku."""
    WARN   = "warn"    # ostrzeżenie w Document.warnings (domyślnie)
    ERROR  = "error"   # wyjątek OrphanedName
    IGNORE = "ignore"


class BlockParser:
    """
    Jednorazowy parser jednego pliku.

    Użycie:
        doc = BlockParser("notes.org").parse(Tokenizer(text, "notes.org"))
    """

    def __init__(self, path: str, orphan_policy: OrphanPolicy = OrphanPolicy.WARN) -> None:
        self.path           = path
        self._orphan_policy = orphan_policy

        self._items: list[DocumentItem] = []
        self._languages: list[tuple[str, str]] = []
        self._warnings: list[str] = []

        # rejestr oczekującej nazwy
        self._pending_name: str | None = None
        self._pending_name_line = 0
        self._pending_deps: tuple[str, ...] = ()

        # bieżący blok
        self._block_start: int | None = None
        self._block_args = ""
        self._block_lines: list[str] = []

        # bieżący akapit prozy
        self._prose_start = 0
        self._prose_lines: list[str] = []

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def parse(self, events: Iterable[Event]) -> Document:
        for event in events:
            if self._block_start is not None:
                self._in_block(event)
            else:
                self._outside_block(event)

        self._flush_prose()
        if self._pending_name is not None:
            self._orphan(self._pending_name, self._pending_name_line)

        return Document(
            path=self.path,
            items=tuple(self._items),
            languages=tuple(self._languages),
            warnings=tuple(self._warnings),
        )

    # ------------------------------------------------------------------
    # Obsługa zdarzeń
    # ------------------------------------------------------------------

    def _in_block(self, event: Event) -> None:
        match event:
            case EndBlock():
                self._close_block()
            case PlainLine(text=text):
                self._block_lines.append(text)

    def _outside_block(self, event: Event) -> None:
        match event:
            case PlainLine(text=text, line=line):
                if not self._prose_lines:
                    self._prose_start = line
                self._prose_lines.append(text)
                return
            case _:
                self._flush_prose()

        match event:
            case Header(name=name, line=line):
                if self._pending_name is not None:
                    self._orphan(self._pending_name, self._pending_name_line)
                self._pending_name = name or None
                self._pending_name_line = line
            case Dependencies(spec=spec):
                self._pending_deps = parse_dependencies(spec)
            case LanguageDecl(spec=spec, line=line):
                self._languages.append(parse_language_decl(spec, self._origin(line)))
            case BeginBlock(header_args=args, line=line):
                self._block_start = line
                self._block_args  = args
                self._block_lines = []
            case Include(spec=spec, line=line):
                directive = parse_include_spec(spec, self._origin(line))
                if directive.kind is IncludeKind.SRC:
                    name, deps = self._take_pending()
                    directive = replace(directive, name=name, dependencies=deps)
                self._items.append(directive)

    # ------------------------------------------------------------------
    # Funkcje pomocnicze
    # ------------------------------------------------------------------

    def _origin(self, line: int) -> Origin:
        return Origin(self.path, line)

    def _take_pending(self) -> tuple[str | None, tuple[str, ...]]:
        name, deps = self._pending_name, self._pending_deps
        self._pending_name = None
        self._pending_deps = ()
        return name, deps

    def _close_block(self) -> None:
        assert self._block_start is not None
        origin = self._origin(self._block_start)
        args = parse_header_args(self._block_args, origin)
        name, deps = self._take_pending()

        self._items.append(Block(
            name=name,
            language=args.language,
            tangle_target=args.tangle,
            content=tuple(self._block_lines),
            origin=origin,
            tangle_auto=args.tangle_auto,
            output_name=args.output_name,
            dependencies=deps,
            switches=tuple(args.switches.items()),
        ))
        self._block_start = None
        self._block_lines = []

    def _flush_prose(self) -> None:
        if self._prose_lines:
            self._items.append(Prose(tuple(self._prose_lines), self._origin(self._prose_start)))
            self._prose_lines = []

    def _orphan(self, name: str, line: int) -> None:
        match self._orphan_policy:
            case OrphanPolicy.ERROR:
                raise OrphanedName(name, origin=self._origin(line))
            case OrphanPolicy.WARN:
                self._warnings.append(
                    f"{self._origin(line)}: #+NAME: '{name}' nie poprzedza żadnego bloku"
                )
            case OrphanPolicy.IGNORE:
                pass


def parse_document(
    text: str,
    path: str = "<string>",
    orphan_policy: OrphanPolicy = OrphanPolicy.WARN,
) -> Document:
    """Tokenizuje i parsuje jeden plik (bez rozwijania #+INCLUDE)."""
    return BlockParser(path, orphan_policy).parse(Tokenizer(text, path))
