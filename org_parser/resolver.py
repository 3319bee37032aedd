"""
org_parser/resolver.py — rozwijanie dyrektyw #+INCLUDE.

Rozwijanie jest rekurencyjne i oddolne: plik dołączany jest najpierw w całości
rozwinięty, a dopiero potem jego bloki trafiają w miejsce dyrektywy. Łańcuch
aktywnych plików przekazywany jest w dół rekurencji (bez globalnej pamięci
podręcznej) — ten sam plik dołączony z dwóch miejsc (romb) jest rozwijany
dwa razy, plik dołączony przez samego siebie to cykl.

Publiczne API:
  IncludeResolver(max_depth, orphan_policy).load(path)          -> Document
  IncludeResolver(...).resolve(document)                        -> Document
  load_document(path, max_depth=64, orphan_policy=WARN)         -> Document
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from data_model.blocks import (
    Block,
    Document,
    DocumentItem,
    IncludeDirective,
    IncludeKind,
    Origin,
)
from data_model.errors import IncludeCycle, IncludeDepthExceeded, IncludeNotFound
from .parser import OrphanPolicy, parse_document

DEFAULT_MAX_DEPTH = 64


def _canonical(path: str | Path) -> Path:
    return Path(path).expanduser().resolve()


def _read_text(path: Path, origin: Origin | None) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise IncludeNotFound(str(path), reason, origin=origin) from e


class IncludeResolver:
    """
    Rozwija #+INCLUDE w dokumencie i w plikach dołączanych.

    Użycie:
        resolver = IncludeResolver(max_depth=16)
        doc      = resolver.load("notes.org")
        for block in doc.blocks: ...
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        orphan_policy: OrphanPolicy = OrphanPolicy.WARN,
    ) -> None:
        self.max_depth      = max_depth
        self._orphan_policy = orphan_policy

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def load(self, path: str | Path) -> Document:
        """Czyta, parsuje i rozwija dokument główny."""
        root = _canonical(path)
        text = _read_text(root, origin=None)
        document = parse_document(text, str(path), self._orphan_policy)
        return self._resolve(document, (root,))

    def resolve(self, document: Document) -> Document:
        """Rozwija już sparsowany dokument; ścieżki względem document.path."""
        return self._resolve(document, (_canonical(document.path),))

    # ------------------------------------------------------------------
    # Rekurencja
    # ------------------------------------------------------------------

    def _resolve(self, document: Document, chain: tuple[Path, ...]) -> Document:
        if not document.includes:
            return document

        base_dir  = chain[-1].parent
        items: list[DocumentItem] = []
        languages = list(document.languages)
        warnings  = list(document.warnings)

        for item in document.items:
            if not isinstance(item, IncludeDirective):
                items.append(item)
                continue
            if item.kind is IncludeKind.VERBATIM:
                continue

            target = _canonical(base_dir / item.referenced_path)

            # src: surowy odczyt, bez rekurencji
            if item.kind is IncludeKind.SRC:
                text = _read_text(target, origin=item.origin)
                items.append(self._source_block(item, target, text))
                continue

            if target in chain:
                raise IncludeCycle(
                    [str(p) for p in chain] + [str(target)],
                    origin=item.origin,
                )
            # chain zawiera korzeń, więc głębokość dołączanego pliku = len(chain)
            if len(chain) > self.max_depth:
                raise IncludeDepthExceeded(self.max_depth, origin=item.origin)

            text = _read_text(target, origin=item.origin)
            child = parse_document(text, str(target), self._orphan_policy)
            child = self._resolve(child, chain + (target,))
            items.extend(self._splice(item, child))
            languages.extend(child.languages)
            warnings.extend(child.warnings)

        return Document(
            path=document.path,
            items=tuple(items),
            languages=tuple(languages),
            warnings=tuple(warnings),
        )

    @staticmethod
    def _splice(directive: IncludeDirective, child: Document) -> list[Block]:
        """Bloki pliku dołączonego: filtr języka, nadpisanie celu, via_include."""
        blocks: list[Block] = []
        for block in child.blocks:
            if directive.language_hint and block.language != directive.language_hint:
                continue
            changes: dict = {"via_include": True}
            if directive.tangle_override:
                changes["tangle_target"] = directive.tangle_override
                changes["tangle_auto"] = False
            blocks.append(replace(block, **changes))
        return blocks

    @staticmethod
    def _source_block(directive: IncludeDirective, target: Path, text: str) -> Block:
        """#+INCLUDE: plik src <lang> — cała zawartość pliku jako jeden blok."""
        content = text.split("\n")
        if content and content[-1] == "":
            content.pop()
        return Block(
            name=directive.name,
            language=directive.language_hint,
            tangle_target=directive.tangle_override,
            content=tuple(content),
            origin=Origin(str(target), 1),
            via_include=True,
            dependencies=directive.dependencies,
        )


def load_document(
    path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    orphan_policy: OrphanPolicy = OrphanPolicy.WARN,
) -> Document:
    return IncludeResolver(max_depth, orphan_policy).load(path)
