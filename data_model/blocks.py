"""
data_model/blocks.py — model dokumentu: bloki źródłowe, include, proza.

Document to uporządkowana sekwencja elementów (Block | IncludeDirective |
Prose) w kolejności dokumentu. Po rozwinięciu include (org_parser.resolver)
dokument nie zawiera już IncludeDirective — bloki dołączonych plików zajmują
miejsce dyrektywy.

Wszystkie struktury są niemutowalne; tworzone raz na jedno wywołanie eksportu.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Origin:
    """Miejsce w pliku źródłowym: ścieżka + numer linii (1-based)."""
    path: str
    line: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}"


@dataclass(frozen=True, slots=True)
class Block:
    """
    Blok źródłowy (#+BEGIN_SRC … #+END_SRC).

    - name:          z poprzedzającej dyrektywy #+NAME: (opcjonalnie)
    - language:      pierwsze słowo nagłówka, np. "python"
    - tangle_target: jawna ścieżka z :tangle <path>
    - content:       linie treści (bez znaczników), bajt w bajt
    - origin:        plik i linia #+BEGIN_SRC
    - via_include:   True gdy blok pochodzi z pliku dołączonego przez #+INCLUDE
    - tangle_auto:   :tangle yes — nazwa pliku wywnioskowana z języka
    - output_name:   :output-name <name> — nadpisanie nazwy bazowej
    - dependencies:  nazwy bloków z #+DEPS:
    - switches:      wszystkie przełączniki nagłówka (dla rendererów)
    """
    name:          str | None
    language:      str | None
    tangle_target: str | None
    content:       tuple[str, ...]
    origin:        Origin
    via_include:   bool = False
    tangle_auto:   bool = False
    output_name:   str | None = None
    dependencies:  tuple[str, ...] = ()
    switches:      tuple[tuple[str, str], ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.content)

    @property
    def is_tangled(self) -> bool:
        """Blok trafia do eksportu AllTangled."""
        return self.tangle_target is not None or self.tangle_auto


class IncludeKind(StrEnum):
    """Wariant dyrektywy #+INCLUDE."""
    ORG      = "org"       # plik org: parsowany, bloki wklejane
    SRC      = "src"       # #+INCLUDE: plik src <lang>: cały plik jako jeden blok
    VERBATIM = "verbatim"  # example / export / quote …, bez kodu


@dataclass(frozen=True, slots=True)
class IncludeDirective:
    """
    Nierozwinięta dyrektywa #+INCLUDE.

    name / dependencies są przejmowane z rejestru oczekującej nazwy tylko
    przez wariant SRC (cały plik staje się jednym nazwanym blokiem).
    """
    referenced_path: str
    language_hint:   str | None
    tangle_override: str | None
    origin:          Origin
    kind:            IncludeKind = IncludeKind.ORG
    name:            str | None = None
    dependencies:    tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Prose:
    """Ciągłe linie poza blokami — przechowywane tylko do przekazania dalej."""
    lines:  tuple[str, ...]
    origin: Origin


DocumentItem: TypeAlias = Block | IncludeDirective | Prose


@dataclass(frozen=True, slots=True)
class Document:
    """
    Sparsowany dokument.

    - path:      ścieżka pliku (lub "<string>")
    - items:     elementy w kolejności dokumentu
    - languages: deklaracje #+SRC_LANG: (język, sufiks) w kolejności wystąpienia
    - warnings:  ostrzeżenia parsera (np. osierocone #+NAME:)
    """
    path:      str
    items:     tuple[DocumentItem, ...]
    languages: tuple[tuple[str, str], ...] = ()
    warnings:  tuple[str, ...] = ()

    @property
    def blocks(self) -> list[Block]:
        return [i for i in self.items if isinstance(i, Block)]

    @property
    def includes(self) -> list[IncludeDirective]:
        return [i for i in self.items if isinstance(i, IncludeDirective)]

    @property
    def stem(self) -> str:
        """Nazwa pliku do pierwszej kropki: 'notes.tangle.org' → 'notes'."""
        name = self.path.replace("\\", "/").rsplit("/", 1)[-1]
        return name.split(".", 1)[0] or name
