"""
data_model/selection.py — żądanie wyboru bloków i grupy wyjściowe.

SelectionRequest opisuje jedno żądanie eksportu (tryb + opcje nazwy pliku).
OutputGroup to uporządkowany zbiór fragmentów trafiających do jednego pliku;
Output Assembler (router.assembler) nadaje mu ostateczną nazwę.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .blocks import Block


class SelectionMode(StrEnum):
    BY_NAME     = "name"
    BY_LANGUAGE = "language"
    ALL_TANGLED = "all"


@dataclass(frozen=True, slots=True)
class SelectionRequest:
    """
    Żądanie wyboru.

    - mode:            BY_NAME | BY_LANGUAGE | ALL_TANGLED
    - name:            nazwa (lub prefiks) bloku dla BY_NAME
    - language:        język dla BY_LANGUAGE; dla BY_NAME opcjonalny filtr
    - explicit_output: pełna ścieżka wyjściowa (wygrywa przy jednej grupie)
    - output_name:     nazwa bazowa zamiast nazwy dokumentu
    """
    mode:            SelectionMode
    name:            str | None = None
    language:        str | None = None
    explicit_output: str | None = None
    output_name:     str | None = None

    @classmethod
    def by_name(
        cls,
        name: str,
        *,
        language: str | None = None,
        explicit_output: str | None = None,
        output_name: str | None = None,
    ) -> SelectionRequest:
        return cls(SelectionMode.BY_NAME, name=name, language=language,
                   explicit_output=explicit_output, output_name=output_name)

    @classmethod
    def by_language(
        cls,
        language: str,
        *,
        explicit_output: str | None = None,
        output_name: str | None = None,
    ) -> SelectionRequest:
        return cls(SelectionMode.BY_LANGUAGE, language=language,
                   explicit_output=explicit_output, output_name=output_name)

    @classmethod
    def all_tangled(
        cls,
        *,
        explicit_output: str | None = None,
        output_name: str | None = None,
    ) -> SelectionRequest:
        return cls(SelectionMode.ALL_TANGLED,
                   explicit_output=explicit_output, output_name=output_name)


@dataclass(frozen=True, slots=True)
class Fragment:
    """Blok wybrany do eksportu + jego pozycja w rozwiniętym dokumencie."""
    block:    Block
    position: int

    @property
    def content(self) -> str:
        return self.block.text


@dataclass(slots=True)
class OutputGroup:
    """
    Fragmenty dla jednego pliku wyjściowego.

    - target:      jawna ścieżka (:tangle <path>) albo None → nazwa wnioskowana
    - language:    język do wyboru rozszerzenia
    - output_name: nazwa bazowa z :output-name (tylko grupy bez target)
    - fragments:   w kolejności eksportu
    """
    target:      str | None
    language:    str | None
    output_name: str | None = None
    fragments:   list[Fragment] = field(default_factory=list)

    @property
    def blocks(self) -> list[Block]:
        return [f.block for f in self.fragments]
