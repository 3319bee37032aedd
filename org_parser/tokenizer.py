"""
org_parser/tokenizer.py — skanowanie tekstu dokumentu na zdarzenia.

Architektura:
  tekst → linie → dyrektywy na początku linii (#+KEY …) → zdarzenia

Rozpoznawane dyrektywy (wielkość liter bez znaczenia):
  #+NAME:       → Header
  #+BEGIN_SRC   → BeginBlock
  #+END_SRC     → EndBlock
  #+INCLUDE:    → Include
  #+DEPS:       → Dependencies
  #+SRC_LANG:   → LanguageDecl
Wszystko inne (również wewnątrz bloku) → PlainLine.

Tokenizer jest leniwy i wielokrotnego użytku: każde iter() skanuje od nowa.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from data_model.blocks import Origin
from data_model.errors import UnterminatedBlock

# #+KEY[:] reszta: KEY bez spacji, dwukropek opcjonalny (BEGIN_SRC go nie ma)
_DIRECTIVE_RE = re.compile(r"^#\+([A-Za-z_]+)(:?)(.*)$")


# ---------------------------------------------------------------------------
# Zdarzenia
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Header:
    name: str
    line: int


@dataclass(frozen=True, slots=True)
class BeginBlock:
    header_args: str
    line: int


@dataclass(frozen=True, slots=True)
class EndBlock:
    line: int


@dataclass(frozen=True, slots=True)
class Include:
    spec: str
    line: int


@dataclass(frozen=True, slots=True)
class Dependencies:
    spec: str
    line: int


@dataclass(frozen=True, slots=True)
class LanguageDecl:
    spec: str
    line: int


@dataclass(frozen=True, slots=True)
class PlainLine:
    text: str
    line: int


Event: TypeAlias = Header | BeginBlock | EndBlock | Include | Dependencies | LanguageDecl | PlainLine


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def _split_lines(text: str) -> list[str]:
    """Dzieli tekst po '\\n'; końcowy znak nowej linii nie tworzy pustej linii."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _directive(line: str) -> tuple[str, bool, str] | None:
    """Zwraca (KEY, ma_dwukropek, reszta) albo None dla zwykłej linii."""
    m = _DIRECTIVE_RE.match(line.rstrip("\r"))
    if m is None:
        return None
    return m.group(1).upper(), bool(m.group(2)), m.group(3).strip()


class Tokenizer:
    """
    Strumień zdarzeń dla jednego pliku.

    Użycie:
        for event in Tokenizer(text, "notes.org"):
            ...

    Błąd strukturalny (#+BEGIN_SRC wewnątrz bloku albo koniec pliku przed
    #+END_SRC) zgłaszany jest jako UnterminatedBlock z miejscem otwarcia bloku.
    """

    def __init__(self, text: str, path: str = "<string>") -> None:
        self._text = text
        self.path  = path

    def __iter__(self) -> Iterator[Event]:
        return self._scan()

    def _origin(self, line: int) -> Origin:
        return Origin(self.path, line)

    def _scan(self) -> Iterator[Event]:
        open_line: int | None = None

        for lineno, raw in enumerate(_split_lines(self._text), start=1):
            d = _directive(raw)

            if open_line is not None:
                if d is not None and d[0] == "END_SRC":
                    open_line = None
                    yield EndBlock(lineno)
                elif d is not None and d[0] == "BEGIN_SRC":
                    raise UnterminatedBlock(
                        f"Blok otwarty w linii {open_line} nie został zamknięty "
                        f"przed kolejnym #+BEGIN_SRC (linia {lineno})",
                        origin=self._origin(open_line),
                    )
                else:
                    yield PlainLine(raw, lineno)
                continue

            if d is None:
                yield PlainLine(raw, lineno)
                continue

            key, colon, rest = d
            match key:
                case "BEGIN_SRC":
                    open_line = lineno
                    yield BeginBlock(rest, lineno)
                case "NAME" if colon:
                    yield Header(rest, lineno)
                case "INCLUDE" if colon:
                    yield Include(rest, lineno)
                case "DEPS" if colon:
                    yield Dependencies(rest, lineno)
                case "SRC_LANG" if colon:
                    yield LanguageDecl(rest, lineno)
                case _:
                    # #+END_SRC poza blokiem i nieznane słowa kluczowe to proza
                    yield PlainLine(raw, lineno)

        if open_line is not None:
            raise UnterminatedBlock(
                "Brak #+END_SRC przed końcem pliku",
                origin=self._origin(open_line),
            )


def tokenize(text: str, path: str = "<string>") -> Tokenizer:
    return Tokenizer(text, path)
