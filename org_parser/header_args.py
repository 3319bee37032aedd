"""
org_parser/header_args.py — parsowanie argumentów dyrektyw.

  parse_header_args("python -n :tangle out.py")  -> HeaderArgs
  parse_include_spec('"lib.org" python :tangle x.py', origin) -> IncludeDirective
  parse_dependencies("setup helpers")            -> ("setup", "helpers")
  parse_language_decl("nim nim", origin)         -> ("nim", "nim")

Wartości można cytować: :tangle "my file.py".
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field

from data_model.blocks import IncludeDirective, IncludeKind, Origin
from data_model.errors import MalformedDirective

TANGLE_SWITCH      = "tangle"
OUTPUT_NAME_SWITCH = "output-name"

# Warianty #+INCLUDE z org-mode, które nie niosą kodu do eksportu
_VERBATIM_INCLUDE_KINDS = {"example", "export", "quote", "comment", "verse", "center"}


def _split(raw: str, origin: Origin | None) -> list[str]:
    """Dzieli jak powłoka (cudzysłowy), ale bez znaków ucieczki: "sub\\lib.org" zostaje."""
    lexer = shlex.shlex(raw, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise MalformedDirective(
            f"Nie można podzielić argumentów '{raw}': {e}",
            origin=origin,
        ) from e


def _switches(tokens: list[str]) -> tuple[list[str], dict[str, str]]:
    """
    Rozdziela tokeny na słowa przed pierwszym przełącznikiem i pary :klucz wartość.

    Wartość to wszystkie tokeny do kolejnego ':klucz' (złączone spacją);
    przełącznik bez wartości dostaje "".
    """
    words: list[str] = []
    switches: dict[str, str] = {}
    key: str | None = None
    value: list[str] = []

    for token in tokens:
        if token.startswith(":") and len(token) > 1:
            if key is not None:
                switches[key] = " ".join(value)
            key, value = token[1:].lower(), []
        elif key is None:
            words.append(token)
        else:
            value.append(token)

    if key is not None:
        switches[key] = " ".join(value)
    return words, switches


# ---------------------------------------------------------------------------
# #+BEGIN_SRC
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HeaderArgs:
    """
    Rozbiór nagłówka bloku.

    - language:    pierwsze słowo (flagi typu -n, -i pomijane)
    - tangle:      ścieżka z :tangle (None dla braku / "no" / "yes")
    - tangle_auto: :tangle yes
    - output_name: wartość :output-name
    - switches:    wszystkie przełączniki :klucz → wartość
    """
    language:    str | None
    tangle:      str | None = None
    tangle_auto: bool = False
    output_name: str | None = None
    switches:    dict[str, str] = field(default_factory=dict)


def parse_header_args(raw: str, origin: Origin | None = None) -> HeaderArgs:
    words, switches = _switches(_split(raw, origin))

    # flagi org-mode (-n, -r, -i …) nie są nazwą języka
    bare = [w for w in words if not (w.startswith("-") and len(w) == 2)]
    language = bare[0] if bare else None

    tangle: str | None = None
    tangle_auto = False
    tangle_raw = switches.get(TANGLE_SWITCH, "").strip()
    match tangle_raw.lower():
        case "" | "no":
            pass
        case "yes":
            tangle_auto = True
        case _:
            tangle = tangle_raw

    output_name = switches.get(OUTPUT_NAME_SWITCH, "").strip() or None

    return HeaderArgs(
        language=language,
        tangle=tangle,
        tangle_auto=tangle_auto,
        output_name=output_name,
        switches=switches,
    )


# ---------------------------------------------------------------------------
# #+INCLUDE
# ---------------------------------------------------------------------------

def parse_include_spec(spec: str, origin: Origin) -> IncludeDirective:
    """
    Formy:
      #+INCLUDE: plik.org                       — wszystkie bloki
      #+INCLUDE: plik.org python                — tylko bloki python
      #+INCLUDE: plik.org :tangle out.py        — nadpisanie celu
      #+INCLUDE: "plik.py" src python           — cały plik jako jeden blok
      #+INCLUDE: plik.txt example               — bez kodu (VERBATIM)
    """
    words, switches = _switches(_split(spec, origin))
    if not words:
        raise MalformedDirective("#+INCLUDE: bez ścieżki", origin=origin)

    path, rest = words[0], words[1:]
    tangle_override = switches.get(TANGLE_SWITCH, "").strip() or None
    if tangle_override is not None and tangle_override.lower() in ("yes", "no"):
        tangle_override = None

    kind = IncludeKind.ORG
    language_hint: str | None = None

    if rest and rest[0].lower() == "src":
        if len(rest) < 2:
            raise MalformedDirective(
                f"#+INCLUDE: {path} src — brak nazwy języka",
                origin=origin,
            )
        kind, language_hint = IncludeKind.SRC, rest[1]
    elif rest and rest[0].lower() in _VERBATIM_INCLUDE_KINDS:
        kind = IncludeKind.VERBATIM
    elif rest:
        language_hint = rest[0]

    return IncludeDirective(
        referenced_path=path,
        language_hint=language_hint,
        tangle_override=tangle_override,
        origin=origin,
        kind=kind,
    )


# ---------------------------------------------------------------------------
# #+DEPS / #+SRC_LANG
# ---------------------------------------------------------------------------

def parse_dependencies(spec: str) -> tuple[str, ...]:
    return tuple(spec.split())


def parse_language_decl(spec: str, origin: Origin) -> tuple[str, str]:
    parts = spec.split()
    if len(parts) < 2:
        raise MalformedDirective(
            f"#+SRC_LANG: oczekiwano '<język> <sufiks>', otrzymano '{spec}'",
            origin=origin,
        )
    language, suffix = parts[0], parts[1]
    return language, suffix.lstrip(".")
