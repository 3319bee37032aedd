"""
router/extensions.py — statyczna tabela język → rozszerzenie pliku.

Tabela jest niemutowalna (MappingProxyType). Języki spoza tabeli można
zadeklarować w dokumencie: #+SRC_LANG: <język> <sufiks>. Deklaracja
w dokumencie ma pierwszeństwo przed tabelą.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import Final, Mapping

# Wartość zwracana dla języka bez znanego rozszerzenia
UNKNOWN: Final = ""

EXTENSIONS: Final[Mapping[str, str]] = MappingProxyType({
    "awk":        ".awk",
    "bash":       ".sh",
    "sh":         ".sh",
    "shell":      ".sh",
    "c":          ".c",
    "cpp":        ".cpp",
    "c++":        ".cpp",
    "csharp":     ".cs",
    "c#":         ".cs",
    "cs":         ".cs",
    "css":        ".css",
    "d":          ".d",
    "emacs-lisp": ".el",
    "elisp":      ".el",
    "go":         ".go",
    "html":       ".html",
    "java":       ".java",
    "javascript": ".js",
    "js":         ".js",
    "json":       ".json",
    "julia":      ".jl",
    "latex":      ".tex",
    "lua":        ".lua",
    "markdown":   ".md",
    "ocaml":      ".ml",
    "perl":       ".pl",
    "php":        ".php",
    "prolog":     ".pl",
    "python":     ".py",
    "r":          ".r",
    "ruby":       ".rb",
    "rust":       ".rs",
    "sql":        ".sql",
    "toml":       ".toml",
    "yaml":       ".yml",
})


def extension_for(
    language: str | None,
    declared: Iterable[tuple[str, str]] = (),
) -> str:
    """
    Rozszerzenie (z kropką) dla języka albo UNKNOWN.

    declared — pary (język, sufiks) z #+SRC_LANG:; ostatnia deklaracja wygrywa.
    Wielkość liter w nazwie języka nie ma znaczenia.
    """
    if not language:
        return UNKNOWN
    key = language.lower()
    custom = {lang.lower(): suffix for lang, suffix in declared}
    if key in custom:
        return "." + custom[key].lstrip(".")
    return EXTENSIONS.get(key, UNKNOWN)
