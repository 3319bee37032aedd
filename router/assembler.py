"""
router/assembler.py — nazwy plików wyjściowych i składanie treści.

Kolejność ustalania nazwy dla grupy:
  1. request.explicit_output — gdy jest dokładnie jedna grupa
  2. group.target            — jawne :tangle <path>
  3. nazwa bazowa + rozszerzenie języka
       nazwa bazowa: request.output_name → group.output_name → stem dokumentu
       rozszerzenie: #+SRC_LANG: z dokumentu → tabela EXTENSIONS
     nieznany język bez podanej nazwy → FilenameInferenceFailure

Ścieżki są normalizowane (normalize_target) przed grupowaniem i scalaniem:
"foo.py", "./foo.py" i "src/../foo.py" to ten sam plik wyjściowy.

Treść pliku: teksty fragmentów złączone jedną pustą linią.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import PurePath

from data_model.errors import FilenameInferenceFailure
from data_model.selection import Fragment, OutputGroup, SelectionRequest
from .extensions import UNKNOWN, extension_for

FRAGMENT_SEPARATOR = "\n\n"


def normalize_target(path: str) -> str:
    """Postać kanoniczna ścieżki wyjściowej (bez "./", "a/../", podwójnych "/")."""
    return os.path.normpath(path)


def output_filename(
    group: OutputGroup,
    request: SelectionRequest,
    *,
    stem: str,
    declared: Iterable[tuple[str, str]] = (),
    single: bool = False,
) -> str:
    if request.explicit_output and single:
        return request.explicit_output
    if group.target:
        return group.target

    override = request.output_name or group.output_name
    ext = extension_for(group.language, declared)
    if ext == UNKNOWN:
        if override:
            return override
        raise FilenameInferenceFailure(group.language)
    if override and PurePath(override).suffix:
        return override
    return (override or stem) + ext


def assemble(
    groups: list[OutputGroup],
    request: SelectionRequest,
    *,
    stem: str,
    declared: Iterable[tuple[str, str]] = (),
) -> dict[str, str]:
    """
    Zwraca {nazwa_pliku: treść} w kolejności pierwszego wystąpienia grup.

    Grupy, które dostały tę samą nazwę, są scalane według pozycji fragmentów.
    """
    declared = tuple(declared)
    single = len(groups) == 1
    by_file: dict[str, list[Fragment]] = {}

    for group in groups:
        name = normalize_target(
            output_filename(group, request, stem=stem, declared=declared, single=single)
        )
        if name in by_file:
            by_file[name] = sorted(by_file[name] + group.fragments, key=lambda f: f.position)
        else:
            by_file[name] = list(group.fragments)

    return {
        name: FRAGMENT_SEPARATOR.join(f.content for f in fragments)
        for name, fragments in by_file.items()
    }
