"""
data_model/errors.py — kody błędów i wyjątki rdzenia eksportu.

Każdy rodzaj błędu ma stały kod (ErrorCode) i własną klasę wyjątku.
Wszystkie dziedziczą po TangleError, więc wywołujący (CLI, renderer)
może złapać jeden typ i sam zdecydować: przerwać czy zapytać użytkownika.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from .blocks import Origin


class ErrorCode(StrEnum):
    """Stałe kody błędów parsera, resolvera include i routera."""

    # Struktura dokumentu
    UNTERMINATED_BLOCK         = "E_UNTERMINATED_BLOCK"
    ORPHANED_NAME              = "E_ORPHANED_NAME"
    MALFORMED_DIRECTIVE        = "E_MALFORMED_DIRECTIVE"

    # Include
    INCLUDE_NOT_FOUND          = "E_INCLUDE_NOT_FOUND"
    INCLUDE_CYCLE              = "E_INCLUDE_CYCLE"
    INCLUDE_DEPTH_EXCEEDED     = "E_INCLUDE_DEPTH_EXCEEDED"

    # Wybór bloków
    NO_MATCHING_BLOCK          = "E_NO_MATCHING_BLOCK"
    AMBIGUOUS_BLOCK_NAME       = "E_AMBIGUOUS_BLOCK_NAME"
    UNSATISFIABLE_DEPENDENCIES = "E_UNSATISFIABLE_DEPENDENCIES"

    # Nazwa pliku wyjściowego
    FILENAME_INFERENCE_FAILURE = "E_FILENAME_INFERENCE_FAILURE"


class TangleError(Exception):
    """
    Bazowy błąd rdzenia.

    - code:    stały identyfikator klasy błędu (ErrorCode)
    - message: czytelny opis
    - origin:  miejsce w dokumencie (plik:linia), jeśli znane
    - details: dodatkowe dane strukturalne (kandydaci, łańcuch include, …)
    """

    code: ErrorCode

    def __init__(
        self,
        message: str,
        *,
        origin: Origin | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.origin  = origin
        self.details = details or {}

    def __str__(self) -> str:
        if self.origin is not None:
            return f"{self.origin}: {self.message}"
        return self.message


class UnterminatedBlock(TangleError):
    code = ErrorCode.UNTERMINATED_BLOCK


class OrphanedName(TangleError):
    code = ErrorCode.ORPHANED_NAME

    def __init__(self, name: str, *, origin: Origin | None = None) -> None:
        super().__init__(
            f"Dyrektywa #+NAME: '{name}' nie poprzedza żadnego bloku",
            origin=origin,
            details={"name": name},
        )
        self.name = name


class MalformedDirective(TangleError):
    code = ErrorCode.MALFORMED_DIRECTIVE


class IncludeNotFound(TangleError):
    code = ErrorCode.INCLUDE_NOT_FOUND

    def __init__(self, path: str, reason: str, *, origin: Origin | None = None) -> None:
        super().__init__(
            f"Nie można odczytać pliku '{path}': {reason}",
            origin=origin,
            details={"path": path},
        )
        self.path = path


class IncludeCycle(TangleError):
    code = ErrorCode.INCLUDE_CYCLE

    def __init__(self, chain: list[str], *, origin: Origin | None = None) -> None:
        super().__init__(
            "Cykl include: " + " → ".join(chain),
            origin=origin,
            details={"chain": chain},
        )
        self.chain = chain


class IncludeDepthExceeded(TangleError):
    code = ErrorCode.INCLUDE_DEPTH_EXCEEDED

    def __init__(self, depth: int, *, origin: Origin | None = None) -> None:
        super().__init__(
            f"Przekroczono maksymalną głębokość include ({depth})",
            origin=origin,
            details={"max_depth": depth},
        )
        self.depth = depth


class NoMatchingBlock(TangleError):
    code = ErrorCode.NO_MATCHING_BLOCK

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Brak bloku o nazwie (lub prefiksie) '{name}'",
            details={"name": name},
        )
        self.name = name


class AmbiguousBlockName(TangleError):
    code = ErrorCode.AMBIGUOUS_BLOCK_NAME

    def __init__(self, name: str, candidates: list[str]) -> None:
        super().__init__(
            f"Niejednoznaczna nazwa bloku '{name}': " + ", ".join(candidates),
            details={"name": name, "candidates": candidates},
        )
        self.name       = name
        self.candidates = candidates


class UnsatisfiableDependencies(TangleError):
    code = ErrorCode.UNSATISFIABLE_DEPENDENCIES

    def __init__(self, names: list[str], reason: str) -> None:
        super().__init__(
            f"Niespełnialne zależności ({reason}): " + ", ".join(names),
            details={"names": names},
        )
        self.names = names


class FilenameInferenceFailure(TangleError):
    code = ErrorCode.FILENAME_INFERENCE_FAILURE

    def __init__(self, language: str | None) -> None:
        shown = language or "(brak języka)"
        super().__init__(
            f"Nie można ustalić rozszerzenia dla języka {shown}; "
            "podaj nazwę wyjściową (-o / --name / :tangle)",
            details={"language": language},
        )
        self.language = language
