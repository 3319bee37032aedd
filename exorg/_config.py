"""Konfiguracja exorg — zmienne środowiskowe (opcjonalnie z pliku .env).

Zmienne:
  EXORG_MAX_INCLUDE_DEPTH   maksymalna głębokość #+INCLUDE (domyślnie 64)
  EXORG_ORPHAN_NAME         warn | error | ignore (domyślnie warn)

Plik .env szukany jest w bieżącym katalogu (python-dotenv, find_dotenv).
Flagi CLI mają pierwszeństwo przed zmiennymi.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from org_parser.parser import OrphanPolicy
from org_parser.resolver import DEFAULT_MAX_DEPTH

_ENV_MAX_DEPTH = "EXORG_MAX_INCLUDE_DEPTH"
_ENV_ORPHAN    = "EXORG_ORPHAN_NAME"


@dataclass(frozen=True, slots=True)
class Settings:
    max_include_depth: int = DEFAULT_MAX_DEPTH
    orphan_policy:     OrphanPolicy = OrphanPolicy.WARN


def load_settings(use_dotenv: bool = True) -> Settings:
    """Czyta ustawienia ze środowiska; błędne wartości → ValueError."""
    if use_dotenv:
        env_file = find_dotenv(usecwd=True)
        if env_file:
            load_dotenv(env_file, override=False)

    raw_depth = os.getenv(_ENV_MAX_DEPTH, str(DEFAULT_MAX_DEPTH)).strip()
    try:
        depth = int(raw_depth)
    except ValueError:
        raise ValueError(f"{_ENV_MAX_DEPTH}: oczekiwano liczby, otrzymano '{raw_depth}'") from None
    if depth < 0:
        raise ValueError(f"{_ENV_MAX_DEPTH}: wartość nie może być ujemna ({depth})")

    raw_policy = os.getenv(_ENV_ORPHAN, OrphanPolicy.WARN.value).strip().lower()
    try:
        policy = OrphanPolicy(raw_policy)
    except ValueError:
        allowed = ", ".join(p.value for p in OrphanPolicy)
        raise ValueError(f"{_ENV_ORPHAN}: dozwolone {allowed}, otrzymano '{raw_policy}'") from None

    return Settings(max_include_depth=depth, orphan_policy=policy)
