"""
router/selector.py — wybór bloków i grupowanie według pliku wyjściowego.

Tryby (SelectionMode):
  BY_NAME      bloki o danej nazwie (z autouzupełnianiem prefiksu)
               + domknięcie zależności #+DEPS:, jedna grupa
  BY_LANGUAGE  wszystkie bloki języka, jedna grupa (cele :tangle ignorowane)
  ALL_TANGLED  bloki z :tangle, grupowane po celu; reszta pomijana

Pozycja fragmentu = indeks bloku w rozwiniętym dokumencie; fragmenty w grupie
są zawsze w kolejności pozycji (dla BY_NAME: zależności przed zależnymi).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from data_model.blocks import Block, Document
from data_model.errors import (
    AmbiguousBlockName,
    NoMatchingBlock,
    UnsatisfiableDependencies,
)
from data_model.selection import (
    Fragment,
    OutputGroup,
    SelectionMode,
    SelectionRequest,
)
from .assembler import normalize_target


# ---------------------------------------------------------------------------
# Autouzupełnianie nazwy
# ---------------------------------------------------------------------------

def complete_name(name: str, candidates: Iterable[str | None]) -> str:
    """
    Rozwija nazwę lub jej prefiks do pełnej nazwy bloku.

    candidates — nazwy kolejnych bloków (po jednej na blok, None dla
    bloków bez nazwy). Dokładne dopasowanie wygrywa zawsze; w przeciwnym
    razie prefiks musi pasować do dokładnie jednego bloku. Dwa bloki
    o tej samej pasującej nazwie to również niejednoznaczność.
    """
    names = [c for c in candidates if c]
    if name in names:
        return name

    matches = sorted(n for n in names if n.startswith(name))
    if not matches:
        raise NoMatchingBlock(name)
    if len(matches) > 1:
        raise AmbiguousBlockName(name, matches)
    return matches[0]


# ---------------------------------------------------------------------------
# Tryby wyboru
# ---------------------------------------------------------------------------

def _fragments(document: Document) -> list[Fragment]:
    return [Fragment(block, pos) for pos, block in enumerate(document.blocks)]


def _target(block: Block) -> str | None:
    if block.tangle_target is None:
        return None
    return normalize_target(block.tangle_target)


def _select_by_name(fragments: list[Fragment], request: SelectionRequest) -> list[OutputGroup]:
    assert request.name is not None
    full_name = complete_name(request.name, (f.block.name for f in fragments))

    pool = fragments
    if request.language:
        pool = [f for f in fragments if f.block.language == request.language]
        if not any(f.block.name == full_name for f in pool):
            raise NoMatchingBlock(
                full_name,
                f"Brak bloku '{full_name}' w języku '{request.language}'",
            )

    wanted = _dependency_closure(full_name, pool)
    selected = [f for f in pool if f.block.name in wanted]
    ordered = _order_by_dependencies(selected)

    main = next(f.block for f in ordered if f.block.name == full_name)
    targets = {_target(f.block) for f in ordered}
    target = targets.pop() if len(targets) == 1 else None

    return [OutputGroup(
        target=target,
        language=request.language or main.language,
        output_name=main.output_name,
        fragments=ordered,
    )]


def _select_by_language(fragments: list[Fragment], request: SelectionRequest) -> list[OutputGroup]:
    selected = [f for f in fragments if f.block.language == request.language]
    if not selected:
        raise NoMatchingBlock(
            request.language or "",
            f"Brak bloków w języku '{request.language}'",
        )
    return [OutputGroup(target=None, language=request.language, fragments=selected)]


def _select_all_tangled(fragments: list[Fragment]) -> list[OutputGroup]:
    groups: dict[tuple, OutputGroup] = {}
    for frag in fragments:
        block = frag.block
        target = _target(block)
        if target is not None:
            key: tuple = ("target", target)
        elif block.tangle_auto:
            key = ("auto", block.language, block.output_name)
        else:
            continue
        if key not in groups:
            groups[key] = OutputGroup(
                target=target,
                language=block.language,
                output_name=None if target else block.output_name,
            )
        groups[key].fragments.append(frag)
    return list(groups.values())


def select(document: Document, request: SelectionRequest) -> list[OutputGroup]:
    """
    Wybiera i grupuje bloki rozwiniętego dokumentu.

    Zwraca grupy w kolejności pierwszego wystąpienia; dla ALL_TANGLED lista
    może być pusta (dokument bez :tangle).
    """
    fragments = _fragments(document)
    match request.mode:
        case SelectionMode.BY_NAME:
            return _select_by_name(fragments, request)
        case SelectionMode.BY_LANGUAGE:
            return _select_by_language(fragments, request)
        case SelectionMode.ALL_TANGLED:
            return _select_all_tangled(fragments)
    raise ValueError(f"Nieznany tryb wyboru: {request.mode!r}")


# ---------------------------------------------------------------------------
# Zależności (#+DEPS:)
# ---------------------------------------------------------------------------

def _dependency_closure(name: str, pool: list[Fragment]) -> set[str]:
    """Nazwa + wszystkie nazwy, od których zależy (przechodnio)."""
    available = {f.block.name for f in pool if f.block.name}
    wanted = {name}
    missing: set[str] = set()
    queue = [name]

    while queue:
        current = queue.pop()
        for frag in pool:
            if frag.block.name != current:
                continue
            for dep in frag.block.dependencies:
                if dep not in available:
                    missing.add(dep)
                elif dep not in wanted:
                    wanted.add(dep)
                    queue.append(dep)

    if missing:
        raise UnsatisfiableDependencies(sorted(missing), "brak bloków")
    return wanted


def _order_by_dependencies(selected: list[Fragment]) -> list[Fragment]:
    """
    Porządek topologiczny po nazwach; remis → kolejność dokumentu.

    Blok jest gotowy, gdy wszystkie bloki każdej z jego zależności zostały
    już wypisane. Bez zależności wynik = kolejność dokumentu.
    """
    remaining = sorted(selected, key=lambda f: f.position)
    pending = Counter(f.block.name for f in remaining)
    ordered: list[Fragment] = []

    def ready(frag: Fragment) -> bool:
        return all(
            pending[dep] == 0 or dep == frag.block.name
            for dep in frag.block.dependencies
        )

    while remaining:
        nxt = next((f for f in remaining if ready(f)), None)
        if nxt is None:
            names = sorted({f.block.name or "?" for f in remaining})
            raise UnsatisfiableDependencies(names, "cykl zależności")
        remaining.remove(nxt)
        pending[nxt.block.name] -= 1
        ordered.append(nxt)

    return ordered


def blocks_of(groups: list[OutputGroup]) -> list[Block]:
    """Wszystkie wybrane bloki (np. dla serializatora notatnika)."""
    return [f.block for g in groups for f in g.fragments]
