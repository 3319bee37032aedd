"""Komenda: exorg tangle — eksport bloków źródłowych do plików."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box

from data_model.errors import TangleError
from data_model.selection import SelectionRequest
from exorg._config import Settings, load_settings
from org_parser.parser import OrphanPolicy
from router.export import ExportResult, export_document

console = Console()

# Formaty obsługiwane przez zewnętrzne renderery, poza zakresem exorg
UNSUPPORTED_FORMATS = {"jupyter", "pdf", "pdf-minted"}
ALL_TANGLED = "."


# ---------------------------------------------------------------------------
# Budowa żądania
# ---------------------------------------------------------------------------

def build_request(
    fmt: str,
    block: str | None = None,
    out: str | None = None,
    name: str | None = None,
) -> SelectionRequest:
    """
    Mapuje argumenty CLI na SelectionRequest.

      "."  + brak -b  → ALL_TANGLED
      "."  + -b NAZWA → BY_NAME (dowolny język)
      lang + brak -b  → BY_LANGUAGE
      lang + -b NAZWA → BY_NAME ograniczone do języka
    """
    if fmt.lower() in UNSUPPORTED_FORMATS:
        raise ValueError(f"Format '{fmt}' nie jest obsługiwany przez exorg tangle")

    if fmt == ALL_TANGLED:
        if block:
            return SelectionRequest.by_name(block, explicit_output=out, output_name=name)
        return SelectionRequest.all_tangled(explicit_output=out, output_name=name)

    if block:
        return SelectionRequest.by_name(block, language=fmt, explicit_output=out, output_name=name)
    return SelectionRequest.by_language(fmt, explicit_output=out, output_name=name)


def _settings(args: argparse.Namespace) -> Settings:
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    depth  = args.max_depth if args.max_depth is not None else settings.max_include_depth
    policy = OrphanPolicy(args.orphan_name) if args.orphan_name else settings.orphan_policy
    return Settings(max_include_depth=depth, orphan_policy=policy)


# ---------------------------------------------------------------------------
# Zapis plików
# ---------------------------------------------------------------------------

def write_files(files: dict[str, str], out_dir: Path) -> list[Path]:
    """Zapisuje treści; każdy plik kończy się znakiem nowej linii."""
    written: list[Path] = []
    for name, content in files.items():
        path = Path(name)
        if not path.is_absolute():
            path = out_dir / path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n", encoding="utf-8")
        written.append(path)
    return written


def _show_result(result: ExportResult, written: list[Path] | None) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("PLIK",   no_wrap=True, style="bold cyan")
    table.add_column("LINIE",  justify="right", no_wrap=True)
    table.add_column("ZNAKI",  justify="right", no_wrap=True)

    for i, (name, content) in enumerate(result.files.items()):
        shown = str(written[i]) if written else name
        n_lines = content.count("\n") + 1 if content else 0
        table.add_row(shown, str(n_lines), str(len(content)))

    console.print()
    console.print(table)


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    doc_path = Path(args.org_file)
    if not doc_path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {doc_path}")
        raise SystemExit(1)

    try:
        request = build_request(args.format, args.block, args.out, args.name)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    settings = _settings(args)

    try:
        result = export_document(
            doc_path,
            request,
            max_depth=settings.max_include_depth,
            orphan_policy=settings.orphan_policy,
        )
    except TangleError as e:
        console.print(f"[red]Błąd ({e.code}):[/red] {e}")
        raise SystemExit(1)

    for warning in result.warnings:
        console.print(f"[yellow]Ostrzeżenie:[/yellow] {warning}")

    if args.out and len(result.groups) > 1:
        console.print(
            f"[yellow]-o {args.out} pominięte: wynik obejmuje "
            f"{len(result.groups)} pliki.[/yellow]"
        )

    if not result.files:
        console.print("[yellow]Brak bloków do eksportu.[/yellow]")
        return

    if args.dry_run:
        _show_result(result, None)
        console.print(f"  [dim]{len(result.files)} plików (bez zapisu)[/dim]\n")
        return

    out_dir = Path(args.dir) if args.dir else Path.cwd()
    try:
        written = write_files(result.files, out_dir)
    except OSError as e:
        console.print(f"[red]Błąd zapisu:[/red] {e}")
        raise SystemExit(1)

    _show_result(result, written)
    console.print(f"  [dim]{len(written)} plików zapisanych[/dim]\n")


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "tangle",
        help="Eksportuje bloki źródłowe dokumentu org do plików.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyciąga bloki #+BEGIN_SRC … #+END_SRC z dokumentu org (razem z plikami
dołączonymi przez #+INCLUDE) i zapisuje je do plików.

FORMAT:
  .        wszystkie bloki z :tangle (grupowane po ścieżce)
  <język>  wszystkie bloki danego języka w jednym pliku, np. python, rust

Przykłady:
  exorg tangle . notatki.org
  exorg tangle python notatki.org
  exorg tangle python notatki.org -b setup
  exorg tangle rust notatki.org -o src/main.rs
  exorg tangle . notatki.org --dir build --dry-run
        """,
    )
    p.add_argument(
        "format",
        metavar="FORMAT",
        help="'.' albo nazwa języka.",
    )
    p.add_argument(
        "org_file",
        metavar="PLIK.org",
        help="Ścieżka do dokumentu org.",
    )
    p.add_argument(
        "-b", "--block",
        metavar="NAZWA",
        default=None,
        help="Nazwa (lub jednoznaczny prefiks) bloku; dołącza też jego #+DEPS:.",
    )
    p.add_argument(
        "-o", "--out",
        metavar="PLIK",
        default=None,
        help="Pełna ścieżka wyjściowa (gdy wynikiem jest jeden plik).",
    )
    p.add_argument(
        "--name",
        metavar="NAZWA",
        default=None,
        help="Nazwa bazowa pliku zamiast nazwy dokumentu.",
    )
    p.add_argument(
        "--dir",
        metavar="KATALOG",
        default=None,
        help="Katalog docelowy dla ścieżek względnych (domyślnie: bieżący).",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Pokaż wynik bez zapisywania plików.",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        dest="max_depth",
        metavar="N",
        help="Maksymalna głębokość #+INCLUDE (domyślnie: EXORG_MAX_INCLUDE_DEPTH lub 64).",
    )
    p.add_argument(
        "--orphan-name",
        choices=[o.value for o in OrphanPolicy],
        default=None,
        dest="orphan_name",
        help="Obsługa #+NAME: bez bloku (domyślnie: EXORG_ORPHAN_NAME lub warn).",
    )
    p.set_defaults(func=run)
