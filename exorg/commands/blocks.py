"""Komenda: exorg blocks — lista bloków źródłowych dokumentu (po rozwinięciu include)."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from data_model.blocks import Block
from data_model.errors import TangleError
from exorg._config import load_settings
from org_parser.resolver import load_document

console = Console()


def _target(block: Block) -> str:
    if block.tangle_target:
        return block.tangle_target
    if block.tangle_auto:
        return "(auto)"
    return "-"


def _show_table(blocks: list[Block]) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("#",       justify="right", no_wrap=True, style="dim")
    table.add_column("NAZWA",   no_wrap=True, style="bold cyan")
    table.add_column("JĘZYK",   no_wrap=True)
    table.add_column(":TANGLE", no_wrap=True)
    table.add_column("DEPS",    no_wrap=False, max_width=30)
    table.add_column("LINIE",   justify="right", no_wrap=True)
    table.add_column("ŹRÓDŁO",  overflow="fold")

    for i, block in enumerate(blocks, start=1):
        origin = Text(str(block.origin), style="yellow" if block.via_include else "")
        table.add_row(
            str(i),
            block.name or "-",
            block.language or "-",
            _target(block),
            " ".join(block.dependencies) or "-",
            str(len(block.content)),
            origin,
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(blocks)} bloków[/dim]\n")


def run(args: argparse.Namespace) -> None:
    doc_path = Path(args.org_file)
    if not doc_path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {doc_path}")
        raise SystemExit(1)

    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    try:
        document = load_document(
            doc_path,
            max_depth=settings.max_include_depth,
            orphan_policy=settings.orphan_policy,
        )
    except TangleError as e:
        console.print(f"[red]Błąd ({e.code}):[/red] {e}")
        raise SystemExit(1)

    for warning in document.warnings:
        console.print(f"[yellow]Ostrzeżenie:[/yellow] {warning}")

    blocks = document.blocks
    if args.lang:
        blocks = [b for b in blocks if b.language in args.lang]
    if args.tangled:
        blocks = [b for b in blocks if b.is_tangled]

    if not blocks:
        console.print("[yellow]Brak bloków spełniających kryteria.[/yellow]")
        return

    _show_table(blocks)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "blocks",
        help="Listuje bloki źródłowe dokumentu (z rozwiniętymi #+INCLUDE).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje bloki źródłowe dokumentu org razem z blokami plików dołączonych.
Bloki z plików dołączonych mają źródło wyróżnione kolorem.

Przykłady:
  exorg blocks notatki.org
  exorg blocks notatki.org --lang python rust
  exorg blocks notatki.org --tangled
        """,
    )
    p.add_argument(
        "org_file",
        metavar="PLIK.org",
        help="Ścieżka do dokumentu org.",
    )
    p.add_argument(
        "--lang", "-l",
        nargs="+",
        metavar="JĘZYK",
        help="Filtruj po języku (można podać kilka).",
    )
    p.add_argument(
        "--tangled",
        action="store_true",
        help="Tylko bloki z :tangle.",
    )
    p.set_defaults(func=run)
