"""
CLI utility helpers: store lifecycle and output formatting.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from ceremony_spine.core.enums import LogFormat, StoreBackend
from ceremony_spine.core.errors import CeremonySpineError
from ceremony_spine.core.logging import configure_logging, get_logger
from ceremony_spine.core.settings import CeremonySettings, get_settings
from ceremony_spine.store.base import DocumentStore
from ceremony_spine.store.factory import create_store

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)


# ── Store helpers ────────────────────────────────────────────────────────


def resolve_settings(fixture: Path | None = None) -> CeremonySettings:
    """Settings from the environment; ``--fixture`` forces the memory backend."""
    settings = get_settings()
    if fixture is not None:
        settings = settings.model_copy(
            update={"store_backend": StoreBackend.MEMORY, "fixture_path": fixture}
        )
    return settings


def setup_logging(settings: CeremonySettings) -> None:
    json_format = None if settings.log_format == LogFormat.AUTO else settings.log_format == LogFormat.JSON
    configure_logging(level=settings.log_level, json_format=json_format)


T = TypeVar("T")


def run_with_store(
    action: Callable[[DocumentStore], Awaitable[T]],
    *,
    fixture: Path | None = None,
) -> T:
    """Open a store, run ``action`` on it, close it.

    Ceremony errors are printed and turned into exit code 1.
    """
    settings = resolve_settings(fixture)
    setup_logging(settings)

    async def _main() -> T:
        store = create_store(settings)
        try:
            return await action(store)
        finally:
            await store.close()

    try:
        return asyncio.run(_main())
    except CeremonySpineError as exc:
        logger.error("cli.command_failed", **exc.to_dict())
        err_console.print(f"[bold red]Error[/bold red] ({exc.category.value}): {exc.message}")
        raise typer.Exit(code=1) from exc


# ── Output helpers ───────────────────────────────────────────────────────


def output(
    data: list[dict[str, Any]] | dict[str, Any],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render rows as a Rich table (or JSON), a dict as key-value pairs."""
    if as_json:
        console.print_json(json.dumps(data, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(data, title=title)


def _print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*("" if v is None else str(v) for v in row.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
