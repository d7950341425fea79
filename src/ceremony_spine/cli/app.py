"""
Root Typer application for the ceremony-spine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="ceremony-spine",
    help="ceremony-spine: read-only views of trusted setup ceremonies.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from ceremony_spine import __version__

        typer.echo(f"ceremony-spine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """ceremony-spine CLI: ceremonies, circuits, participants, contributions."""


# ── Sub-command registration ─────────────────────────────────────────────

from ceremony_spine.cli.ceremonies import app as ceremonies_app  # noqa: E402
from ceremony_spine.cli.config import app as config_app  # noqa: E402

app.add_typer(ceremonies_app, name="ceremonies", help="Ceremony views.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
