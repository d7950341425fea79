"""ceremony-spine command line interface (typer + rich)."""

from ceremony_spine.cli.app import app

__all__ = ["app"]
