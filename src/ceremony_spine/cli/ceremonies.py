"""
CLI: ``ceremony-spine ceremonies``: read-only ceremony views.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from ceremony_spine.cli.utils import console, err_console, output, resolve_settings, run_with_store
from ceremony_spine.store.base import DocumentStore

app = typer.Typer(no_args_is_help=True)

FixtureOption = typer.Option(
    None, "--fixture", help="JSON fixture; reads from an in-memory store instead of Firestore",
)
JsonOption = typer.Option(False, "--json", help="Print JSON instead of a table")


@app.command("list")
def list_ceremonies(
    search: str = typer.Option("", "--search", "-s", help="Filter by title, prefix or description"),
    fixture: Path | None = FixtureOption,
    json_out: bool = JsonOption,
) -> None:
    """List every ceremony."""
    from ceremony_spine.state import DashboardState

    state = DashboardState(search=search)

    async def _action(store: DocumentStore) -> DashboardState:
        if not await state.refresh(store):
            raise state.error
        return state

    run_with_store(_action, fixture=fixture)
    rows = [
        {
            "id": p.id,
            "title": p.ceremony.data.get("title"),
            "prefix": p.ceremony.data.get("prefix"),
            "state": p.ceremony.data.get("state"),
            "type": p.ceremony.data.get("type"),
        }
        for p in state.visible_projects
    ]
    output(rows, as_json=json_out, title="Ceremonies")


@app.command("show")
def show_ceremony(
    ceremony_id: str = typer.Argument(..., help="Ceremony document id"),
    contributions: bool = typer.Option(True, "--contributions/--no-contributions"),
    avatars: bool = typer.Option(False, "--avatars/--no-avatars"),
    fixture: Path | None = FixtureOption,
    json_out: bool = JsonOption,
) -> None:
    """Show one ceremony with circuits, participants and contributions."""
    from ceremony_spine.aggregation.projects import load_project

    settings = resolve_settings(fixture)
    project = run_with_store(
        lambda store: load_project(
            store,
            ceremony_id,
            include_contributions=contributions,
            include_avatars=avatars,
            avatar_error_policy=settings.avatar_error_policy,
            batch_size=settings.membership_batch_size,
        ),
        fixture=fixture,
    )

    if json_out:
        output(project.to_dict(), as_json=True)
        return

    data = project.ceremony.data
    summary: dict[str, Any] = {
        "id": project.id,
        "title": data.get("title"),
        "state": data.get("state"),
        "type": data.get("type"),
        "circuits": len(project.circuits or []),
        "participants": len(project.participants or []),
    }
    if project.contributions is not None:
        summary["contributions"] = len(project.contributions)
    if project.avatars is not None:
        summary["avatars"] = len(project.avatars)
    output(summary, title=data.get("title") or project.id)


@app.command("circuits")
def list_circuits(
    ceremony_id: str = typer.Argument(..., help="Ceremony document id"),
    fixture: Path | None = FixtureOption,
    json_out: bool = JsonOption,
) -> None:
    """List circuits in sequence order."""
    from ceremony_spine.aggregation.circuits import get_ceremony_circuits

    circuits = run_with_store(lambda store: get_ceremony_circuits(store, ceremony_id), fixture=fixture)
    if json_out:
        output([c.to_dict() for c in circuits], as_json=True)
        return
    rows = [
        {
            "position": c.data.get("sequencePosition"),
            "id": c.id,
            "name": c.data.get("name"),
            "constraints": c.data.get("constraints"),
        }
        for c in circuits
    ]
    output(rows, title="Circuits")


@app.command("participants")
def list_participants(
    ceremony_id: str = typer.Argument(..., help="Ceremony document id"),
    fixture: Path | None = FixtureOption,
    json_out: bool = JsonOption,
) -> None:
    """List participants."""
    from ceremony_spine.aggregation.ceremonies import get_ceremony_participants

    participants = run_with_store(
        lambda store: get_ceremony_participants(store, ceremony_id), fixture=fixture,
    )
    if json_out:
        output([p.to_dict() for p in participants], as_json=True)
        return
    rows = [
        {
            "id": p.id,
            "status": p.data.get("status"),
            "step": p.data.get("contributionStep"),
            "progress": p.data.get("contributionProgress"),
        }
        for p in participants
    ]
    output(rows, title="Participants")


@app.command("avatars")
def list_avatars(
    ceremony_id: str = typer.Argument(..., help="Ceremony document id"),
    fixture: Path | None = FixtureOption,
    json_out: bool = JsonOption,
) -> None:
    """List participants' avatar URLs; failed lookups are reported, not fatal."""
    from ceremony_spine.aggregation.avatars import fetch_participants_avatars

    settings = resolve_settings(fixture)
    result = run_with_store(
        lambda store: fetch_participants_avatars(
            store, ceremony_id, batch_size=settings.membership_batch_size,
        ),
        fixture=fixture,
    )

    if json_out:
        output({"avatars": result.results, "errors": [e.to_dict() for e in result.errors]}, as_json=True)
        return
    for url in result.results:
        console.print(url)
    if result.errors:
        err_console.print(
            f"[yellow]{result.failed_batches} of {result.batch_count} avatar batches failed[/yellow]"
        )


@app.command("contributions")
def list_contributions(
    ceremony_id: str = typer.Argument(..., help="Ceremony document id"),
    circuit_id: str = typer.Argument(..., help="Circuit document id"),
    fixture: Path | None = FixtureOption,
    json_out: bool = JsonOption,
) -> None:
    """List contributions of one circuit."""
    from ceremony_spine.aggregation.contributions import get_contributions

    contributions = run_with_store(
        lambda store: get_contributions(store, ceremony_id, circuit_id), fixture=fixture,
    )
    if json_out:
        output([c.to_dict() for c in contributions], as_json=True)
        return
    rows = [
        {
            "id": c.id,
            "participant": c.data.get("participantId"),
            "zkey_index": c.data.get("zkeyIndex"),
            "valid": c.data.get("valid"),
        }
        for c in contributions
    ]
    output(rows, title="Contributions")
