"""Enforcement and validation CLI commands for Waveplan."""

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from waveplan.cli.main import app, console, emit_json, read_tasks, report_error
from waveplan.core.errors import WaveplanError
from waveplan.manifest.loader import load_manifest
from waveplan.manifest.models import Manifest

STRATEGY_STYLES = {
    "isolated_retry": "green",
    "cascade_restart": "yellow",
    "escalate": "bold red",
}


def read_manifest(manifest: Path) -> Manifest:
    """Load a manifest, exiting with code 1 on a malformed file."""
    try:
        return load_manifest(manifest)
    except WaveplanError as e:
        raise report_error(e) from e


@app.command()
def validate(
    manifest: Path = typer.Argument(..., help="Path to the component manifest"),
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    Check a task set against the manifest.
    """
    from waveplan.plan.validator import validate_task_set
    from waveplan.scheduler.hazards import detect_hazards

    components = read_manifest(manifest)
    tasks = read_tasks(plan)

    try:
        found = detect_hazards(tasks)
    except WaveplanError:
        found = None  # duplicate ids, reported by the validator below

    result = validate_task_set(tasks, components, found)

    if as_json:
        emit_json(result.to_dict())
    else:
        for error in result.errors:
            console.print(f"[red]error[/red]   {escape(error)}")
        for warning in result.warnings:
            console.print(f"[yellow]warning[/yellow] {escape(warning)}")
        if result.valid:
            console.print(f"[green]Task set is valid[/green] ({len(tasks)} tasks)")

    if not result.valid:
        raise typer.Exit(code=1)


@app.command()
def verify(
    manifest: Path = typer.Argument(..., help="Path to the component manifest"),
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    task_id: str = typer.Argument(..., help="Task whose changes are checked"),
    files: list[str] = typer.Argument(..., help="Files the task modified"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    Check that a task only modified files inside its declared writes.

    Exits with code 2 when violations are found.
    """
    from waveplan.enforcement.capabilities import verify_capabilities

    components = read_manifest(manifest)
    tasks = {task.id: task for task in read_tasks(plan)}

    if task_id not in tasks:
        console.print(f"[bold red]Error:[/bold red] Unknown task {escape(task_id)}")
        raise typer.Exit(code=1)

    report = verify_capabilities(files, tasks[task_id].writes, components)

    if as_json:
        emit_json({"valid": report.valid, **report.model_dump(mode="json")})
    elif report.valid:
        console.print(f"[green]All {len(files)} files within declared writes[/green]")
    else:
        table = Table(title=f"Capability violations for {escape(task_id)}")
        table.add_column("File")
        table.add_column("Owning component", style="red")
        for violation in report.violations:
            table.add_row(
                escape(violation.path),
                escape(violation.actual_component or "outside all components"),
            )
        console.print(table)

    if not report.valid:
        raise typer.Exit(code=2)


@app.command()
def restart(
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    failed_task_id: str = typer.Argument(..., help="Task that failed"),
    completed: list[str] | None = typer.Option(
        None,
        "--completed",
        "-c",
        help="Completed task id (repeatable)",
    ),
    dispatched: list[str] | None = typer.Option(
        None,
        "--dispatched",
        "-d",
        help="Dispatched task id (repeatable)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    Decide how to recover from a failed task.
    """
    from waveplan.core.analyzer import PlanAnalyzer

    tasks = read_tasks(plan)

    try:
        strategy = PlanAnalyzer().restart(
            failed_task_id,
            tasks,
            completed or [],
            dispatched or [],
        )
    except WaveplanError as e:
        raise report_error(e) from e

    if as_json:
        emit_json(strategy.model_dump(mode="json"))
        return

    style = STRATEGY_STYLES[strategy.strategy.value]
    console.print(f"[{style}]{strategy.strategy.value}[/{style}]: {escape(strategy.reason)}")
    if strategy.affected_tasks:
        console.print(f"[dim]Affected: {escape(', '.join(strategy.affected_tasks))}[/dim]")
