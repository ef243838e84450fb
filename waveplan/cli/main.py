"""Main CLI entry point using Typer."""

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from waveplan import __version__
from waveplan.core.config import get_settings
from waveplan.core.errors import WaveplanError
from waveplan.core.log import configure_logging
from waveplan.plan.loader import load_tasks
from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.models import CriticalPath, Hazard, WavePlan

app = typer.Typer(
    name="waveplan",
    help="Waveplan - hazard analysis and wave scheduling for parallel tasks",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Waveplan[/bold blue] version {__version__}")
        raise typer.Exit()


def emit_json(data: Any) -> None:
    """Write JSON to stdout without rich markup."""
    typer.echo(json.dumps(data, indent=2))


def report_error(error: WaveplanError, code: int = 1) -> typer.Exit:
    """Print an error and build the Exit to raise."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    return typer.Exit(code=code)


def read_tasks(plan: Path) -> list[TaskDefinition]:
    """Load tasks, exiting with code 1 on a malformed file."""
    try:
        return load_tasks(plan)
    except WaveplanError as e:
        raise report_error(e) from e


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Console log level (defaults to WAVEPLAN_LOG_LEVEL).",
    ),
) -> None:
    """
    Waveplan - decide what can run in parallel, and how to recover.

    Reads a task set (YAML/JSON with a top-level [bold]tasks[/bold] list)
    and reports hazards, execution waves, critical path, capability
    violations and restart strategies.
    """
    configure_logging(get_settings(), level=log_level.upper() if log_level else None)


# =============================================================================
# RENDERING
# =============================================================================


def render_hazards(hazards: list[Hazard]) -> None:
    """Print hazards as a table."""
    if not hazards:
        console.print("[green]No hazards detected[/green]")
        return

    table = Table(title=f"Hazards ({len(hazards)})")
    table.add_column("Type", style="bold")
    table.add_column("Source")
    table.add_column("Target")
    table.add_column("Component / Mutex", style="cyan")

    for hazard in hazards:
        table.add_row(
            hazard.type.value,
            escape(hazard.source_task_id),
            escape(hazard.target_task_id),
            escape(hazard.component),
        )

    console.print(table)


def render_waves(plan: WavePlan, critical: CriticalPath | None = None) -> None:
    """Print waves as a table, marking critical-path tasks."""
    on_path = set(critical.task_ids) if critical else set()

    table = Table(title=f"Waves ({plan.depth})")
    table.add_column("Wave", justify="right")
    table.add_column("Tasks")

    for index, wave in enumerate(plan.waves):
        cells = [
            f"[bold yellow]{escape(t)}[/bold yellow]" if t in on_path else escape(t) for t in wave
        ]
        table.add_row(str(index), ", ".join(cells))

    console.print(table)


def render_critical_path(path: CriticalPath) -> None:
    """Print the critical path."""
    chain = escape(" -> ".join(path.task_ids)) if path.task_ids else "(empty)"
    console.print(f"[bold]Critical path[/bold] (length {path.length}): {chain}")


# =============================================================================
# ANALYSIS COMMANDS
# =============================================================================


@app.command()
def hazards(
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    List every hazard between tasks.
    """
    from waveplan.scheduler.hazards import detect_hazards

    tasks = read_tasks(plan)
    try:
        found = detect_hazards(tasks)
    except WaveplanError as e:
        raise report_error(e) from e

    if as_json:
        emit_json([h.model_dump(mode="json") for h in found])
    else:
        render_hazards(found)


@app.command()
def waves(
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    war_separates: bool | None = typer.Option(
        None,
        "--war-separates/--war-overlaps",
        help="Whether WAR hazards force a later wave (defaults to settings).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    Group tasks into parallel execution waves.
    """
    from waveplan.scheduler.hazards import detect_hazards
    from waveplan.scheduler.waves import compute_waves

    settings = get_settings()
    if war_separates is None:
        war_separates = settings.waveplan_war_separates_waves

    tasks = read_tasks(plan)
    try:
        plan_waves = compute_waves(
            tasks,
            detect_hazards(tasks),
            war_separates=war_separates,
            critical_first=settings.waveplan_critical_first,
        )
    except WaveplanError as e:
        raise report_error(e) from e

    if as_json:
        emit_json(plan_waves.model_dump(mode="json"))
    else:
        render_waves(plan_waves)


@app.command("critical-path")
def critical_path(
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    Show the longest chain of RAW-dependent tasks.
    """
    from waveplan.scheduler.critical_path import compute_critical_path
    from waveplan.scheduler.hazards import detect_hazards

    tasks = read_tasks(plan)
    try:
        path = compute_critical_path(tasks, detect_hazards(tasks))
    except WaveplanError as e:
        raise report_error(e) from e

    if as_json:
        emit_json(path.model_dump(mode="json"))
    else:
        render_critical_path(path)


@app.command()
def analyze(
    plan: Path = typer.Argument(..., help="Path to the task-set file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """
    Run hazard detection, wave planning and critical-path analysis together.
    """
    from waveplan.core.analyzer import PlanAnalyzer

    tasks = read_tasks(plan)
    try:
        analysis = PlanAnalyzer().analyze(tasks)
    except WaveplanError as e:
        raise report_error(e) from e

    if as_json:
        emit_json(analysis.to_dict())
        return

    console.print(
        Panel(
            f"[bold]{len(tasks)}[/bold] tasks, [bold]{len(analysis.hazards)}[/bold] hazards, "
            f"[bold]{analysis.waves.depth}[/bold] waves",
            title="[bold blue]Waveplan[/bold blue]",
            border_style="blue",
        )
    )
    render_hazards(analysis.hazards)
    render_waves(analysis.waves, analysis.critical_path)
    render_critical_path(analysis.critical_path)


# Register enforcement commands
from waveplan.cli import commands  # noqa: E402, F401


if __name__ == "__main__":
    app()
