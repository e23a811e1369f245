"""leetsrs CLI: problem tracking, daily queue, stats, and backups."""

import json
import logging
import sys
from pathlib import Path
from enum import Enum
from typing import Annotated

import typer

from leetsrs.application.config import AppConfig, resolve_config
from leetsrs.application.utils.log_files import attach_log_file
from leetsrs.domain.errors import LeetSrsError
from leetsrs.domain.problems.models import AttemptInput, Difficulty, Problem

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="leetsrs: spaced-repetition tracker for coding-interview problems.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage leetsrs configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.WARNING, 2: logging.INFO}


class View(str, Enum):
    ACTIVE = "active"
    DUE = "due"
    MASTERED = "mastered"
    ALL = "all"


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_file: Annotated[
        Path | None, typer.Option("--data-file", help="Problem collection JSON file.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for leetsrs."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"data_file": data_file, "verbose": verbose}
    logging.getLogger("leetsrs").setLevel(_LOG_LEVELS.get(verbose, logging.DEBUG))


def _config(ctx: typer.Context) -> AppConfig:
    obj = ctx.obj or {}
    return resolve_config(obj.get("overrides"))


def _service(ctx: typer.Context):
    from leetsrs.application.factory import get_problem_service

    config = _config(ctx)
    attach_log_file(config.log_dir)
    return get_problem_service(config)


def _fail(e: LeetSrsError) -> typer.Exit:
    typer.secho(str(e), fg="red", err=True)
    return typer.Exit(1)


def _format_row(problem: Problem) -> str:
    due = problem.next_review_date.strftime("%Y-%m-%d")
    return (
        f"{problem.id}  [{problem.difficulty.value:<6}] {problem.name}"
        f"  ({problem.category})  status={problem.status.value}"
        f"  interval={problem.interval}d  next={due}"
    )


# ---------------------------------------------------------------------------
# Problem commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Problem name.")],
    url: Annotated[str, typer.Option(help="Link to the problem.")] = "",
    difficulty: Annotated[
        Difficulty, typer.Option(help="Easy, Medium or Hard.")
    ] = Difficulty.MEDIUM,
    category: Annotated[str, typer.Option(help="Topic, e.g. Array or Graph.")] = "Array",
):
    """[bold green]Add[/bold green] a problem to track."""
    problem = _service(ctx).add_problem(name, url, difficulty, category)
    typer.secho(f"Added {problem.name} ({problem.id})", fg="green")


@app.command()
def attempt(
    ctx: typer.Context,
    problem_id: Annotated[str, typer.Argument(help="Problem ID.")],
    success: Annotated[
        bool, typer.Option("--success/--fail", help="Whether you solved it.")
    ] = True,
    rating: Annotated[
        int, typer.Option("--rating", "-r", help="Perceived difficulty, 0 (trivial) to 5.")
    ] = 3,
    notes: Annotated[str | None, typer.Option(help="Optional notes.")] = None,
):
    """Record an attempt and reschedule the problem."""
    service = _service(ctx)
    try:
        updated = service.record_attempt(
            problem_id, AttemptInput(success=success, difficulty_rating=rating, notes=notes)
        )
    except LeetSrsError as e:
        raise _fail(e) from None

    typer.echo(_format_row(updated))
    if updated.mastered:
        typer.secho("Mastered!", fg="green")


@app.command()
def due(ctx: typer.Context):
    """Show the problems to work on today."""
    problems = _service(ctx).due_today()
    if not problems:
        typer.secho("Nothing due today.", fg="green")
        return
    typer.echo(f"Due today: {len(problems)}")
    for problem in problems:
        typer.echo(f"  {_format_row(problem)}")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    view: Annotated[View, typer.Option(help="active, due, mastered or all.")] = View.ACTIVE,
):
    """List tracked problems."""
    problems = _service(ctx).list_problems(view.value)
    if not problems:
        typer.secho("No problems found.", fg="yellow")
        return
    for problem in problems:
        typer.echo(_format_row(problem))


@app.command()
def show(
    ctx: typer.Context,
    problem_id: Annotated[str, typer.Argument(help="Problem ID.")],
):
    """Show one problem with its attempt history."""
    try:
        problem = _service(ctx).get_problem(problem_id)
    except LeetSrsError as e:
        raise _fail(e) from None

    typer.echo(_format_row(problem))
    if problem.url:
        typer.echo(f"  {problem.url}")
    typer.echo(f"  ease={problem.ease_factor:.2f}  attempts={len(problem.attempts)}")
    for a in problem.attempts:
        mark = "ok  " if a.success else "fail"
        line = f"    {a.date:%Y-%m-%d %H:%M}  {mark}  rating={a.difficulty_rating}"
        if a.notes:
            line += f"  {a.notes}"
        typer.echo(line)


@app.command()
def edit(
    ctx: typer.Context,
    problem_id: Annotated[str, typer.Argument(help="Problem ID.")],
    name: Annotated[str | None, typer.Option(help="New name.")] = None,
    url: Annotated[str | None, typer.Option(help="New link.")] = None,
    difficulty: Annotated[Difficulty | None, typer.Option(help="New difficulty.")] = None,
    category: Annotated[str | None, typer.Option(help="New category.")] = None,
):
    """Edit a problem's name, link, difficulty or category."""
    try:
        problem = _service(ctx).edit_problem(
            problem_id, name=name, url=url, difficulty=difficulty, category=category
        )
    except LeetSrsError as e:
        raise _fail(e) from None
    typer.echo(_format_row(problem))


@app.command()
def delete(
    ctx: typer.Context,
    problem_id: Annotated[str, typer.Argument(help="Problem ID.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Delete a problem and its history."""
    if not force:
        typer.confirm(f"Delete {problem_id}?", abort=True)
    try:
        _service(ctx).delete_problem(problem_id)
    except LeetSrsError as e:
        raise _fail(e) from None
    typer.secho(f"Deleted {problem_id}", fg="green")


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Summary counts and activity heatmaps."""
    from leetsrs.infrastructure.serialization import stats_to_dict

    result = _service(ctx).stats()

    if json_output:
        typer.echo(json.dumps(stats_to_dict(result), indent=2))
        return

    by_diff = result.problems_by_difficulty
    typer.echo(
        f"Problems: {result.total_problems}  Due today: {result.problems_due_today}"
        f"  Mastered: {result.mastered_problems}"
    )
    typer.echo(
        f"Easy: {by_diff['Easy']}  Medium: {by_diff['Medium']}  Hard: {by_diff['Hard']}"
        f"  Avg ease: {result.average_ease_factor:.2f}"
    )
    for name, heatmap in result.activity_heatmap.items():
        total = sum(heatmap.values.values())
        typer.echo(
            f"{name}: {heatmap.start_date:%Y-%m-%d} .. {heatmap.end_date:%Y-%m-%d}"
            f"  active days={len(heatmap.values)}  attempts={total}"
        )


# ---------------------------------------------------------------------------
# Backup
# ---------------------------------------------------------------------------


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    output: Annotated[
        Path | None, typer.Argument(help="File to write. Prints to stdout if omitted.")
    ] = None,
):
    """Export all problems as a versioned JSON backup."""
    payload = _service(ctx).export_json()
    if output is None:
        typer.echo(payload)
        return
    output.write_text(payload, encoding="utf-8")
    typer.secho(f"Exported to {output}", fg="green")


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="Backup file to import.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Replace the whole collection with a JSON backup."""
    if not force:
        typer.confirm("This replaces all stored problems. Continue?", abort=True)
    try:
        count = _service(ctx).import_json(source.read_text(encoding="utf-8"))
    except LeetSrsError as e:
        raise _fail(e) from None
    typer.secho(f"Imported {count} problems.", fg="green")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8777,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP API for the dashboard."""
    import uvicorn

    uvicorn.run("leetsrs.server:app", host=host, port=port, reload=reload)
