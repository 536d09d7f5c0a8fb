"""
CLI for the task tracker.

Each invocation runs one command against the configured backend. Values a
command needs and that were not given as options are prompted for.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from task_tracker.config import TrackerConfig
from task_tracker.display import OutputStyle, Presenter
from task_tracker.exceptions import (
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    RemoteFailureError,
    TransportError,
)
from task_tracker.storage import Backend, create_backend
from task_tracker.themes import DEFAULT_THEME, Theme, accent_for, palette_for
from task_tracker.utils.logger import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="task-tracker",
    help="A multi platform task manager.",
    no_args_is_help=True,
)

console = Console(highlight=False)

# Errors reported to the user without aborting the run.
RECOVERABLE_ERRORS = (NotFoundError, InvalidInputError, TransportError, RemoteFailureError)

EXIT_REPORTED_ERROR = 1
EXIT_PERSISTENCE_FAILURE = 2

Operation = Callable[[Backend, Presenter], None]


@app.callback()
def main(
    ctx: typer.Context,
    mode: str | None = typer.Option(
        None,
        "--mode",
        "-m",
        help="Storage mode: local or remote",
    ),
    data_file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        help="Local state document (local mode)",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Task service base URL (remote mode)",
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        help="Task service API key (remote mode)",
    ),
    id_policy: str | None = typer.Option(
        None,
        "--id-policy",
        help="Id allocation for local mode: count or next-max",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """A multi platform task manager."""
    try:
        config = TrackerConfig.from_env(
            mode=mode,
            data_file=data_file,
            base_url=base_url,
            api_key=api_key,
            id_policy=id_policy,
        )
    except ConfigurationError as e:
        console.print(Text(f"Configuration error: {e.message}", style="red"))
        raise typer.Exit(EXIT_REPORTED_ERROR) from None

    configure_logging(logging.DEBUG if verbose else config.logging_level)
    ctx.obj = config


def _current_theme(backend: Backend) -> str:
    try:
        return backend.get_theme()
    except (TransportError, RemoteFailureError) as e:
        logger.warning("Could not fetch theme, using %s: %s", DEFAULT_THEME.value, e)
        return DEFAULT_THEME.value


def _abort(error: PersistenceError) -> typer.Exit:
    console.print(Text(error.message, style="red"))
    return typer.Exit(EXIT_PERSISTENCE_FAILURE)


def _run(ctx: typer.Context, operation: Operation) -> None:
    """Open the backend, apply one operation, and close the backend.

    Recoverable errors are printed and turn into exit code 1. The backend
    is closed (the local document saved) even when the operation failed.
    """
    config: TrackerConfig = ctx.obj
    try:
        backend = create_backend(config)
    except PersistenceError as e:
        raise _abort(e) from None

    failed = False
    try:
        presenter = Presenter(OutputStyle.for_mode(config.mode, _current_theme(backend)), console)
        try:
            operation(backend, presenter)
        except RECOVERABLE_ERRORS as e:
            logger.debug("Operation failed: %r", e)
            presenter.error(e.message)
            failed = True
    finally:
        try:
            backend.close()
        except PersistenceError as e:
            raise _abort(e) from None

    if failed:
        raise typer.Exit(EXIT_REPORTED_ERROR)


@app.command("createtask")
def create_task(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", prompt="Enter task name"),
    description: str = typer.Option(..., "--description", prompt="Enter task description"),
    eta: str = typer.Option(..., "--eta", prompt="Enter task ETA"),
) -> None:
    """Creates a new task."""

    def operation(backend: Backend, out: Presenter) -> None:
        backend.create_task(name, description, eta)
        out.success("Task created successfully!")

    _run(ctx, operation)


@app.command("createcategory")
def create_category(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", prompt="Enter category name"),
) -> None:
    """Creates a new category."""

    def operation(backend: Backend, out: Presenter) -> None:
        backend.create_category(name)
        out.success("Category created successfully!")

    _run(ctx, operation)


@app.command("edittask")
def edit_task(
    ctx: typer.Context,
    task_id: int = typer.Option(..., "--id", prompt="Enter task ID to edit"),
    field: str = typer.Option(
        ..., "--field", prompt="Enter field to edit (name, description, eta)"
    ),
    value: str = typer.Option(..., "--value", prompt="Enter new value"),
) -> None:
    """Edits an existing task."""

    def operation(backend: Backend, out: Presenter) -> None:
        backend.edit_task(task_id, field, value)
        out.success("Task updated successfully!")

    _run(ctx, operation)


@app.command("editcategory")
def edit_category(
    ctx: typer.Context,
    category_id: int = typer.Option(..., "--id", prompt="Enter category ID to edit"),
    name: str = typer.Option(..., "--name", prompt="Enter new name"),
) -> None:
    """Edits an existing category."""

    def operation(backend: Backend, out: Presenter) -> None:
        backend.edit_category(category_id, name)
        out.success("Category updated successfully!")

    _run(ctx, operation)


@app.command("deltask")
def delete_task(
    ctx: typer.Context,
    task_id: int = typer.Option(..., "--id", prompt="Enter task ID to delete"),
) -> None:
    """Deletes a task."""

    def operation(backend: Backend, out: Presenter) -> None:
        backend.delete_task(task_id)
        out.success("Task deleted successfully!")

    _run(ctx, operation)


@app.command("delcategory")
def delete_category(
    ctx: typer.Context,
    category_id: int = typer.Option(..., "--id", prompt="Enter category ID to delete"),
) -> None:
    """Deletes a category."""

    def operation(backend: Backend, out: Presenter) -> None:
        backend.delete_category(category_id)
        out.success("Category deleted successfully!")

    _run(ctx, operation)


@app.command("assigncategory")
def assign_category(
    ctx: typer.Context,
    task_id: int = typer.Option(..., "--task-id", prompt="Enter task ID"),
    category_id: int = typer.Option(..., "--category-id", prompt="Enter category ID"),
) -> None:
    """Assigns a category to a task."""

    def operation(backend: Backend, out: Presenter) -> None:
        name = backend.assign_category(task_id, category_id)
        out.success(f"Task {task_id} assigned to category {category_id if name is None else name}.")

    _run(ctx, operation)


@app.command("listtasks")
def list_tasks(ctx: typer.Context) -> None:
    """Lists all tasks with their categories."""

    def operation(backend: Backend, out: Presenter) -> None:
        out.task_groups(backend.list_tasks_grouped())

    _run(ctx, operation)


@app.command("changetheme")
def change_theme(
    ctx: typer.Context,
    theme: str = typer.Option(
        ..., "--theme", prompt=f"Enter new theme ({', '.join(Theme.names())})"
    ),
) -> None:
    """Changes the theme."""
    mode = ctx.obj.mode

    def operation(backend: Backend, out: Presenter) -> None:
        new_theme = backend.change_theme(theme)
        out.theme_changed(OutputStyle.for_mode(mode, new_theme))

    _run(ctx, operation)


@app.command("theme")
def show_theme(ctx: typer.Context) -> None:
    """Shows the current theme and its colors."""
    mode = ctx.obj.mode

    def operation(backend: Backend, out: Presenter) -> None:
        name = backend.get_theme()
        table = Table(title=f"Theme: {name}", show_header=True)
        table.add_column("Role", style="cyan")
        table.add_column("Color", style="white")
        if mode == "remote":
            palette = palette_for(name)
            for role in ("success", "error", "warning", "info"):
                color = getattr(palette, role)
                table.add_row(role, f"[{color}]{color}[/{color}]")
        else:
            accent = accent_for(name)
            table.add_row("accent", f"[{accent}]{accent}[/{accent}]")
        console.print(table)

    _run(ctx, operation)


if __name__ == "__main__":
    app()
