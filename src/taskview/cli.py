"""taskview CLI - filtered, sorted views of a to-do list."""

import json
import logging
import sys

import click

from .config import load_config
from .core.tasks import Priority, Task
from .adapters.json_store import TaskFileError
from .workflows import build_query, get_clock, get_store, run_query

PRIORITY_MARKERS = {
    Priority.NONE: " ",
    Priority.LOW: "!",
    Priority.MEDIUM: "!!",
    Priority.HIGH: "!!!",
}


@click.group()
@click.version_option(package_name="taskview")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """taskview - To-do list views."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _show_tasks(tasks: list[Task], as_json: bool, empty_msg: str = "No tasks.") -> None:
    """Shared task display logic."""
    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo(empty_msg)
        return

    for task in tasks:
        check = "x" if task.completed else " "
        marker = PRIORITY_MARKERS[task.priority]
        due = f" (due {task.due_date.strftime('%Y-%m-%d %H:%M')})" if task.due_date else ""
        click.echo(f"{task.id:>3} [{check}] [{marker:3}] {task.title}{due}")


@main.command("list")
@click.option(
    "--status",
    type=click.Choice(["all", "active", "completed"], case_sensitive=False),
    default=None,
    help="Filter by completion status",
)
@click.option(
    "--date",
    "date_mode",
    type=click.Choice(["all", "today", "week", "overdue"], case_sensitive=False),
    default=None,
    help="Filter by due date",
)
@click.option(
    "--sort",
    type=click.Choice(["date", "priority", "dueDate"], case_sensitive=False),
    default=None,
    help="Sort by creation date, priority or due date",
)
@click.option(
    "--priority",
    type=click.Choice(["none", "low", "medium", "high"], case_sensitive=False),
    default=None,
    help="Only tasks with this priority",
)
@click.option("--asc/--desc", "ascending", default=None, help="Sort direction")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(
    status: str | None,
    date_mode: str | None,
    sort: str | None,
    priority: str | None,
    ascending: bool | None,
    as_json: bool,
):
    """List tasks matching the given filters."""
    config = load_config()
    task_query = build_query(config, status, date_mode, sort, ascending, priority)
    tasks = run_query(task_query, get_store(config), get_clock(config))
    _show_tasks(tasks, as_json, "No tasks match.")


@main.command()
@click.argument("title")
@click.option("-d", "--description", default="", help="Longer description")
@click.option(
    "-p",
    "--priority",
    type=click.Choice(["low", "medium", "high"], case_sensitive=False),
    default=None,
    help="Priority",
)
@click.option(
    "--due",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M"]),
    default=None,
    help="Due date (YYYY-MM-DD or YYYY-MM-DDTHH:MM)",
)
def add(title: str, description: str, priority: str | None, due):
    """Add a new task."""
    config = load_config()
    clock = get_clock(config)
    store = get_store(config)

    due_date = due.replace(tzinfo=clock.tz) if due else None
    try:
        task = store.add(
            title,
            description=description,
            priority=priority or "",
            due_date=due_date,
            now=clock.now(),
        )
    except (ValueError, TaskFileError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Added task #{task.id}: {task.title}")


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@main.command()
@click.argument("task_id", type=int)
@click.option("--title", default=None, help="New title")
@click.option("-d", "--description", default=None, help="New description")
@click.option(
    "-p",
    "--priority",
    type=click.Choice(["none", "low", "medium", "high"], case_sensitive=False),
    default=None,
    help="New priority",
)
@click.option(
    "--due",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M"]),
    default=None,
    help="New due date (YYYY-MM-DD or YYYY-MM-DDTHH:MM)",
)
@click.option("--no-due", is_flag=True, help="Remove the due date")
@click.option("--done/--not-done", "completed", default=None, help="Set completion status")
def edit(
    task_id: int,
    title: str | None,
    description: str | None,
    priority: str | None,
    due,
    no_due: bool,
    completed: bool | None,
):
    """Edit a task's fields."""
    if due and no_due:
        _fail("--due and --no-due cannot be combined.")

    config = load_config()
    fields = {}
    if title is not None:
        fields["title"] = title
    if description is not None:
        fields["description"] = description
    if priority is not None:
        fields["priority"] = priority
    if due:
        fields["due_date"] = due.replace(tzinfo=get_clock(config).tz)
    elif no_due:
        fields["due_date"] = None
    if completed is not None:
        fields["completed"] = completed

    if not fields:
        _fail("Nothing to change.")

    store = get_store(config)
    try:
        task = store.update(task_id, **fields)
    except (ValueError, TaskFileError) as e:
        _fail(str(e))

    if task is None:
        _fail(f"Task #{task_id} not found.")
    click.echo(f"Updated task #{task.id}: {task.title}")


@main.command()
@click.argument("task_id", type=int)
def toggle(task_id: int):
    """Toggle a task between active and completed."""
    store = get_store(load_config())
    try:
        found = store.toggle(task_id)
    except TaskFileError as e:
        _fail(str(e))

    if not found:
        _fail(f"Task #{task_id} not found.")

    task = store.get(task_id)
    state = "completed" if task.completed else "active"
    click.echo(f"Task #{task_id} is now {state}.")


@main.command()
@click.argument("task_id", type=int)
def delete(task_id: int):
    """Delete a task."""
    store = get_store(load_config())
    try:
        found = store.delete(task_id)
    except TaskFileError as e:
        _fail(str(e))

    if not found:
        _fail(f"Task #{task_id} not found.")

    click.echo(f"Deleted task #{task_id}.")


@main.command()
def stats():
    """Show active and completed task counts."""
    store = get_store(load_config())
    active, completed = store.counts()
    click.echo(f"Active: {active}")
    click.echo(f"Completed: {completed}")
    click.echo(f"Total: {active + completed}")


if __name__ == "__main__":
    main()
