#!/usr/bin/env python3
"""taskmatch — CLI for searching tasks, ranking workers, and committing assignments."""

import json
import sys
from pathlib import Path

import click

from taskmatch.catalog import TaskCatalog
from taskmatch.committer import CommitFn
from taskmatch.config import ProjectConfig
from taskmatch.directory import WorkerDirectory
from taskmatch.exceptions import (
    CommitFailed, ConfigError, DataError, EmptySelection, TaskNotFound, WorkerNotFound,
)
from taskmatch.log import setup_logging
from taskmatch.session import AssignmentSession
from taskmatch.search import search as search_tasks
from taskmatch.ranker import Recommender
from taskmatch.transport import HttpCommitTransport, build_payload


def _load_project(project_dir: Path | None = None) -> tuple[ProjectConfig, TaskCatalog, WorkerDirectory]:
    """Load config plus catalog and directory from the given (or current) directory."""
    config = ProjectConfig.load(project_dir or Path.cwd())
    catalog = config.load_catalog()
    directory = config.load_directory(catalog)
    return config, catalog, directory


def _load_or_exit(ctx) -> tuple[ProjectConfig, TaskCatalog, WorkerDirectory]:
    try:
        config, catalog, directory = _load_project(ctx.obj["project_dir"])
    except ConfigError as e:
        click.echo(f"Config error: {e}", err=True)
        sys.exit(1)
    except DataError as e:
        click.echo(f"Data error: {e}", err=True)
        sys.exit(1)
    setup_logging(level="DEBUG" if ctx.obj["verbose"] else config.logging.level,
                  log_file=config.log_path())
    return config, catalog, directory


def _commit_fn(config: ProjectConfig) -> CommitFn:
    """HTTP commit function for the configured endpoint."""
    if not config.commit.endpoint:
        def _unconfigured(selection):
            raise CommitFailed(
                "no commit endpoint configured",
                suggestion="Set commit.endpoint in taskmatch.yaml.",
            )
        return _unconfigured
    return HttpCommitTransport(config.commit.endpoint, timeout=config.commit.timeout)


@click.group()
@click.option("--project-dir", type=click.Path(exists=True, path_type=Path), default=None,
              help="Project directory (defaults to cwd)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, project_dir, verbose):
    """taskmatch — recommend workers for tasks and assign them."""
    ctx.ensure_object(dict)
    ctx.obj["project_dir"] = project_dir
    ctx.obj["verbose"] = verbose
    setup_logging(level="DEBUG" if verbose else "INFO")


@cli.command()
@click.argument("query")
@click.pass_context
def search(ctx, query):
    """List tasks whose name starts with QUERY."""
    _, catalog, _ = _load_or_exit(ctx)
    results = search_tasks(query, catalog)
    if not results:
        click.echo(f"No tasks match '{query}'.")
        return
    for task in results:
        click.echo(f"  {task.id}  {task.name}")


@cli.command()
@click.argument("task_name")
@click.option("--limit", type=int, default=None, help="Show only the top N workers")
@click.pass_context
def recommend(ctx, task_name, limit):
    """Rank workers for TASK_NAME by suitability."""
    _, catalog, directory = _load_or_exit(ctx)
    try:
        task = catalog.find_by_name(task_name)
    except TaskNotFound as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ranked = Recommender(directory).recommend(task, limit=limit)
    if not ranked:
        click.echo(f"No workers with skill '{task.name}'.")
        return

    click.echo(f"Recommended workers for \"{task.name}\":")
    for w in ranked:
        current = ", ".join(w.current_tasks) or "-"
        click.echo(f"  {w.id:<5} {w.name:<12} {w.suitability_score:>3}%  "
                   f"{w.availability.value:<9} {w.experience}y  [{current}]")


@cli.command()
@click.option("--pick", "picks", multiple=True, required=True, metavar="TASK:WORKER_ID",
              help="Select WORKER_ID for TASK (repeatable)")
@click.option("--dry-run", is_flag=True, help="Show the grouped summary and payload without committing")
@click.pass_context
def assign(ctx, picks, dry_run):
    """Select workers for one or more tasks and commit the assignment."""
    config, catalog, directory = _load_or_exit(ctx)
    session = AssignmentSession(catalog, directory, _commit_fn(config),
                                success_message=config.commit.success_message)

    for pick in picks:
        task_name, sep, worker_id = pick.rpartition(":")
        if not sep or not task_name or not worker_id:
            click.echo(f"Error: invalid pick '{pick}', expected TASK:WORKER_ID", err=True)
            sys.exit(1)
        try:
            session.select_task(catalog.find_by_name(task_name).id)
            if session.store.contains(worker_id):
                click.echo(f"Skipping {worker_id}: already selected", err=True)
                continue
            session.toggle(worker_id)
        except (TaskNotFound, WorkerNotFound) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    for task_name, entries in session.summary.items():
        click.echo(task_name.upper())
        for e in entries:
            click.echo(f"  {e.name} ({e.worker.availability.value}, {e.worker.experience}y)")

    if dry_run:
        click.echo(json.dumps(build_payload(session.selection), indent=2))
        return

    try:
        result = session.commit()
    except EmptySelection as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except CommitFailed as e:
        click.echo(f"Commit failed: {e}", err=True)
        sys.exit(1)
    click.echo(result.message)


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to api.host)")
@click.option("--port", type=int, default=None, help="Port (defaults to api.port)")
@click.pass_context
def serve(ctx, host, port):
    """Run the JSON API for an assignment session."""
    from taskmatch.api import create_api_app

    config, catalog, directory = _load_or_exit(ctx)
    session = AssignmentSession(catalog, directory, _commit_fn(config),
                                success_message=config.commit.success_message)
    app = create_api_app(session)
    try:
        app.run(host=host or config.api.host, port=port or config.api.port)
    finally:
        session.close()


if __name__ == "__main__":
    cli()
