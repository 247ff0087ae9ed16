"""Shared CLI options and lookups."""

from __future__ import annotations

import typer

from evo.core.extract import DEFAULT_MAX_WORKERS
from evo.core.project import DEFAULT_PROJECT, Project, UnknownProjectError, get_project
from evo.utils.config import config_value
from evo.utils.output import error

FORMAT_OPTION = typer.Option(None, "--format", "-F", help="Output format: json or text")
PROJECT_OPTION = typer.Option(
    None, "--project", "-p", help="Proposal series: swift, testing or foundation"
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log progress and details to stderr")


def resolve_project(name: str | None) -> Project:
    """The named project, else the configured default, else Swift."""
    name = name or config_value("default_project")
    if not name:
        return DEFAULT_PROJECT
    try:
        return get_project(name)
    except UnknownProjectError as e:
        error(str(e))
        raise typer.Exit(1)


def resolve_workers(workers: int | None) -> int:
    if workers is not None:
        if workers < 1:
            error("--workers must be at least 1")
            raise typer.Exit(1)
        return workers
    return int(config_value("max_workers", DEFAULT_MAX_WORKERS))
