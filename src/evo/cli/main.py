"""Typer app: extract, validate, snapshot, projects and config."""

from __future__ import annotations

import typer

from evo.cli.config_cmd import config_app
from evo.cli.extract_cmd import extract_command
from evo.cli.projects import projects_command
from evo.cli.snapshot_cmd import snapshot_command
from evo.cli.validate_cmd import validate_command

app = typer.Typer(
    name="evolution-metadata",
    help="Extract and validate metadata of evolution proposals.",
    no_args_is_help=True,
)

app.command("extract")(extract_command)
app.command("validate")(validate_command)
app.command("snapshot")(snapshot_command)
app.command("projects")(projects_command)
app.add_typer(config_app, name="config", help="Manage global configuration")
