"""Config subcommands: get, set, list for global settings."""

from __future__ import annotations

from typing import Optional

import typer

from evo.cli._shared import FORMAT_OPTION
from evo.core.project import list_projects
from evo.utils.config import load_global_config, save_global_config
from evo.utils.output import error, info, output, success

config_app = typer.Typer(no_args_is_help=True)


def _positive_int(value: str) -> int | None:
    return int(value) if value.isdigit() and int(value) > 0 else None


def _project_key(value: str) -> str | None:
    return value.lower() if value.lower() in list_projects() else None


# key -> (parser returning None for invalid values, description of valid values)
_VALID_KEYS = {
    "default_project": (_project_key, lambda: ", ".join(list_projects())),
    "max_workers": (_positive_int, lambda: "a positive integer"),
}


def _check_key(key: str) -> None:
    if key not in _VALID_KEYS:
        error(f"Unknown key: {key}. Valid keys: {', '.join(sorted(_VALID_KEYS))}")
        raise typer.Exit(1)


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help="Configuration key"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Get a configuration value."""
    _check_key(key)

    config = load_global_config()
    value = config.get(key)
    if fmt == "json":
        output({"key": key, "value": value}, fmt="json")
    elif value is None:
        info(f"{key}: (not set)")
    else:
        info(f"{key}: {value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Configuration key"),
    value: str = typer.Argument(..., help="Value to set"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Set a configuration value."""
    _check_key(key)

    parse, describe = _VALID_KEYS[key]
    parsed = parse(value)
    if parsed is None:
        error(f"Invalid value for {key}: {value}. Valid values: {describe()}")
        raise typer.Exit(1)

    config = load_global_config()
    config[key] = parsed
    save_global_config(config)

    if fmt == "json":
        output({"key": key, "value": parsed}, fmt="json")
    else:
        success(f"{key} = {parsed}")


@config_app.command("list")
def config_list(
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List all configuration values."""
    config = load_global_config()
    if fmt == "json":
        output(config, fmt="json")
    elif config:
        for k, v in sorted(config.items()):
            info(f"{k}: {v}")
    else:
        info("No configuration set")
