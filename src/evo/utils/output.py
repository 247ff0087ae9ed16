"""Console output for the CLI: JSON or text, rich tables, logging setup.

Results go to stdout through ``console``; messages, errors and log records
go to stderr through ``error_console`` so piped JSON stays clean.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


def is_piped() -> bool:
    return not sys.stdout.isatty()


def resolve_format(fmt: str | None) -> str:
    """Requested format, else json when piped and text on a terminal."""
    if fmt is None:
        return "json" if is_piped() else "text"
    return fmt.lower()


def setup_logging(verbose: bool = False) -> None:
    """Route library logging to stderr through rich. Called once per command."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=verbose, markup=False)],
        force=True,
    )
    # Request logs are noise even when verbose
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, list):
        return [_to_jsonable(item) for item in data]
    return data


def output(data: Any, fmt: str | None = None) -> None:
    """Print models, lists, dicts or text in the requested format.

    Text is printed verbatim: no rich markup, highlighting or wrapping, so
    reports read the same on a terminal and in a file.
    """
    fmt = resolve_format(fmt)
    if fmt == "json":
        if isinstance(data, str):
            data = {"value": data}
        print(json.dumps(_to_jsonable(data), indent=2, default=str))
    elif isinstance(data, str):
        console.print(data, markup=False, highlight=False, soft_wrap=True, end="")
    else:
        console.print_json(json.dumps(_to_jsonable(data), default=str))


def output_table(rows: list[dict[str, str]], columns: list[str], fmt: str | None = None) -> None:
    if resolve_format(fmt) == "json":
        print(json.dumps(rows, indent=2))
        return
    table = Table()
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for row in rows:
        table.add_row(*[str(row.get(col, "")) for col in columns])
    console.print(table)


def error(msg: str) -> None:
    error_console.print(f"[red]Error:[/red] {msg}", highlight=False)


def success(msg: str) -> None:
    error_console.print(f"[green]{msg}[/green]", highlight=False)


def info(msg: str) -> None:
    console.print(msg, style="dim", markup=False, highlight=False)
