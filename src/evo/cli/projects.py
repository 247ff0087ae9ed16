"""projects: list the built-in proposal series."""

from __future__ import annotations

from typing import Optional

from evo.cli._shared import FORMAT_OPTION
from evo.core.project import all_projects
from evo.utils.output import output_table

_COLUMNS = ["key", "name", "repo", "path", "prefix", "output"]


def projects_command(fmt: Optional[str] = FORMAT_OPTION) -> None:
    """List built-in projects."""
    rows = [
        {
            "key": p.key,
            "name": p.name,
            "repo": p.repo,
            "path": p.path,
            "prefix": p.proposal_prefix,
            "output": p.default_output_filename,
        }
        for p in all_projects()
    ]
    output_table(rows, _COLUMNS, fmt=fmt)
