"""validate: report warnings and errors without reusing previous results."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from evo.cli._shared import (
    FORMAT_OPTION,
    PROJECT_OPTION,
    VERBOSE_OPTION,
    resolve_project,
    resolve_workers,
)
from evo.core.job import ExtractionJob, JobError
from evo.core.report import validation_report
from evo.core.snapshot import SnapshotError
from evo.sources.base import SourceError
from evo.utils.output import error, output, setup_logging, success
from evo.utils.paths import write_text_output


def validate_command(
    files: Optional[List[Path]] = typer.Argument(None, help="Proposal files or directories"),
    snapshot_path: Optional[Path] = typer.Option(
        None, "--snapshot-path", help="Validate a .evosnapshot directory"
    ),
    pull: Optional[int] = typer.Option(None, "--pull", help="Validate proposals changed by a pull request"),
    project_name: Optional[str] = PROJECT_OPTION,
    output_path: Optional[Path] = typer.Option(
        None, "--output-path", "-o", help="Write the report to a file instead of stdout"
    ),
    workers: Optional[int] = typer.Option(None, "--workers", "-j", help="Parallel extractions"),
    fmt: Optional[str] = FORMAT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Validate proposals. Exits with status 1 when any proposal has errors."""
    setup_logging(verbose)
    project = resolve_project(project_name)

    sources = [s for s in (files, snapshot_path, pull) if s]
    if len(sources) > 1:
        error("Give proposal files, --snapshot-path or --pull, not more than one")
        raise typer.Exit(1)

    # Previous results are never reused: every proposal is validated
    options = {"max_workers": resolve_workers(workers)}
    try:
        if files:
            job = ExtractionJob.from_files(project, files, **options)
        elif snapshot_path is not None:
            job = ExtractionJob.from_snapshot(snapshot_path, project, ignore_previous=True, **options)
        elif pull is not None:
            job = ExtractionJob.from_pull_request(project, pull, **options)
        else:
            job = ExtractionJob.from_network(project, ignore_previous=True, **options)
        results = job.run()
    except (JobError, SourceError, SnapshotError) as e:
        error(str(e))
        raise typer.Exit(1)

    if fmt == "json":
        flagged = [p.to_json_dict() for p in results.proposals if p.has_issues]
        output(flagged, fmt="json")
    else:
        report = validation_report(results, title=f"{project.name} Evolution")
        if output_path is not None:
            write_text_output(report, output_path)
            success(f"Wrote validation report to {output_path}")
        else:
            output(report, fmt="text")

    if results.has_errors:
        raise typer.Exit(1)
