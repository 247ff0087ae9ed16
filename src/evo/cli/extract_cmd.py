"""extract: write the metadata JSON for a whole proposal series."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from evo.cli._shared import PROJECT_OPTION, VERBOSE_OPTION, resolve_project, resolve_workers
from evo.core.job import ExtractionJob, JobError, parse_force_directives
from evo.core.report import metadata_json
from evo.core.snapshot import SnapshotError
from evo.sources.base import SourceError
from evo.utils.output import error, setup_logging, success
from evo.utils.paths import resolve_output_path, write_text_output


def extract_command(
    output_path: Optional[str] = typer.Option(
        None, "--output-path", "-o", help="Output file or directory ('-' for stdout)"
    ),
    snapshot_path: Optional[Path] = typer.Option(
        None, "--snapshot-path", help="Extract from a .evosnapshot directory instead of GitHub"
    ),
    force_extract: Optional[List[str]] = typer.Option(
        None, "--force-extract", help="'all' or a proposal id to extract even if unchanged"
    ),
    previous_results: Optional[str] = typer.Option(
        None, "--previous-results", help="URL or path of previous results to reuse"
    ),
    project_name: Optional[str] = PROJECT_OPTION,
    workers: Optional[int] = typer.Option(None, "--workers", "-j", help="Parallel extractions"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Extract metadata from all proposals, reusing unchanged previous results."""
    setup_logging(verbose)
    project = resolve_project(project_name)

    try:
        forced_ids, force_all = parse_force_directives(force_extract or [], project)
        options = {
            "forced_ids": forced_ids,
            "force_all": force_all,
            "max_workers": resolve_workers(workers),
        }
        if snapshot_path is not None:
            job = ExtractionJob.from_snapshot(snapshot_path, project, **options)
        else:
            job = ExtractionJob.from_network(project, previous_results=previous_results, **options)
        results = job.run()
    except (JobError, SourceError, SnapshotError) as e:
        error(str(e))
        raise typer.Exit(1)

    text = metadata_json(results)
    path = resolve_output_path(output_path, project.default_output_filename)
    if path is None:
        print(text, end="")
        return
    write_text_output(text, path)
    success(f"Wrote {len(results.proposals)} proposals to {path}")
