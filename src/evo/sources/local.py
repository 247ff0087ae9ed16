"""Proposal files on the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

import git

from evo.core.project import Project
from evo.sources.base import ProposalSpec, SourceError, is_proposal_filename

logger = logging.getLogger(__name__)


def blob_sha(path: Path) -> str:
    """Git blob hash of a file, the same value GitHub listings report."""
    try:
        return git.Git().hash_object(str(path))
    except (git.GitCommandError, git.GitCommandNotFound) as e:
        raise SourceError(f"Cannot hash {path}: {e}") from e


def local_proposal_specs(project: Project, paths: list[Path]) -> list[ProposalSpec]:
    """Specs for proposal files and directories of proposal files.

    Directories contribute their ``.md`` files sorted by name. Files keep
    the order given.
    """
    files: list[Path] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            files.extend(sorted(p for p in path.iterdir() if p.is_file() and is_proposal_filename(p.name)))
        elif path.is_file():
            if not is_proposal_filename(path.name):
                raise SourceError(f"Proposal files must be Markdown files ending in '.md': {path}")
            files.append(path)
        else:
            raise SourceError(f"No such file or directory: {path}")

    return [
        ProposalSpec.for_file(
            project.proposal_prefix, file.name, url=str(file), sha=blob_sha(file), sort_index=index,
        )
        for index, file in enumerate(files)
    ]


def head_commit(path: Path) -> str:
    """Commit sha of the repository containing ``path``, or '' outside a repository."""
    path = Path(path)
    if not path.is_dir():
        path = path.parent
    try:
        repo = git.Repo(path, search_parent_directories=True)
        return repo.head.commit.hexsha
    except (git.InvalidGitRepositoryError, git.NoSuchPathError, ValueError):
        return ""
