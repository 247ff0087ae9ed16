"""GitHub proposal listings via the gh CLI.

Listings, branch heads and pull request files come from the GitHub REST
API through ``gh api``. Document contents are not fetched here; the
``download_url`` / ``raw_url`` of each file becomes the spec locator and is
read later by ``evo.sources.fetch``.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass

from evo.core.project import Project
from evo.sources.base import ProposalSpec, SourceError, is_proposal_filename

logger = logging.getLogger(__name__)

_GH_TIMEOUT = 60


class GitHubSourceError(SourceError):
    """Raised when a gh CLI call fails."""


@dataclass
class BranchInfo:
    name: str
    commit_sha: str

    def to_json_dict(self) -> dict:
        return {"name": self.name, "commit": {"sha": self.commit_sha}}

    @classmethod
    def from_json_dict(cls, data: dict) -> BranchInfo:
        commit = data.get("commit") or {}
        return cls(name=data.get("name", ""), commit_sha=commit.get("sha", ""))


class GitHubSource:
    """Proposal listings of one project's repository."""

    def __init__(self, project: Project) -> None:
        self.project = project

    def fetch_branch(self, branch: str = "main") -> BranchInfo:
        data = self._run_gh_single(["gh", "api", f"repos/{self.project.repo}/branches/{branch}"])
        return BranchInfo.from_json_dict(data)

    def fetch_listing(self, ref: str | None = None) -> list[dict]:
        """Markdown files of the proposals directory at ``ref``.

        Subdirectories and non-Markdown files are filtered out.
        """
        endpoint = f"repos/{self.project.repo}/contents/{self.project.path}"
        if ref:
            endpoint += f"?ref={ref}"
        items = self._run_gh(["gh", "api", endpoint])
        return [
            item for item in items
            if item.get("type") == "file" and is_proposal_filename(item.get("name", ""))
        ]

    def fetch_pull_request_files(self, number: int) -> list[dict]:
        """Proposal files touched by a pull request."""
        endpoint = f"repos/{self.project.repo}/pulls/{number}/files?per_page=100"
        prefix = self.project.path.rstrip("/") + "/"
        items = self._run_gh(["gh", "api", endpoint])
        return [
            item for item in items
            if item.get("filename", "").startswith(prefix)
            and is_proposal_filename(item.get("filename", ""))
            and item.get("status") != "removed"
        ]

    def listing_specs(self, listing: list[dict]) -> list[ProposalSpec]:
        specs = []
        for item in listing:
            url = item.get("download_url")
            if not url:
                continue
            specs.append(ProposalSpec.for_file(
                self.project.proposal_prefix,
                item["name"],
                url=url,
                sha=item.get("sha", ""),
                sort_index=len(specs),
            ))
        return specs

    def pull_request_specs(self, files: list[dict]) -> list[ProposalSpec]:
        specs = []
        for index, item in enumerate(files):
            name = item["filename"].rsplit("/", 1)[-1]
            specs.append(ProposalSpec.for_file(
                self.project.proposal_prefix,
                name,
                url=item.get("raw_url", ""),
                sha=item.get("sha", ""),
                sort_index=index,
            ))
        return specs

    # -- Internal helpers --

    def _run_gh(self, cmd: list[str]) -> list[dict]:
        """Run a gh command that returns a JSON array."""
        data = self._parse(self._exec_gh(cmd))
        if not isinstance(data, list):
            return [data] if data else []
        return data

    def _run_gh_single(self, cmd: list[str]) -> dict:
        """Run a gh command that returns a single JSON object."""
        data = self._parse(self._exec_gh(cmd))
        if isinstance(data, list):
            if not data:
                raise GitHubSourceError("Empty response from GitHub")
            return data[0]
        return data

    def _parse(self, raw: str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise GitHubSourceError(f"Unexpected gh output: {e}") from e

    def _exec_gh(self, cmd: list[str]) -> str:
        """Execute a gh CLI command and return stdout."""
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=_GH_TIMEOUT,
            )
        except FileNotFoundError:
            raise GitHubSourceError(
                "gh CLI not found. Install it: https://cli.github.com/"
            )
        except subprocess.TimeoutExpired:
            raise GitHubSourceError(f"gh command timed out after {_GH_TIMEOUT} seconds")

        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "auth login" in stderr or "not logged" in stderr.lower():
                raise GitHubSourceError(
                    f"gh authentication required. Run: gh auth login\n{stderr}"
                )
            raise GitHubSourceError(f"gh command failed: {stderr}")

        return result.stdout
