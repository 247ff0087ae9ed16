"""Renderings of an extraction result: validation report and JSON."""

from __future__ import annotations

import json

from evo.core.schema import EvolutionMetadata, Issue, Proposal


def _issues_block(heading: str, issues: list[Issue]) -> str:
    lines = [f"\t{heading}"]
    lines.extend(f"\t[{issue.code}] {issue.message}" for issue in issues)
    return "\n".join(lines) + "\n"


def proposal_report(proposal: Proposal) -> str:
    """Issues of one proposal; empty string when it has none."""
    if not proposal.has_issues:
        return ""
    if not proposal.id and not proposal.title:
        heading = "<Missing ID & Title>"
    else:
        proposal_id = proposal.id or "<Missing ID>"
        title = f"'{proposal.title}'" if proposal.title else "<Missing Title>"
        heading = f"{proposal_id} {title}"

    parts = [heading]
    if proposal.link:
        parts.append(proposal.link)
    text = "\n".join(parts) + "\n\n"
    if proposal.errors:
        text += _issues_block("ERRORS", proposal.errors) + "\n"
    if proposal.warnings:
        text += _issues_block("WARNINGS", proposal.warnings) + "\n"
    return text


def validation_report(metadata: EvolutionMetadata, title: str = "Swift Evolution") -> str:
    report = (
        f"{title} Validation Report\n"
        f"Generated: {metadata.creation_date}\n"
        f"Tool Version: {metadata.tool_version}\n\n"
    )
    with_issues = [p for p in metadata.proposals if p.has_issues]
    if not with_issues:
        return report + "NO ISSUES FOUND\n"
    report += "ISSUES FOUND\n\n"
    for proposal in with_issues:
        report += proposal_report(proposal) + "\n"
    return report


def metadata_json(metadata: EvolutionMetadata) -> str:
    """Pretty-printed, key-sorted JSON with camelCase keys."""
    return json.dumps(metadata.to_json_dict(), indent=2, sort_keys=True) + "\n"
