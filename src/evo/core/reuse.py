"""Incremental reuse: decide which proposals need extracting again.

A proposal from the previous run is reused when its id is still listed,
its content sha is unchanged, it was not forced and it still sits at the
same position in the listing. Everything else is extracted again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from evo.core.schema import Proposal
from evo.sources.base import ProposalSpec

logger = logging.getLogger(__name__)


@dataclass
class SortableProposal:
    """A proposal with its position in the listing."""

    proposal: Proposal
    sort_index: int

    @property
    def id(self) -> str:
        return self.proposal.id

    @property
    def sha(self) -> str:
        return self.proposal.sha


@dataclass
class ReusePartition:
    needs_parsing: list[ProposalSpec] = field(default_factory=list)
    reused: list[SortableProposal] = field(default_factory=list)
    deleted_ids: list[str] = field(default_factory=list)
    # Reused candidates whose listing position moved; extracted again
    reordered_ids: list[str] = field(default_factory=list)


def filter_proposal_specs(
    specs: Sequence[ProposalSpec],
    previous: Sequence[Proposal] | None = None,
    forced_ids: Iterable[str] = (),
    force_all: bool = False,
) -> ReusePartition:
    """Split ``specs`` into specs to extract and previous records to reuse.

    A previous record's sort index is its position in ``previous``.
    """
    if not previous:
        return ReusePartition(needs_parsing=list(specs))

    forced = set(forced_ids)
    previous_by_id: dict[str, SortableProposal] = {}
    for index, proposal in enumerate(previous):
        previous_by_id[proposal.id] = SortableProposal(proposal=proposal, sort_index=index)

    partition = ReusePartition()
    for spec in specs:
        candidate = previous_by_id.pop(spec.id, None)
        if force_all or candidate is None:
            partition.needs_parsing.append(spec)
        elif candidate.sha != spec.sha or spec.id in forced:
            partition.needs_parsing.append(spec)
        elif candidate.sort_index != spec.sort_index:
            logger.warning(
                "%s moved from position %d to %d in the listing; extracting again",
                spec.id, candidate.sort_index, spec.sort_index,
            )
            partition.reordered_ids.append(spec.id)
            partition.needs_parsing.append(spec)
        else:
            partition.reused.append(candidate)

    partition.deleted_ids = sorted(i for i in previous_by_id if i)

    if not partition.needs_parsing and not partition.deleted_ids:
        logger.info("No proposals require extraction. Using previously extracted results.")
    return partition
