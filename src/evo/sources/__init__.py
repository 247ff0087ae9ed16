"""Where proposal listings, documents and previous results come from.

GitHub listings go through the gh CLI, document contents through httpx
or the filesystem, and local files are hashed with git.
"""

from __future__ import annotations

from evo.sources.base import ProposalSpec, SourceError

__all__ = ["ProposalSpec", "SourceError"]
