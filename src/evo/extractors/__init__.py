"""Field extractors: one module per header field or document section.

Each extractor is a plain function returning an ``ExtractionResult``.
Title and summary read the whole ``Document``; the rest read a
``FieldContext`` built around the header field index.
"""

from __future__ import annotations

from evo.extractors.base import FieldContext
from evo.extractors.discussion import extract_discussions
from evo.extractors.feature_flag import extract_upcoming_feature_flag
from evo.extractors.header import HeaderFields, extract_header_fields
from evo.extractors.implementation import extract_implementation
from evo.extractors.person import extract_authors, extract_review_managers
from evo.extractors.previous_proposal import extract_previous_proposals
from evo.extractors.proposal_link import extract_proposal_link
from evo.extractors.status import extract_status
from evo.extractors.summary import extract_summary
from evo.extractors.title import extract_title
from evo.extractors.tracking_bug import extract_tracking_bugs

__all__ = [
    "FieldContext",
    "HeaderFields",
    "extract_authors",
    "extract_discussions",
    "extract_header_fields",
    "extract_implementation",
    "extract_previous_proposals",
    "extract_proposal_link",
    "extract_review_managers",
    "extract_status",
    "extract_summary",
    "extract_title",
    "extract_tracking_bugs",
    "extract_upcoming_feature_flag",
]
