"""Upcoming Feature Flag field."""

from __future__ import annotations

import re

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult
from evo.core.schema import UpcomingFeatureFlag
from evo.extractors.base import FieldContext
from evo.markdown.document import MarkupWalker

_AVAILABLE = re.compile(r"\([Ii]mplemented in Swift (\d(\.\d)*)\)")
_ENABLED = re.compile(r"\(Enabled in Swift (\d(\.\d)*) language mode\)")


class _FeatureFlagWalker(MarkupWalker):
    def __init__(self) -> None:
        self.flag: str | None = None
        self.available: str | None = None
        self.enabled: str | None = None

    def visit_code_inline(self, node: SyntaxTreeNode) -> None:
        self.flag = node.content

    def visit_text(self, node: SyntaxTreeNode) -> None:
        available = _AVAILABLE.search(node.content)
        if available:
            self.available = available.group(1)
        enabled = _ENABLED.search(node.content)
        if enabled:
            self.enabled = enabled.group(1)


def extract_upcoming_feature_flag(context: FieldContext) -> ExtractionResult[UpcomingFeatureFlag]:
    """The flag is the last inline code span of the field."""
    reporter = context.reporter()
    item = context.field_item("upcoming_feature_flag")
    if item is None:
        return reporter.result(None)

    walker = _FeatureFlagWalker()
    walker.visit(item)
    if walker.flag is None:
        reporter.report(issues.UPCOMING_FEATURE_FLAG_EXTRACTION_FAILURE)
        return reporter.result(None)
    if re.search(r"\s", walker.flag):
        reporter.report(issues.MALFORMED_UPCOMING_FEATURE_FLAG)
        return reporter.result(None)

    return reporter.result(
        UpcomingFeatureFlag(
            flag=walker.flag,
            available=walker.available,
            enabled_in_language_version=walker.enabled,
        )
    )
