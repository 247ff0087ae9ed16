"""Header field index: label -> list item of the bullet list directly after the title."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from markdown_it.tree import SyntaxTreeNode

from evo.core.issues import ExtractionResult
from evo.markdown.document import Document, LinkInfo, MarkupWalker, inline_children

logger = logging.getLogger(__name__)


class HeaderFields:
    """Mapping of header labels to the list items holding their values."""

    def __init__(self, items: dict[str, SyntaxTreeNode] | None = None) -> None:
        self._items: dict[str, SyntaxTreeNode] = dict(items or {})

    def __getitem__(self, label: str) -> SyntaxTreeNode:
        return self._items[label]

    def __contains__(self, label: object) -> bool:
        return label in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, label: str) -> SyntaxTreeNode | None:
        return self._items.get(label)

    def lookup(self, labels: Iterable[str]) -> tuple[str, SyntaxTreeNode] | None:
        """Return the first (label, item) found, trying labels in order."""
        for label in labels:
            item = self._items.get(label)
            if item is not None:
                return label, item
        return None


def label_for_item(item: SyntaxTreeNode) -> str | None:
    """Label of a header list item, or None when the item has no label shape.

    ``Author: [Name](...)`` gives ``Author``. An item whose first paragraph
    is nothing but a link is labeled by the link text.
    """
    if not item.children or item.children[0].type != "paragraph":
        return None
    inlines = inline_children(item.children[0])
    if not inlines:
        return None
    first = inlines[0]
    if first.type == "text":
        return first.content.split(":", 1)[0].strip()
    if first.type == "link" and len(inlines) == 1:
        link = LinkInfo.from_node(first)
        if link is not None and link.text:
            return link.text
    return None


class _HeaderWalker(MarkupWalker):
    def __init__(self) -> None:
        self.items: dict[str, SyntaxTreeNode] = {}

    def visit_list_item(self, item: SyntaxTreeNode) -> None:
        label = label_for_item(item)
        if label is None:
            logger.debug("Unable to extract label from header item: %r", item.pretty())
            return
        if label in self.items:
            logger.debug("Header field '%s' appears more than once", label)
        self.items[label] = item


def extract_header_fields(document: Document) -> ExtractionResult[HeaderFields]:
    """Index the bullet list directly after the title. ``None`` value when there is none."""
    header_list = document.first_unordered_list()
    if header_list is None:
        return ExtractionResult()
    walker = _HeaderWalker()
    walker.visit(header_list)
    return ExtractionResult(value=HeaderFields(walker.items))
