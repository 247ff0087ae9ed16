"""Markdown document model built on markdown-it-py's syntax tree.

Only the structure the extractors need is exposed: the top-level blocks,
the title heading, the header-field list and plain-text rendering. Tree
walking goes through ``MarkupWalker``, a small depth-first visitor keyed on
node type.
"""

from __future__ import annotations

from dataclasses import dataclass

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


def _markdown_parser() -> MarkdownIt:
    # CommonMark plus the GitHub table and strikethrough extensions.
    # Typographer stays off so quotes and dashes are kept verbatim.
    return MarkdownIt("commonmark", {"typographer": False}).enable(["table", "strikethrough"])


class Document:
    """A parsed Markdown document."""

    def __init__(self, root: SyntaxTreeNode) -> None:
        self.root = root

    @classmethod
    def parse(cls, text: str) -> Document:
        tokens = _markdown_parser().parse(text)
        return cls(SyntaxTreeNode(tokens))

    @property
    def children(self) -> list[SyntaxTreeNode]:
        return list(self.root.children)

    @property
    def is_empty(self) -> bool:
        return not self.root.children

    def first_heading(self) -> SyntaxTreeNode | None:
        """The first block, if it is a heading."""
        children = self.root.children
        if children and children[0].type == "heading":
            return children[0]
        return None

    def first_unordered_list(self) -> SyntaxTreeNode | None:
        """The header block: a bullet list directly after the title.

        Lists further down the document are body content and never count.
        """
        children = self.root.children
        if len(children) > 1 and children[1].type == "bullet_list":
            return children[1]
        return None


def plain_text(node: SyntaxTreeNode) -> str:
    """Render a subtree as plain text.

    Inline code keeps its backticks, soft breaks become spaces and hard
    breaks become newlines. Inline HTML is dropped.
    """
    kind = node.type
    if kind == "text":
        return node.content
    if kind == "code_inline":
        return f"`{node.content}`"
    if kind == "softbreak":
        return " "
    if kind == "hardbreak":
        return "\n"
    if kind in ("html_inline", "html_block"):
        return ""
    if kind in ("code_block", "fence"):
        return node.content
    return "".join(plain_text(child) for child in node.children)


def text_content(node: SyntaxTreeNode) -> str:
    """Like ``plain_text`` but without markup characters around inline code."""
    if node.type == "code_inline":
        return node.content
    if node.type in ("text", "softbreak", "hardbreak", "html_inline"):
        return plain_text(node)
    return "".join(text_content(child) for child in node.children)


def inline_children(block: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    """Inline nodes of a paragraph or heading (empty for other blocks)."""
    for child in block.children:
        if child.type == "inline":
            return list(child.children)
    return []


class MarkupWalker:
    """Depth-first visitor.

    ``visit`` calls ``visit_<type>`` when the subclass defines it and does
    not descend further; otherwise it descends into the children. A
    handler that also wants the children calls ``descend`` itself.
    """

    def visit(self, node: SyntaxTreeNode) -> None:
        handler = getattr(self, f"visit_{node.type}", None)
        if handler is not None:
            handler(node)
        else:
            self.descend(node)

    def descend(self, node: SyntaxTreeNode) -> None:
        for child in node.children:
            self.visit(child)


@dataclass
class LinkInfo:
    """Text and destination of an inline link."""

    text: str
    destination: str
    contains_text_element: bool = False

    @classmethod
    def from_node(cls, link: SyntaxTreeNode) -> LinkInfo | None:
        """Return ``None`` for a link without visible content or destination."""
        destination = link.attrs.get("href")
        if not link.children or not destination:
            return None
        children = link.children
        bare = len(children) == 1 and children[0].type == "text"
        return cls(
            text=text_content(link),
            destination=str(destination),
            contains_text_element=bare,
        )
