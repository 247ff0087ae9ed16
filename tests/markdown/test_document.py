"""Tests for the Markdown document model."""

from __future__ import annotations

from evo.markdown.document import Document, LinkInfo, MarkupWalker, inline_children, plain_text


def _first_link(markdown: str):
    paragraph = Document.parse(markdown).children[0]
    return next(n for n in inline_children(paragraph) if n.type == "link")


class TestDocument:
    def test_empty(self):
        assert Document.parse("").is_empty
        assert Document.parse("   \n\n").is_empty

    def test_first_heading(self):
        doc = Document.parse("# Title\n\nText\n")
        heading = doc.first_heading()
        assert heading is not None
        assert plain_text(heading) == "Title"

    def test_first_heading_only_if_first_block(self):
        doc = Document.parse("Intro text\n\n# Title\n")
        assert doc.first_heading() is None

    def test_first_unordered_list(self):
        doc = Document.parse("# Title\n\n* one\n* two\n\n1. ordered\n")
        bullets = doc.first_unordered_list()
        assert bullets is not None
        assert len(bullets.children) == 2

    def test_no_unordered_list(self):
        assert Document.parse("# Title\n\nJust text.\n").first_unordered_list() is None

    def test_later_list_is_not_the_header(self):
        doc = Document.parse("# Title\n\n1. ordered\n\n* one\n* two\n")
        assert doc.first_unordered_list() is None

    def test_list_after_paragraph_is_not_the_header(self):
        doc = Document.parse("# Title\n\nIntro.\n\n## Motivation\n\n* one\n")
        assert doc.first_unordered_list() is None


class TestPlainText:
    def test_inline_code_keeps_backticks(self):
        paragraph = Document.parse("Use `foo` here\n").children[0]
        assert plain_text(paragraph) == "Use `foo` here"

    def test_soft_break_becomes_space(self):
        paragraph = Document.parse("one\ntwo\n").children[0]
        assert plain_text(paragraph) == "one two"

    def test_link_and_emphasis_render_text(self):
        paragraph = Document.parse("see [the *docs*](https://example.com) now\n").children[0]
        assert plain_text(paragraph) == "see the docs now"


class TestLinkInfo:
    def test_bare_text_link(self):
        info = LinkInfo.from_node(_first_link("[SE-0001](0001-x.md)\n"))
        assert info == LinkInfo(text="SE-0001", destination="0001-x.md", contains_text_element=True)

    def test_link_with_markup(self):
        info = LinkInfo.from_node(_first_link("[`SE-0001`](0001-x.md)\n"))
        assert info is not None
        assert info.text == "SE-0001"
        assert not info.contains_text_element

    def test_link_without_text(self):
        assert LinkInfo.from_node(_first_link("[](0001-x.md)\n")) is None


class _LinkCollector(MarkupWalker):
    def __init__(self):
        self.links = []
        self.texts = []

    def visit_link(self, node):
        self.links.append(node.attrs["href"])

    def visit_text(self, node):
        self.texts.append(node.content)


class TestMarkupWalker:
    def test_handler_stops_descent(self):
        walker = _LinkCollector()
        walker.visit(Document.parse("before [inside](https://a.example) after\n").root)
        assert walker.links == ["https://a.example"]
        assert "inside" not in "".join(walker.texts)
        assert walker.texts == ["before ", " after"]

    def test_descends_nested_lists(self):
        walker = _LinkCollector()
        walker.visit(Document.parse("* one\n  * [two](https://b.example)\n").root)
        assert walker.links == ["https://b.example"]
