#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_parser.py
"""Unit tests for the Markdown to tree converter.

Tests cover:
- CommonMark blocks: paragraphs, headings, code, quotes, lists, breaks, HTML
- Inline content: emphasis, code spans, links, images, breaks
- Front matter extraction
- Footnote references and definitions
- Tables
- Input validation and error wrapping

"""

import pytest

from markdown_walker import (
    Arena,
    FRONT_MATTER_EXTENSIONS,
    ExtensionOptions,
    ListDelimType,
    ListType,
    MarkdownToTreeConverter,
    NodeCode,
    NodeCodeBlock,
    NodeFootnoteDefinition,
    NodeFootnoteReference,
    NodeHeading,
    NodeKind,
    NodeLink,
    NodeList,
    NodeTable,
    ParsingError,
    TableAlignment,
    ValidationError,
    parse_document,
)
from markdown_walker.parsers import markdown as markdown_module


def kinds(node):
    """Return the kinds of the children of ``node``."""
    return [child.kind for child in node.children]


def find_all(node, kind):
    """Return every node of ``kind`` under ``node``, in pre-order."""
    found = [node] if node.kind is kind else []
    for child in node.children:
        found.extend(find_all(child, kind))
    return found


def find(node, kind):
    """Return the first node of ``kind`` under ``node``."""
    matches = find_all(node, kind)
    assert matches, f"no {kind} node found"
    return matches[0]


@pytest.mark.unit
class TestDocument:
    """Tests for the document root."""

    def test_empty_input(self):
        """Test empty input yields a lone DOCUMENT node."""
        root = parse_document("")
        assert root.kind is NodeKind.DOCUMENT
        assert root.children == ()
        assert root.is_root

    def test_blank_lines_only(self):
        """Test whitespace-only input has no block children."""
        assert parse_document("\n\n   \n").children == ()

    def test_uses_given_arena(self):
        """Test nodes are stored in the arena passed in."""
        arena = Arena()
        first = parse_document("a", arena=arena)
        second = parse_document("b", arena=arena)
        assert arena.roots() == [first, second]
        assert first.arena is arena

    def test_non_string_input(self):
        """Test non-string input is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            parse_document(None)
        assert exc_info.value.parameter_name == "markdown"

    def test_invalid_extensions(self):
        """Test the converter rejects options of the wrong type."""
        with pytest.raises(ValidationError):
            MarkdownToTreeConverter(extensions={"table": False})

    def test_parser_failure_wrapped(self, monkeypatch):
        """Test an exception inside mistune surfaces as ParsingError."""

        class BrokenParser:
            def parse(self, text):
                raise RuntimeError("parser exploded")

        monkeypatch.setattr(markdown_module, "build_markdown", lambda extensions: BrokenParser())
        with pytest.raises(ParsingError) as exc_info:
            parse_document("text")
        assert exc_info.value.parsing_stage == "markdown"
        assert isinstance(exc_info.value.original_error, RuntimeError)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_non_list_result_rejected(self, monkeypatch):
        """Test a parser result other than a token list raises ParsingError."""

        class RenderingParser:
            def parse(self, text):
                return "<p>text</p>", None

        monkeypatch.setattr(markdown_module, "build_markdown", lambda extensions: RenderingParser())
        with pytest.raises(ParsingError, match="token list"):
            parse_document("text")

    def test_parser_cached_per_configuration(self):
        """Test one mistune instance is built per extension configuration."""
        options = ExtensionOptions(spoiler=False)
        assert markdown_module.build_markdown(options) is markdown_module.build_markdown(
            ExtensionOptions(spoiler=False)
        )


@pytest.mark.unit
class TestHeadings:
    """Tests for ATX and setext headings."""

    def test_atx_heading(self):
        """Test a single ATX heading."""
        root = parse_document("# Title")
        heading = root.children[0]
        assert heading.kind is NodeKind.HEADING
        assert heading.payload == NodeHeading(level=1, setext=False)
        assert [(c.kind, c.payload) for c in heading.children] == [(NodeKind.TEXT, "Title")]

    def test_heading_levels(self):
        """Test heading levels 1 to 6."""
        root = parse_document("\n\n".join("#" * level + f" H{level}" for level in range(1, 7)))
        assert [node.payload.level for node in root.children] == [1, 2, 3, 4, 5, 6]

    def test_closing_hashes_dropped(self):
        """Test trailing closing sequence is not part of the text."""
        heading = parse_document("## Sub ##").children[0]
        assert heading.children[0].payload == "Sub"

    def test_setext_heading(self):
        """Test underlined headings record their style."""
        root = parse_document("Title\n=====\n\nSub\n---")
        assert [node.payload for node in root.children] == [
            NodeHeading(level=1, setext=True),
            NodeHeading(level=2, setext=True),
        ]


@pytest.mark.unit
class TestInline:
    """Tests for inline content."""

    def test_emphasis_and_strong(self):
        """Test emphasis and strong emphasis containers."""
        para = parse_document("a *b* **c**").children[0]
        assert kinds(para) == [NodeKind.TEXT, NodeKind.EMPH, NodeKind.TEXT, NodeKind.STRONG]
        assert para.children[1].children[0].payload == "b"
        assert para.children[3].children[0].payload == "c"

    def test_adjacent_text_merged(self):
        """Test text split by the tokenizer becomes a single TEXT node."""
        para = parse_document("\\*not emphasis\\*").children[0]
        assert [(c.kind, c.payload) for c in para.children] == [(NodeKind.TEXT, "*not emphasis*")]

    def test_code_span(self):
        """Test inline code."""
        para = parse_document("Use `pip install`.").children[0]
        assert find(para, NodeKind.CODE).payload == NodeCode(literal="pip install")

    def test_soft_break(self):
        """Test a plain newline inside a paragraph."""
        para = parse_document("line one\nline two").children[0]
        assert kinds(para) == [NodeKind.TEXT, NodeKind.SOFT_BREAK, NodeKind.TEXT]

    def test_hard_break(self):
        """Test two trailing spaces make a line break."""
        para = parse_document("line one  \nline two").children[0]
        assert kinds(para) == [NodeKind.TEXT, NodeKind.LINE_BREAK, NodeKind.TEXT]
        assert para.children[0].payload == "line one"

    def test_link(self):
        """Test an inline link with title."""
        para = parse_document('[home](https://example.com "Home page")').children[0]
        link = para.children[0]
        assert link.kind is NodeKind.LINK
        assert link.payload == NodeLink(url="https://example.com", title="Home page")
        assert link.children[0].payload == "home"

    def test_link_without_title(self):
        """Test a missing title is the empty string."""
        link = parse_document("[x](y)").children[0].children[0]
        assert link.payload.title == ""

    def test_image_alt_text_children(self):
        """Test image alt text is kept as children."""
        image = parse_document("![alt *text*](img.png)").children[0].children[0]
        assert image.kind is NodeKind.IMAGE
        assert image.payload == NodeLink(url="img.png")
        assert kinds(image) == [NodeKind.TEXT, NodeKind.EMPH]

    def test_angle_autolink(self):
        """Test <scheme:...> autolinks."""
        link = parse_document("<https://example.org>").children[0].children[0]
        assert link.kind is NodeKind.LINK
        assert link.payload.url == "https://example.org"

    def test_inline_html(self):
        """Test inline HTML that is not filtered."""
        para = parse_document("a <span>b</span> c").children[0]
        html = [node.payload for node in find_all(para, NodeKind.HTML_INLINE)]
        assert html == ["<span>", "</span>"]

    def test_tagfilter_escapes_unsafe_tags(self):
        """Test filtered tags become ESCAPED_TAG nodes."""
        para = parse_document("a <script>alert(1)</script> b").children[0]
        assert [node.payload for node in find_all(para, NodeKind.ESCAPED_TAG)] == ["<script>", "</script>"]
        assert find_all(para, NodeKind.HTML_INLINE) == []

    def test_tagfilter_disabled(self):
        """Test filtered tags pass through as inline HTML when the filter is off."""
        root = parse_document("a <script>x</script> b", extensions=ExtensionOptions(tagfilter=False))
        assert len(find_all(root, NodeKind.HTML_INLINE)) == 2
        assert find_all(root, NodeKind.ESCAPED_TAG) == []


@pytest.mark.unit
class TestBlocks:
    """Tests for block constructs."""

    def test_paragraphs(self):
        """Test blank lines separate paragraphs."""
        root = parse_document("one\n\ntwo")
        assert kinds(root) == [NodeKind.PARAGRAPH, NodeKind.PARAGRAPH]

    def test_fenced_code(self):
        """Test a fenced code block with an info string."""
        block = parse_document("```python\nprint(1)\n```").children[0]
        assert block.kind is NodeKind.CODE_BLOCK
        assert block.payload == NodeCodeBlock(
            fenced=True, fence_char="`", fence_length=3, info="python", literal="print(1)\n"
        )
        assert block.payload.language == "python"
        assert block.children == ()

    def test_tilde_fence(self):
        """Test a longer tilde fence without info string."""
        payload = parse_document("~~~~\ncode\n~~~~").children[0].payload
        assert (payload.fence_char, payload.fence_length, payload.info) == ("~", 4, "")

    def test_indented_code(self):
        """Test an indented code block."""
        payload = parse_document("    code line").children[0].payload
        assert payload.fenced is False
        assert payload.fence_length == 0
        assert payload.literal.rstrip("\n") == "code line"

    def test_block_quote(self):
        """Test a block quote holding a paragraph."""
        quote = parse_document("> quoted").children[0]
        assert quote.kind is NodeKind.BLOCK_QUOTE
        assert kinds(quote) == [NodeKind.PARAGRAPH]

    def test_thematic_break(self):
        """Test a thematic break between paragraphs."""
        root = parse_document("a\n\n***\n\nb")
        assert kinds(root) == [NodeKind.PARAGRAPH, NodeKind.THEMATIC_BREAK, NodeKind.PARAGRAPH]

    def test_html_block(self):
        """Test a raw HTML block keeps its literal."""
        block = parse_document("<div>\nhi\n</div>").children[0]
        assert block.kind is NodeKind.HTML_BLOCK
        assert block.payload.literal.startswith("<div>")


@pytest.mark.unit
class TestLists:
    """Tests for list descriptors and items."""

    def test_bullet_list(self):
        """Test a tight bullet list."""
        lst = parse_document("- a\n- b").children[0]
        assert lst.kind is NodeKind.LIST
        assert lst.payload == NodeList(
            list_type=ListType.BULLET, start=1, delimiter=ListDelimType.PERIOD, bullet_char="-", tight=True
        )
        assert kinds(lst) == [NodeKind.ITEM, NodeKind.ITEM]
        item = lst.children[0]
        assert item.payload == lst.payload
        assert kinds(item) == [NodeKind.PARAGRAPH]
        assert item.children[0].children[0].payload == "a"

    def test_bullet_char(self):
        """Test the bullet character is recorded."""
        assert parse_document("* a").children[0].payload.bullet_char == "*"
        assert parse_document("+ a").children[0].payload.bullet_char == "+"

    def test_ordered_list_paren(self):
        """Test an ordered list with start number and paren delimiter."""
        descriptor = parse_document("3) x\n4) y").children[0].payload
        assert descriptor.list_type is ListType.ORDERED
        assert descriptor.start == 3
        assert descriptor.delimiter is ListDelimType.PAREN
        assert descriptor.bullet_char == ""

    def test_ordered_list_period(self):
        """Test an ordered list starting at one."""
        descriptor = parse_document("1. x\n2. y").children[0].payload
        assert (descriptor.start, descriptor.delimiter) == (1, ListDelimType.PERIOD)

    def test_loose_list(self):
        """Test blank lines between items make a loose list."""
        assert parse_document("- a\n\n- b").children[0].payload.tight is False

    def test_nested_list(self):
        """Test a list nested in an item."""
        root = parse_document("- outer\n  - inner")
        lists = find_all(root, NodeKind.LIST)
        assert len(lists) == 2
        assert lists[1].parent.kind is NodeKind.ITEM


@pytest.mark.unit
class TestFrontMatter:
    """Tests for front matter extraction."""

    def test_front_matter_first_child(self):
        """Test a leading front matter block becomes the first child."""
        root = parse_document("---\ntitle: Hi\n---\n# Body", extensions=FRONT_MATTER_EXTENSIONS)
        assert kinds(root) == [NodeKind.FRONT_MATTER, NodeKind.HEADING]
        assert root.children[0].payload == "---\ntitle: Hi\n---\n"

    def test_unclosed_delimiter(self):
        """Test an opening delimiter without a closing one is not front matter."""
        root = parse_document("---\ntitle: Hi", extensions=FRONT_MATTER_EXTENSIONS)
        assert NodeKind.FRONT_MATTER not in kinds(root)

    def test_not_at_start(self):
        """Test front matter must open the document."""
        root = parse_document("text\n\n---\na: b\n---\n", extensions=FRONT_MATTER_EXTENSIONS)
        assert find_all(root, NodeKind.FRONT_MATTER) == []

    def test_custom_delimiter(self):
        """Test a configured delimiter."""
        options = ExtensionOptions(front_matter_delimiter="+++")
        root = parse_document("+++\na = 1\n+++\nbody", extensions=options)
        assert root.children[0].payload == "+++\na = 1\n+++\n"

    def test_disabled_by_default(self):
        """Test leading delimiters are thematic breaks unless front matter is enabled."""
        root = parse_document("---\n# A\n---\n")
        assert kinds(root) == [NodeKind.THEMATIC_BREAK, NodeKind.HEADING, NodeKind.THEMATIC_BREAK]

    def test_disabled(self):
        """Test front matter detection can be turned off."""
        options = FRONT_MATTER_EXTENSIONS.create_updated(front_matter_delimiter=None)
        root = parse_document("---\na: b\n---\n", extensions=options)
        assert find_all(root, NodeKind.FRONT_MATTER) == []


@pytest.mark.unit
class TestFootnotes:
    """Tests for footnote references and definitions."""

    def test_reference_and_definition(self):
        """Test a referenced footnote."""
        root = parse_document("Text[^1].\n\n[^1]: Note.")
        assert kinds(root) == [NodeKind.PARAGRAPH, NodeKind.FOOTNOTE_DEFINITION]

        reference = find(root.children[0], NodeKind.FOOTNOTE_REFERENCE)
        assert reference.payload == NodeFootnoteReference(name="1", ref_num=1, ix=1)

        definition = root.children[1]
        assert definition.payload == NodeFootnoteDefinition(name="1", total_references=1)
        assert find(definition, NodeKind.TEXT).payload == "Note."

    def test_repeated_references(self):
        """Test reference numbering and total count for a reused footnote."""
        root = parse_document("A[^n] and B[^n].\n\n[^n]: Shared.")
        references = [node.payload for node in find_all(root, NodeKind.FOOTNOTE_REFERENCE)]
        assert [(ref.ref_num, ref.ix) for ref in references] == [(1, 1), (2, 1)]
        assert find(root, NodeKind.FOOTNOTE_DEFINITION).payload.total_references == 2

    def test_index_follows_first_reference(self):
        """Test footnote indexes follow the order of first reference."""
        root = parse_document("X[^b] Y[^a]\n\n[^a]: A\n[^b]: B")
        references = [node.payload for node in find_all(root, NodeKind.FOOTNOTE_REFERENCE)]
        assert [(ref.name, ref.ix) for ref in references] == [("b", 1), ("a", 2)]
        definitions = [node.payload.name for node in find_all(root, NodeKind.FOOTNOTE_DEFINITION)]
        assert definitions == ["b", "a"]

    def test_names_normalized(self):
        """Test labels are case-folded."""
        root = parse_document("See[^Note].\n\n[^note]: Body")
        assert find(root, NodeKind.FOOTNOTE_REFERENCE).payload.name == "note"

    def test_undefined_reference_is_text(self):
        """Test a reference without definition stays text."""
        root = parse_document("Missing[^x].")
        assert find_all(root, NodeKind.FOOTNOTE_REFERENCE) == []
        assert "[^x]" in find(root, NodeKind.TEXT).payload

    def test_state_reset_between_parses(self):
        """Test reference counters restart for each document."""
        converter = MarkdownToTreeConverter()
        converter.parse("A[^1]\n\n[^1]: x")
        root = converter.parse("B[^1]\n\n[^1]: y")
        assert find(root, NodeKind.FOOTNOTE_REFERENCE).payload.ref_num == 1
        assert find(root, NodeKind.FOOTNOTE_DEFINITION).payload.total_references == 1


@pytest.mark.unit
class TestTables:
    """Tests for pipe tables."""

    TABLE = "| a | b |\n|:--|--:|\n| 1 |   |\n"

    def test_table_payload(self):
        """Test alignments and counts."""
        table = parse_document(self.TABLE).children[0]
        assert table.kind is NodeKind.TABLE
        assert table.payload == NodeTable(
            alignments=(TableAlignment.LEFT, TableAlignment.RIGHT),
            num_columns=2,
            num_rows=2,
            num_nonempty_cells=3,
        )

    def test_rows_and_cells(self):
        """Test the header row comes first and empty cells have no children."""
        table = parse_document(self.TABLE).children[0]
        assert [row.payload for row in table.children] == [True, False]
        header, body = table.children
        assert [cell.children[0].payload for cell in header.children] == ["a", "b"]
        assert kinds(body) == [NodeKind.TABLE_CELL, NodeKind.TABLE_CELL]
        assert body.children[1].children == ()

    def test_center_and_default_alignment(self):
        """Test center and unspecified alignments."""
        table = parse_document("| a | b |\n|:-:|---|\n| 1 | 2 |").children[0]
        assert table.payload.alignments == (TableAlignment.CENTER, TableAlignment.NONE)

    def test_inline_content_in_cells(self):
        """Test cells hold inline nodes."""
        table = parse_document("| a |\n|---|\n| **b** |").children[0]
        assert find(table.children[1], NodeKind.STRONG) is not None

    def test_tables_disabled(self):
        """Test pipe syntax stays a paragraph when tables are off."""
        root = parse_document(self.TABLE, extensions=ExtensionOptions(table=False))
        assert find_all(root, NodeKind.TABLE) == []
