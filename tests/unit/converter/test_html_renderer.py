"""Tests for converter/html_renderer.py: the Medium output formats."""

from __future__ import annotations

from mediumify.converter.html_renderer import (
    MAX_GROUP_SIZE,
    SECTION_DELIMITER,
    group_blocks,
    render_block,
    render_optimized,
    render_plain_text,
    render_rich_document,
    render_sections,
)
from mediumify.models import (
    ArtifactRef,
    BlockType,
    ContentBlock,
    Document,
    DocumentMetadata,
)


def _p(text: str) -> ContentBlock:
    return ContentBlock(type=BlockType.PARAGRAPH, content=text)


def _h(text: str, level: int = 2) -> ContentBlock:
    return ContentBlock(type=BlockType.HEADER, content=text, level=level)


def _gist(gist_id: str) -> ContentBlock:
    return ContentBlock(
        type=BlockType.GIST_REFERENCE,
        content=f"[View code on GitHub Gist](https://gist.github.com/{gist_id})",
        language="python",
        code_index=0,
        gist_id=gist_id,
    )


ARTIFACT = ArtifactRef(
    id="abc123",
    url="https://gist.github.com/abc123",
    embed_url="https://gist.github.com/abc123.js",
    language="python",
    block_index=0,
)


def make_document(**overrides) -> Document:
    defaults = dict(
        title="Testing <Things>",
        subtitle="Short subtitle",
        sections=[
            _h("Setup", level=2),
            _p("Install **it**."),
            ContentBlock(type=BlockType.LIST, content="• one\n• two"),
            ContentBlock(type=BlockType.QUOTE, content="wise words"),
            ContentBlock(type=BlockType.CODE, content="if a < b:\n    pass", language="python", code_index=0),
        ],
        metadata=DocumentMetadata(tags=("python", "testing"), word_count=450, reading_time=3),
    )
    defaults.update(overrides)
    return Document(**defaults)


# ---------------------------------------------------------------------------
# Per-block rendering
# ---------------------------------------------------------------------------

class TestRenderBlock:
    def test_header_always_h2(self):
        doc = make_document()
        for level in (1, 2, 3, 6):
            assert render_block(_h("Title", level), doc) == "<h2>Title</h2>"

    def test_paragraph_inline_markup(self):
        assert render_block(_p("Install **it**."), make_document()) == (
            "<p>Install <strong>it</strong>.</p>"
        )

    def test_list_flat_with_bullets_stripped(self):
        block = ContentBlock(type=BlockType.LIST, content="• one\n• *two*")
        assert render_block(block, make_document()) == (
            "<ul>\n<li>one</li>\n<li><em>two</em></li>\n</ul>"
        )

    def test_quote(self):
        block = ContentBlock(type=BlockType.QUOTE, content="wise words")
        assert render_block(block, make_document()) == (
            "<blockquote><p>wise words</p></blockquote>"
        )

    def test_code_escaped(self):
        block = ContentBlock(type=BlockType.CODE, content="a < b && c", language="c")
        assert render_block(block, make_document()) == (
            "<pre><code>a &lt; b &amp;&amp; c</code></pre>"
        )

    def test_gist_reference_with_artifact(self):
        doc = make_document(artifacts=[ARTIFACT])
        html = render_block(_gist("abc123"), doc)
        assert '<a href="https://gist.github.com/abc123" target="_blank">' in html
        assert "View python code on GitHub Gist" in html
        assert html.endswith('<script src="https://gist.github.com/abc123.js"></script>')

    def test_gist_reference_without_artifact_omitted(self):
        assert render_block(_gist("missing"), make_document()) == ""


# ---------------------------------------------------------------------------
# Optimized
# ---------------------------------------------------------------------------

class TestRenderOptimized:
    def test_title_escaped(self):
        html = render_optimized(make_document())
        assert html.startswith("<h1>Testing &lt;Things&gt;</h1>")

    def test_short_subtitle_as_h2(self):
        html = render_optimized(make_document())
        assert "<h2>Short subtitle</h2>" in html

    def test_long_subtitle_as_italic_paragraph(self):
        subtitle = "A considerably longer subtitle that goes well past sixty characters"
        html = render_optimized(make_document(subtitle=subtitle))
        assert f"<p><em>{subtitle}</em></p>" in html

    def test_no_subtitle(self):
        html = render_optimized(make_document(subtitle=None))
        assert html.startswith("<h1>Testing &lt;Things&gt;</h1>\n\n<h2>Setup</h2>")

    def test_trailer_comments(self):
        html = render_optimized(make_document())
        assert html.endswith(
            "<!-- Tags: python, testing -->\n"
            "<!-- Reading time: 3 minutes -->\n"
            "<!-- Word count: 450 words -->"
        )

    def test_no_tags_comment_without_tags(self):
        doc = make_document(metadata=DocumentMetadata(word_count=10, reading_time=1))
        assert "Tags:" not in render_optimized(doc)

    def test_missing_artifact_leaves_no_gap(self):
        doc = make_document(sections=[_p("a"), _gist("missing"), _p("b")])
        assert "<p>a</p>\n\n<p>b</p>" in render_optimized(doc)

    def test_deterministic(self):
        doc = make_document(artifacts=[ARTIFACT], sections=[_p("x"), _gist("abc123")])
        assert render_optimized(doc) == render_optimized(doc)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

class TestGroupBlocks:
    def test_seven_paragraphs_then_header(self):
        blocks = [_p(str(i)) for i in range(7)] + [_h("End")]
        assert [len(g) for g in group_blocks(blocks)] == [3, 3, 1, 1]

    def test_max_group_size_constant(self):
        assert MAX_GROUP_SIZE == 3

    def test_type_change_starts_group(self):
        blocks = [_p("a"), ContentBlock(type=BlockType.QUOTE, content="q"), _p("b")]
        assert [len(g) for g in group_blocks(blocks)] == [1, 1, 1]

    def test_consecutive_headers_each_alone(self):
        blocks = [_h("a"), _h("b"), _h("c")]
        assert [len(g) for g in group_blocks(blocks)] == [1, 1, 1]

    def test_header_followed_by_paragraphs(self):
        blocks = [_h("a"), _p("1"), _p("2")]
        assert [len(g) for g in group_blocks(blocks)] == [1, 2]

    def test_custom_group_size(self):
        blocks = [_p(str(i)) for i in range(5)]
        assert [len(g) for g in group_blocks(blocks, max_group=2)] == [2, 2, 1]

    def test_empty(self):
        assert group_blocks([]) == []

    def test_order_preserved(self):
        blocks = [_p(str(i)) for i in range(7)]
        flattened = [b for group in group_blocks(blocks) for b in group]
        assert flattened == blocks


class TestRenderSections:
    def test_title_section_first(self):
        sections = render_sections(make_document())
        assert sections[0] == "<h1>Testing &lt;Things&gt;</h1>\n<h2>Short subtitle</h2>"

    def test_one_section_per_group(self):
        doc = make_document(sections=[_p(str(i)) for i in range(7)] + [_h("End")])
        sections = render_sections(doc)
        assert len(sections) == 1 + 4
        assert sections[1] == "<p>0</p>\n\n<p>1</p>\n\n<p>2</p>"
        assert sections[-1] == "<h2>End</h2>"

    def test_group_of_omitted_blocks_dropped(self):
        doc = make_document(sections=[_p("a"), _gist("missing")])
        assert render_sections(doc) == [render_sections(doc)[0], "<p>a</p>"]

    def test_delimiter(self):
        assert SECTION_DELIMITER == "\n\n---\n\n"


# ---------------------------------------------------------------------------
# Rich document
# ---------------------------------------------------------------------------

class TestRenderRichDocument:
    def test_document_shell(self):
        html = render_rich_document(make_document())
        assert html.startswith("<!DOCTYPE html>\n<html lang=\"en\">")
        assert "<title>Testing &lt;Things&gt;</title>" in html
        assert "<style>" in html
        assert html.endswith("</body>\n</html>")

    def test_contains_optimized_body(self):
        html = render_rich_document(make_document())
        assert "<h2>Setup</h2>" in html
        assert "<blockquote><p>wise words</p></blockquote>" in html

    def test_metadata_footer(self):
        html = render_rich_document(make_document())
        assert '<div class="metadata">' in html
        assert "<strong>Reading time:</strong> 3 minutes" in html
        assert "<strong>Word count:</strong> 450 words" in html
        assert "<strong>Tags:</strong> python, testing" in html

    def test_gist_count(self):
        second = ArtifactRef(
            id="def456", url="https://gist.github.com/def456",
            embed_url="https://gist.github.com/def456.js",
            language="go", block_index=1,
        )
        one = render_rich_document(make_document(artifacts=[ARTIFACT]))
        two = render_rich_document(make_document(artifacts=[ARTIFACT, second]))
        none = render_rich_document(make_document())
        assert "1 GitHub Gist</p>" in one
        assert "2 GitHub Gists</p>" in two
        assert "Code examples:" not in none


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

class TestRenderPlainText:
    def test_layout(self):
        text = render_plain_text(make_document())
        assert text == (
            "Testing <Things>\n\n"
            "Short subtitle\n\n"
            "## Setup\n\n"
            "Install **it**.\n\n"
            "• one\n• two\n\n"
            "> wise words\n\n"
            "```\nif a < b:\n    pass\n```"
        )

    def test_gist_reference_as_link(self):
        doc = make_document(sections=[_gist("abc123")], artifacts=[ARTIFACT])
        assert render_plain_text(doc).endswith(
            "[View python code on GitHub Gist](https://gist.github.com/abc123)"
        )
