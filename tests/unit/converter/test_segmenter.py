"""Tests for converter/segmenter.py: code span extraction and block scan."""

from __future__ import annotations

from mediumify.converter.segmenter import (
    extract_code_blocks,
    is_block_boundary,
    segment_blocks,
)
from mediumify.models import BlockType

ARTICLE = "\n".join([
    "# Title",           # 1
    "",                  # 2
    "Intro text.",       # 3
    "",                  # 4
    "```python",         # 5
    "print(1)",          # 6
    "```",               # 7
    "",                  # 8
    "More.",             # 9
    "```",               # 10
    "plain",             # 11
    "```",               # 12
])


def _types(blocks):
    return [b.type for b in blocks]


# ---------------------------------------------------------------------------
# extract_code_blocks
# ---------------------------------------------------------------------------

class TestExtractCodeBlocks:
    def test_no_fences_returns_empty(self):
        assert extract_code_blocks("just text\n\nmore text") == []

    def test_empty_string(self):
        assert extract_code_blocks("") == []

    def test_line_numbers_are_one_indexed_and_inclusive(self):
        blocks = extract_code_blocks(ARTICLE)
        assert [(b.start_line, b.end_line) for b in blocks] == [(5, 7), (10, 12)]

    def test_language_tag(self):
        blocks = extract_code_blocks(ARTICLE)
        assert blocks[0].language == "python"

    def test_missing_language_defaults_to_text(self):
        blocks = extract_code_blocks(ARTICLE)
        assert blocks[1].language == "text"

    def test_code_body_excludes_fences(self):
        blocks = extract_code_blocks(ARTICLE)
        assert blocks[0].code == "print(1)"
        assert blocks[1].code == "plain"

    def test_multiline_code_preserved(self):
        text = "```js\nconst a = 1;\n\nconst b = 2;\n```"
        (block,) = extract_code_blocks(text)
        assert block.code == "const a = 1;\n\nconst b = 2;"
        assert (block.start_line, block.end_line) == (1, 5)

    def test_info_string_after_language_ignored(self):
        (block,) = extract_code_blocks("```python title=example.py\nx = 1\n```")
        assert block.language == "python"

    def test_language_with_symbols(self):
        (block,) = extract_code_blocks("```c++\nint x;\n```")
        assert block.language == "c++"

    def test_unterminated_fence_is_not_code(self):
        assert extract_code_blocks("```python\nprint(1)\n") == []

    def test_fence_with_language_does_not_close(self):
        text = "```\na\n```python\nb\n```"
        (block,) = extract_code_blocks(text)
        assert block.code == "a\n```python\nb"

    def test_empty_code_block(self):
        (block,) = extract_code_blocks("```\n```")
        assert block.code == ""
        assert block.start_line <= block.end_line


# ---------------------------------------------------------------------------
# is_block_boundary
# ---------------------------------------------------------------------------

class TestIsBlockBoundary:
    def test_heading(self):
        assert is_block_boundary("## Heading")

    def test_bullet(self):
        assert is_block_boundary("- item")
        assert is_block_boundary("3. item")

    def test_quote(self):
        assert is_block_boundary("> quoted")

    def test_fence(self):
        assert is_block_boundary("```python")

    def test_plain_text(self):
        assert not is_block_boundary("just words")

    def test_hash_without_space_is_text(self):
        assert not is_block_boundary("#hashtag")


# ---------------------------------------------------------------------------
# segment_blocks
# ---------------------------------------------------------------------------

class TestSegmentBlocks:
    def test_article_block_order(self):
        blocks = segment_blocks(ARTICLE)
        assert _types(blocks) == [
            BlockType.HEADER,
            BlockType.PARAGRAPH,
            BlockType.CODE,
            BlockType.PARAGRAPH,
            BlockType.CODE,
        ]

    def test_code_blocks_carry_index_and_language(self):
        blocks = [b for b in segment_blocks(ARTICLE) if b.type is BlockType.CODE]
        assert [b.code_index for b in blocks] == [0, 1]
        assert [b.language for b in blocks] == ["python", "text"]
        assert blocks[0].content == "print(1)"

    def test_heading_levels(self):
        blocks = segment_blocks("# One\n## Two\n###### Six")
        assert [(b.content, b.level) for b in blocks] == [("One", 1), ("Two", 2), ("Six", 6)]

    def test_closing_hashes_stripped(self):
        (block,) = segment_blocks("## Title ##")
        assert block.content == "Title"

    def test_trailing_hash_in_word_kept(self):
        (block,) = segment_blocks("# C#")
        assert block.content == "C#"

    def test_paragraph_lines_joined(self):
        (block,) = segment_blocks("line one\nline two")
        assert block.type is BlockType.PARAGRAPH
        assert block.content == "line one line two"

    def test_blank_line_separates_paragraphs(self):
        blocks = segment_blocks("first\n\nsecond")
        assert [b.content for b in blocks] == ["first", "second"]

    def test_bullet_list(self):
        (block,) = segment_blocks("- a\n* b\n1. c")
        assert block.type is BlockType.LIST
        assert block.content == "• a\n• b\n• c"

    def test_nested_list_flattened(self):
        (block,) = segment_blocks("- a\n  - b\n    - c")
        assert block.content == "• a\n• b\n• c"

    def test_list_then_paragraph(self):
        blocks = segment_blocks("- a\n- b\n\nAfter the list.")
        assert _types(blocks) == [BlockType.LIST, BlockType.PARAGRAPH]

    def test_loose_list_stays_one_block(self):
        (block,) = segment_blocks("- a\n\n- b")
        assert block.content == "• a\n• b"

    def test_quote_lines(self):
        (block,) = segment_blocks("> first\n> second")
        assert block.type is BlockType.QUOTE
        assert block.content == "first\nsecond"

    def test_table_becomes_list(self):
        (block,) = segment_blocks("| a | b |\n|---|:-:|\n| 1 | 2 |")
        assert block.type is BlockType.LIST
        assert block.content == "• a | b\n• 1 | 2"

    def test_thematic_break_skipped(self):
        blocks = segment_blocks("before\n\n---\n\nafter")
        assert [b.content for b in blocks] == ["before", "after"]

    def test_paragraph_stops_at_fence(self):
        blocks = segment_blocks("text\n```py\nx = 1\n```")
        assert _types(blocks) == [BlockType.PARAGRAPH, BlockType.CODE]

    def test_heading_inside_code_is_code(self):
        blocks = segment_blocks("```bash\n# not a heading\n```")
        assert _types(blocks) == [BlockType.CODE]

    def test_unterminated_fence_is_paragraph(self):
        blocks = segment_blocks("```python\nprint(1)")
        assert _types(blocks) == [BlockType.PARAGRAPH]

    def test_precomputed_code_blocks_used(self):
        code_blocks = extract_code_blocks(ARTICLE)
        assert segment_blocks(ARTICLE, code_blocks) == segment_blocks(ARTICLE)

    def test_whitespace_only(self):
        assert segment_blocks("   \n\n  ") == []
