"""Tests for plain-text extraction from blog content blocks."""

import pytest

from blog_seo_dashboard.content_sources import (
    ContentExtractionError,
    extract_block_text,
    extract_blocks_text,
    extract_blog_text,
    strip_html,
)
from blog_seo_dashboard.models import Blog


def _squash(text: str) -> str:
    return " ".join(text.split())


class TestStripHtml:
    """Tests for HTML removal."""

    def test_plain_text_unchanged(self):
        """Test that text without tags is returned as-is."""
        assert strip_html("5 < 6 and 7 > 3") == "5 < 6 and 7 > 3"

    def test_removes_tags(self):
        """Test that markup is removed and text kept."""
        assert _squash(strip_html("<p>Hello <b>world</b></p>")) == "Hello world"

    def test_drops_scripts(self):
        """Test that script contents are not treated as text."""
        html = "<div>Recipe<script>var tracking = 1;</script></div>"
        assert _squash(strip_html(html)) == "Recipe"


class TestExtractBlockText:
    """Tests for single-block extraction."""

    def test_string_block(self):
        assert extract_block_text("Just text") == "Just text"

    def test_none_block(self):
        assert extract_block_text(None) == ""

    def test_dict_with_text(self):
        """Test the common {'type', 'text'} block shape."""
        assert extract_block_text({"type": "paragraph", "text": "Knead the dough"}) == "Knead the dough"

    def test_dict_with_html_content(self):
        """Test a block storing rich HTML under 'content'."""
        block = {"type": "richText", "content": "<p>Proof <em>overnight</em></p>"}
        assert _squash(extract_block_text(block)) == "Proof overnight"

    def test_nested_children(self):
        """Test rich-text blocks made of child spans."""
        block = {"type": "paragraph", "children": [{"text": "Hello"}, {"text": "world"}]}
        assert extract_block_text(block) == "Hello world"

    def test_text_and_children(self):
        """Test that a block's own text comes before its children."""
        block = {"text": "Title", "children": [{"text": "child"}]}
        assert extract_block_text(block) == "Title child"

    def test_list_items(self):
        """Test list blocks."""
        block = {"type": "list", "items": ["flour", {"text": "water"}, "salt"]}
        assert extract_block_text(block) == "flour water salt"

    def test_numbers(self):
        assert extract_block_text(350) == "350"

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            extract_block_text(object())


class TestExtractBlogText:
    """Tests for whole-blog extraction."""

    def test_joins_blocks(self, sample_blogs):
        """Test that every block contributes text."""
        assert extract_blog_text(sample_blogs[2]) == "Pizza dough rests overnight."

    def test_skips_empty_blocks(self):
        assert extract_blocks_text(["One", None, {"text": ""}, "Two"]) == "One Two"

    def test_bad_block_raises_extraction_error(self):
        """Test that unsupported blocks surface as ContentExtractionError."""
        blog = Blog(id="x", title="Broken", content=[object()])
        with pytest.raises(ContentExtractionError, match="blog x"):
            extract_blog_text(blog)
