"""
Plain-text extraction from structured blog content.

Blog records store `content` as a list of blocks whose shape depends on
the editor that produced them. This module handles:
- Plain strings (optionally containing HTML markup)
- Dict blocks with a text-like field ("text", "html", "value", "content")
- Rich-text blocks with nested "children" spans
- Lists of any of the above
"""

import re
from typing import Any, Iterable

from bs4 import BeautifulSoup

from .models import Blog


class ContentExtractionError(Exception):
    """Raised when a content block has no usable text representation."""
    pass


# Dict keys checked in order when looking for a block's text.
TEXT_FIELDS = ("text", "html", "value", "content", "body", "description")
CHILD_FIELDS = ("children", "items", "blocks")

_TAG_RE = re.compile(r"<[a-zA-Z/!][^>]*>")


def strip_html(text: str) -> str:
    """Return the visible text of an HTML fragment, or text unchanged."""
    if not _TAG_RE.search(text):
        return text
    soup = BeautifulSoup(text, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text(separator=" ")


def extract_block_text(block: Any) -> str:
    """
    Extract plain text from one content block.

    Args:
        block: A string, a dict block, or a list of blocks. None yields "".

    Returns:
        The block's text with HTML removed.

    Raises:
        TypeError: If the block type is not understood.
    """
    if block is None:
        return ""
    if isinstance(block, str):
        return strip_html(block)
    if isinstance(block, (int, float)) and not isinstance(block, bool):
        return str(block)
    if isinstance(block, (list, tuple)):
        return " ".join(extract_block_text(item) for item in block)
    if isinstance(block, dict):
        parts: list[str] = []
        for key in TEXT_FIELDS:
            if key in block and block[key] is not None:
                parts.append(extract_block_text(block[key]))
                break
        for key in CHILD_FIELDS:
            if isinstance(block.get(key), list):
                parts.append(extract_block_text(block[key]))
        return " ".join(part for part in parts if part)
    raise TypeError(f"Unsupported content block type: {type(block).__name__}")


def extract_blocks_text(blocks: Iterable[Any]) -> str:
    """Join the text of every block with single spaces."""
    return " ".join(text for text in (extract_block_text(b) for b in blocks) if text)


def extract_blog_text(blog: Blog) -> str:
    """
    Extract the full plain text of a blog's content.

    Raises:
        ContentExtractionError: If a block cannot be converted to text.
    """
    try:
        return extract_blocks_text(blog.content)
    except TypeError as e:
        raise ContentExtractionError(f"Failed to extract text from blog {blog.id}: {e}")
