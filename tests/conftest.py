"""
Pytest fixtures and configuration for Blog SEO Dashboard tests.
"""

import json
from pathlib import Path

import pytest

from blog_seo_dashboard.blog_store import InMemoryBlogStore
from blog_seo_dashboard.models import Blog, KeywordSuggestionSet


SAMPLE_CONTENT = (
    "the quick brown fox jumps over the lazy dog "
    "the quick brown fox runs fast"
)


@pytest.fixture
def sample_content() -> str:
    """Short text with a repeated phrase."""
    return SAMPLE_CONTENT


@pytest.fixture
def long_content() -> str:
    """A few paragraphs of realistic blog copy."""
    return (
        "Sourdough bread starts with a healthy starter. Feed your sourdough "
        "starter every day with flour and water, and keep the starter warm.\n\n"
        "When the starter doubles, mix it into the dough. Sourdough bread dough "
        "needs a long, slow rise! Shape the dough gently and bake the sourdough "
        "bread in a very hot oven.\n\n"
        "Why does sourdough bread taste tangy? The wild yeast and bacteria in "
        "the starter produce acids while the dough rises."
    )


@pytest.fixture
def sample_blogs() -> list[Blog]:
    """Blogs covering the cases the bulk updater distinguishes."""
    return [
        Blog(
            id="1",
            title="sourdough-bread-basics",
            slug="sourdough-bread-basics",
            content=[{"type": "paragraph", "text": "<p>Sourdough bread needs a starter.</p>"}],
            seo={"primaryKeywords": ["sourdough bread"], "secondaryKeywords": ["starter"]},
        ),
        Blog(
            id="2",
            title="banana-cake",
            slug="banana-cake",
            content=["Banana cake is moist and sweet."],
            seo={"primaryKeywords": ["banana cake"]},
        ),
        Blog(
            id="3",
            title="pizza-dough",
            slug="pizza-dough",
            content=[{"children": [{"text": "Pizza dough"}, {"text": "rests overnight."}]}],
            seo={
                "primaryKeywords": ["pizza dough"],
                "secondaryKeywords": ["yeast"],
                "metaDescription": "Overnight pizza dough",
            },
        ),
    ]


@pytest.fixture
def blog_store(sample_blogs) -> InMemoryBlogStore:
    return InMemoryBlogStore(sample_blogs)


@pytest.fixture
def blogs_json(tmp_path: Path, sample_blogs) -> Path:
    """Write the sample blogs to a JSON export."""
    path = tmp_path / "blogs.json"
    path.write_text(json.dumps([blog.to_dict() for blog in sample_blogs]))
    return path


class FakeSuggestionProvider:
    """Suggestion provider returning canned results keyed by primary seed."""

    def __init__(self, results=None, errors=None):
        self.results = results or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, str]] = []

    def fetch_suggestions(self, primary_query: str, secondary_query: str) -> KeywordSuggestionSet:
        self.calls.append((primary_query, secondary_query))
        if primary_query in self.errors:
            raise self.errors[primary_query]
        return self.results.get(primary_query, KeywordSuggestionSet())


@pytest.fixture
def fake_provider() -> FakeSuggestionProvider:
    return FakeSuggestionProvider(results={
        "sourdough bread": KeywordSuggestionSet(
            primary_keywords=["sourdough bread recipe easy"],
            secondary_keywords=["starter tips", "starter guide"],
        ),
        "pizza dough": KeywordSuggestionSet(
            primary_keywords=["pizza dough recipe overnight"],
            secondary_keywords=["yeast types"],
        ),
    })
