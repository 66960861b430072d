"""
Data models for the Blog SEO Dashboard.

This module defines the analyzer result types plus the blog record and
the rows returned by the external keyword services.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


# Readability bands, checked top-down with a strict ">" comparison.
READABILITY_BANDS: tuple[tuple[float, str], ...] = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
)


def readability_label(score: float) -> str:
    """Map a Flesch Reading Ease score to a human-readable band."""
    for floor, label in READABILITY_BANDS:
        if score > floor:
            return label
    return "Difficult"


@dataclass(frozen=True)
class KeywordCandidate:
    """A single word or multi-word phrase found in the content."""
    keyword: str
    occurrences: int
    density: float
    relevance: float

    @property
    def word_count(self) -> int:
        """Number of space-separated tokens in the keyword."""
        return len(self.keyword.split(" "))

    @property
    def is_phrase(self) -> bool:
        """True for candidates with two or more tokens."""
        return self.word_count >= 2

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "density": self.density,
            "occurrences": self.occurrences,
            "relevance": self.relevance,
        }


@dataclass(frozen=True)
class KeywordSuggestions:
    """Top phrase (primary) and single-word (secondary) suggestions."""
    primary: tuple[str, ...] = ()
    secondary: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {"primary": list(self.primary), "secondary": list(self.secondary)}


@dataclass(frozen=True)
class AnalysisResult:
    """
    Output of the content keyword analyzer.

    Attributes:
        keywords: Candidates sorted by relevance, highest first.
        readability: Approximate Flesch Reading Ease score (not clamped).
        suggestions: Primary/secondary keyword suggestions.
    """
    keywords: tuple[KeywordCandidate, ...]
    readability: float
    suggestions: KeywordSuggestions

    @property
    def readability_label(self) -> str:
        return readability_label(self.readability)

    @property
    def phrases(self) -> list[KeywordCandidate]:
        return [k for k in self.keywords if k.is_phrase]

    @property
    def words(self) -> list[KeywordCandidate]:
        return [k for k in self.keywords if not k.is_phrase]

    def get(self, keyword: str) -> Optional[KeywordCandidate]:
        """Look up a candidate by its exact keyword text."""
        for candidate in self.keywords:
            if candidate.keyword == keyword:
                return candidate
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": [k.to_dict() for k in self.keywords],
            "readability": self.readability,
            "suggestions": self.suggestions.to_dict(),
        }


@dataclass
class Blog:
    """A blog record as exposed by the blog store."""
    id: str
    title: str
    content: list[Any] = field(default_factory=list)
    seo: dict[str, Any] = field(default_factory=dict)
    slug: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Blog":
        """Build a Blog from a JSON object (unknown keys are ignored)."""
        content = data.get("content") or []
        if isinstance(content, str):
            content = [content]
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            content=list(content),
            seo=dict(data.get("seo") or {}),
            slug=data.get("slug"),
        )

    def to_dict(self, include_slug: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "seo": self.seo,
        }
        if include_slug:
            data["slug"] = self.slug
        return data


@dataclass
class KeywordSuggestionSet:
    """Suggestions returned by the autocomplete provider for two seed terms."""
    primary_keywords: list[str] = field(default_factory=list)
    secondary_keywords: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.primary_keywords and not self.secondary_keywords

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "primaryKeywords": list(self.primary_keywords),
            "secondaryKeywords": list(self.secondary_keywords),
        }


@dataclass
class SearchConsoleRow:
    """One (query, page) performance row from Search Console."""
    keyword: str
    page: str
    clicks: float = 0
    impressions: float = 0
    ctr: float = 0.0
    position: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "page": self.page,
            "clicks": self.clicks,
            "impressions": self.impressions,
            "ctr": self.ctr,
            "position": self.position,
        }


@dataclass
class SearchConsoleReport:
    """Keyword rows for a site plus the number of rows returned."""
    keywords: list[SearchConsoleRow] = field(default_factory=list)
    total_rows: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": [row.to_dict() for row in self.keywords],
            "totalRows": self.total_rows,
        }


@dataclass
class FailedBlog:
    """A blog whose bulk update raised or was rejected by the store."""
    id: str
    title: str
    error: str


@dataclass
class SkippedBlog:
    """A blog the bulk updater did not touch."""
    id: str
    title: str
    reason: str


@dataclass
class BulkUpdateProgress:
    """Running state of a bulk keyword refresh."""
    current: int = 0
    total: int = 0
    status: str = ""
    batch_number: int = 0
    total_batches: int = 0
    succeeded: int = 0
    stopped: bool = False
    failed: list[FailedBlog] = field(default_factory=list)
    skipped: list[SkippedBlog] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
