# -*- coding: utf-8 -*-
"""
Centralized configuration for the Blog SEO Dashboard.

Configuration lives in plain dataclasses with sensible defaults:
- AnalyzerConfig: thresholds and caps for the content keyword analyzer
- BulkUpdateConfig: batching and pacing of the bulk keyword refresh
- SearchConsoleConfig: service-account credentials and query window
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Tunables for the content keyword analyzer.

    Attributes:
        min_word_length: Single words shorter than this are ignored when
            counting word frequency. The default of 4 keeps words with
            more than 3 characters.
        word_density_threshold: Single-word candidates need a density
            strictly above this percentage.
        phrase_density_threshold: Phrase candidates need a density strictly
            above this percentage. Lower than the word threshold because
            phrases repeat less often.
        max_primary: Maximum number of primary (phrase) suggestions.
        max_secondary: Maximum number of secondary (single-word) suggestions.
    """

    min_word_length: int = 4
    word_density_threshold: float = 0.5
    phrase_density_threshold: float = 0.3
    max_primary: int = 3
    max_secondary: int = 3

    @classmethod
    def dashboard(cls, **overrides) -> "AnalyzerConfig":
        """Preset used by the dashboard research panel (5 secondary keywords)."""
        defaults = {"max_secondary": 5}
        defaults.update(overrides)
        return cls(**defaults)


@dataclass
class BulkUpdateConfig:
    """
    Pacing for the bulk keyword refresh.

    Delays are in seconds. The updater sleeps `blog_delay` after each
    processed blog and `batch_delay` between batches.
    """

    batch_size: int = 10
    blog_delay: float = 0.2
    batch_delay: float = 2.0

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.blog_delay < 0 or self.batch_delay < 0:
            raise ValueError("delays must be non-negative")

    @classmethod
    def immediate(cls, batch_size: int = 10) -> "BulkUpdateConfig":
        """No pauses between calls. Useful for tests and local stores."""
        return cls(batch_size=batch_size, blog_delay=0.0, batch_delay=0.0)


@dataclass
class SearchConsoleConfig:
    """
    Service-account settings for the Search Console client.

    `private_key` accepts keys copied from env files where newlines are
    stored as the two characters backslash-n.
    """

    client_email: Optional[str] = None
    private_key: Optional[str] = None
    start_date: str = "2024-01-01"
    row_limit: int = 100
    dimensions: list[str] = field(default_factory=lambda: ["query", "page"])

    def __post_init__(self) -> None:
        if self.private_key:
            self.private_key = self.private_key.replace("\\n", "\n")

    @classmethod
    def from_env(cls, **overrides) -> "SearchConsoleConfig":
        """Read GOOGLE_CLIENT_EMAIL / GOOGLE_PRIVATE_KEY from the environment."""
        values = {
            "client_email": os.environ.get("GOOGLE_CLIENT_EMAIL"),
            "private_key": os.environ.get("GOOGLE_PRIVATE_KEY"),
        }
        values.update(overrides)
        return cls(**values)

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_email and self.private_key)
