"""
Blog SEO Dashboard

Keyword research tooling for a blog admin dashboard:
- Analyzes blog content for keyword candidates and readability
- Fetches keyword suggestions from Google autocomplete and Search Console
- Writes chosen keywords back to each blog's SEO document
"""

__version__ = "1.0.0"
__author__ = "Blog SEO Dashboard Team"

from .config import AnalyzerConfig, BulkUpdateConfig, SearchConsoleConfig

from .models import (
    AnalysisResult,
    Blog,
    BulkUpdateProgress,
    KeywordCandidate,
    KeywordSuggestions,
    KeywordSuggestionSet,
    SearchConsoleReport,
    SearchConsoleRow,
    readability_label,
)

# Content keyword analyzer
from .analysis import (
    InvalidInputError,
    analyze_blocks,
    analyze_content,
    calculate_readability,
    normalize_text,
)

from .content_sources import (
    ContentExtractionError,
    extract_block_text,
    extract_blog_text,
)

# External collaborators
from .blog_store import (
    BlogNotFoundError,
    BlogStore,
    BlogStoreError,
    InMemoryBlogStore,
    load_blogs,
    save_blogs,
)

from .suggestions_client import GoogleSuggestionsClient, SuggestionError

from .search_console import SearchConsoleClient, SearchConsoleError

from .bulk_update import BulkUpdater

__all__ = [
    # Configuration
    "AnalyzerConfig",
    "BulkUpdateConfig",
    "SearchConsoleConfig",
    # Models
    "AnalysisResult",
    "Blog",
    "BulkUpdateProgress",
    "KeywordCandidate",
    "KeywordSuggestions",
    "KeywordSuggestionSet",
    "SearchConsoleReport",
    "SearchConsoleRow",
    "readability_label",
    # Analyzer
    "InvalidInputError",
    "analyze_blocks",
    "analyze_content",
    "calculate_readability",
    "normalize_text",
    # Content extraction
    "ContentExtractionError",
    "extract_block_text",
    "extract_blog_text",
    # Storage
    "BlogNotFoundError",
    "BlogStore",
    "BlogStoreError",
    "InMemoryBlogStore",
    "load_blogs",
    "save_blogs",
    # Suggestion providers
    "GoogleSuggestionsClient",
    "SuggestionError",
    "SearchConsoleClient",
    "SearchConsoleError",
    # Bulk update
    "BulkUpdater",
]
