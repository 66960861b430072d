"""
Keyword suggestions from Google autocomplete.

Given a primary and a secondary seed keyword, the client queries the
public autocomplete endpoint with a handful of variations of each seed
and keeps the suggestions that still contain the seed.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests

from .models import KeywordSuggestionSet

logger = logging.getLogger(__name__)

AUTOCOMPLETE_URL = "http://suggestqueries.google.com/complete/search"

DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0"}

# Templates for topping up secondary suggestions when autocomplete is thin.
FALLBACK_SUFFIXES = [
    "tips",
    "guide",
    "tutorial",
    "examples",
    "basics",
    "for beginners",
    "meaning",
    "definition",
    "explained",
    "overview",
]

MAX_SUGGESTIONS = 3


class SuggestionError(Exception):
    """Raised when suggestions cannot be requested."""
    pass


def build_variations(query: str) -> list[str]:
    """Expand a cleaned seed into the query variations sent to autocomplete."""
    return [
        query,
        f"{query} for",
        f"{query} how",
        f"{query} what",
        f"best {query}",
        f"{query} guide",
    ]


def _dedupe(suggestions: list[str]) -> list[str]:
    return list(dict.fromkeys(suggestions))


def filter_primary(suggestions: list[str], query: str, limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Long-tail suggestions: contain the seed, 5+ chars and 3+ words."""
    query = query.lower()
    return [
        s for s in _dedupe(suggestions)
        if query in s.lower() and len(s) >= 5 and len(s.split(" ")) >= 3
    ][:limit]


def filter_secondary(suggestions: list[str], query: str, limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Suggestions that contain the seed and are 3+ chars, topped up from templates."""
    query = query.lower()
    kept = [
        s for s in _dedupe(suggestions)
        if query in s.lower() and len(s) >= 3
    ][:limit]

    if len(kept) < limit:
        fallback = [
            f"{query} {suffix}" for suffix in FALLBACK_SUFFIXES
            if f"{query} {suffix}" not in kept
        ]
        kept.extend(fallback[:limit - len(kept)])

    return kept


class GoogleSuggestionsClient:
    """
    Client for the Google autocomplete endpoint.

    The HTTP session is injected so callers own its lifecycle; a new
    requests.Session is created when none is given.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        max_workers: int = 6,
        base_url: str = AUTOCOMPLETE_URL,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_workers = max_workers
        self.base_url = base_url

    def fetch_autocomplete(self, query: str) -> list[str]:
        """
        Fetch raw autocomplete suggestions for one query.

        Failures are logged and produce an empty list so one bad
        variation does not sink the whole request.
        """
        try:
            response = self.session.get(
                self.base_url,
                params={"client": "firefox", "q": query},
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f'Error fetching suggestions for "{query}": {e}')
            return []

        if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
            logger.warning(f'Unexpected autocomplete payload for "{query}"')
            return []
        return [str(s) for s in data[1]]

    def _fetch_all(self, queries: list[str]) -> list[str]:
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            results = list(pool.map(self.fetch_autocomplete, queries))
        return [s for batch in results for s in batch]

    def fetch_suggestions(self, primary_query: str, secondary_query: str) -> KeywordSuggestionSet:
        """
        Fetch primary and secondary keyword suggestions for two seeds.

        Args:
            primary_query: Seed for long-tail primary suggestions.
            secondary_query: Seed for secondary suggestions.

        Returns:
            KeywordSuggestionSet with up to 3 keywords per list.

        Raises:
            SuggestionError: If either seed is empty.
        """
        primary = (primary_query or "").strip().lower()
        secondary = (secondary_query or "").strip().lower()
        if not primary or not secondary:
            raise SuggestionError("Both primary and secondary query parameters are required")

        logger.info(f"Fetching suggestions for '{primary}' / '{secondary}'")

        primary_raw = self._fetch_all(build_variations(primary))
        secondary_raw = self._fetch_all(build_variations(secondary))

        return KeywordSuggestionSet(
            primary_keywords=filter_primary(primary_raw, primary),
            secondary_keywords=filter_secondary(secondary_raw, secondary),
        )
