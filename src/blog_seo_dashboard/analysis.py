"""
Content keyword analysis.

This module turns raw blog content into:
- Ranked single-word and multi-word keyword candidates
- An approximate Flesch Reading Ease score
- Primary (phrase) and secondary (single-word) keyword suggestions

Everything here is a pure function of its input. Nothing is logged and
nothing is cached, so the analyzer can be called from any thread or from
inside the bulk update loop without coordination.
"""

import re
from collections import Counter
from typing import Any, Callable, Iterable, Optional, Sequence

from .config import AnalyzerConfig
from .content_sources import extract_block_text
from .models import AnalysisResult, KeywordCandidate, KeywordSuggestions


class InvalidInputError(ValueError):
    """Raised when content cannot be analyzed."""
    pass


# ASCII word characters only; accented letters split a token.
_NON_WORD_RE = re.compile(r"[^\w\s]+", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+", re.ASCII)
_SENTENCE_END_RE = re.compile(r"[.!?]+")
_NON_LETTER_RE = re.compile(r"[^a-z]")
_NON_VOWEL_RE = re.compile(r"[^aeiouy]+")

# Relevance bonus reaches its cap once a candidate has this many tokens.
PHRASE_BONUS_TOKENS = 3


# =============================================================================
# Text normalization
# =============================================================================

def normalize_text(text: str) -> str:
    """
    Lowercase text and reduce it to words separated by single spaces.

    Punctuation runs become a space, whitespace runs collapse to one
    space, and the result is trimmed.
    """
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def tokenize(normalized_text: str) -> list[str]:
    """Split normalized text into tokens."""
    if not normalized_text:
        return []
    return normalized_text.split(" ")


# =============================================================================
# Frequency counting
# =============================================================================

def calculate_word_frequency(
    tokens: Iterable[str],
    min_length: int = 4,
) -> dict[str, int]:
    """
    Count single words, skipping anything shorter than `min_length`.

    Short tokens ("the", "and", "fox") are treated as low-value filler.
    This is a length heuristic, not a stop-word list.
    """
    return dict(Counter(token for token in tokens if len(token) >= min_length))


def extract_phrases(tokens: Sequence[str]) -> list[str]:
    """
    Build every 2-word and 3-word phrase in reading order.

    For each position the 2-word phrase comes first, followed by the
    3-word phrase starting at the same token when one fits.
    """
    phrases: list[str] = []
    for i in range(len(tokens) - 1):
        phrases.append(f"{tokens[i]} {tokens[i + 1]}")
        if i + 2 < len(tokens):
            phrases.append(f"{tokens[i]} {tokens[i + 1]} {tokens[i + 2]}")
    return phrases


def calculate_phrase_frequency(phrases: Iterable[str]) -> dict[str, int]:
    """Count occurrences of each distinct phrase."""
    return dict(Counter(phrases))


# =============================================================================
# Candidate scoring
# =============================================================================

def calculate_density(count: int, total_words: int) -> float:
    """Occurrences as a percentage of all tokens."""
    if total_words <= 0:
        raise InvalidInputError("Cannot compute density without any words")
    return count / total_words * 100


def calculate_relevance(keyword: str, density: float) -> float:
    """
    Score a candidate by density with a bonus for longer phrases.

    The multiplier grows by a third per token and caps at 2x for
    phrases of three or more tokens.
    """
    length_score = min(len(keyword.split(" ")) / PHRASE_BONUS_TOKENS, 1)
    return density * (1 + length_score)


def score_candidates(
    word_frequency: dict[str, int],
    phrase_frequency: dict[str, int],
    total_words: int,
    config: Optional[AnalyzerConfig] = None,
) -> list[KeywordCandidate]:
    """
    Keep candidates above their density floor and rank them.

    Args:
        word_frequency: Single-word counts.
        phrase_frequency: Multi-word phrase counts.
        total_words: Number of tokens in the normalized content.
        config: Thresholds to apply. Defaults to AnalyzerConfig().

    Returns:
        Candidates sorted by relevance, highest first. Equal relevance is
        ordered alphabetically so output does not depend on scan order.
    """
    config = config or AnalyzerConfig()
    candidates: list[KeywordCandidate] = []

    for frequency, threshold in (
        (word_frequency, config.word_density_threshold),
        (phrase_frequency, config.phrase_density_threshold),
    ):
        for keyword, count in frequency.items():
            density = calculate_density(count, total_words)
            if density > threshold:
                candidates.append(KeywordCandidate(
                    keyword=keyword,
                    occurrences=count,
                    density=density,
                    relevance=calculate_relevance(keyword, density),
                ))

    return sorted(candidates, key=lambda c: (-c.relevance, c.keyword))


# =============================================================================
# Readability
# =============================================================================

def count_sentences(text: str) -> int:
    """
    Count fragments between runs of '.', '!' or '?'.

    A trailing empty fragment after the last terminator is counted too,
    so "One. Two." yields 3.
    """
    return len(_SENTENCE_END_RE.split(text))


def count_syllables(text: str) -> int:
    """
    Approximate syllables as groups of consecutive vowels (y included).

    Non-letters are dropped before grouping, so vowel groups may join
    across word boundaries.
    """
    letters = _NON_LETTER_RE.sub("", text.lower())
    groups = _NON_VOWEL_RE.sub(" ", letters).strip().split(" ")
    return len([group for group in groups if group])


def calculate_readability(text: str) -> float:
    """
    Compute an approximate Flesch Reading Ease score.

    Args:
        text: Normalized content.

    Returns:
        206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words).
        The score is not clamped to 0-100.

    Raises:
        InvalidInputError: If there are no words or no sentences.
    """
    sentences = count_sentences(text)
    words = len(tokenize(text))
    if sentences == 0 or words == 0:
        raise InvalidInputError("Readability is undefined for empty content")

    syllables = count_syllables(text)
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


# =============================================================================
# Suggestions
# =============================================================================

def generate_suggestions(
    keywords: Sequence[KeywordCandidate],
    max_primary: int = 3,
    max_secondary: int = 3,
) -> KeywordSuggestions:
    """
    Pick top phrases as primary and top single words as secondary.

    Both lists keep the rank order of `keywords` and may be empty.
    """
    primary = [k.keyword for k in keywords if k.word_count >= 2][:max_primary]
    secondary = [k.keyword for k in keywords if k.word_count == 1][:max_secondary]
    return KeywordSuggestions(primary=tuple(primary), secondary=tuple(secondary))


# =============================================================================
# Entry points
# =============================================================================

def analyze_content(
    content: Any,
    config: Optional[AnalyzerConfig] = None,
) -> AnalysisResult:
    """
    Analyze blog content for keyword candidates and readability.

    Args:
        content: Raw content string.
        config: Analyzer thresholds and suggestion caps.

    Returns:
        AnalysisResult with ranked keywords, readability and suggestions.

    Raises:
        InvalidInputError: If content is missing, not a string, or has no
            words once punctuation is removed.
    """
    if content is None or not isinstance(content, str):
        raise InvalidInputError("Invalid content format")

    config = config or AnalyzerConfig()

    normalized = normalize_text(content)
    if not normalized:
        raise InvalidInputError("No content to analyze")

    tokens = tokenize(normalized)

    word_frequency = calculate_word_frequency(tokens, config.min_word_length)
    phrase_frequency = calculate_phrase_frequency(extract_phrases(tokens))

    keywords = score_candidates(word_frequency, phrase_frequency, len(tokens), config)
    readability = calculate_readability(normalized)
    suggestions = generate_suggestions(
        keywords,
        max_primary=config.max_primary,
        max_secondary=config.max_secondary,
    )

    return AnalysisResult(
        keywords=tuple(keywords),
        readability=readability,
        suggestions=suggestions,
    )


def analyze_blocks(
    blocks: Any,
    text_extractor: Optional[Callable[[Any], str]] = None,
    config: Optional[AnalyzerConfig] = None,
) -> AnalysisResult:
    """
    Analyze structured content blocks.

    Args:
        blocks: Sequence of blocks (strings, dicts, or anything the
            extractor understands).
        text_extractor: Callable returning plain text for one block.
            Defaults to extract_block_text.
        config: Analyzer configuration.

    Returns:
        AnalysisResult for the space-joined text of all blocks.

    Raises:
        InvalidInputError: If blocks is not a sequence, an extractor returns
            a non-string, or the combined text is empty.
    """
    if blocks is None or isinstance(blocks, (str, bytes, dict)):
        raise InvalidInputError("Invalid content format")

    extractor = text_extractor or extract_block_text
    try:
        texts = [extractor(block) for block in blocks]
    except TypeError as e:
        raise InvalidInputError(f"Invalid content format: {e}") from e

    if any(not isinstance(text, str) for text in texts):
        raise InvalidInputError("Text extractor must return strings")

    return analyze_content(" ".join(texts), config=config)
