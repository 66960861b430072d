"""
Helpers for the `seo` JSON document stored on each blog.

The document is free-form; these helpers only touch the keyword lists and
always return a new dict so the caller's copy is never mutated.

Keys:
    primaryKeywords / secondaryKeywords: keywords currently in use.
    primaryKeywordsNew / secondaryKeywordsNew: candidate keywords waiting
        to be reviewed and promoted.
"""

from typing import Any, Literal, Optional, Sequence

from .models import AnalysisResult

KeywordKind = Literal["primary", "secondary"]

PRIMARY_KEY = "primaryKeywords"
SECONDARY_KEY = "secondaryKeywords"
PRIMARY_NEW_KEY = "primaryKeywordsNew"
SECONDARY_NEW_KEY = "secondaryKeywordsNew"


def _new_key(kind: KeywordKind) -> str:
    if kind == "primary":
        return PRIMARY_NEW_KEY
    if kind == "secondary":
        return SECONDARY_NEW_KEY
    raise ValueError(f"Unknown keyword kind: {kind!r}")


def keyword_list(seo: Optional[dict[str, Any]], key: str) -> list[str]:
    """Return seo[key] as a list of strings, or [] when absent."""
    value = (seo or {}).get(key) or []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def seed_keywords(seo: Optional[dict[str, Any]]) -> tuple[Optional[str], Optional[str]]:
    """First primary and first secondary keyword, or None for either."""
    primary = keyword_list(seo, PRIMARY_KEY)
    secondary = keyword_list(seo, SECONDARY_KEY)
    return (primary[0] if primary and primary[0] else None,
            secondary[0] if secondary and secondary[0] else None)


def merge_new_keywords(
    seo: Optional[dict[str, Any]],
    primary_new: Sequence[str],
    secondary_new: Sequence[str],
) -> dict[str, Any]:
    """Copy `seo` and replace both pending keyword lists."""
    merged = dict(seo or {})
    merged[PRIMARY_NEW_KEY] = list(primary_new)
    merged[SECONDARY_NEW_KEY] = list(secondary_new)
    return merged


def merge_analysis(seo: Optional[dict[str, Any]], result: AnalysisResult) -> dict[str, Any]:
    """Store analyzer suggestions as the pending keyword lists."""
    return merge_new_keywords(seo, result.suggestions.primary, result.suggestions.secondary)


def promote_new_keywords(
    seo: Optional[dict[str, Any]],
    selected_primary: Optional[Sequence[str]] = None,
    selected_secondary: Optional[Sequence[str]] = None,
    primary_new: Optional[Sequence[str]] = None,
    secondary_new: Optional[Sequence[str]] = None,
) -> dict[str, Any]:
    """
    Append pending keywords to the in-use keyword lists.

    Any argument left as None falls back to the matching list already in
    `seo`. The pending lists themselves are left as they are.
    """
    if selected_primary is None:
        selected_primary = keyword_list(seo, PRIMARY_KEY)
    if selected_secondary is None:
        selected_secondary = keyword_list(seo, SECONDARY_KEY)
    if primary_new is None:
        primary_new = keyword_list(seo, PRIMARY_NEW_KEY)
    if secondary_new is None:
        secondary_new = keyword_list(seo, SECONDARY_NEW_KEY)

    promoted = dict(seo or {})
    promoted[PRIMARY_KEY] = [*selected_primary, *primary_new]
    promoted[SECONDARY_KEY] = [*selected_secondary, *secondary_new]
    return promoted


def add_keyword(seo: Optional[dict[str, Any]], kind: KeywordKind, keyword: str) -> dict[str, Any]:
    """Append a keyword to the pending list of the given kind."""
    key = _new_key(kind)
    updated = dict(seo or {})
    updated[key] = [*keyword_list(seo, key), keyword]
    return updated


def remove_keyword(seo: Optional[dict[str, Any]], kind: KeywordKind, index: int) -> dict[str, Any]:
    """Drop the pending keyword at `index`; out-of-range indexes are a no-op."""
    key = _new_key(kind)
    updated = dict(seo or {})
    updated[key] = [kw for i, kw in enumerate(keyword_list(seo, key)) if i != index]
    return updated


def clear_keywords(seo: Optional[dict[str, Any]], kind: KeywordKind) -> dict[str, Any]:
    """Empty the pending list of the given kind."""
    updated = dict(seo or {})
    updated[_new_key(kind)] = []
    return updated
