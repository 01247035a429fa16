"""
Restricted fallback generation.

Fallbacks pad an under-filled result set only for generic queries: at most
GENERIC_QUERY_MAX_LENGTH characters and no detected concept. A specific
query that finds little gets little; padding it with loosely related
resources reads as noise.
"""

from typing import Iterable, List, Optional, Sequence, Set

from config.constants import DEFAULT_SEARCH_CONFIG, SearchConfig
from search.models import Resource, ScoredResult


def is_generic_query(
    query: str,
    detected_concepts: Sequence[str],
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> bool:
    return len(query.strip()) <= config.GENERIC_QUERY_MAX_LENGTH and not detected_concepts


def generate_fallbacks(
    pool: Iterable[Resource],
    query: str,
    detected_concepts: Sequence[str],
    matched_category: Optional[str],
    exclude_ids: Set[int],
    count: int,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> List[ScoredResult]:
    """
    Category fallbacks from the already hard-filtered pool.

    Returns [] unless the query is generic and resolved to a category.
    Candidates are ranked by gravity score and capped at
    min(count, MAX_FALLBACK_RESULTS).
    """
    limit = min(count, config.MAX_FALLBACK_RESULTS)
    if limit <= 0 or not matched_category:
        return []
    if not is_generic_query(query, detected_concepts, config):
        return []

    category = matched_category.lower()
    candidates = [
        resource
        for resource in pool
        if resource.id not in exclude_ids
        and resource.category
        and resource.category.lower() == category
    ]
    candidates.sort(key=lambda r: r.gravity_score, reverse=True)

    return [
        ScoredResult(
            resource=resource,
            score=resource.gravity_score * config.FALLBACK_GRAVITY_FACTOR,
            match_reasons=["category fallback"],
        )
        for resource in candidates[:limit]
    ]
