"""
Semantic search orchestrator.

One request/response cycle over an in-memory catalog:

1. Hard filters narrow the pool (short-circuit when nothing survives)
2. Concept & synonym expansion builds the scoring context
3. Every candidate is scored; weak matches (< RELEVANCE_THRESHOLD) are dropped
4. Quality is classified from the primary results
5. Restricted fallbacks pad generic queries that under-fill

Every call is a pure function of (catalog, query, options): nothing is
cached between calls and the catalog is only read, so concurrent callers
need no locking. No exception escapes ``semantic_search``; failures show
up as fewer or lower-quality results in the metadata.
"""

from typing import List, Optional, Sequence

from config.constants import DEFAULT_SEARCH_CONFIG, SearchConfig
from core.logging import get_logger
from scoring.scorer import ResourceScorer, build_scoring_context
from search.fallback import generate_fallbacks
from search.hard_filters import apply_hard_filters
from search.models import (
    HardFilters,
    MatchQuality,
    Resource,
    ScoredResult,
    SearchMetadata,
    SearchOptions,
    SearchResponse,
)

logger = get_logger(__name__)

_scorer = ResourceScorer()


# =============================================================================
# Quality
# =============================================================================

def determine_quality(
    results: Sequence[ScoredResult],
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> MatchQuality:
    """
    Classify a score-sorted primary result list.

    high: top >= 80 with >= 3 results; medium: top >= 40 with >= 2;
    low: anything else, including no results at all.
    """
    if not results:
        return MatchQuality.LOW

    top_score = results[0].score
    if top_score >= config.HIGH_QUALITY_MIN_SCORE and len(results) >= config.HIGH_QUALITY_MIN_RESULTS:
        return MatchQuality.HIGH
    if top_score >= config.MEDIUM_QUALITY_MIN_SCORE and len(results) >= config.MEDIUM_QUALITY_MIN_RESULTS:
        return MatchQuality.MEDIUM
    return MatchQuality.LOW


def _empty_response(
    query: str,
    quality: MatchQuality,
    filters: Optional[HardFilters] = None,
    filtered_pool_size: Optional[int] = None,
    llm_concepts: Optional[List[str]] = None,
) -> SearchResponse:
    return SearchResponse(
        results=[],
        metadata=SearchMetadata(
            quality=quality,
            original_query=query,
            filtered_pool_size=filtered_pool_size,
            applied_filters=filters,
            llm_concepts=list(llm_concepts or []),
        ),
    )


# =============================================================================
# Search
# =============================================================================

def semantic_search(
    resources: Sequence[Resource],
    query: str,
    options: Optional[SearchOptions] = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchResponse:
    """
    Rank the catalog against a free-text query.

    Args:
        resources: Catalog snapshot, in display order
        query: Raw user query
        options: min/max results, fallback switch, hard filters, LLM concepts
        config: Thresholds (tests override; callers normally don't)

    Returns:
        SearchResponse with score-sorted results and metadata
    """
    options = options or SearchOptions()
    try:
        return _run_search(resources, query, options, config)
    except Exception as e:
        logger.error(
            "Semantic search failed, returning empty response",
            query=query,
            error=str(e),
            error_type=type(e).__name__,
        )
        return _empty_response(query, MatchQuality.LOW)


def _run_search(
    resources: Sequence[Resource],
    query: str,
    options: SearchOptions,
    config: SearchConfig,
) -> SearchResponse:
    normalized = query.lower().strip()
    llm_concepts = list(options.llm_concepts or [])

    if not normalized:
        return _empty_response(query, MatchQuality.FALLBACK, llm_concepts=llm_concepts)

    # Hard filters narrow the pool before any scoring
    filters = options.hard_filters
    if filters is not None and filters.is_empty():
        filters = None

    pool = apply_hard_filters(resources, filters)
    filtered_pool_size = len(pool) if filters is not None else None

    if filters is not None and not pool:
        logger.debug("Hard filters exhausted the pool", query=query)
        return _empty_response(
            query,
            MatchQuality.FALLBACK,
            filters=filters,
            filtered_pool_size=0,
            llm_concepts=llm_concepts,
        )

    ctx = build_scoring_context(normalized, llm_concepts)

    scored = [
        result
        for result in _scorer.score_all(pool, ctx)
        if result.score >= config.RELEVANCE_THRESHOLD
    ]
    # Stable sort: ties keep catalog order
    scored.sort(key=lambda r: r.score, reverse=True)

    results = scored[:options.max_results]
    direct_match_count = len(results)
    quality = determine_quality(results, config)

    if options.include_fallback and len(results) < options.min_results:
        fallbacks = generate_fallbacks(
            pool,
            normalized,
            ctx.detected_concepts,
            ctx.matched_category,
            exclude_ids={r.resource.id for r in results},
            count=options.min_results - len(results),
            config=config,
        )
        if fallbacks:
            results = results + fallbacks
            quality = MatchQuality.FALLBACK

    logger.debug(
        "Semantic search completed",
        query=query,
        pool_size=len(pool),
        direct_matches=direct_match_count,
        total_results=len(results),
        quality=quality.value,
        concepts=list(ctx.detected_concepts),
    )

    return SearchResponse(
        results=results,
        metadata=SearchMetadata(
            quality=quality,
            total_results=len(results),
            direct_match_count=direct_match_count,
            detected_concepts=list(ctx.detected_concepts),
            expanded_terms=list(ctx.expanded_terms),
            matched_category=ctx.matched_category,
            matched_pricing=ctx.matched_pricing,
            original_query=query,
            filtered_pool_size=filtered_pool_size,
            applied_filters=filters,
            llm_concepts=llm_concepts,
        ),
    )


# =============================================================================
# Lightweight helpers
# =============================================================================

def quick_search(
    resources: Sequence[Resource],
    query: str,
    max_results: int = DEFAULT_SEARCH_CONFIG.QUICK_SEARCH_MAX_RESULTS,
) -> List[Resource]:
    """Top resources for autocomplete-style lookups (no fallback padding)."""
    response = semantic_search(
        resources,
        query,
        SearchOptions(max_results=max_results, include_fallback=False),
    )
    return [result.resource for result in response.results]


def get_suggestions(
    resources: Sequence[Resource],
    query: str,
    max_suggestions: int = DEFAULT_SEARCH_CONFIG.MAX_SUGGESTIONS,
) -> List[str]:
    """
    Completion strings for a partial query.

    Resource names first, then tags, then categories containing the
    query; deduplicated in that order. Queries under two characters get
    no suggestions.
    """
    normalized = query.lower().strip()
    if len(normalized) < DEFAULT_SEARCH_CONFIG.MIN_SUGGESTION_QUERY_LENGTH or max_suggestions <= 0:
        return []

    suggestions: dict = {}

    def add(value: str) -> bool:
        """Add a suggestion; True once the list is full."""
        suggestions.setdefault(value, None)
        return len(suggestions) >= max_suggestions

    for resource in resources:
        if normalized in resource.name.lower() and add(resource.name):
            return list(suggestions)

    for resource in resources:
        for tag in resource.tags or []:
            if normalized in tag.lower() and add(tag):
                return list(suggestions)

    for resource in resources:
        if resource.category and normalized in resource.category.lower():
            if add(resource.category):
                return list(suggestions)

    return list(suggestions)
