"""
Response composer: the one-line summary shown above search results.

Reads the result list and metadata; never ranks. Counts use
``direct_match_count`` so fallback padding is not reported as matches.
"""

import random
from typing import Optional, Sequence

from scoring.lexicon import CONCEPT_MAPPINGS
from search.models import AIResponse, MatchQuality, ScoredResult, SearchMetadata

DESCRIPTION_PREVIEW_LENGTH = 80

_HIGH_QUALITY_CATEGORY_MESSAGES = {
    "AI": "Found {count} AI-powered tools.",
    "Tools": "Found {count} design tools.",
    "Inspiration": "Found {count} sources of design inspiration.",
    "Learning": "Found {count} learning resources.",
    "Templates": "Found {count} templates and assets.",
    "Community": "Found {count} design communities.",
}

_CATEGORY_DESCRIPTIONS = {
    "AI": "AI-powered tools for design, content creation, and automation",
    "Tools": "Design and development tools to bring your ideas to life",
    "Inspiration": "Galleries and showcases to spark your creativity",
    "Learning": "Tutorials, courses, and resources to grow your skills",
    "Templates": "Ready-to-use templates, assets, and design kits",
    "Community": "Communities where designers connect and collaborate",
}

WELCOME_MESSAGES = (
    'Ask me about any design tool, like "figma alternatives" or "ai image generators".',
    'Try searching for "vibe code tools" or "stock photos" to get started.',
    "What are you looking for? I can help find design tools, learning resources, and more.",
    'Search for tools, templates, or inspiration. Try "video editing" or "color palettes".',
)


# =============================================================================
# Helpers
# =============================================================================

def format_concept_name(concept: str) -> str:
    """'vibe code' -> 'Vibe Code'."""
    return " ".join(word[:1].upper() + word[1:] for word in concept.split(" "))


def truncate(text: str, max_length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


# =============================================================================
# Search summaries
# =============================================================================

def generate_ai_response(
    results: Sequence[ScoredResult],
    metadata: SearchMetadata,
) -> AIResponse:
    """
    Summarize a result set according to its match quality.

    Args:
        results: Score-sorted results, fallbacks included
        metadata: Metadata from the same search call

    Returns:
        AIResponse with the message, the honest match count and an
        optional highlighted resource name
    """
    match_count = metadata.direct_match_count
    if match_count is None:
        match_count = len(results)
    query = metadata.original_query

    if match_count == 0:
        return AIResponse(
            message=f'No resources found for "{query}". Try a different search term or browse by category.',
            match_count=0,
        )

    if metadata.quality == MatchQuality.HIGH:
        return _high_quality_response(results, metadata, match_count)
    if metadata.quality == MatchQuality.MEDIUM:
        return _medium_quality_response(results, metadata, match_count)
    if metadata.quality == MatchQuality.LOW:
        return _low_quality_response(results, metadata, match_count)
    return _fallback_response(metadata, match_count)


def _high_quality_response(
    results: Sequence[ScoredResult],
    metadata: SearchMetadata,
    match_count: int,
) -> AIResponse:
    query = metadata.original_query
    top = results[0] if results else None
    top_name = top.resource.name if top else None

    if metadata.detected_concepts:
        concept = metadata.detected_concepts[0]
        mapping = CONCEPT_MAPPINGS.get(concept)
        if mapping is not None:
            return AIResponse(
                message=f"Found {match_count} {format_concept_name(concept)} tools. {mapping.description}.",
                match_count=match_count,
                highlight=top_name,
            )

    if top is not None and "exact name match" in top.match_reasons:
        description = top.resource.description
        suffix = f" - {truncate(description)}" if description else ""
        return AIResponse(
            message=f"Found {top.resource.name}{suffix}.",
            match_count=match_count,
            highlight=top_name,
        )

    if top is not None and top.resource.category in _HIGH_QUALITY_CATEGORY_MESSAGES:
        return AIResponse(
            message=_HIGH_QUALITY_CATEGORY_MESSAGES[top.resource.category].format(count=match_count),
            match_count=match_count,
        )

    if metadata.matched_pricing:
        return AIResponse(
            message=f'Found {match_count} {metadata.matched_pricing.lower()} resources for "{query}".',
            match_count=match_count,
        )

    return AIResponse(
        message=f'Found {match_count} resources for "{query}".',
        match_count=match_count,
        highlight=top_name,
    )


def _medium_quality_response(
    results: Sequence[ScoredResult],
    metadata: SearchMetadata,
    match_count: int,
) -> AIResponse:
    query = metadata.original_query
    reasons = results[0].match_reasons if results else []

    if any("tag" in reason for reason in reasons):
        return AIResponse(
            message=f'Found {match_count} resources related to "{query}".',
            match_count=match_count,
        )

    if "description contains query" in reasons:
        return AIResponse(
            message=f'Found {match_count} resources mentioning "{query}".',
            match_count=match_count,
        )

    return AIResponse(
        message=f'Found {match_count} resources related to "{query}".',
        match_count=match_count,
        highlight=results[0].resource.name if results else None,
    )


def _low_quality_response(
    results: Sequence[ScoredResult],
    metadata: SearchMetadata,
    match_count: int,
) -> AIResponse:
    query = metadata.original_query
    top = results[0] if results else None

    if top is not None and "fuzzy name match" in top.match_reasons:
        return AIResponse(
            message=f'Did you mean "{top.resource.name}"?',
            match_count=match_count,
            highlight=top.resource.name,
        )

    if match_count == 1 and top is not None:
        return AIResponse(
            message=f'Found {top.resource.name} for "{query}".',
            match_count=1,
            highlight=top.resource.name,
        )

    return AIResponse(
        message=f'Found {match_count} resources that might match "{query}".',
        match_count=match_count,
    )


def _fallback_response(metadata: SearchMetadata, match_count: int) -> AIResponse:
    if metadata.matched_category:
        return AIResponse(
            message=f"Showing {match_count} {metadata.matched_category} resources.",
            match_count=match_count,
        )
    return AIResponse(message=f"Found {match_count} resources.", match_count=match_count)


# =============================================================================
# Browse-mode messages
# =============================================================================

def generate_welcome_response(rng: Optional[random.Random] = None) -> AIResponse:
    """Random prompt for the empty search box."""
    chooser = rng or random
    return AIResponse(message=chooser.choice(WELCOME_MESSAGES), match_count=0)


def generate_category_response(category: str, resource_count: int) -> AIResponse:
    description = _CATEGORY_DESCRIPTIONS.get(category, f"resources in {category}")
    return AIResponse(
        message=f"Showing {resource_count} {description}.",
        match_count=resource_count,
    )


def generate_filter_response(
    category: Optional[str] = None,
    sub_category: Optional[str] = None,
    pricing: Optional[str] = None,
    resource_count: int = 0,
) -> AIResponse:
    """'Showing 12 free design tools resources.' style message for manual filters."""
    parts = [value.lower() for value in (pricing, sub_category, category) if value]
    description = " ".join(parts) if parts else "all"
    return AIResponse(
        message=f"Showing {resource_count} {description} resources.",
        match_count=resource_count,
    )
