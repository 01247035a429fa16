"""
Application constants and algorithm configuration.

These are values that don't change based on environment but may need
to be tuned or referenced across the codebase.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


# =============================================================================
# Scoring Weights
# =============================================================================

@dataclass(frozen=True)
class ScoringWeights:
    """Points contributed by each relevance signal."""

    # Name signals (at most one fires)
    NAME_EXACT: float = 100.0
    NAME_STARTS_WITH: float = 70.0
    NAME_CONTAINS: float = 40.0

    # Concept signals
    CONCEPT_BOOST: float = 80.0
    LLM_CONCEPT: float = 30.0

    # Tag signals (at most one kind fires)
    TAG_EXACT: float = 30.0
    TAG_CONTAINS: float = 25.0
    SYNONYM_MATCH: float = 35.0

    # Taxonomy signals (partial category = CATEGORY_MATCH / 2)
    CATEGORY_MATCH: float = 20.0
    SUBCATEGORY_MATCH: float = 15.0

    DESCRIPTION_CONTAINS: float = 10.0
    PRICING_MATCH: float = 25.0

    # Fuzzy fallback. A one-transposition typo of a five-letter name
    # (similarity 0.6) must clear the relevance threshold at zero gravity.
    FUZZY_NAME_MAX: float = 80.0
    FUZZY_CONTENT_MAX: float = 20.0

    # Post-multipliers, only applied to already relevant results
    GRAVITY_MULTIPLIER: float = 2.0
    FEATURED_BONUS: float = 10.0


DEFAULT_SCORING_WEIGHTS = ScoringWeights()


# =============================================================================
# Search Pipeline Configuration
# =============================================================================

@dataclass(frozen=True)
class SearchConfig:
    """Thresholds and caps for the search orchestrator."""

    # Primary results below this score are discarded
    RELEVANCE_THRESHOLD: float = 25.0

    # Quality classification cutoffs
    HIGH_QUALITY_MIN_SCORE: float = 80.0
    HIGH_QUALITY_MIN_RESULTS: int = 3
    MEDIUM_QUALITY_MIN_SCORE: float = 40.0
    MEDIUM_QUALITY_MIN_RESULTS: int = 2

    # Fallback eligibility
    GENERIC_QUERY_MAX_LENGTH: int = 3
    MAX_FALLBACK_RESULTS: int = 3
    FALLBACK_GRAVITY_FACTOR: float = 4.0

    # Fuzzy matching
    MIN_FUZZY_QUERY_LENGTH: int = 3
    FUZZY_NAME_THRESHOLD: float = 0.4
    FUZZY_CONTENT_THRESHOLD: float = 0.6

    # Token length needed before a partial tag match counts
    MIN_PARTIAL_TAG_TOKEN_LENGTH: int = 4
    # Query length needed before the description signal applies
    MIN_DESCRIPTION_QUERY_LENGTH: int = 4
    # Synonym terms shorter than this only match tags exactly
    MIN_SYNONYM_CONTAINS_LENGTH: int = 3

    # Defaults for SearchOptions
    DEFAULT_MIN_RESULTS: int = 3
    DEFAULT_MAX_RESULTS: int = 50

    # quick_search / get_suggestions
    QUICK_SEARCH_MAX_RESULTS: int = 5
    MAX_SUGGESTIONS: int = 5
    MIN_SUGGESTION_QUERY_LENGTH: int = 2


DEFAULT_SEARCH_CONFIG = SearchConfig()


# =============================================================================
# Query Parser Configuration
# =============================================================================

@dataclass(frozen=True)
class ParserConfig:
    """Whitelists and limits for LLM query parsing."""

    VALID_INTENTS: Tuple[str, ...] = ("filter", "find", "compare", "explore", "recommend")
    VALID_CONFIDENCE: Tuple[str, ...] = ("high", "medium", "low")
    VALID_PRICING: Tuple[str, ...] = ("Free", "Freemium", "Paid", "Pay per use")
    VALID_CATEGORIES: Tuple[str, ...] = (
        "Tools", "AI", "Templates", "Learning", "Inspiration", "Community",
    )

    DEFAULT_INTENT: str = "find"
    DEFAULT_CONFIDENCE: str = "medium"

    MIN_GRAVITY: float = 0.0
    MAX_GRAVITY: float = 10.0

    MAX_QUERY_LENGTH: int = 1000
    MAX_COMPLETION_TOKENS: int = 500

    # Client-side race timeout when no setting is provided
    DEFAULT_TIMEOUT_SECONDS: float = 5.0


DEFAULT_PARSER_CONFIG = ParserConfig()


# =============================================================================
# Query Classifier Configuration
# =============================================================================

@dataclass(frozen=True)
class ClassifierConfig:
    """Cutoffs for the query complexity classifier."""

    MIN_QUERY_LENGTH: int = 2
    VERY_SHORT_MAX_LENGTH: int = 5
    MULTI_INTENT_MIN_WORDS: int = 4
    MULTI_WORD_MIN_WORDS: int = 3

    KNOWN_TOOL_NAMES: FrozenSet[str] = field(default_factory=lambda: frozenset({
        "figma", "framer", "webflow", "notion", "linear", "cursor", "claude",
        "chatgpt", "midjourney", "github", "vercel", "supabase", "tailwind",
        "react",
    }))


DEFAULT_CLASSIFIER_CONFIG = ClassifierConfig()
