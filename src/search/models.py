"""
Pydantic models for the search pipeline and API.

Python attributes are snake_case; every model also accepts and emits the
camelCase names used by the catalog JSON and the web client
(``gravityScore``, ``matchReasons``, ...).
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases; accepts either spelling on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Enums & literals
# ============================================================================

class MatchQuality(str, Enum):
    """How confident the result set is; drives the summary message only."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    FALLBACK = "fallback"


ParsedIntent = Literal["filter", "find", "compare", "explore", "recommend"]
ClassifierIntent = Literal["filter", "find", "compare", "explore"]
Confidence = Literal["high", "medium", "low"]
ParseSource = Literal["llm", "fallback"]


# ============================================================================
# Catalog
# ============================================================================

class Resource(CamelModel):
    """A curated catalog entry. Created at catalog load, never mutated."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: int
    name: str = Field(..., min_length=1)
    url: str
    description: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    pricing: Optional[str] = None
    tags: Optional[List[str]] = None
    gravity_score: float = Field(0.0, ge=0.0, le=10.0)
    featured: bool = False
    opensource: bool = False


# ============================================================================
# Filters & parse output
# ============================================================================

class HardFilters(CamelModel):
    """
    Structured exact-match constraints applied before scoring.

    AND across dimensions, OR within a list. ``None`` or an empty list
    leaves that dimension unconstrained.
    """
    pricing: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    sub_categories: Optional[List[str]] = None
    min_gravity_score: Optional[float] = None
    max_gravity_score: Optional[float] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None
    opensource: Optional[bool] = None

    def active_dimensions(self) -> List[str]:
        """Names of the dimensions that actually constrain the pool."""
        active = []
        for name in ("pricing", "categories", "sub_categories", "tags"):
            if getattr(self, name):
                active.append(name)
        for name in ("min_gravity_score", "max_gravity_score", "featured", "opensource"):
            if getattr(self, name) is not None:
                active.append(name)
        return active

    def is_empty(self) -> bool:
        return not self.active_dimensions()

    def without_empty_lists(self) -> "HardFilters":
        """Copy with empty list dimensions reset to None."""
        updates = {
            name: None
            for name in ("pricing", "categories", "sub_categories", "tags")
            if getattr(self, name) == []
        }
        return self.model_copy(update=updates) if updates else self


class ParsedQuery(CamelModel):
    """Structured interpretation of a query, from the LLM or the heuristic parser."""
    intent: ParsedIntent = "find"
    filters: HardFilters = Field(default_factory=HardFilters)
    concepts: List[str] = Field(default_factory=list)
    semantic_terms: List[str] = Field(default_factory=list)
    confidence: Confidence = "medium"
    comparison_target: Optional[str] = None
    explanation: Optional[str] = None


class QueryClassification(CamelModel):
    """Output of the complexity gate in front of the LLM parser."""
    is_complex: bool
    reasons: List[str] = Field(default_factory=list)
    suggested_intent: Optional[ClassifierIntent] = None


# ============================================================================
# Search results
# ============================================================================

class ScoredResult(CamelModel):
    resource: Resource
    score: float = Field(..., ge=0.0)
    match_reasons: List[str] = Field(default_factory=list)


class SearchMetadata(CamelModel):
    """Everything the summary and the client need to explain a result set."""
    quality: MatchQuality
    total_results: int = 0
    direct_match_count: Optional[int] = Field(
        None, description="Primary results before fallback padding; None when not tracked"
    )
    detected_concepts: List[str] = Field(default_factory=list)
    expanded_terms: List[str] = Field(default_factory=list)
    matched_category: Optional[str] = None
    matched_pricing: Optional[str] = None
    original_query: str = ""
    filtered_pool_size: Optional[int] = Field(
        None, description="Pool size after hard filters; None when no filters were applied"
    )
    applied_filters: Optional[HardFilters] = None
    llm_concepts: List[str] = Field(default_factory=list)


class SearchResponse(CamelModel):
    results: List[ScoredResult] = Field(default_factory=list)
    metadata: SearchMetadata


class SearchOptions(CamelModel):
    """Per-call knobs for semantic_search."""
    min_results: int = Field(3, ge=0)
    max_results: int = Field(50, ge=1)
    include_fallback: bool = True
    hard_filters: Optional[HardFilters] = None
    llm_concepts: Optional[List[str]] = None


class AIResponse(CamelModel):
    """Short natural-language summary shown above the results."""
    message: str
    match_count: int = 0
    highlight: Optional[str] = None


class HybridSearchResult(CamelModel):
    """Full output of one classify -> parse -> search -> compose cycle."""
    results: List[ScoredResult] = Field(default_factory=list)
    metadata: SearchMetadata
    ai_response: AIResponse
    parsed_query: Optional[ParsedQuery] = None
    classification: Optional[QueryClassification] = None
    is_llm_enhanced: bool = False
    parse_source: Optional[ParseSource] = None


# ============================================================================
# Request models
# ============================================================================

class SearchRequest(CamelModel):
    """Request body for POST /api/search."""
    query: str = Field(..., max_length=1000, description="Search query")
    min_results: Optional[int] = Field(None, ge=0, le=50)
    max_results: Optional[int] = Field(None, ge=1, le=200)
    include_fallback: bool = True
    enable_llm: bool = Field(True, description="Allow LLM parsing for complex queries")
    hard_filters: Optional[HardFilters] = Field(
        None, description="Explicit filters; skips LLM parsing when provided"
    )

    @model_validator(mode="after")
    def validate_result_bounds(self):
        """Ensure min_results <= max_results when both are set."""
        if self.min_results is not None and self.max_results is not None:
            if self.min_results > self.max_results:
                raise ValueError(
                    f"min_results ({self.min_results}) must be <= max_results ({self.max_results})"
                )
        return self


class SuggestionsResponse(CamelModel):
    query: str
    suggestions: List[str] = Field(default_factory=list)
