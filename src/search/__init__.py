"""
Semantic resource search.

Pipeline: classify -> (LLM parse | heuristic parse) -> hard filters ->
scoring -> threshold/sort -> restricted fallback -> summary.

Modules:
- models: pydantic request/response models
- semantic_search: semantic_search, quick_search, get_suggestions
- hard_filters / fallback: pool narrowing and the generic-query fallback
- query_classifier: complexity gate in front of the LLM
- query_parser / parse_service: LLM parse with timeout and heuristic fallback
- response_composer: natural-language summary of a result set
- hybrid_search: the full request cycle used by the API

Only the models are re-exported here; import the pipeline modules directly
(``scoring`` depends on ``search.models``, so this package stays light).
"""

from search.models import (
    AIResponse,
    HardFilters,
    HybridSearchResult,
    MatchQuality,
    ParsedQuery,
    QueryClassification,
    Resource,
    ScoredResult,
    SearchMetadata,
    SearchOptions,
    SearchResponse,
)

__all__ = [
    "AIResponse",
    "HardFilters",
    "HybridSearchResult",
    "MatchQuality",
    "ParsedQuery",
    "QueryClassification",
    "Resource",
    "ScoredResult",
    "SearchMetadata",
    "SearchOptions",
    "SearchResponse",
]
