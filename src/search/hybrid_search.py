"""
Hybrid Search Service: local semantic ranking + optional LLM parsing.

Pipeline:
1. Classify query complexity (simple queries skip the LLM entirely)
2. Complex queries are parsed into hard filters + concepts (LLM, bounded
   by a timeout; heuristic parse on any failure)
3. Run semantic_search over the catalog with those filters/concepts
4. Compose the summary message
"""

from typing import List, Optional, Sequence

from config.settings import get_settings
from core.logging import LoggerMixin
from search.models import (
    AIResponse,
    HardFilters,
    HybridSearchResult,
    MatchQuality,
    ParsedQuery,
    Resource,
    SearchMetadata,
    SearchOptions,
)
from search.query_classifier import classify_query_complexity
from search.query_parser import LLMQueryParser, create_query_parser
from search.response_composer import generate_ai_response
from search.semantic_search import semantic_search


class HybridSearchService(LoggerMixin):
    """
    One search box worth of state: the catalog snapshot and a query parser.

    The parser's generation counter makes a later ``search`` win over an
    earlier one still waiting on the LLM, so create one service per
    independent caller (the API creates one per request).
    """

    def __init__(
        self,
        resources: Sequence[Resource],
        parser: Optional[LLMQueryParser] = None,
        min_results: Optional[int] = None,
        max_results: Optional[int] = None,
    ):
        settings = get_settings()
        self._resources = list(resources)
        self._parser = parser if parser is not None else create_query_parser(settings)
        self._min_results = min_results if min_results is not None else settings.search_min_results
        self._max_results = max_results if max_results is not None else settings.search_max_results

    @property
    def parser(self) -> LLMQueryParser:
        return self._parser

    async def search(
        self,
        query: str,
        enable_llm: bool = True,
        timeout: Optional[float] = None,
        min_results: Optional[int] = None,
        max_results: Optional[int] = None,
        include_fallback: bool = True,
        hard_filters: Optional[HardFilters] = None,
    ) -> HybridSearchResult:
        """
        Run one classify -> parse -> search -> compose cycle.

        Explicit ``hard_filters`` skip LLM parsing. Never raises for bad
        input; unexpected failures degrade to a plain local search.
        """
        min_results = self._min_results if min_results is None else min_results
        max_results = self._max_results if max_results is None else max_results
        normalized = (query or "").strip()

        if not normalized:
            response = semantic_search(self._resources, normalized)
            return HybridSearchResult(
                results=[],
                metadata=response.metadata,
                ai_response=AIResponse(message="", match_count=0),
            )

        try:
            return await self._search(
                normalized, enable_llm, timeout, min_results, max_results,
                include_fallback, hard_filters,
            )
        except Exception as e:
            self.logger.error(
                "Hybrid search failed, falling back to local search",
                query=normalized,
                error=str(e),
                error_type=type(e).__name__,
            )
            response = semantic_search(
                self._resources,
                normalized,
                SearchOptions(
                    min_results=min_results,
                    max_results=max_results,
                    include_fallback=include_fallback,
                ),
            )
            return HybridSearchResult(
                results=response.results,
                metadata=response.metadata,
                ai_response=generate_ai_response(response.results, response.metadata),
            )

    async def _search(
        self,
        query: str,
        enable_llm: bool,
        timeout: Optional[float],
        min_results: int,
        max_results: int,
        include_fallback: bool,
        hard_filters: Optional[HardFilters],
    ) -> HybridSearchResult:
        classification = classify_query_complexity(query)
        parsed: Optional[ParsedQuery] = None
        parse_source = None
        llm_concepts: Optional[List[str]] = None
        filters = hard_filters.without_empty_lists() if hard_filters is not None else None

        if filters is None and enable_llm and classification.is_complex:
            outcome = await self._parser.parse(query, timeout=timeout)
            parsed = outcome.parsed
            parse_source = outcome.source

            if outcome.superseded:
                # A newer query owns the result list now
                self.logger.debug("Discarding superseded parse", query=query, generation=outcome.generation)
                return HybridSearchResult(
                    results=[],
                    metadata=SearchMetadata(quality=MatchQuality.LOW, original_query=query),
                    ai_response=AIResponse(message="", match_count=0),
                    parsed_query=parsed,
                    classification=classification,
                    parse_source=parse_source,
                )

            filters = parsed.filters.without_empty_lists()
            if outcome.is_llm and parsed.concepts:
                llm_concepts = list(parsed.concepts)

        response = semantic_search(
            self._resources,
            query,
            SearchOptions(
                min_results=min_results,
                max_results=max_results,
                include_fallback=include_fallback,
                hard_filters=filters,
                llm_concepts=llm_concepts,
            ),
        )

        self.logger.info(
            "Hybrid search completed",
            query=query,
            is_complex=classification.is_complex,
            parse_source=parse_source,
            quality=response.metadata.quality.value,
            results=len(response.results),
        )

        return HybridSearchResult(
            results=response.results,
            metadata=response.metadata,
            ai_response=generate_ai_response(response.results, response.metadata),
            parsed_query=parsed,
            classification=classification,
            is_llm_enhanced=parse_source == "llm",
            parse_source=parse_source,
        )
