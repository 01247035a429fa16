"""
Search API Routes.

Provides hybrid search, LLM query parsing and completion suggestions.

``/parse-query`` keeps the wire format its web client expects: errors are
``{"error": ...}`` bodies rather than FastAPI's ``{"detail": ...}``, and an
LLM failure still answers 200 with a low-confidence fallback parse.
"""

import json

from fastapi import APIRouter, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from config.constants import DEFAULT_PARSER_CONFIG, DEFAULT_SEARCH_CONFIG
from core.logging import get_logger
from core.middleware import get_client_ip
from core.rate_limit import get_parse_rate_limiter
from search.catalog import get_catalog
from search.hybrid_search import HybridSearchService
from search.models import HybridSearchResult, SearchRequest, SuggestionsResponse
from search.parse_service import (
    ParseServiceError,
    ParseServiceNotConfiguredError,
    fallback_payload,
    get_parse_service,
)
from search.query_parser import sanitize_parsed_query
from search.semantic_search import get_suggestions

logger = get_logger(__name__)

router = APIRouter(prefix="/api/search", tags=["Search"])


# =============================================================================
# Hybrid Search
# =============================================================================

@router.post(
    "",
    response_model=HybridSearchResult,
    summary="Hybrid search (local ranking + LLM query parsing)",
)
async def search(request: SearchRequest) -> HybridSearchResult:
    """
    Search the resource catalog.

    - **Simple queries** ("figma", "icons") are ranked locally
    - **Complex queries** ("free tools rated over 9") are parsed into hard
      filters and concepts first; a slow or failing parse falls back to
      heuristics
    - Explicit ``hardFilters`` skip parsing
    """
    service = HybridSearchService(get_catalog())
    return await service.search(
        request.query,
        enable_llm=request.enable_llm,
        min_results=request.min_results,
        max_results=request.max_results,
        include_fallback=request.include_fallback,
        hard_filters=request.hard_filters,
    )


# =============================================================================
# Query Parsing
# =============================================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/parse-query",
    summary="Parse a query into structured filters and concepts",
)
async def parse_query(request: Request) -> JSONResponse:
    """
    Parse a free-text query with the LLM.

    Rate limited per client IP. Returns the sanitized parse (camelCase);
    on LLM failure returns 200 with a low-confidence fallback and an
    ``error`` field so clients can continue with local search.
    """
    client_ip = get_client_ip(request)
    decision = get_parse_rate_limiter().check(client_ip)
    if not decision.allowed:
        return JSONResponse(
            status_code=429,
            content=fallback_payload("", decision.reason),
            headers={"Retry-After": str(decision.retry_after_seconds)},
        )

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, "Invalid JSON body")

    query = body.get("query") if isinstance(body, dict) else None
    if not query or not isinstance(query, str):
        return _error(400, "Invalid query parameter")

    max_length = DEFAULT_PARSER_CONFIG.MAX_QUERY_LENGTH
    if len(query) > max_length:
        return _error(400, f"Query too long (max {max_length} characters)")

    service = get_parse_service()
    if not service.configured:
        return _error(500, "API key not configured")

    try:
        payload = await run_in_threadpool(service.parse, query)
    except ParseServiceNotConfiguredError:
        return _error(500, "API key not configured")
    except ParseServiceError as e:
        logger.warning("Parse-query falling back", client_ip=client_ip, error=str(e))
        return JSONResponse(status_code=200, content=fallback_payload(query, "LLM parsing failed"))

    parsed = sanitize_parsed_query(payload)
    return JSONResponse(
        status_code=200,
        content=parsed.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers={"Cache-Control": "public, s-maxage=3600"},
    )


# =============================================================================
# Suggestions
# =============================================================================

@router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Completion suggestions for a partial query",
)
def suggestions(
    q: str = Query("", max_length=DEFAULT_PARSER_CONFIG.MAX_QUERY_LENGTH, description="Partial query"),
    limit: int = Query(DEFAULT_SEARCH_CONFIG.MAX_SUGGESTIONS, ge=1, le=20, description="Max suggestions"),
) -> SuggestionsResponse:
    """Resource names, then tags, then categories containing the query."""
    return SuggestionsResponse(
        query=q,
        suggestions=get_suggestions(get_catalog(), q, max_suggestions=limit),
    )
