"""
LLM Query Parser.

Turns complex queries into a structured ParsedQuery (intent, hard filters,
concepts) by asking the parse service, with a bounded wait:

- The transport call runs in a worker thread and is raced against a timeout
- A newer parse cancels the in-flight one; its outcome is marked superseded
- Timeouts, transport errors and bad JSON all resolve to the heuristic
  ``create_fallback_parse`` (confidence "low"); nothing is retried

Everything the LLM returns goes through ``sanitize_parsed_query`` before it
can reach the hard filter engine.
"""

import asyncio
import math
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from config.constants import DEFAULT_PARSER_CONFIG
from config.settings import Settings, get_settings
from core.logging import get_logger
from search.models import HardFilters, ParsedQuery
from search.parse_service import ParseQueryService, get_parse_service

logger = get_logger(__name__)

CFG = DEFAULT_PARSER_CONFIG


# =============================================================================
# Errors
# =============================================================================

class QueryParseError(RuntimeError):
    """Base error for a failed LLM parse."""


class QueryParseTimeoutError(QueryParseError):
    """The parse did not complete within its time budget."""

    def __init__(self, query: str, timeout_seconds: float):
        self.query = query
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Query parse timed out after {timeout_seconds:.1f}s")


# =============================================================================
# Sanitization
# =============================================================================

def _get(payload: Dict[str, Any], camel: str, snake: str) -> Any:
    """Read a key in either spelling; the wire format is camelCase."""
    if camel in payload:
        return payload[camel]
    return payload.get(snake)


def _strings(value: Any) -> Optional[List[str]]:
    """Keep only the string items of a list; None when not a list."""
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _whitelisted(value: Any, allowed) -> Optional[List[str]]:
    items = _strings(value)
    if items is None:
        return None
    return [item for item in items if item in allowed]


def _gravity(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return max(CFG.MIN_GRAVITY, min(CFG.MAX_GRAVITY, float(value)))


def sanitize_parsed_query(payload: Any) -> ParsedQuery:
    """
    Validate an untrusted parse payload field by field.

    Unknown intents and confidences fall back to "find" / "medium",
    pricing and categories are whitelisted, gravity bounds are clamped to
    [0, 10] and anything of the wrong type is dropped. A non-dict payload
    sanitizes to the defaults.
    """
    if not isinstance(payload, dict):
        payload = {}

    intent = payload.get("intent")
    if intent not in CFG.VALID_INTENTS:
        intent = CFG.DEFAULT_INTENT

    raw_filters = payload.get("filters")
    filters = HardFilters()
    if isinstance(raw_filters, dict):
        featured = raw_filters.get("featured")
        opensource = raw_filters.get("opensource")
        filters = HardFilters(
            pricing=_whitelisted(raw_filters.get("pricing"), CFG.VALID_PRICING),
            categories=_whitelisted(raw_filters.get("categories"), CFG.VALID_CATEGORIES),
            sub_categories=_strings(_get(raw_filters, "subCategories", "sub_categories")),
            min_gravity_score=_gravity(_get(raw_filters, "minGravityScore", "min_gravity_score")),
            max_gravity_score=_gravity(_get(raw_filters, "maxGravityScore", "max_gravity_score")),
            tags=_strings(raw_filters.get("tags")),
            featured=featured if isinstance(featured, bool) else None,
            opensource=opensource if isinstance(opensource, bool) else None,
        )

    confidence = payload.get("confidence")
    if confidence not in CFG.VALID_CONFIDENCE:
        confidence = CFG.DEFAULT_CONFIDENCE

    comparison_target = _get(payload, "comparisonTarget", "comparison_target")
    explanation = payload.get("explanation")

    return ParsedQuery(
        intent=intent,
        filters=filters,
        concepts=_strings(payload.get("concepts")) or [],
        semantic_terms=_strings(_get(payload, "semanticTerms", "semantic_terms")) or [],
        confidence=confidence,
        comparison_target=comparison_target if isinstance(comparison_target, str) else None,
        explanation=explanation if isinstance(explanation, str) else None,
    )


# =============================================================================
# Heuristic fallback
# =============================================================================

_FREE = re.compile(r"\bfree\b")
_FREEMIUM = re.compile(r"\bfreemium\b")
_PAID = re.compile(r"\b(paid|premium)\b")

_RATING_MIN = re.compile(r"(?:over|above|greater than|at least)\s*(\d+(?:\.\d+)?)")
_RATING_MAX = re.compile(r"(?:under|below|less than|at most)\s*(\d+(?:\.\d+)?)")

# First match wins, so "ai tools" resolves to AI before Tools is considered
_CATEGORY_RULES = (
    (re.compile(r"\bai\b|\bartificial intelligence\b"), "AI"),
    (re.compile(r"\btools?\b"), "Tools"),
    (re.compile(r"\binspiration\b|\binspo\b"), "Inspiration"),
    (re.compile(r"\blearning\b|\btutorial\b"), "Learning"),
    (re.compile(r"\btemplates?\b"), "Templates"),
    (re.compile(r"\bcommunity\b"), "Community"),
)

_COMPARISON = re.compile(r"alternatives?\s+(?:to|for)\s+(\w+)")
_OPEN_SOURCE = re.compile(r"\bopen\s*source\b|\boss\b")

_STOP_TERMS = re.compile(
    r"\b(free|freemium|paid|premium|open\s*source|oss|over|under|above|below|"
    r"at least|at most|greater than|less than|tools?|apps?|resources?)\b"
)
_NUMBERS = re.compile(r"\d+(\.\d+)?")
_WHITESPACE = re.compile(r"\s+")


def create_fallback_parse(query: str) -> ParsedQuery:
    """
    Heuristic parse used whenever the LLM is unavailable.

    Picks out pricing, rating bounds, a category, a comparison target and
    an open-source preference with regexes; what is left of the query
    (more than two characters) becomes a concept. Always low confidence.
    """
    q = query.lower()
    filters: Dict[str, Any] = {}
    intent = "find"

    if _FREE.search(q) and not _FREEMIUM.search(q):
        filters["pricing"] = ["Free"]
        intent = "filter"
    elif _FREEMIUM.search(q):
        filters["pricing"] = ["Freemium"]
        intent = "filter"
    elif _PAID.search(q):
        filters["pricing"] = ["Paid"]
        intent = "filter"

    rating_min = _RATING_MIN.search(q)
    if rating_min:
        filters["min_gravity_score"] = _gravity(float(rating_min.group(1)))
        intent = "filter"

    rating_max = _RATING_MAX.search(q)
    if rating_max:
        filters["max_gravity_score"] = _gravity(float(rating_max.group(1)))
        intent = "filter"

    for pattern, category in _CATEGORY_RULES:
        if pattern.search(q):
            filters["categories"] = [category]
            break

    comparison = _COMPARISON.search(q)
    if comparison:
        return ParsedQuery(
            intent="compare",
            filters=HardFilters(**filters),
            concepts=["similar functionality", "same category"],
            semantic_terms=[],
            confidence="low",
            comparison_target=comparison.group(1),
        )

    if _OPEN_SOURCE.search(q):
        filters["opensource"] = True
        intent = "filter"

    concepts: List[str] = []
    cleaned = _NUMBERS.sub("", _STOP_TERMS.sub("", q))
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    if len(cleaned) > 2:
        concepts.append(cleaned)

    return ParsedQuery(
        intent=intent,
        filters=HardFilters(**filters),
        concepts=concepts,
        semantic_terms=[],
        confidence="low",
    )


# =============================================================================
# Transports
# =============================================================================

class OpenAIQueryTransport:
    """Calls the parse service in-process."""

    def __init__(self, service: Optional[ParseQueryService] = None):
        self._service = service or get_parse_service()

    def fetch(self, query: str) -> Dict[str, Any]:
        return self._service.parse(query)


class HttpQueryTransport:
    """POSTs ``{"query": ...}`` to a remote parse-query endpoint."""

    def __init__(self, endpoint: str, timeout: float = CFG.DEFAULT_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, query: str) -> Dict[str, Any]:
        response = self._session.post(
            self.endpoint,
            json={"query": query},
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        if not response.ok:
            raise QueryParseError(f"API error: {response.status_code}")

        data = response.json()
        if not isinstance(data, dict):
            raise QueryParseError("Parse endpoint returned a non-object body")
        return data


def build_default_transport(settings: Optional[Settings] = None):
    """
    Transport from settings: a remote endpoint wins over the in-process
    OpenAI service. None when parsing is disabled or unconfigured.
    """
    settings = settings or get_settings()
    if not settings.query_parser_enabled:
        return None
    if settings.query_parser_endpoint:
        return HttpQueryTransport(
            settings.query_parser_endpoint,
            timeout=settings.query_parser_timeout_seconds,
        )
    if settings.openai_api_key:
        return OpenAIQueryTransport()
    return None


# =============================================================================
# Parser
# =============================================================================

@dataclass
class ParseOutcome:
    """Result of one parse call. ``superseded`` outcomes must not be applied."""
    parsed: ParsedQuery
    source: str
    generation: int
    error: Optional[str] = None
    superseded: bool = False
    latency_ms: int = 0

    @property
    def is_llm(self) -> bool:
        return self.source == "llm"


class LLMQueryParser:
    """
    Async LLM parse with a timeout, cancellation and stale-result detection.

    One instance serves one logical input (a search box, an API request);
    each ``parse`` call bumps the generation and cancels the previous
    in-flight call.
    """

    def __init__(self, transport=None, timeout: Optional[float] = None):
        self._transport = transport
        self._timeout = timeout if timeout is not None else CFG.DEFAULT_TIMEOUT_SECONDS
        self._generation = 0
        self._inflight: Optional[asyncio.Future] = None

    @property
    def enabled(self) -> bool:
        return self._transport is not None

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        """True while no newer parse has started."""
        return generation == self._generation

    def cancel(self) -> None:
        """Cancel the in-flight parse, if any."""
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

    async def parse(self, query: str, timeout: Optional[float] = None) -> ParseOutcome:
        self._generation += 1
        generation = self._generation
        self.cancel()

        if self._transport is None:
            logger.debug("Query parser not configured, using heuristic parse")
            return ParseOutcome(
                parsed=create_fallback_parse(query),
                source="fallback",
                generation=generation,
                error="query parser not configured",
            )

        timeout = timeout if timeout is not None else self._timeout
        t_start = time.time()
        task = asyncio.ensure_future(asyncio.to_thread(self._transport.fetch, query))
        self._inflight = task

        error: Optional[str] = None
        parsed: Optional[ParsedQuery] = None
        try:
            payload = await self._wait(task, query, timeout)
            parsed = sanitize_parsed_query(payload)
        except QueryParseTimeoutError as e:
            error = str(e)
        except asyncio.CancelledError:
            if not task.cancelled():
                # The caller cancelled us, not a newer parse
                task.cancel()
                raise
            error = "superseded by a newer query"
        except Exception as e:
            error = str(e) or type(e).__name__
        finally:
            if self._inflight is task:
                self._inflight = None

        latency_ms = int((time.time() - t_start) * 1000)
        superseded = not self.is_current(generation)

        if parsed is not None:
            logger.info(
                "Parsed query with LLM",
                query=query,
                intent=parsed.intent,
                confidence=parsed.confidence,
                superseded=superseded,
                latency_ms=latency_ms,
            )
            return ParseOutcome(
                parsed=parsed,
                source="llm",
                generation=generation,
                superseded=superseded,
                latency_ms=latency_ms,
            )

        if not superseded:
            logger.warning(
                "LLM query parse failed, using heuristic fallback",
                query=query,
                error=error,
                latency_ms=latency_ms,
            )
        return ParseOutcome(
            parsed=create_fallback_parse(query),
            source="fallback",
            generation=generation,
            error=error,
            superseded=superseded,
            latency_ms=latency_ms,
        )

    @staticmethod
    async def _wait(task: asyncio.Future, query: str, timeout: float) -> Dict[str, Any]:
        done, _ = await asyncio.wait({task}, timeout=timeout)
        if not done:
            task.cancel()
            raise QueryParseTimeoutError(query, timeout)
        return task.result()


def create_query_parser(settings: Optional[Settings] = None) -> LLMQueryParser:
    """New parser wired from settings. Create one per request or input box."""
    settings = settings or get_settings()
    return LLMQueryParser(
        transport=build_default_transport(settings),
        timeout=settings.query_parser_timeout_seconds,
    )
