"""
LLM parse service behind POST /api/search/parse-query.

Turns a free-text query into the raw JSON structure the query parser
sanitizes (intent, filters, concepts, semanticTerms, confidence, ...).
Runs one OpenAI chat completion in JSON mode; never retries. Callers
decide what a failure means: the route answers with a low-confidence
fallback body, the in-process transport lets the parser fall back to
heuristics.
"""

import json
import threading
import time
from typing import Any, Dict, Optional

from config.constants import DEFAULT_PARSER_CONFIG
from config.settings import get_settings
from core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Errors
# =============================================================================

class ParseServiceError(RuntimeError):
    """The LLM call failed or returned something that is not a JSON object."""


class ParseServiceNotConfiguredError(ParseServiceError):
    """No API key is configured, so the service cannot call the LLM."""


# =============================================================================
# Prompts
# =============================================================================

SYSTEM_PROMPT = """You are a search query parser for a design tool directory. Your job is to understand user queries and extract structured filters and semantic concepts.

Available data fields to filter on:
- category: "Tools", "AI", "Templates", "Learning", "Inspiration", "Community"
- subCategory: "Design", "Development", "Productivity", "Generative", "Assets", "Guides", "Galleries", etc.
- pricing: "Free", "Freemium", "Paid", "Pay per use"
- gravityScore: 7.5 to 9.8 (higher = more important/popular, like a rating)
- tags: design, prototyping, ai, video, animation, icons, collaboration, react, etc.
- featured: true/false
- opensource: true/false

Intent types:
- "filter": User wants to narrow down results by specific criteria
- "find": User is looking for tools that serve a specific purpose
- "compare": User wants alternatives to a specific tool
- "explore": User is browsing/discovering without specific criteria
- "recommend": User wants suggestions based on a use case

IMPORTANT: Respond with ONLY valid JSON, no markdown, no code blocks."""


def build_user_prompt(query: str) -> str:
    """User message: the response schema, a few worked examples, then the query."""
    return f"""Parse this search query into structured JSON: "{query}"

Return JSON with this structure:
{{
  "intent": "filter" | "find" | "compare" | "explore" | "recommend",
  "filters": {{
    "pricing": ["Free"] (optional array),
    "categories": ["Tools"] (optional array),
    "subCategories": ["Design"] (optional array),
    "minGravityScore": 9 (optional number),
    "maxGravityScore": 10 (optional number),
    "tags": ["design"] (optional array),
    "featured": true (optional boolean),
    "opensource": true (optional boolean)
  }},
  "concepts": ["concept1", "concept2"] (semantic concepts for soft matching),
  "semanticTerms": ["term1"] (original terms for fallback),
  "confidence": "high" | "medium" | "low",
  "comparisonTarget": "Figma" (optional, for comparison queries),
  "explanation": "Brief explanation" (optional)
}}

Examples:
- "free tools rated over 9" -> {{"intent":"filter","filters":{{"pricing":["Free"],"minGravityScore":9}},"concepts":[],"semanticTerms":["tools"],"confidence":"high"}}
- "mood board tools" -> {{"intent":"find","filters":{{}},"concepts":["visual inspiration","design curation","image collection","pinterest-like","collage","moodboard"],"semanticTerms":["mood board"],"confidence":"medium"}}
- "alternatives to Figma" -> {{"intent":"compare","filters":{{"categories":["Tools"]}},"concepts":["design tool","ui design","prototyping"],"semanticTerms":[],"confidence":"high","comparisonTarget":"Figma"}}
- "freemium ai tools" -> {{"intent":"filter","filters":{{"pricing":["Freemium"],"categories":["AI"]}},"concepts":[],"semanticTerms":["ai","artificial intelligence"],"confidence":"high"}}

Now parse: "{query}\""""


def strip_code_fences(text: str) -> str:
    """Remove a ```json ... ``` wrapper some models add despite instructions."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else cleaned[3:]
        if cleaned.startswith("json"):
            cleaned = cleaned[4:]
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()


def fallback_payload(query: str, error: Optional[str] = None) -> Dict[str, Any]:
    """Body returned when parsing fails; clients treat it as a low-confidence parse."""
    payload: Dict[str, Any] = {
        "intent": "find",
        "filters": {},
        "concepts": [],
        "semanticTerms": [query] if query else [],
        "confidence": "low",
    }
    if error:
        payload["error"] = error
    return payload


# =============================================================================
# Service
# =============================================================================

class ParseQueryService:
    """Single-shot LLM query parsing using OpenAI chat completions."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None):
        self._client = None
        self._client_lock = threading.Lock()
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._model = model or settings.query_parser_model
        self._timeout = timeout if timeout is not None else settings.query_parser_timeout_seconds

    @property
    def client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    from openai import OpenAI
                    self._client = OpenAI(
                        api_key=self._api_key,
                        timeout=self._timeout,
                    )
        return self._client

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def parse(self, query: str) -> Dict[str, Any]:
        """
        Parse a query into the raw structured payload.

        Raises:
            ParseServiceNotConfiguredError: No API key
            ParseServiceError: The call failed, returned nothing, or not a JSON object
        """
        if not self.configured:
            raise ParseServiceNotConfiguredError("API key not configured")

        t_start = time.time()
        try:
            response = self.client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(query)},
                ],
                temperature=0.0,
                max_tokens=DEFAULT_PARSER_CONFIG.MAX_COMPLETION_TOKENS,
                response_format={"type": "json_object"},
            )

            raw = response.choices[0].message.content
            if not raw:
                raise ParseServiceError("No text response from LLM")

            data = json.loads(strip_code_fences(raw))
            if not isinstance(data, dict):
                raise ParseServiceError("LLM response is not a JSON object")

            latency_ms = int((time.time() - t_start) * 1000)
            logger.info(
                "Parse service parsed query",
                query=query,
                intent=data.get("intent"),
                confidence=data.get("confidence"),
                latency_ms=latency_ms,
            )
            return data

        except ParseServiceError:
            raise
        except json.JSONDecodeError as e:
            logger.warning("Parse service returned invalid JSON", error=str(e))
            raise ParseServiceError("Invalid JSON from LLM") from e
        except Exception as e:
            latency_ms = int((time.time() - t_start) * 1000)
            logger.warning(
                "Parse service LLM call failed",
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=latency_ms,
            )
            raise ParseServiceError("LLM parsing failed") from e


# =============================================================================
# Singleton
# =============================================================================

_service: Optional[ParseQueryService] = None
_service_lock = threading.Lock()


def get_parse_service() -> ParseQueryService:
    """Get or create the ParseQueryService singleton (thread-safe)."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = ParseQueryService()
    return _service


def reset_parse_service() -> None:
    """Drop the singleton so the next call re-reads settings (tests)."""
    global _service
    with _service_lock:
        _service = None
