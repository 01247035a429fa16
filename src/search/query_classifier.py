"""
Query Complexity Classifier.

Decides whether a query can be answered by local search alone (simple) or
should first go through LLM parsing (complex):
- simple: tool names, single short words, plain two-word lookups
- complex: rating/pricing constraints, comparisons, filter phrasing,
  feature-seeking queries, anything of three or more words

Pure and synchronous; never touches the network.
"""

import re
from typing import List, Optional, Tuple

from config.constants import DEFAULT_CLASSIFIER_CONFIG
from core.logging import get_logger
from search.models import QueryClassification

logger = get_logger(__name__)

CFG = DEFAULT_CLASSIFIER_CONFIG


# ============================================================================
# Patterns
# ============================================================================

_RATING_OPERATORS = re.compile(
    r"\b(over|under|above|below|more\s+than|less\s+than|greater\s+than|at\s+least|at\s+most)\s*\d+",
    re.IGNORECASE,
)
_RATING_KEYWORDS = re.compile(
    r"\b(top\s*rated|best|highest\s*rated|rating|rated|score|gravity)",
    re.IGNORECASE,
)
_PRICING_KEYWORDS = re.compile(
    r"\b(free|freemium|paid|premium|open\s*source|oss|subscription|one-time|lifetime)",
    re.IGNORECASE,
)
_COMPARISON_KEYWORDS = re.compile(
    r"\b(alternative|alternatives|similar\s+to|like|instead\s+of|vs|versus|compared\s+to|replacement)",
    re.IGNORECASE,
)
_MULTI_INTENT = re.compile(r"\b(and|with|for|that|which)\b", re.IGNORECASE)
_FILTER_LANGUAGE = re.compile(
    r"\b(only|just|exclusively|show\s+me|find\s+me|give\s+me|looking\s+for)\b",
    re.IGNORECASE,
)
_FEATURE_QUERIES = re.compile(
    r"\b(tools?\s+for|apps?\s+for|resources?\s+for|software\s+for)\b",
    re.IGNORECASE,
)
_CATEGORY_PLUS_MODIFIER = re.compile(
    r"\b(ai|design|dev|development|learning|community|templates?|inspiration)\s+"
    r"(tools?|apps?|resources?|platforms?)",
    re.IGNORECASE,
)

_VERY_SHORT_WORD = re.compile(r"^[a-zA-Z]{1,8}$")

# (pattern, reason, suggested intent). Comparison always overrides the
# intent; every other pattern only sets it when nothing has yet.
_COMPLEX_RULES: Tuple[Tuple[re.Pattern, str, str], ...] = (
    (_RATING_OPERATORS, "contains rating operator", "filter"),
    (_RATING_KEYWORDS, "contains rating keyword", "filter"),
    (_PRICING_KEYWORDS, "contains pricing keyword", "filter"),
    (_COMPARISON_KEYWORDS, "comparison query", "compare"),
    (_FILTER_LANGUAGE, "explicit filter language", "filter"),
    (_FEATURE_QUERIES, "feature-based query", "find"),
    (_CATEGORY_PLUS_MODIFIER, "category with modifier", "find"),
)

_OVERRIDING_INTENTS = {"compare"}


# ============================================================================
# Classifier
# ============================================================================

class QueryClassifier:
    """
    Classify search queries by how much interpretation they need.

    Checks run in a fixed order: the simple short-circuits first, then
    every complex pattern independently, then the word-count default.
    """

    @staticmethod
    def _word_count(q: str) -> int:
        return len(q.split())

    @staticmethod
    def classify(query: str) -> QueryClassification:
        q = query.lower().strip()

        # 1. Empty / single character
        if len(q) < CFG.MIN_QUERY_LENGTH:
            return QueryClassification(is_complex=False, reasons=["query too short"])

        # 2. Known tool names are exact lookups
        if q in CFG.KNOWN_TOOL_NAMES:
            return QueryClassification(is_complex=False, reasons=["known tool name"])

        # 3. Short alphabetic single word
        if _VERY_SHORT_WORD.match(q) and len(q) <= CFG.VERY_SHORT_MAX_LENGTH:
            return QueryClassification(is_complex=False, reasons=["very short single word"])

        # 4. Complexity indicators
        reasons: List[str] = []
        intent: Optional[str] = None
        for pattern, reason, rule_intent in _COMPLEX_RULES:
            if pattern.search(q):
                reasons.append(reason)
                if rule_intent in _OVERRIDING_INTENTS or intent is None:
                    intent = rule_intent

        word_count = QueryClassifier._word_count(q)
        if word_count >= CFG.MULTI_INTENT_MIN_WORDS and _MULTI_INTENT.search(q):
            reasons.append("multi-intent query")
            intent = intent or "find"

        if reasons:
            return QueryClassification(is_complex=True, reasons=reasons, suggested_intent=intent)

        # 5. Longer free text may need semantic understanding ("mood board tools")
        if word_count >= CFG.MULTI_WORD_MIN_WORDS:
            return QueryClassification(
                is_complex=True,
                reasons=["multi-word query may need semantic understanding"],
                suggested_intent="find",
            )

        return QueryClassification(is_complex=False, reasons=["simple query"])

    @staticmethod
    def is_simple(query: str) -> bool:
        return not QueryClassifier.classify(query).is_complex

    @staticmethod
    def is_complex(query: str) -> bool:
        return QueryClassifier.classify(query).is_complex


def classify_query_complexity(query: str) -> QueryClassification:
    return QueryClassifier.classify(query)


def is_simple_query(query: str) -> bool:
    return QueryClassifier.is_simple(query)


def is_complex_query(query: str) -> bool:
    return QueryClassifier.is_complex(query)
