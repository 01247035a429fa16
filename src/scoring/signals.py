"""
Relevance signal evaluators.

Each evaluator looks at one aspect of a resource (name, tags, category,
...) and returns the hits it produced as ``(points, reason)`` pairs. The
scorer runs them in SIGNALS order and sums the points. Signals are
independent and additive, with two ordering rules:

1. Name match: exact, else prefix, else substring (one at most).
2. Concept boost from detected lexicon concepts.
3. LLM concept phrase in description or tags (one credit at most).
4. Tags: exact token match, else partial (tokens >= 4 chars), else synonym.
5. Category (exact and partial) and subcategory.
6. Full query inside the description (queries >= 4 chars).
7. Resolved pricing.
8. Fuzzy name / content match, only while the score is still zero.

Reason strings are part of the API: the response composer and the web
client key off "exact name match", "fuzzy name match" and the "tag" prefix.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from config.constants import DEFAULT_SCORING_WEIGHTS, DEFAULT_SEARCH_CONFIG
from scoring.context import ScoringContext
from scoring.fuzzy import get_fuzzy_score, get_multi_term_fuzzy_score
from search.models import Resource

W = DEFAULT_SCORING_WEIGHTS
CFG = DEFAULT_SEARCH_CONFIG

Hit = Tuple[float, str]


@dataclass(frozen=True)
class Signal:
    """A named evaluator; ``only_if_unscored`` signals run only at score 0."""
    name: str
    evaluate: Callable[[Resource, ScoringContext], List[Hit]]
    only_if_unscored: bool = False


# =============================================================================
# Evaluators
# =============================================================================

def name_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    name = resource.name.lower()
    if name == ctx.query:
        return [(W.NAME_EXACT, "exact name match")]
    if name.startswith(ctx.query):
        return [(W.NAME_STARTS_WITH, "name starts with query")]
    if ctx.query in name:
        return [(W.NAME_CONTAINS, "name contains query")]
    return []


def concept_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    if resource.name.lower() in ctx.boosted_names:
        return [(W.CONCEPT_BOOST, "concept match")]
    return []


def llm_concept_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    """Credit the first externally supplied concept found in description or tags."""
    if not ctx.llm_concepts:
        return []

    description = (resource.description or "").lower()
    tags = [tag.lower() for tag in resource.tags or []]

    for concept in ctx.llm_concepts:
        if description and concept in description:
            return [(W.LLM_CONCEPT, f"llm concept: {concept}")]
        if any(concept in tag or tag in concept for tag in tags):
            return [(W.LLM_CONCEPT, f"llm concept: {concept}")]
    return []


def tag_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    if not resource.tags:
        return []

    tokens = set(ctx.tokens)

    exact = [
        (W.TAG_EXACT, f"exact tag: {tag}")
        for tag in resource.tags
        if tag.lower() in tokens
    ]
    if exact:
        return exact

    long_tokens = [t for t in ctx.tokens if len(t) >= CFG.MIN_PARTIAL_TAG_TOKEN_LENGTH]
    for tag in resource.tags:
        tag_lower = tag.lower()
        if any(token in tag_lower or tag_lower in token for token in long_tokens):
            return [(W.TAG_CONTAINS, f"partial tag: {tag}")]

    synonyms = [term for term in ctx.expanded_terms if term not in tokens]
    for tag in resource.tags:
        tag_lower = tag.lower()
        for term in synonyms:
            if tag_lower == term or (
                len(term) >= CFG.MIN_SYNONYM_CONTAINS_LENGTH and term in tag_lower
            ):
                return [(W.SYNONYM_MATCH, f"synonym tag: {tag}")]
    return []


def category_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    hits: List[Hit] = []

    if resource.category:
        category = resource.category.lower()
        if ctx.matched_category and category == ctx.matched_category.lower():
            hits.append((W.CATEGORY_MATCH, f"category: {resource.category}"))
        if ctx.query in category or category in ctx.query:
            hits.append((W.CATEGORY_MATCH / 2, f"category partial: {resource.category}"))

    if resource.sub_category:
        sub_category = resource.sub_category.lower()
        if ctx.query in sub_category or sub_category in ctx.query:
            hits.append((W.SUBCATEGORY_MATCH, f"subcategory: {resource.sub_category}"))

    return hits


def description_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    if len(ctx.query) < CFG.MIN_DESCRIPTION_QUERY_LENGTH or not resource.description:
        return []
    if ctx.query in resource.description.lower():
        return [(W.DESCRIPTION_CONTAINS, "description contains query")]
    return []


def pricing_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    if not ctx.matched_pricing or not resource.pricing:
        return []
    pricing = resource.pricing.lower()
    if ctx.matched_pricing.lower() in pricing:
        return [(W.PRICING_MATCH, f"pricing: {resource.pricing}")]
    return []


def fuzzy_signal(resource: Resource, ctx: ScoringContext) -> List[Hit]:
    hits: List[Hit] = []

    name_score = get_fuzzy_score(ctx.query, resource.name, CFG.FUZZY_NAME_THRESHOLD)
    if name_score > 0:
        hits.append((name_score * W.FUZZY_NAME_MAX, "fuzzy name match"))

    if ctx.is_multi_term and resource.description:
        content_score = get_multi_term_fuzzy_score(
            ctx.query,
            f"{resource.name} {resource.description}",
            CFG.FUZZY_CONTENT_THRESHOLD,
        )
        if content_score > 0:
            hits.append((content_score * W.FUZZY_CONTENT_MAX, "fuzzy content match"))

    return hits


SIGNALS: Tuple[Signal, ...] = (
    Signal("name", name_signal),
    Signal("concept", concept_signal),
    Signal("llm_concept", llm_concept_signal),
    Signal("tags", tag_signal),
    Signal("category", category_signal),
    Signal("description", description_signal),
    Signal("pricing", pricing_signal),
    Signal("fuzzy", fuzzy_signal, only_if_unscored=True),
)
