"""
Relevance Scoring Module.

Lexicon lookups, fuzzy matching and the weighted multi-signal scorer used
by the search orchestrator (``search/semantic_search.py``).

Quick start::

    from scoring import ResourceScorer, build_scoring_context

    ctx = build_scoring_context("figma alternatives")
    scorer = ResourceScorer()

    results = scorer.score_all(catalog, ctx)
    breakdown = scorer.explain(catalog[0], ctx)
"""

from scoring.context import ConceptMapping, ScoreBreakdown, ScoringContext, SignalHit
from scoring.lexicon import (
    CATEGORY_ALIASES,
    CONCEPT_MAPPINGS,
    PRICING_KEYWORDS,
    SYNONYM_GROUPS,
    detect_concepts,
    expand_synonyms,
    resolve_category,
    resolve_pricing,
)
from scoring.scorer import ResourceScorer, build_scoring_context

__all__ = [
    "ConceptMapping",
    "ScoreBreakdown",
    "ScoringContext",
    "SignalHit",
    "CATEGORY_ALIASES",
    "CONCEPT_MAPPINGS",
    "PRICING_KEYWORDS",
    "SYNONYM_GROUPS",
    "detect_concepts",
    "expand_synonyms",
    "resolve_category",
    "resolve_pricing",
    "ResourceScorer",
    "build_scoring_context",
]
