"""
ResourceScorer -- the relevance scoring orchestrator.

Runs the ordered signal evaluators from ``scoring.signals`` over one
resource, then applies the catalog-quality post-multipliers.

Usage::

    from scoring.scorer import ResourceScorer, build_scoring_context

    ctx = build_scoring_context("vibe code")
    scorer = ResourceScorer()

    # Single resource
    result = scorer.score(resource, ctx)

    # Pool (drops zero scores, keeps pool order)
    results = scorer.score_all(resources, ctx)
"""

from typing import Iterable, List, Optional, Sequence

from config.constants import DEFAULT_SCORING_WEIGHTS, ScoringWeights
from scoring.context import ScoreBreakdown, ScoringContext, SignalHit
from scoring.fuzzy import tokenize
from scoring.lexicon import (
    concept_resource_names,
    detect_concepts,
    expand_synonyms,
    resolve_category,
    resolve_pricing,
)
from scoring.signals import SIGNALS, Signal
from search.models import Resource, ScoredResult


def build_scoring_context(
    query: str,
    llm_concepts: Optional[Iterable[str]] = None,
) -> ScoringContext:
    """Derive tokens, synonyms, concepts, category and pricing from a query once."""
    normalized = query.lower().strip()
    tokens = tokenize(normalized)

    expanded: dict = {}
    for token in tokens:
        for term in expand_synonyms(token):
            expanded[term] = None

    concepts = detect_concepts(normalized)

    cleaned_llm_concepts = tuple(
        concept.lower().strip()
        for concept in (llm_concepts or [])
        if concept and concept.strip()
    )

    return ScoringContext(
        query=normalized,
        tokens=tuple(tokens),
        expanded_terms=tuple(expanded),
        detected_concepts=tuple(concepts),
        boosted_names=frozenset(concept_resource_names(concepts)),
        matched_category=resolve_category(normalized),
        matched_pricing=resolve_pricing(normalized),
        llm_concepts=cleaned_llm_concepts,
    )


class ResourceScorer:
    """
    Combines all relevance signals into one score per resource.

    Stateless -- safe to share across threads / reuse across requests.
    """

    def __init__(
        self,
        signals: Sequence[Signal] = SIGNALS,
        weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
    ) -> None:
        self._signals = tuple(signals)
        self._weights = weights

    def _collect_hits(self, resource: Resource, ctx: ScoringContext) -> List[SignalHit]:
        hits: List[SignalHit] = []
        running = 0.0
        for signal in self._signals:
            if signal.only_if_unscored and running > 0:
                continue
            for points, reason in signal.evaluate(resource, ctx):
                hits.append(SignalHit(points=points, reason=reason))
                running += points
        return hits

    def _gravity_multiplier(self, resource: Resource) -> float:
        return 1 + (resource.gravity_score / 10) * (self._weights.GRAVITY_MULTIPLIER - 1)

    def explain(self, resource: Resource, ctx: ScoringContext) -> ScoreBreakdown:
        """
        Full breakdown of a resource's score.

        Post-multipliers only apply when some signal fired: catalog quality
        amplifies relevance but never creates it.
        """
        hits = self._collect_hits(resource, ctx)
        breakdown = ScoreBreakdown(resource_id=resource.id, hits=hits)
        breakdown.base_score = sum(hit.points for hit in hits)

        if breakdown.base_score > 0:
            breakdown.gravity_multiplier = self._gravity_multiplier(resource)
            if resource.featured:
                breakdown.featured_bonus = self._weights.FEATURED_BONUS
            breakdown.final_score = (
                breakdown.base_score * breakdown.gravity_multiplier + breakdown.featured_bonus
            )

        return breakdown

    def score(self, resource: Resource, ctx: ScoringContext) -> ScoredResult:
        breakdown = self.explain(resource, ctx)
        reasons = [hit.reason for hit in breakdown.hits]
        if breakdown.featured_bonus:
            reasons.append("featured")
        return ScoredResult(
            resource=resource,
            score=breakdown.final_score,
            match_reasons=reasons,
        )

    def score_all(
        self,
        resources: Iterable[Resource],
        ctx: ScoringContext,
    ) -> List[ScoredResult]:
        """Score a pool, keeping only positive scores in pool order."""
        results = []
        for resource in resources:
            result = self.score(resource, ctx)
            if result.score > 0:
                results.append(result)
        return results
