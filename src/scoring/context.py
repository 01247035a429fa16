"""
Context dataclasses for resource scoring.

ConceptMapping describes one curated concept in the lexicon tables.
ScoringContext holds everything derived from the query once per search,
so the per-resource signal evaluators never re-tokenize or re-expand.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class ConceptMapping:
    """A curated concept: trigger phrases plus the resources it should surface."""
    keywords: Tuple[str, ...]
    resource_names: Tuple[str, ...]
    categories: Tuple[str, ...]
    description: str


@dataclass(frozen=True)
class ScoringContext:
    """
    Query-derived state shared by every signal evaluator.

    Built once per search by ``scoring.scorer.build_scoring_context``.
    """
    query: str                                     # lowercased, trimmed
    tokens: Tuple[str, ...] = ()
    expanded_terms: Tuple[str, ...] = ()           # synonyms of every token, tokens included
    detected_concepts: Tuple[str, ...] = ()
    boosted_names: FrozenSet[str] = frozenset()    # lowercased resource names
    matched_category: Optional[str] = None
    matched_pricing: Optional[str] = None
    llm_concepts: Tuple[str, ...] = ()             # lowercased concept phrases

    @property
    def is_multi_term(self) -> bool:
        return len(self.tokens) > 1


@dataclass
class SignalHit:
    """One scoring contribution with its reason tag."""
    points: float
    reason: str


@dataclass
class ScoreBreakdown:
    """Debug view of how a resource reached its score."""
    resource_id: int
    hits: List[SignalHit] = field(default_factory=list)
    base_score: float = 0.0
    gravity_multiplier: float = 1.0
    featured_bonus: float = 0.0
    final_score: float = 0.0
