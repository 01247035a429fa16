"""
Fuzzy string matching for typo tolerance.

Levenshtein edit distance (rapidfuzz) plus the similarity and scoring
helpers built on it. All comparisons are case-insensitive. Queries shorter
than MIN_FUZZY_QUERY_LENGTH never fuzzy-match: with two characters almost
everything is within one edit.
"""

import re
from typing import List, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from config.constants import DEFAULT_SEARCH_CONFIG

MIN_FUZZY_QUERY_LENGTH = DEFAULT_SEARCH_CONFIG.MIN_FUZZY_QUERY_LENGTH

_TOKEN_SPLIT = re.compile(r"[\s\-_.,;:!?]+")


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum single-character insertions, deletions and substitutions to turn a into b."""
    return Levenshtein.distance(a.lower(), b.lower())


def similarity_ratio(a: str, b: str) -> float:
    """1.0 for identical strings, 0.0 for completely different ones."""
    if not a and not b:
        return 1.0
    return Levenshtein.normalized_similarity(a.lower(), b.lower())


def is_fuzzy_match(query: str, target: str, threshold: float = 0.7) -> bool:
    if len(query) < MIN_FUZZY_QUERY_LENGTH:
        return False
    return similarity_ratio(query, target) >= threshold


def find_best_match(
    query: str,
    candidates: Sequence[str],
    threshold: float = 0.7,
) -> Optional[Tuple[str, float]]:
    """
    Best (candidate, similarity) at or above the threshold, or None.

    Ties keep the earliest candidate.
    """
    best: Optional[Tuple[str, float]] = None
    for candidate in candidates:
        similarity = similarity_ratio(query, candidate)
        if similarity >= threshold and (best is None or similarity > best[1]):
            best = (candidate, similarity)
    return best


def get_fuzzy_score(query: str, target: str, threshold: float = 0.6) -> float:
    """
    Similarity remapped so ``threshold`` -> 0.0 and an exact match -> 1.0.

    Returns 0.0 below the threshold and for queries that are too short.
    """
    if len(query) < MIN_FUZZY_QUERY_LENGTH:
        return 0.0
    similarity = similarity_ratio(query, target)
    if similarity < threshold:
        return 0.0
    if threshold >= 1.0:
        return 1.0
    return (similarity - threshold) / (1.0 - threshold)


def tokenize(text: str) -> List[str]:
    """Lowercase and split on whitespace and common punctuation."""
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def has_any_fuzzy_word_match(query: str, target: str, threshold: float = 0.7) -> bool:
    target_tokens = tokenize(target)
    return any(
        is_fuzzy_match(q_token, t_token, threshold)
        for q_token in tokenize(query)
        for t_token in target_tokens
    )


def get_multi_term_fuzzy_score(query: str, target: str, threshold: float = 0.6) -> float:
    """
    Aggregate fuzzy score of a multi-word query against a target text.

    Each query token takes its best-scoring target token. The result is
    the mean per-token score multiplied by coverage (matched tokens /
    query tokens), so a query where most words find a counterpart beats
    one where a single word matches strongly.
    """
    query_tokens = tokenize(query)
    target_tokens = tokenize(target)
    if not query_tokens or not target_tokens:
        return 0.0

    total = 0.0
    matched = 0
    for q_token in query_tokens:
        best = max(get_fuzzy_score(q_token, t_token, threshold) for t_token in target_tokens)
        if best > 0:
            total += best
            matched += 1

    if matched == 0:
        return 0.0

    coverage = matched / len(query_tokens)
    return (total / len(query_tokens)) * coverage
