"""
Lexicon lookups: synonym expansion, concept detection, category and
pricing resolution.

The raw tables live in ``scoring/constants``. They are frozen into
read-only views once at import time; every lookup here is a pure
function over those views, so concurrent searches share them safely.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from scoring.constants.category_aliases import CATEGORY_ALIASES as _CATEGORY_ALIASES
from scoring.constants.category_aliases import PRICING_KEYWORDS as _PRICING_KEYWORDS
from scoring.constants.concepts import CONCEPT_MAPPINGS as _CONCEPT_MAPPINGS
from scoring.constants.synonyms import SYNONYM_GROUPS as _SYNONYM_GROUPS
from scoring.context import ConceptMapping


# =============================================================================
# Frozen tables
# =============================================================================

def _freeze(table: Dict[str, List[str]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


SYNONYM_GROUPS: Mapping[str, Tuple[str, ...]] = _freeze(_SYNONYM_GROUPS)
CATEGORY_ALIASES: Mapping[str, Tuple[str, ...]] = _freeze(_CATEGORY_ALIASES)
PRICING_KEYWORDS: Mapping[str, Tuple[str, ...]] = _freeze(_PRICING_KEYWORDS)
CONCEPT_MAPPINGS: Mapping[str, ConceptMapping] = MappingProxyType(dict(_CONCEPT_MAPPINGS))


def _build_reverse_synonyms() -> Mapping[str, Tuple[str, ...]]:
    """Synonym value -> canonical keys listing it (a value can sit in several groups)."""
    reverse: Dict[str, List[str]] = {}
    for key, synonyms in SYNONYM_GROUPS.items():
        for synonym in synonyms:
            reverse.setdefault(synonym, []).append(key)
    return _freeze(reverse)


_REVERSE_SYNONYMS = _build_reverse_synonyms()


# =============================================================================
# Lookups
# =============================================================================

def expand_synonyms(term: str) -> List[str]:
    """
    Expand a term with its synonym group(s).

    Returns the term itself, plus its synonyms if it is a canonical key,
    plus the key and every sibling for each group listing it as a value.
    Deduplicated; order follows discovery.
    """
    normalized = term.lower().strip()
    expanded: Dict[str, None] = {normalized: None}

    for synonym in SYNONYM_GROUPS.get(normalized, ()):
        expanded[synonym] = None

    for key in _REVERSE_SYNONYMS.get(normalized, ()):
        expanded[key] = None
        for synonym in SYNONYM_GROUPS[key]:
            expanded[synonym] = None

    return list(expanded)


def detect_concepts(query: str) -> List[str]:
    """
    Return concept names whose keywords match the query.

    Matching is bidirectional substring containment: the query contains
    the keyword, or the keyword contains the query. An empty query is
    contained in every keyword and therefore matches every concept.
    """
    normalized = query.lower().strip()
    return [
        name
        for name, concept in CONCEPT_MAPPINGS.items()
        if any(keyword in normalized or normalized in keyword for keyword in concept.keywords)
    ]


def resolve_category(term: str) -> Optional[str]:
    """Canonical category for a term: exact name first, then alias equality."""
    normalized = term.lower().strip()

    for category in CATEGORY_ALIASES:
        if category.lower() == normalized:
            return category

    for category, aliases in CATEGORY_ALIASES.items():
        if any(alias.lower() == normalized for alias in aliases):
            return category

    return None


def resolve_pricing(term: str) -> Optional[str]:
    """
    First pricing group (declared order) with a keyword contained in the term.

    "Free" is declared before "Freemium", so "freemium" resolves to "Free".
    """
    normalized = term.lower().strip()

    for pricing, keywords in PRICING_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            return pricing

    return None


def concept_resource_names(concepts: Iterable[str]) -> Set[str]:
    """Lowercased resource names boosted by the given concepts."""
    names: Set[str] = set()
    for concept in concepts:
        mapping = CONCEPT_MAPPINGS.get(concept)
        if mapping:
            names.update(name.lower() for name in mapping.resource_names)
    return names


def concept_categories(concepts: Iterable[str]) -> Set[str]:
    categories: Set[str] = set()
    for concept in concepts:
        mapping = CONCEPT_MAPPINGS.get(concept)
        if mapping:
            categories.update(mapping.categories)
    return categories
