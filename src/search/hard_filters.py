"""
Hard filters: exact-match constraints applied before scoring.

Distinct dimensions combine with AND, values inside one dimension with OR.
A resource that lacks the field of an active dimension is excluded. An
empty result is a valid outcome; the orchestrator reports it as
``filtered_pool_size == 0``.
"""

from typing import Callable, Iterable, List, Optional, Set

from core.logging import get_logger
from scoring.lexicon import PRICING_KEYWORDS, resolve_category, resolve_pricing
from search.models import HardFilters, Resource

logger = get_logger(__name__)

_PRICING_LABELS = {label.lower() for label in PRICING_KEYWORDS}


def _normalize_pricing(values: Iterable[str]) -> Set[str]:
    """Lowercased pricing labels; free-form values go through the pricing table."""
    normalized: Set[str] = set()
    for value in values:
        lowered = value.lower().strip()
        if lowered in _PRICING_LABELS:
            normalized.add(lowered)
            continue
        resolved = resolve_pricing(lowered)
        normalized.add(resolved.lower() if resolved else lowered)
    return normalized


def _normalize_categories(values: Iterable[str]) -> Set[str]:
    """Lowercased categories; aliases ("apps", "inspo") map to their canonical name."""
    normalized: Set[str] = set()
    for value in values:
        resolved = resolve_category(value)
        normalized.add((resolved or value).lower().strip())
    return normalized


def _lower_set(values: Iterable[str]) -> Set[str]:
    return {value.lower().strip() for value in values}


def compile_hard_filters(filters: HardFilters) -> Callable[[Resource], bool]:
    """Normalize filter values once and return a per-resource predicate."""
    pricing = _normalize_pricing(filters.pricing) if filters.pricing else None
    categories = _normalize_categories(filters.categories) if filters.categories else None
    sub_categories = _lower_set(filters.sub_categories) if filters.sub_categories else None
    tags = _lower_set(filters.tags) if filters.tags else None
    min_gravity = filters.min_gravity_score
    max_gravity = filters.max_gravity_score

    def predicate(resource: Resource) -> bool:
        if pricing is not None:
            if not resource.pricing or resource.pricing.lower() not in pricing:
                return False

        if categories is not None:
            if not resource.category or resource.category.lower() not in categories:
                return False

        if sub_categories is not None:
            if not resource.sub_category or resource.sub_category.lower() not in sub_categories:
                return False

        if min_gravity is not None and resource.gravity_score < min_gravity:
            return False
        if max_gravity is not None and resource.gravity_score > max_gravity:
            return False

        if tags is not None:
            if not resource.tags:
                return False
            resource_tags = [tag.lower() for tag in resource.tags]
            # A filter tag matches when some resource tag contains it
            if not any(want in tag for want in tags for tag in resource_tags):
                return False

        if filters.featured is not None and resource.featured != filters.featured:
            return False
        if filters.opensource is not None and resource.opensource != filters.opensource:
            return False

        return True

    return predicate


def matches_hard_filters(resource: Resource, filters: HardFilters) -> bool:
    """True when the resource satisfies every active filter dimension."""
    return compile_hard_filters(filters)(resource)


def apply_hard_filters(
    resources: Iterable[Resource],
    filters: Optional[HardFilters],
) -> List[Resource]:
    """
    Narrow the candidate pool, preserving catalog order.

    ``None`` or an all-empty filter set returns the pool unchanged.
    """
    pool = list(resources)
    if filters is None or filters.is_empty():
        return pool

    predicate = compile_hard_filters(filters)
    filtered = [resource for resource in pool if predicate(resource)]

    logger.debug(
        "Applied hard filters",
        dimensions=filters.active_dimensions(),
        pool_size=len(pool),
        filtered_size=len(filtered),
    )
    return filtered
