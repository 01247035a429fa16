"""
Offline integrity checks for the search lexicon against a catalog.

Concept mappings name resources they expect to exist. A name that is not
in the catalog is a data defect: it never breaks a live search (the boost
simply never fires) but it silently weakens concept queries. Run these
checks at build time (``scripts/validate_search_data.py``), never on the
query path.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from core.logging import get_logger
from scoring.context import ConceptMapping
from scoring.lexicon import CONCEPT_MAPPINGS
from search.models import Resource

logger = get_logger(__name__)

# A resource named by more concepts than this is probably over-mapped
MAX_CONCEPTS_PER_RESOURCE = 3


class SearchDataValidationError(RuntimeError):
    """Concept mappings reference data that does not exist."""

    def __init__(self, errors: List["ValidationIssue"]):
        self.errors = errors
        super().__init__(f"Search data validation failed with {len(errors)} error(s)")


@dataclass(frozen=True)
class ValidationIssue:
    type: str  # missing_resource | empty_keywords
    concept: str
    detail: str


@dataclass
class ValidationResult:
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_concept_mappings(
    resources: Sequence[Resource],
    mappings: Mapping[str, ConceptMapping] = CONCEPT_MAPPINGS,
) -> ValidationResult:
    """Check every concept mapping against the catalog's resource names."""
    result = ValidationResult()
    catalog_names = {resource.name.lower() for resource in resources}
    mentioned: Dict[str, List[str]] = defaultdict(list)

    for concept, mapping in mappings.items():
        if not mapping.keywords:
            result.errors.append(ValidationIssue(
                type="empty_keywords",
                concept=concept,
                detail=f'Concept "{concept}" has no keywords defined',
            ))

        for name in mapping.resource_names:
            lowered = name.lower()
            if lowered not in catalog_names:
                result.errors.append(ValidationIssue(
                    type="missing_resource",
                    concept=concept,
                    detail=f'Resource "{name}" referenced in concept "{concept}" does not exist in the catalog',
                ))
            mentioned[lowered].append(concept)

        if not mapping.categories:
            result.warnings.append(f'Concept "{concept}" has no categories defined')

    for name, concepts in mentioned.items():
        if len(concepts) > MAX_CONCEPTS_PER_RESOURCE:
            result.warnings.append(
                f'Resource "{name}" appears in {len(concepts)} concepts: '
                f'{", ".join(concepts)}. Consider if all are appropriate.'
            )

    return result


def validate_search_data(resources: Sequence[Resource]) -> ValidationResult:
    """
    Validate and log; raise on errors.

    Raises:
        SearchDataValidationError: At least one error was found
    """
    result = validate_concept_mappings(resources)

    for warning in result.warnings:
        logger.warning("Search data validation warning", detail=warning)

    if not result.valid:
        for issue in result.errors:
            logger.error(
                "Search data validation error",
                type=issue.type,
                concept=issue.concept,
                detail=issue.detail,
            )
        raise SearchDataValidationError(result.errors)

    logger.info("Search data validation passed", warnings=len(result.warnings))
    return result


def get_validation_report(resources: Sequence[Resource]) -> str:
    """Human-readable report; never raises."""
    result = validate_concept_mappings(resources)
    lines = ["=== Search Data Validation Report ===", ""]

    if result.errors:
        lines.append("ERRORS:")
        lines.extend(f"  [{issue.type}] {issue.detail}" for issue in result.errors)
        lines.append("")

    if result.warnings:
        lines.append("WARNINGS:")
        lines.extend(f"  {warning}" for warning in result.warnings)
        lines.append("")

    if result.valid and not result.warnings:
        lines.append("All checks passed - no issues found")
    elif result.valid:
        lines.append("Validation passed with warnings")
    else:
        lines.append(f"Validation failed with {len(result.errors)} error(s)")

    return "\n".join(lines)
