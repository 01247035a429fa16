"""
Resource catalog loading.

The catalog is a JSON array of camelCase resource records. It is loaded
once per process and treated as read-only afterwards.
"""

import json
import threading
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from config.settings import get_settings
from core.logging import get_logger
from search.models import Resource

logger = get_logger(__name__)


def load_catalog(path: Union[str, Path]) -> List[Resource]:
    """
    Load resources from a JSON file.

    A missing file yields an empty catalog (search then returns empty,
    well-formed responses). Records that fail validation are skipped.

    Raises:
        ValueError: The file exists but is not a JSON array
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Catalog file not found, starting with an empty catalog", path=str(path))
        return []

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Catalog {path} must contain a JSON array of resources")

    resources: List[Resource] = []
    skipped = 0
    for index, record in enumerate(data):
        try:
            resources.append(Resource.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "Skipping invalid catalog record",
                index=index,
                error_count=e.error_count(),
                errors=[err["msg"] for err in e.errors()][:3],
            )

    logger.info("Loaded catalog", path=str(path), resources=len(resources), skipped=skipped)
    return resources


# =============================================================================
# Singleton
# =============================================================================

_catalog: Optional[List[Resource]] = None
_catalog_lock = threading.Lock()


def get_catalog() -> List[Resource]:
    """Get or load the configured catalog (thread-safe, loaded once)."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = load_catalog(get_settings().catalog_path)
    return _catalog


def set_catalog(resources: List[Resource]) -> None:
    """Replace the cached catalog (tests, warm starts from another source)."""
    global _catalog
    with _catalog_lock:
        _catalog = list(resources)


def reset_catalog() -> None:
    """Drop the cached catalog so the next get_catalog() reloads it."""
    global _catalog
    with _catalog_lock:
        _catalog = None
