#!/usr/bin/env python3
"""
Validate search lexicon data against the resource catalog.

Checks that every concept mapping names resources that exist, prints a
report plus a per-category breakdown of the catalog, and exits non-zero
on errors so it can gate a build.

Usage:
    # From project root, with venv active:
    PYTHONPATH=src python scripts/validate_search_data.py

    # Validate a specific catalog file:
    PYTHONPATH=src python scripts/validate_search_data.py --catalog data/resources.json

    # Treat warnings as failures too:
    PYTHONPATH=src python scripts/validate_search_data.py --strict
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from config.settings import get_settings
from core.logging import configure_logging
from search.catalog import load_catalog
from search.validation import get_validation_report, validate_concept_mappings


def print_catalog_summary(resources) -> None:
    categories = Counter(r.category or "(none)" for r in resources)
    print(f"Total resources: {len(resources)}")
    print("\nCategories:")
    for category, count in categories.most_common():
        print(f"  {category}: {count}")

    if resources:
        avg_len = round(sum(len(r.description or "") for r in resources) / len(resources))
        print(f"\nAvg description length: {avg_len} chars")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate search concept mappings against the catalog")
    parser.add_argument("--catalog", type=str, help="Catalog JSON path (default: CATALOG_PATH setting)")
    parser.add_argument("--strict", action="store_true", help="Fail on warnings as well as errors")
    args = parser.parse_args(argv)

    configure_logging(json_logs=False, log_level="WARNING")

    catalog_path = Path(args.catalog) if args.catalog else get_settings().catalog_path
    resources = load_catalog(catalog_path)

    print(f"Catalog: {catalog_path}\n")
    print_catalog_summary(resources)
    print()
    print(get_validation_report(resources))

    result = validate_concept_mappings(resources)
    if not result.valid:
        return 1
    if args.strict and result.warnings:
        print(f"\n--strict: failing on {len(result.warnings)} warning(s)")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
