"""
Tests for the response composer.
"""

import random

import pytest


def _meta(quality, **kwargs):
    from search.models import SearchMetadata

    return SearchMetadata(quality=quality, **kwargs)


def _scored(resource, score=100.0, reasons=None):
    from search.models import ScoredResult

    return ScoredResult(resource=resource, score=score, match_reasons=reasons or [])


class TestHelpers:
    """Tests for format_concept_name and truncate."""

    def test_format_concept_name(self):
        from search.response_composer import format_concept_name

        assert format_concept_name("vibe code") == "Vibe Code"
        assert format_concept_name("ai art") == "Ai Art"

    def test_truncate(self):
        from search.response_composer import truncate

        assert truncate("short") == "short"
        assert truncate("x" * 100) == "x" * 80 + "..."
        assert truncate("abc def", max_length=4) == "abc..."


class TestGenerateAIResponse:
    """Tests for generate_ai_response."""

    def test_no_results(self):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        response = generate_ai_response([], _meta(MatchQuality.FALLBACK, original_query="zzqx"))

        assert response.match_count == 0
        assert response.message.startswith('No resources found for "zzqx"')

    def test_high_with_concept(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[1]), _scored(catalog[2]), _scored(catalog[0])]
        metadata = _meta(
            MatchQuality.HIGH,
            original_query="vibe coding",
            detected_concepts=["vibe code"],
            direct_match_count=3,
        )

        response = generate_ai_response(results, metadata)

        assert response.message.startswith("Found 3 Vibe Code tools. AI-powered coding tools")
        assert response.highlight == "Cursor"

    def test_high_exact_name(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[0], reasons=["exact name match"]), _scored(catalog[3]), _scored(catalog[6])]
        metadata = _meta(MatchQuality.HIGH, original_query="figma", direct_match_count=3)

        response = generate_ai_response(results, metadata)

        assert response.message == "Found Figma - Collaborative interface design tool for teams."
        assert response.highlight == "Figma"

    def test_high_category_message(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[4]), _scored(catalog[0]), _scored(catalog[1])]
        metadata = _meta(MatchQuality.HIGH, original_query="showcase", direct_match_count=3)

        response = generate_ai_response(results, metadata)

        assert response.message == "Found 3 sources of design inspiration."

    def test_medium_tag_match(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[5], reasons=["synonym tag: photos"]), _scored(catalog[2])]
        metadata = _meta(MatchQuality.MEDIUM, original_query="pictures", direct_match_count=2)

        response = generate_ai_response(results, metadata)

        assert response.message == 'Found 2 resources related to "pictures".'
        assert response.highlight is None

    def test_medium_description_match(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[6], reasons=["description contains query"]), _scored(catalog[0])]
        metadata = _meta(MatchQuality.MEDIUM, original_query="palette", direct_match_count=2)

        response = generate_ai_response(results, metadata)

        assert response.message == 'Found 2 resources mentioning "palette".'

    def test_low_fuzzy_did_you_mean(self, catalog):
        """A typo recovers Figma through fuzzy matching."""
        from search.response_composer import generate_ai_response
        from search.semantic_search import semantic_search

        response = semantic_search(catalog, "figam")
        ai_response = generate_ai_response(response.results, response.metadata)

        assert ai_response.message == 'Did you mean "Figma"?'
        assert ai_response.highlight == "Figma"

    def test_low_single_result(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[7], score=30.0, reasons=["name contains query"])]
        metadata = _meta(MatchQuality.LOW, original_query="factoring", direct_match_count=1)

        response = generate_ai_response(results, metadata)

        assert response.message == 'Found Refactoring UI for "factoring".'

    def test_fallback_counts_direct_matches(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[1]), _scored(catalog[2], reasons=["category fallback"])]
        metadata = _meta(
            MatchQuality.FALLBACK,
            original_query="ml",
            matched_category="AI",
            direct_match_count=1,
        )

        response = generate_ai_response(results, metadata)

        assert response.message == "Showing 1 AI resources."
        assert response.match_count == 1

    def test_padding_alone_is_not_a_match(self):
        """Fallback padding with zero direct matches reports no results."""
        from search.models import MatchQuality, Resource
        from search.response_composer import generate_ai_response
        from search.semantic_search import semantic_search

        pool = [Resource(id=1, name="Foo", url="https://foo.example", category="AI", gravity_score=1.0)]
        response = semantic_search(pool, "ml")

        assert response.metadata.direct_match_count == 0
        assert response.metadata.quality == MatchQuality.FALLBACK
        assert len(response.results) == 1

        ai_response = generate_ai_response(response.results, response.metadata)

        assert ai_response.match_count == 0
        assert ai_response.message.startswith('No resources found for "ml"')

    def test_untracked_direct_count_uses_results(self, catalog):
        from search.models import MatchQuality
        from search.response_composer import generate_ai_response

        results = [_scored(catalog[6], score=30.0, reasons=["partial tag: color"])]
        response = generate_ai_response(results, _meta(MatchQuality.LOW, original_query="colr"))

        assert response.match_count == 1


class TestBrowseMessages:
    """Tests for welcome, category and filter messages."""

    def test_welcome_is_one_of_the_prompts(self):
        from search.response_composer import WELCOME_MESSAGES, generate_welcome_response

        response = generate_welcome_response(random.Random(7))

        assert response.message in WELCOME_MESSAGES
        assert response.match_count == 0

    @pytest.mark.parametrize("category,expected", [
        ("AI", "Showing 12 AI-powered tools for design, content creation, and automation."),
        ("Widgets", "Showing 12 resources in Widgets."),
    ])
    def test_category_response(self, category, expected):
        from search.response_composer import generate_category_response

        assert generate_category_response(category, 12).message == expected

    def test_filter_response(self):
        from search.response_composer import generate_filter_response

        response = generate_filter_response(category="Tools", sub_category="Design", pricing="Free", resource_count=4)

        assert response.message == "Showing 4 free design tools resources."
        assert generate_filter_response(resource_count=9).message == "Showing 9 all resources."
