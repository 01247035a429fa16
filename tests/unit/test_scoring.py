"""
Tests for relevance signals and the ResourceScorer.
"""

import pytest


def _score(resource, query, llm_concepts=None):
    from scoring.scorer import ResourceScorer, build_scoring_context

    return ResourceScorer().score(resource, build_scoring_context(query, llm_concepts))


class TestBuildScoringContext:
    """Tests for build_scoring_context."""

    def test_context_fields(self):
        from scoring.scorer import build_scoring_context

        ctx = build_scoring_context("  Free AI Tools ")

        assert ctx.query == "free ai tools"
        assert ctx.tokens == ("free", "ai", "tools")
        assert "ml" in ctx.expanded_terms
        assert ctx.matched_pricing == "Free"
        assert ctx.is_multi_term is True

    def test_llm_concepts_normalized(self):
        from scoring.scorer import build_scoring_context

        ctx = build_scoring_context("mood board", ["  Visual Inspiration ", "", "  "])

        assert ctx.llm_concepts == ("visual inspiration",)


class TestNameSignal:
    """Name match: exact > prefix > substring, at most one."""

    def test_exact(self, figma):
        result = _score(figma, "figma")

        assert "exact name match" in result.match_reasons
        assert "name starts with query" not in result.match_reasons

    def test_prefix(self, figma):
        result = _score(figma, "fig")

        assert "name starts with query" in result.match_reasons

    def test_substring(self, catalog):
        refactoring_ui = catalog[7]

        result = _score(refactoring_ui, "factoring")

        assert "name contains query" in result.match_reasons


class TestTagSignal:
    """Tag signals: exact, else partial, else synonym."""

    def test_exact_tag_each_match(self, figma):
        result = _score(figma, "design ui")

        assert "exact tag: design" in result.match_reasons
        assert "exact tag: ui" in result.match_reasons

    def test_partial_requires_four_chars(self, figma):
        assert "partial tag: prototyping" in _score(figma, "proto").match_reasons
        assert not any(r.startswith("partial tag") for r in _score(figma, "pro").match_reasons)

    def test_partial_skipped_after_exact(self, figma):
        result = _score(figma, "design prototyp")

        assert "exact tag: design" in result.match_reasons
        assert not any(r.startswith("partial tag") for r in result.match_reasons)

    def test_synonym_tag(self, catalog):
        """'pictures' is a synonym of 'photo'; Unsplash is tagged 'photos'."""
        unsplash = catalog[5]

        result = _score(unsplash, "pictures")

        assert any(r.startswith("synonym tag") for r in result.match_reasons)


class TestCategorySignal:
    """Category exact / partial and subcategory."""

    def test_exact_and_partial(self, catalog):
        cursor = catalog[1]

        result = _score(cursor, "ai")

        assert "category: AI" in result.match_reasons
        assert "category partial: AI" in result.match_reasons

    def test_subcategory(self, figma):
        result = _score(figma, "design")

        assert "subcategory: Design" in result.match_reasons


class TestOtherSignals:
    """Description, pricing, concept and LLM concept signals."""

    def test_description_requires_four_chars(self, catalog):
        coolors = catalog[6]

        assert "description contains query" in _score(coolors, "palette gen").match_reasons
        assert "description contains query" not in _score(coolors, "fas").match_reasons

    def test_pricing(self, catalog):
        penpot = catalog[3]

        result = _score(penpot, "free")

        assert "pricing: Free" in result.match_reasons

    def test_concept_boost(self, catalog):
        """'figma' detects the figma alternative concept, which names Penpot."""
        penpot = catalog[3]

        result = _score(penpot, "figma")

        assert "concept match" in result.match_reasons

    def test_llm_concept_single_credit(self, catalog):
        midjourney = catalog[2]

        result = _score(midjourney, "something", ["images", "text prompts", "art"])

        llm_hits = [r for r in result.match_reasons if r.startswith("llm concept")]
        assert llm_hits == ["llm concept: images"]


class TestFuzzySignal:
    """Fuzzy runs only while nothing else scored."""

    def test_typo_matches_by_fuzzy(self, figma):
        result = _score(figma, "figam")

        assert result.match_reasons[0] == "fuzzy name match"
        assert result.score >= 25

    @pytest.mark.parametrize("gravity", [0.0, 5.0])
    def test_typo_clears_threshold_at_any_gravity(self, figma, gravity):
        from config.constants import DEFAULT_SEARCH_CONFIG

        plain = figma.model_copy(update={"gravity_score": gravity, "featured": False})
        result = _score(plain, "figam")

        assert result.match_reasons == ["fuzzy name match"]
        assert result.score >= DEFAULT_SEARCH_CONFIG.RELEVANCE_THRESHOLD

    def test_fuzzy_skipped_when_scored(self, figma):
        result = _score(figma, "figma")

        assert "fuzzy name match" not in result.match_reasons


class TestMultipliers:
    """Gravity multiplier and featured bonus."""

    def test_exact_score_value(self, figma):
        from config.constants import DEFAULT_SCORING_WEIGHTS as W

        result = _score(figma, "figma")

        expected = W.NAME_EXACT * (1 + 0.95 * (W.GRAVITY_MULTIPLIER - 1)) + W.FEATURED_BONUS
        assert result.score == pytest.approx(expected)
        assert result.match_reasons[-1] == "featured"

    def test_no_relevance_no_score(self, figma):
        """Gravity and featured never create a score from nothing."""
        result = _score(figma, "zzqx")

        assert result.score == 0
        assert result.match_reasons == []

    def test_explain_breakdown(self, figma):
        from scoring.scorer import ResourceScorer, build_scoring_context

        breakdown = ResourceScorer().explain(figma, build_scoring_context("figma"))

        assert breakdown.resource_id == figma.id
        assert breakdown.base_score == 100
        assert breakdown.gravity_multiplier == pytest.approx(1.95)
        assert breakdown.featured_bonus == 10

    def test_score_all_drops_zero(self, catalog):
        from scoring.scorer import ResourceScorer, build_scoring_context

        results = ResourceScorer().score_all(catalog, build_scoring_context("figma"))

        assert all(r.score > 0 for r in results)
        assert results[0].resource.name == "Figma"

    def test_custom_signal_list(self, figma):
        """The scorer runs exactly the signals it is given."""
        from scoring.scorer import ResourceScorer, build_scoring_context
        from scoring.signals import Signal

        scorer = ResourceScorer(signals=[Signal("const", lambda resource, ctx: [(5.0, "const")])])
        result = scorer.score(figma, build_scoring_context("anything"))

        assert result.match_reasons == ["const", "featured"]
