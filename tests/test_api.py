"""
Tests for the FastAPI server
"""
from unittest.mock import patch

import pytest


@pytest.fixture
def parse_service(mock_openai_client):
    """Configured parse service backed by the mock OpenAI client."""
    from search.parse_service import ParseQueryService

    service = ParseQueryService(api_key="sk-test")
    service._client = mock_openai_client
    return service


@pytest.fixture
def offline_parser():
    """Patch the search route's parser factory to an unconfigured parser."""
    from search.query_parser import LLMQueryParser

    with patch("search.hybrid_search.create_query_parser", return_value=LLMQueryParser(transport=None)):
        yield


class TestHealthEndpoints:
    """Tests for health check endpoints"""

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "design-directory-search"}

    def test_detailed_health(self, client):
        data = client.get("/health/detailed").json()

        assert data["status"] == "healthy"
        assert data["checks"]["catalog"]["resources"] == 9
        assert "query_parser" in data["checks"]

    def test_ready_and_live(self, client):
        assert client.get("/ready").json() == {"status": "ready"}
        assert client.get("/live").json() == {"status": "alive"}

    def test_not_ready_with_empty_catalog(self, client):
        from search.catalog import set_catalog

        set_catalog([])

        assert client.get("/ready").json() == {"status": "not_ready", "reason": "catalog_empty"}
        assert client.get("/health/detailed").json()["status"] == "degraded"

    def test_request_id_header(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


class TestSearchEndpoint:
    """Tests for POST /api/search"""

    def test_simple_query(self, client, offline_parser):
        response = client.post("/api/search", json={"query": "figma"})

        assert response.status_code == 200
        data = response.json()
        assert data["results"][0]["resource"]["name"] == "Figma"
        assert data["results"][0]["matchReasons"][0] == "exact name match"
        assert data["metadata"]["originalQuery"] == "figma"
        assert data["isLlmEnhanced"] is False
        assert data["aiResponse"]["highlight"] == "Figma"

    def test_complex_query_without_llm(self, client, offline_parser):
        response = client.post("/api/search", json={"query": "free design tools for teams"})

        data = response.json()
        assert data["parseSource"] == "fallback"
        assert data["metadata"]["appliedFilters"]["pricing"] == ["Free"]
        assert all(r["resource"]["pricing"] == "Free" for r in data["results"])

    def test_explicit_hard_filters(self, client, offline_parser):
        response = client.post("/api/search", json={
            "query": "design",
            "enableLlm": False,
            "hardFilters": {"categories": ["NonExistentCategory"]},
        })

        data = response.json()
        assert data["results"] == []
        assert data["metadata"]["quality"] == "fallback"
        assert data["metadata"]["filteredPoolSize"] == 0

    def test_empty_query(self, client, offline_parser):
        data = client.post("/api/search", json={"query": ""}).json()

        assert data["results"] == []
        assert data["aiResponse"]["message"] == ""

    @pytest.mark.parametrize("body", [
        {},
        {"query": "x" * 1001},
        {"query": "figma", "minResults": 10, "maxResults": 5},
    ])
    def test_invalid_request(self, client, body):
        assert client.post("/api/search", json=body).status_code == 422


class TestParseQueryEndpoint:
    """Tests for POST /api/search/parse-query"""

    def test_success(self, client, parse_service):
        with patch("api.routes.search.get_parse_service", return_value=parse_service):
            response = client.post("/api/search/parse-query", json={"query": "free tools"})

        assert response.status_code == 200
        data = response.json()
        assert data["intent"] == "filter"
        assert data["filters"]["pricing"] == ["Free"]
        assert data["semanticTerms"] == ["tools"]
        assert "s-maxage=3600" in response.headers["Cache-Control"]

    def test_invalid_json(self, client):
        response = client.post(
            "/api/search/parse-query",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    @pytest.mark.parametrize("body", [{}, {"query": ""}, {"query": 42}, ["free tools"]])
    def test_invalid_query(self, client, body):
        response = client.post("/api/search/parse-query", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid query parameter"}

    def test_query_too_long(self, client):
        response = client.post("/api/search/parse-query", json={"query": "x" * 1001})

        assert response.status_code == 400
        assert response.json() == {"error": "Query too long (max 1000 characters)"}

    def test_not_configured(self, client):
        from search.parse_service import ParseQueryService

        with patch("api.routes.search.get_parse_service", return_value=ParseQueryService(api_key="")):
            response = client.post("/api/search/parse-query", json={"query": "free tools"})

        assert response.status_code == 500
        assert response.json() == {"error": "API key not configured"}

    def test_llm_failure_returns_fallback(self, client, parse_service):
        parse_service._client.chat.completions.create.side_effect = TimeoutError("slow")

        with patch("api.routes.search.get_parse_service", return_value=parse_service):
            response = client.post("/api/search/parse-query", json={"query": "mood board tools"})

        assert response.status_code == 200
        data = response.json()
        assert data["confidence"] == "low"
        assert data["semanticTerms"] == ["mood board tools"]
        assert data["error"] == "LLM parsing failed"

    def test_rate_limited(self, client, monkeypatch):
        import core.rate_limit as rate_limit

        monkeypatch.setattr(rate_limit, "_parse_limiter", rate_limit.RateLimiter(per_minute=1, per_day=10))
        headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}

        client.post("/api/search/parse-query", json={}, headers=headers)
        response = client.post("/api/search/parse-query", json={}, headers=headers)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        assert response.json()["confidence"] == "low"
        assert "too many requests per minute" in response.json()["error"]

        other = client.post("/api/search/parse-query", json={}, headers={"X-Forwarded-For": "198.51.100.1"})
        assert other.status_code == 400


class TestSuggestionsEndpoint:
    """Tests for GET /api/search/suggestions"""

    def test_suggestions(self, client):
        response = client.get("/api/search/suggestions", params={"q": "de"})

        assert response.status_code == 200
        assert response.json() == {"query": "de", "suggestions": ["Designer News", "design", "code"]}

    def test_limit(self, client):
        data = client.get("/api/search/suggestions", params={"q": "de", "limit": 1}).json()

        assert data["suggestions"] == ["Designer News"]

    def test_limit_bounds(self, client):
        assert client.get("/api/search/suggestions", params={"q": "de", "limit": 0}).status_code == 422
