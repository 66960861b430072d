# -*- coding: utf-8 -*-
"""
Tests for the REST API.

Routes are exercised through FastAPI's TestClient with an in-memory blog
store and fake suggestion / Search Console collaborators.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

# Add api directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

from index import create_app

from blog_seo_dashboard.blog_store import BlogStoreError
from blog_seo_dashboard.models import SearchConsoleReport, SearchConsoleRow
from blog_seo_dashboard.search_console import SearchConsoleError
from blog_seo_dashboard.suggestions_client import SuggestionError


@pytest.fixture
def search_console() -> Mock:
    client = Mock()
    client.fetch_keywords.return_value = SearchConsoleReport(
        keywords=[SearchConsoleRow("sourdough bread", "https://example.com/sourdough", 4, 120, 0.033, 9.5)],
        total_rows=1,
    )
    return client


@pytest.fixture
def client(blog_store, fake_provider, search_console) -> TestClient:
    app = create_app(store=blog_store, suggestions=fake_provider, search_console=search_console)
    return TestClient(app)


class TestBlogRoutes:
    """Tests for blog listing and SEO updates."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_blogs(self, client):
        """Test that the listing omits slugs."""
        response = client.get("/api/blogs")

        assert response.status_code == 200
        blogs = response.json()
        assert [b["id"] for b in blogs] == ["1", "2", "3"]
        assert set(blogs[0]) == {"id", "title", "content", "seo"}

    def test_get_blog(self, client):
        response = client.get("/api/blogs/3")

        assert response.status_code == 200
        assert response.json()["slug"] == "pizza-dough"

    def test_get_missing_blog(self, client):
        response = client.get("/api/blogs/404")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Blog not found"

    def test_patch_blog_seo(self, client, blog_store):
        """Test replacing the seo document."""
        seo = {"primaryKeywords": ["sourdough bread"], "primaryKeywordsNew": ["sourdough bread recipe"]}

        response = client.patch("/api/blogs/1", json={"seo": seo})

        assert response.status_code == 200
        assert response.json()["seo"] == seo
        assert blog_store.get_blog("1").seo == seo

    def test_patch_missing_blog(self, client):
        response = client.patch("/api/blogs/404", json={"seo": {}})
        assert response.status_code == 404

    def test_patch_requires_seo(self, client):
        response = client.patch("/api/blogs/1", json={"title": "nope"})
        assert response.status_code == 422


class TestSuggestionRoutes:
    """Tests for the keyword suggestion endpoint."""

    def test_suggestions(self, client, fake_provider):
        response = client.get(
            "/api/google-suggestions",
            params={"primaryQuery": "sourdough bread", "secondaryQuery": "starter"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "primaryKeywords": ["sourdough bread recipe easy"],
            "secondaryKeywords": ["starter tips", "starter guide"],
        }
        assert fake_provider.calls == [("sourdough bread", "starter")]

    def test_suggestions_missing_param(self, client):
        response = client.get("/api/google-suggestions", params={"primaryQuery": "bread"})

        assert response.status_code == 400
        assert "required" in response.json()["detail"]["error"]

    def test_suggestions_provider_error(self, client, fake_provider):
        fake_provider.errors["bread"] = RuntimeError("boom")

        response = client.get(
            "/api/google-suggestions",
            params={"primaryQuery": "bread", "secondaryQuery": "flour"},
        )

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "Failed to fetch suggestions"

    def test_suggestions_validation_error(self, client, fake_provider):
        fake_provider.errors["bread"] = SuggestionError("bad seed")

        response = client.get(
            "/api/google-suggestions",
            params={"primaryQuery": "bread", "secondaryQuery": "flour"},
        )

        assert response.status_code == 400


class TestSearchConsoleRoutes:
    def test_search_console(self, client, search_console):
        response = client.get("/api/search-console", params={"siteUrl": "https://example.com/"})

        assert response.status_code == 200
        data = response.json()
        assert data["totalRows"] == 1
        assert data["keywords"][0]["keyword"] == "sourdough bread"
        search_console.fetch_keywords.assert_called_once_with("https://example.com/")

    def test_search_console_requires_site(self, client):
        response = client.get("/api/search-console")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Site URL is required"

    def test_search_console_error(self, client, search_console):
        search_console.fetch_keywords.side_effect = SearchConsoleError("quota exceeded")

        response = client.get("/api/search-console", params={"siteUrl": "https://example.com/"})

        assert response.status_code == 500
        assert response.json()["detail"]["details"] == "quota exceeded"


class TestAnalyzeRoutes:
    """Tests for content analysis endpoints."""

    def test_analyze_content(self, client, sample_content):
        response = client.post("/api/analyze", json={"content": sample_content})

        assert response.status_code == 200
        data = response.json()
        assert data["suggestions"]["primary"] == ["quick brown fox", "the quick brown", "brown fox"]
        assert data["suggestions"]["secondary"] == ["brown", "quick", "fast"]
        assert data["readability_label"] in {
            "Very Easy", "Easy", "Fairly Easy", "Standard", "Fairly Difficult", "Difficult",
        }

    def test_analyze_max_secondary(self, client, sample_content):
        response = client.post("/api/analyze", json={"content": sample_content, "max_secondary": 5})
        assert len(response.json()["suggestions"]["secondary"]) == 5

    def test_analyze_blocks(self, client):
        response = client.post(
            "/api/analyze",
            json={"blocks": [{"text": "Sourdough starter."}, {"text": "Sourdough starter!"}]},
        )

        assert response.status_code == 200
        assert response.json()["suggestions"]["primary"][0] == "sourdough starter"
        assert response.json()["keywords"][0]["occurrences"] == 2

    @pytest.mark.parametrize("body", [
        {"content": ""},
        {"content": "?!"},
        {"content": 42},
        {"content": ["not", "text"]},
        {},
    ])
    def test_analyze_invalid(self, client, body):
        response = client.post("/api/analyze", json=body)
        assert response.status_code == 400

    def test_analyze_stored_blog(self, client):
        response = client.get("/api/blogs/1/analysis")

        assert response.status_code == 200
        keywords = [k["keyword"] for k in response.json()["keywords"]]
        assert "sourdough bread" in keywords
        assert "p" not in keywords

    def test_analyze_missing_blog(self, client):
        assert client.get("/api/blogs/404/analysis").status_code == 404

    def test_analyze_non_string_content_error_body(self, client):
        """Test that non-text content is reported as invalid input."""
        response = client.post("/api/analyze", json={"content": 42})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Invalid content format"

    def test_analyze_store_failure(self, fake_provider, search_console):
        """Test that store errors keep the structured error body."""
        store = Mock()
        store.get_blog.side_effect = BlogStoreError("database offline")
        app = create_app(store=store, suggestions=fake_provider, search_console=search_console)

        response = TestClient(app).get("/api/blogs/1/analysis")

        assert response.status_code == 500
        assert response.json()["detail"] == {
            "error": "Failed to fetch blog",
            "details": "database offline",
        }
