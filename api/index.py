"""
FastAPI wrapper for the Blog SEO Dashboard - Vercel Serverless Function.

This module exposes blog listing, SEO updates, keyword suggestions,
Search Console data and content analysis as a REST API.

Collaborators (blog store, suggestion client, Search Console client) are
created once in create_app() and kept on app.state; route handlers pull
them from the request instead of module globals.
"""

import logging
import os
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blog_seo_dashboard import __version__
from blog_seo_dashboard.analysis import InvalidInputError, analyze_blocks, analyze_content
from blog_seo_dashboard.blog_store import (
    BlogNotFoundError,
    BlogStore,
    BlogStoreError,
    InMemoryBlogStore,
    load_blogs,
)
from blog_seo_dashboard.config import AnalyzerConfig
from blog_seo_dashboard.content_sources import ContentExtractionError, extract_blog_text
from blog_seo_dashboard.search_console import SearchConsoleClient, SearchConsoleError
from blog_seo_dashboard.suggestions_client import GoogleSuggestionsClient, SuggestionError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class SeoUpdateRequest(BaseModel):
    """PATCH body for a blog: the full replacement `seo` document."""
    seo: dict[str, Any] = Field(..., description="SEO document to store on the blog")


class AnalyzeRequest(BaseModel):
    """Request model for content analysis.

    Provide either raw `content` or structured `blocks`.
    """
    content: Optional[Any] = Field(None, description="Raw content to analyze")
    blocks: Optional[list[Any]] = Field(None, description="Structured content blocks")
    max_secondary: int = Field(3, ge=0, description="Maximum secondary keywords to suggest")


class KeywordCandidateResponse(BaseModel):
    keyword: str
    density: float
    occurrences: int
    relevance: float


class SuggestionsResponse(BaseModel):
    primary: list[str]
    secondary: list[str]


class AnalysisResponse(BaseModel):
    """Response model for analysis results."""
    keywords: list[KeywordCandidateResponse]
    readability: float
    readability_label: str
    suggestions: SuggestionsResponse


def _error(status_code: int, message: str, details: Optional[str] = None) -> HTTPException:
    detail: dict[str, str] = {"error": message}
    if details:
        detail["details"] = details
    return HTTPException(status_code=status_code, detail=detail)


def _analysis_response(result) -> dict[str, Any]:
    data = result.to_dict()
    data["readability_label"] = result.readability_label
    return data


def _default_store() -> BlogStore:
    """Seed an in-memory store from BLOG_DATA_PATH when set."""
    data_path = os.environ.get("BLOG_DATA_PATH")
    if data_path:
        return InMemoryBlogStore(load_blogs(data_path))
    return InMemoryBlogStore()


def create_app(
    store: Optional[BlogStore] = None,
    suggestions: Optional[GoogleSuggestionsClient] = None,
    search_console: Optional[SearchConsoleClient] = None,
) -> FastAPI:
    """Build the API with explicitly provided collaborators."""
    app = FastAPI(
        title="Blog SEO Dashboard API",
        description="Blog keyword research: content analysis, autocomplete suggestions and Search Console data",
        version=__version__,
    )

    # Enable CORS for all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else _default_store()
    app.state.suggestions = suggestions or GoogleSuggestionsClient()
    app.state.search_console = search_console or SearchConsoleClient()

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/api/blogs")
    def list_blogs(request: Request):
        """List all blogs with their content and SEO document."""
        try:
            blogs = request.app.state.store.list_blogs()
        except BlogStoreError as e:
            logger.error(f"Error fetching blogs: {e}")
            raise _error(500, "Failed to fetch blogs", str(e))
        return [blog.to_dict(include_slug=False) for blog in blogs]

    @app.get("/api/blogs/{blog_id}")
    def get_blog(blog_id: str, request: Request):
        """Fetch a single blog."""
        try:
            blog = request.app.state.store.get_blog(blog_id)
        except BlogNotFoundError:
            raise _error(404, "Blog not found")
        except BlogStoreError as e:
            logger.error(f"Error fetching blog: {e}")
            raise _error(500, "Failed to fetch blog", str(e))
        return blog.to_dict()

    @app.patch("/api/blogs/{blog_id}")
    def update_blog(blog_id: str, body: SeoUpdateRequest, request: Request):
        """Replace a blog's SEO document."""
        try:
            blog = request.app.state.store.update_seo(blog_id, body.seo)
        except BlogNotFoundError:
            raise _error(404, "Blog not found")
        except BlogStoreError as e:
            logger.error(f"Error updating blog: {e}")
            raise _error(500, "Failed to update blog", str(e))
        return blog.to_dict()

    @app.get("/api/blogs/{blog_id}/analysis", response_model=AnalysisResponse)
    def analyze_blog(blog_id: str, request: Request, max_secondary: int = Query(5, ge=0)):
        """Run the content keyword analyzer on a stored blog."""
        try:
            blog = request.app.state.store.get_blog(blog_id)
            text = extract_blog_text(blog)
            result = analyze_content(text, AnalyzerConfig(max_secondary=max_secondary))
        except BlogNotFoundError:
            raise _error(404, "Blog not found")
        except BlogStoreError as e:
            logger.error(f"Error fetching blog for analysis: {e}")
            raise _error(500, "Failed to fetch blog", str(e))
        except (ContentExtractionError, InvalidInputError) as e:
            raise _error(400, "Could not analyze blog content", str(e))
        return _analysis_response(result)

    @app.get("/api/google-suggestions")
    def google_suggestions(
        request: Request,
        primaryQuery: Optional[str] = None,
        secondaryQuery: Optional[str] = None,
    ):
        """Autocomplete suggestions for a primary and a secondary seed keyword."""
        if not primaryQuery or not secondaryQuery:
            raise _error(400, "Both primary and secondary query parameters are required")
        try:
            result = request.app.state.suggestions.fetch_suggestions(primaryQuery, secondaryQuery)
        except SuggestionError as e:
            raise _error(400, str(e))
        except Exception as e:
            logger.error(f"Error in Google suggestions API: {e}")
            raise _error(500, "Failed to fetch suggestions")
        return result.to_dict()

    @app.get("/api/search-console")
    def search_console_data(request: Request, siteUrl: Optional[str] = None):
        """Keyword/page performance rows for a site."""
        if not siteUrl:
            raise _error(400, "Site URL is required")
        try:
            report = request.app.state.search_console.fetch_keywords(siteUrl)
        except SearchConsoleError as e:
            raise _error(500, "Failed to fetch Search Console data", str(e))
        return report.to_dict()

    @app.post("/api/analyze", response_model=AnalysisResponse)
    def analyze(body: AnalyzeRequest):
        """Analyze raw content or structured blocks."""
        config = AnalyzerConfig(max_secondary=body.max_secondary)
        try:
            if body.blocks is not None:
                result = analyze_blocks(body.blocks, config=config)
            else:
                result = analyze_content(body.content, config=config)
        except InvalidInputError as e:
            raise _error(400, str(e))
        return _analysis_response(result)

    @app.get("/api/info")
    async def api_info():
        """Get API information."""
        return {
            "name": "Blog SEO Dashboard API",
            "version": __version__,
            "endpoints": {
                "GET /api/health": "Health check",
                "GET /api/blogs": "List blogs",
                "GET /api/blogs/{id}": "Fetch one blog",
                "PATCH /api/blogs/{id}": "Replace a blog's SEO document",
                "GET /api/blogs/{id}/analysis": "Analyze a blog's content",
                "GET /api/google-suggestions": "Autocomplete keyword suggestions",
                "GET /api/search-console": "Search Console keyword data",
                "POST /api/analyze": "Analyze content",
            },
        }

    return app


app = create_app()
