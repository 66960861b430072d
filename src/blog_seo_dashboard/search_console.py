"""
Search Console integration.

Fetches (query, page) performance rows for a verified site using a
service account with read-only webmaster scope.
"""

import logging
from datetime import date
from typing import Any, Optional

from .config import SearchConsoleConfig
from .models import SearchConsoleReport, SearchConsoleRow

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/webmasters.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SearchConsoleError(Exception):
    """Raised when Search Console data cannot be fetched."""
    pass


def build_service(config: SearchConsoleConfig) -> Any:
    """Create an authorized searchconsole v1 service from service-account settings."""
    if not config.has_credentials:
        raise SearchConsoleError(
            "Search Console credentials missing. Set GOOGLE_CLIENT_EMAIL and "
            "GOOGLE_PRIVATE_KEY."
        )

    from google.oauth2 import service_account
    from googleapiclient.discovery import build

    try:
        credentials = service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": config.client_email,
                "private_key": config.private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )
    except ValueError as e:
        raise SearchConsoleError(f"Invalid service account credentials: {e}")

    return build("searchconsole", "v1", credentials=credentials, cache_discovery=False)


def parse_rows(rows: Optional[list[dict[str, Any]]]) -> list[SearchConsoleRow]:
    """Convert raw API rows (keys = [query, page]) into SearchConsoleRow objects."""
    parsed: list[SearchConsoleRow] = []
    for row in rows or []:
        keys = row.get("keys") or []
        parsed.append(SearchConsoleRow(
            keyword=keys[0] if len(keys) > 0 else "",
            page=keys[1] if len(keys) > 1 else "",
            clicks=row.get("clicks", 0),
            impressions=row.get("impressions", 0),
            ctr=row.get("ctr", 0.0),
            position=row.get("position", 0.0),
        ))
    return parsed


class SearchConsoleClient:
    """
    Client for the Search Console search analytics API.

    Pass `service` to reuse an existing googleapiclient resource; otherwise
    one is built lazily from `config` on first use.
    """

    def __init__(
        self,
        config: Optional[SearchConsoleConfig] = None,
        service: Any = None,
    ):
        self.config = config or SearchConsoleConfig.from_env()
        self._service = service

    @property
    def service(self) -> Any:
        if self._service is None:
            self._service = build_service(self.config)
        return self._service

    def build_query(self, end_date: Optional[date] = None) -> dict[str, Any]:
        """Request body for searchanalytics.query."""
        end = end_date or date.today()
        return {
            "startDate": self.config.start_date,
            "endDate": end.isoformat(),
            "dimensions": list(self.config.dimensions),
            "rowLimit": self.config.row_limit,
            "startRow": 0,
        }

    def fetch_keywords(self, site_url: str, end_date: Optional[date] = None) -> SearchConsoleReport:
        """
        Fetch keyword/page rows for a site.

        Args:
            site_url: Property URL as registered in Search Console.
            end_date: Last day of the window. Defaults to today.

        Returns:
            SearchConsoleReport with the parsed rows.

        Raises:
            SearchConsoleError: If site_url is empty or the API call fails.
        """
        if not site_url or not site_url.strip():
            raise SearchConsoleError("Site URL is required")

        body = self.build_query(end_date)
        try:
            response = self.service.searchanalytics().query(
                siteUrl=site_url, body=body
            ).execute()
        except SearchConsoleError:
            raise
        except Exception as e:
            logger.error(f"Search Console API Error: {e}")
            raise SearchConsoleError(f"Failed to fetch Search Console data: {e}")

        rows = parse_rows(response.get("rows"))
        return SearchConsoleReport(keywords=rows, total_rows=len(rows))
