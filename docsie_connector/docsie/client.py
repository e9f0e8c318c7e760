"""
Docsie API client.

Handles authentication, pagination and rate limiting for reads against the
Docsie v2 API.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import DEFAULT_DOCSIE_BASE_URL
from ..errors import AuthenticationError, ConfigurationError, DocsieApiError
from ..models import (
    DocsieArticle,
    DocsieBook,
    DocsieDocumentation,
    DocsiePage,
    DocsieWorkspace,
)
from .rate_limit import RateLimiter

DEFAULT_MAX_CONCURRENT = 5
DEFAULT_MIN_TIME = 0.2
DEFAULT_PAGE_SIZE = 100


class DocsieClient:
    """
    Read-only client for the Docsie API.

    Every request carries the bearer token and goes through a shared
    RateLimiter.
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        min_time: float = DEFAULT_MIN_TIME,
        timeout: float = 30.0,
        page_size: int = DEFAULT_PAGE_SIZE,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the Docsie client.

        Args:
            api_key: Docsie API key (required)
            base_url: API base URL (defaults to the public v2 endpoint)
            max_concurrent: Maximum concurrent requests
            min_time: Minimum seconds between requests
            timeout: Per-request timeout in seconds
            page_size: Default page size for paginated endpoints
            http_client: Preconfigured httpx client, mainly for tests

        Raises:
            ConfigurationError: If the API key is empty
        """
        if not api_key:
            raise ConfigurationError("Docsie API key is required")

        self._api_key = api_key
        self.base_url = (base_url or DEFAULT_DOCSIE_BASE_URL).rstrip("/")
        self.page_size = page_size
        self.limiter = RateLimiter(max_concurrent=max_concurrent, min_time=min_time)
        self.client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        self.client.close()

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make a rate-limited GET request and return the parsed JSON body.

        Raises:
            AuthenticationError: On 401/403
            DocsieApiError: On any other non-2xx response
            httpx.TransportError: On network failure (not wrapped)
        """
        return self.limiter.schedule(lambda: self._fetch_with_auth(endpoint, params))

    def _fetch_with_auth(self, endpoint: str, params: Optional[Dict[str, Any]]) -> Any:
        response = self.client.get(
            f"{self.base_url}{endpoint}",
            params=params,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
        )

        if not response.is_success:
            error_cls = AuthenticationError if response.status_code in (401, 403) else DocsieApiError
            raise error_cls(response.status_code, response.reason_phrase, endpoint)

        return response.json()

    def fetch_all_paginated(
        self,
        endpoint: str,
        limit: Optional[int] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch every item of a paginated endpoint.

        Uses limit/offset paging and keeps requesting until the server
        reports no ``next`` page.

        Args:
            endpoint: Endpoint path, e.g. "/articles/"
            limit: Page size (defaults to the client page size)
            params: Extra query parameters (filters)

        Returns:
            All items, in server order
        """
        limit = limit or self.page_size
        items: List[Dict[str, Any]] = []
        offset = 0

        while True:
            query = dict(params or {})
            query.update({"limit": limit, "offset": offset})

            page = DocsiePage.model_validate(self.get(endpoint, params=query))
            items.extend(page.results)
            logging.info(f"{endpoint} offset {offset}: fetched {len(page.results)} items")

            if not page.next:
                break
            offset += limit

        return items

    def get_workspaces(self) -> List[DocsieWorkspace]:
        """Fetch all workspaces."""
        return [DocsieWorkspace.model_validate(item) for item in self.fetch_all_paginated("/workspaces/")]

    def get_documentation(self) -> List[DocsieDocumentation]:
        """Fetch all documentation shelves."""
        return [DocsieDocumentation.model_validate(item) for item in self.fetch_all_paginated("/documentation/")]

    def get_books(self, include_deleted: bool = False) -> List[DocsieBook]:
        """Fetch books, skipping soft-deleted ones unless asked otherwise."""
        params = None if include_deleted else {"deleted": "false"}
        return [DocsieBook.model_validate(item) for item in self.fetch_all_paginated("/books/", params=params)]

    def get_articles(self, book_id: Optional[str] = None, limit: Optional[int] = None) -> List[DocsieArticle]:
        """
        Fetch articles across all workspaces, optionally for a single book.
        """
        params = {"book": book_id} if book_id else None
        return [
            DocsieArticle.model_validate(item)
            for item in self.fetch_all_paginated("/articles/", limit=limit, params=params)
        ]

    def get_article(self, article_id: str) -> DocsieArticle:
        """Fetch a single article with its content."""
        return DocsieArticle.model_validate(self.get(f"/articles/{article_id}/"))
