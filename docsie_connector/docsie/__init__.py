"""Docsie source API: client, rate limiting and content conversion."""

from .client import DocsieClient
from .content import doc_to_markdown
from .rate_limit import RateLimiter

__all__ = ["DocsieClient", "RateLimiter", "doc_to_markdown"]
