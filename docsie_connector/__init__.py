"""
Docsie Connector: syncs Docsie documentation into a Maven AGI knowledge base.

Fetches articles from the Docsie API, converts their block content to
Markdown and uploads them to Maven in batches.
"""

__version__ = "1.0.0"

# Import main components
from .config import ConfigManager
from .docsie import DocsieClient, RateLimiter, doc_to_markdown
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ConnectorError,
    DocsieApiError,
    MavenApiError,
)
from .maven import MavenClient, MavenUploader, transform_to_maven_format
from .sync import DocsieSync, run_validation
from .utils import RetryConfig, with_retry

__all__ = [
    "ConfigManager",
    "DocsieClient",
    "RateLimiter",
    "doc_to_markdown",
    "ApiError",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectorError",
    "DocsieApiError",
    "MavenApiError",
    "MavenClient",
    "MavenUploader",
    "transform_to_maven_format",
    "DocsieSync",
    "run_validation",
    "RetryConfig",
    "with_retry",
]
