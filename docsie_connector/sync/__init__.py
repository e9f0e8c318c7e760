"""Sync orchestration and pre-sync validation."""

from .sync import DocsieSync, filter_articles_with_content
from .validate import run_validation, validate_docsie_connection, validate_maven_connection

__all__ = [
    "DocsieSync",
    "filter_articles_with_content",
    "run_validation",
    "validate_docsie_connection",
    "validate_maven_connection",
]
