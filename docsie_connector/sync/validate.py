"""
Pre-sync validation.

Checks connectivity and credentials for both APIs and counts resources
before a first sync.
"""

import logging
from typing import Optional

from ..docsie.client import DocsieClient
from ..maven.client import MavenClient
from ..models import DocsieValidationResult, MavenValidationResult, ValidationResult


def validate_docsie_connection(client: DocsieClient) -> DocsieValidationResult:
    """
    Validate the Docsie connection and count workspaces and articles.

    Errors are reported in the result rather than raised.
    """
    try:
        logging.info("Validating Docsie connection...")

        workspaces = client.get_workspaces()
        logging.info(f"Found {len(workspaces)} workspace(s)")
        for workspace in workspaces:
            logging.info(f"  {workspace.name} ({workspace.id})")

        articles = client.get_articles()
        with_content = sum(1 for article in articles if article.has_content)
        logging.info(f"Total articles: {len(articles)} ({with_content} with content)")

        return DocsieValidationResult(
            success=True,
            workspaces=len(workspaces),
            articles=len(articles),
        )
    except Exception as e:
        logging.error(f"Docsie validation failed: {e}")
        return DocsieValidationResult(success=False, error=str(e))


def validate_maven_connection(client: MavenClient, knowledge_base_id: str) -> MavenValidationResult:
    """
    Validate the Maven connection by looking up the target knowledge base.
    """
    try:
        logging.info("Validating Maven connection...")

        knowledge_base = client.get_knowledge_base(knowledge_base_id)
        logging.info(f"Knowledge base: {knowledge_base.name}")

        return MavenValidationResult(success=True, knowledge_base_name=knowledge_base.name)
    except Exception as e:
        logging.error(f"Maven validation failed: {e}")
        return MavenValidationResult(success=False, error=str(e))


def run_validation(docsie_client: DocsieClient, maven_client: MavenClient,
                   knowledge_base_id: str,
                   expected_document_count: Optional[int] = None) -> ValidationResult:
    """
    Run both connection checks and decide whether a sync can proceed.

    Args:
        docsie_client: Source API client
        maven_client: Destination API client
        knowledge_base_id: Target knowledge base
        expected_document_count: Article count to compare against, if known

    Returns:
        ValidationResult; ``ready`` is True only when both checks pass
    """
    logging.info("=== Running Pre-Sync Validation ===")

    docsie = validate_docsie_connection(docsie_client)
    maven = validate_maven_connection(maven_client, knowledge_base_id)
    ready = docsie.success and maven.success

    count_mismatch = None
    if expected_document_count is not None and docsie.articles is not None:
        count_mismatch = docsie.articles != expected_document_count
        if count_mismatch:
            logging.warning(
                f"Expected {expected_document_count} documents, found {docsie.articles}"
            )

    logging.info("=== Validation Summary ===")
    logging.info(f"Docsie: {'OK' if docsie.success else 'FAILED'}")
    logging.info(f"Maven: {'OK' if maven.success else 'FAILED'}")
    logging.info(f"Ready to sync: {'YES' if ready else 'NO'}")

    return ValidationResult(
        docsie=docsie,
        maven=maven,
        ready=ready,
        expected_count=expected_document_count,
        count_mismatch=count_mismatch,
    )
