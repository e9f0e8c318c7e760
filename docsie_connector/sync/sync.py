"""
Docsie sync orchestrator.

Fetches articles from Docsie, transforms them to Maven format and uploads
them to a Maven knowledge base.
"""

import logging
import time
from typing import Iterable, List, Optional

from ..docsie.client import DocsieClient
from ..maven.transform import transform_to_maven_format
from ..maven.uploader import MavenUploader
from ..models import DocsieArticle, SyncResult


class DocsieSync:
    """
    End-to-end driver for one sync run.
    """

    def __init__(self, docsie_client: DocsieClient, uploader: MavenUploader,
                 workspace_ids: Optional[Iterable[str]] = None):
        """
        Args:
            docsie_client: Source API client
            uploader: Destination uploader
            workspace_ids: Restrict the sync to these workspaces (all if empty)
        """
        self.docsie_client = docsie_client
        self.uploader = uploader
        self.workspace_ids = set(workspace_ids or [])

    def sync_all(self) -> SyncResult:
        """
        Sync every article with content from Docsie to Maven.

        Fetch errors propagate and abort the run. Upload failures are
        counted in the result instead.

        Returns:
            SyncResult with counts, per-document errors and duration
        """
        start = time.monotonic()
        result = SyncResult()

        try:
            self._run(result)
        finally:
            result.duration_ms = int((time.monotonic() - start) * 1000)

        return result

    def _run(self, result: SyncResult) -> None:
        logging.info("Fetching workspaces from Docsie...")
        workspaces = self.docsie_client.get_workspaces()
        if self.workspace_ids:
            workspaces = [ws for ws in workspaces if ws.id in self.workspace_ids]
        result.workspaces = len(workspaces)
        logging.info(f"Found {len(workspaces)} workspace(s)")

        logging.info("Fetching all articles...")
        articles = self.docsie_client.get_articles()
        if self.workspace_ids:
            articles = [article for article in articles if article.workspace in self.workspace_ids]
        logging.info(f"Found {len(articles)} articles")

        with_content = filter_articles_with_content(articles)
        result.articles = len(with_content)
        result.skipped = len(articles) - len(with_content)

        if result.skipped:
            logging.info(f"Skipped {result.skipped} articles with no content")

        if not with_content:
            logging.info("No articles with content to sync")
            return

        logging.info(f"Articles to sync: {len(with_content)}")

        logging.info("Transforming articles to Maven format...")
        documents = [transform_to_maven_format(article) for article in with_content]

        logging.info("Uploading to Maven...")
        upload_result = self.uploader.upload(documents)

        result.uploaded = upload_result.success
        result.failed = upload_result.failed
        result.errors = upload_result.errors

        logging.info(
            f"Sync complete: {result.uploaded} uploaded, {result.failed} failed, "
            f"{result.skipped} skipped"
        )


def filter_articles_with_content(articles: Iterable[DocsieArticle]) -> List[DocsieArticle]:
    """Keep only articles that have at least one content block."""
    return [article for article in articles if article.has_content]
