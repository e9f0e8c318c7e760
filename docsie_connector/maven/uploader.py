"""
Maven knowledge document uploader.

Uploads documents in batches with progress logging. Each document is
retried with exponential backoff; a document that still fails is recorded
and the upload moves on.
"""

import logging
import time
from typing import Callable, List, Optional, Sequence

from ..models import MavenKnowledgeDocument, UploadError, UploadResult
from ..utils.retry import RetryConfig, retry_call
from .client import MavenClient

DEFAULT_BATCH_SIZE = 50


class MavenUploader:
    """
    Pushes transformed documents into one Maven knowledge base.
    """

    def __init__(self, client: MavenClient, knowledge_base_id: str,
                 batch_size: int = DEFAULT_BATCH_SIZE,
                 retry_config: Optional[RetryConfig] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            client: Maven client (anything with create_knowledge_document)
            knowledge_base_id: Target knowledge base
            batch_size: Documents per batch
            retry_config: Backoff settings per document
            sleep: Sleep function used between retries
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")

        self.client = client
        self.knowledge_base_id = knowledge_base_id
        self.batch_size = batch_size
        self.retry_config = retry_config or RetryConfig()
        self._sleep = sleep

    def upload(self, documents: Sequence[MavenKnowledgeDocument]) -> UploadResult:
        """
        Upload documents to the knowledge base in batches.

        Args:
            documents: Documents to upload

        Returns:
            UploadResult with success/failure counts and per-document errors
        """
        result = UploadResult(total=len(documents))

        if not documents:
            return result

        batches = self._batched(documents)

        for batch_num, batch in enumerate(batches, 1):
            logging.info(f"Batch {batch_num}/{len(batches)}: Uploading {len(batch)} documents...")

            for document in batch:
                try:
                    self._upload_one(document)
                    result.success += 1
                except Exception as e:
                    result.failed += 1
                    result.errors.append(UploadError(doc_id=document.reference_id, error=str(e)))
                    logging.error(f"[upload {document.reference_id}] permanently failed: {e}")

            logging.info(f"Batch {batch_num} complete: {result.success} success, {result.failed} failed")

        return result

    def _upload_one(self, document: MavenKnowledgeDocument) -> None:
        retry_call(
            lambda: self.client.create_knowledge_document(self.knowledge_base_id, document),
            f"upload {document.reference_id}",
            self.retry_config,
            sleep=self._sleep,
        )

    def _batched(self, documents: Sequence[MavenKnowledgeDocument]) -> List[Sequence[MavenKnowledgeDocument]]:
        return [documents[i:i + self.batch_size] for i in range(0, len(documents), self.batch_size)]
