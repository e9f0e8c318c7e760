"""
Maven AGI knowledge document models.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from mavenagi.commons import EntityIdBase
from mavenagi.knowledge import KnowledgeDocumentRequest
from pydantic import BaseModel, ConfigDict, Field


class MavenKnowledgeDocument(BaseModel):
    """
    A document ready to be created in a Maven knowledge base.

    Maven deduplicates on ``reference_id``, so repeated syncs update the
    existing document instead of creating a new one.
    """

    model_config = ConfigDict(frozen=True)

    reference_id: str = Field(
        ...,
        description="Stable id from the source system, used for deduplication"
    )

    title: str = Field(
        ...,
        description="Document title"
    )

    content: str = Field(
        ...,
        min_length=1,
        description="Markdown body; never empty"
    )

    content_type: str = Field(
        default="MARKDOWN",
        description="Content type tag understood by Maven"
    )

    metadata: Dict[str, str] = Field(
        default_factory=dict,
        description="Flat string metadata attached to the document"
    )

    created_at: Optional[datetime] = Field(
        default=None,
        description="Creation time in the source system"
    )

    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last update time in the source system"
    )

    def to_request(self) -> KnowledgeDocumentRequest:
        """Build the SDK request for the Maven document-create call."""
        optional: Dict[str, Any] = {}
        if self.metadata:
            optional["metadata"] = dict(self.metadata)
        if self.created_at is not None:
            optional["created_at"] = self.created_at
        if self.updated_at is not None:
            optional["updated_at"] = self.updated_at

        return KnowledgeDocumentRequest(
            knowledge_document_id=EntityIdBase(reference_id=self.reference_id),
            content_type=self.content_type,
            title=self.title,
            content=self.content,
            **optional,
        )


class MavenKnowledgeBase(BaseModel):
    """A Maven knowledge base as returned by the lookup call."""

    name: str = Field(default="", description="Knowledge base display name")
