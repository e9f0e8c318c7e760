"""
Result models produced by a connector run.

None of these are persisted; they live for the duration of one run and are
printed by the CLI.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class UploadError(BaseModel):
    """A document that could not be uploaded after all retries."""

    doc_id: str = Field(..., description="Reference id of the failed document")
    error: str = Field(..., description="Message of the last error")


class UploadResult(BaseModel):
    """Counters for one upload call."""

    total: int = 0
    success: int = 0
    failed: int = 0
    errors: List[UploadError] = Field(default_factory=list)


class SyncResult(BaseModel):
    """Aggregate outcome of a full sync."""

    workspaces: int = 0
    articles: int = Field(default=0, description="Articles with content considered for upload")
    uploaded: int = 0
    failed: int = 0
    skipped: int = Field(default=0, description="Articles without content")
    errors: List[UploadError] = Field(default_factory=list)
    duration_ms: int = 0


class DocsieValidationResult(BaseModel):
    success: bool
    workspaces: Optional[int] = None
    articles: Optional[int] = None
    error: Optional[str] = None


class MavenValidationResult(BaseModel):
    success: bool
    knowledge_base_name: Optional[str] = None
    error: Optional[str] = None


class ValidationResult(BaseModel):
    """Outcome of the pre-sync connectivity checks."""

    docsie: DocsieValidationResult
    maven: MavenValidationResult
    ready: bool
    expected_count: Optional[int] = None
    count_mismatch: Optional[bool] = None
