"""Data models for the Docsie connector."""

from .docsie import (
    DocBlock,
    DocContent,
    DocsieArticle,
    DocsieBook,
    DocsieDocumentation,
    DocsiePage,
    DocsieWorkspace,
    ProseMirrorNode,
)
from .maven import MavenKnowledgeBase, MavenKnowledgeDocument
from .results import (
    DocsieValidationResult,
    MavenValidationResult,
    SyncResult,
    UploadError,
    UploadResult,
    ValidationResult,
)

__all__ = [
    "DocBlock",
    "DocContent",
    "DocsieArticle",
    "DocsieBook",
    "DocsieDocumentation",
    "DocsiePage",
    "DocsieWorkspace",
    "ProseMirrorNode",
    "MavenKnowledgeBase",
    "MavenKnowledgeDocument",
    "DocsieValidationResult",
    "MavenValidationResult",
    "SyncResult",
    "UploadError",
    "UploadResult",
    "ValidationResult",
]
