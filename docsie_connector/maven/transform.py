"""
Transform Docsie articles into Maven knowledge documents.
"""

from datetime import datetime
from typing import Dict, Optional

from ..docsie.content import doc_to_markdown
from ..models import DocsieArticle, MavenKnowledgeDocument

SOURCE_NAME = "docsie"


def transform_to_maven_format(article: DocsieArticle) -> MavenKnowledgeDocument:
    """
    Transform a Docsie article into a Maven knowledge document.

    The article id becomes the Maven reference id so repeated syncs update
    documents in place. Block content is converted to Markdown; when that
    yields nothing the title is used as content.

    Args:
        article: The article to transform

    Returns:
        The equivalent MavenKnowledgeDocument
    """
    content = doc_to_markdown(article.doc)

    return MavenKnowledgeDocument(
        reference_id=article.id,
        title=article.name,
        content=content or article.name or article.id,
        content_type="MARKDOWN",
        metadata=build_metadata(article),
        created_at=parse_timestamp(article.created),
        updated_at=parse_timestamp(article.modified),
    )


def build_metadata(article: DocsieArticle) -> Dict[str, str]:
    """Build the flat string metadata for an article."""
    metadata = {
        "source": SOURCE_NAME,
        f"{SOURCE_NAME}_id": article.id,
    }

    if article.tags:
        metadata["tags"] = ",".join(article.tags)

    optional_fields = (
        ("slug", article.slug),
        ("template", article.template),
        ("author", article.author),
        ("workspace_id", article.workspace),
        ("book_id", article.book),
        ("status", article.status),
    )
    for key, value in optional_fields:
        if value:
            metadata[key] = value

    return metadata


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp from the Docsie API.

    Returns None for missing or unparseable values.
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
