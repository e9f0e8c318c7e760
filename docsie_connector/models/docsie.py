"""
Docsie API data models.

These mirror the records returned by the Docsie v2 API. Only the fields the
connector uses are declared; anything else in the payload is ignored.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProseMirrorNode(BaseModel):
    """
    A node of the nested rich-text tree held by container blocks
    (banner, content, tiles).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = Field(
        default="",
        description="Node type (text, paragraph, heading, bulletList, ...)"
    )

    text: Optional[str] = Field(
        default=None,
        description="Literal text for text nodes"
    )

    attrs: Dict[str, Any] = Field(
        default_factory=dict,
        description="Node attributes, e.g. heading level"
    )

    content: List['ProseMirrorNode'] = Field(
        default_factory=list,
        description="Child nodes"
    )

    @field_validator("type", mode="before")
    @classmethod
    def _null_type(cls, value):
        return "" if value is None else value

    @field_validator("attrs", mode="before")
    @classmethod
    def _null_attrs(cls, value):
        return {} if value is None else value

    @field_validator("content", mode="before")
    @classmethod
    def _null_children(cls, value):
        return [] if value is None else value


class DocBlock(BaseModel):
    """
    A top-level Draft.js style block of an article document.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = Field(
        ...,
        description="Block type tag (unstyled, header-two, figure, ...)"
    )

    text: Optional[str] = Field(
        default="",
        description="Plain text of the block"
    )

    depth: int = Field(
        default=0,
        description="Nesting depth for list items"
    )

    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Block data such as 'src' and 'label' for media blocks"
    )

    content: List[ProseMirrorNode] = Field(
        default_factory=list,
        description="Nested rich-text tree for container blocks"
    )

    @field_validator("depth", mode="before")
    @classmethod
    def _null_depth(cls, value):
        return 0 if value is None else value

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value):
        return {} if value is None else value

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value):
        return [] if value is None else value


class DocContent(BaseModel):
    """The block list of an article."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    blocks: List[DocBlock] = Field(
        default_factory=list,
        description="Blocks in document order"
    )

    @field_validator("blocks", mode="before")
    @classmethod
    def _null_blocks(cls, value):
        return [] if value is None else value


class DocsieWorkspace(BaseModel):
    """A Docsie workspace."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Workspace id")
    name: str = Field(default="", description="Display name")
    slug: Optional[str] = Field(default=None, description="URL slug")
    shelves_count: Optional[int] = Field(default=None, description="Number of documentation shelves")
    created: Optional[str] = Field(default=None, description="Creation timestamp")
    modified: Optional[str] = Field(default=None, description="Last modification timestamp")


class DocsieDocumentation(BaseModel):
    """A documentation shelf inside a workspace."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Documentation id")
    name: str = Field(default="", description="Display name")
    workspace: Optional[str] = Field(default=None, description="Owning workspace id")
    active_books_count: Optional[int] = Field(default=None, description="Number of non-deleted books")


class DocsieBook(BaseModel):
    """A book inside a documentation shelf."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Book id")
    name: str = Field(default="", description="Display name")
    documentation: Optional[str] = Field(default=None, description="Owning documentation id")
    deleted: bool = Field(default=False, description="Soft-delete flag")


class DocsieArticle(BaseModel):
    """
    A Docsie article, the unit that is synced to Maven.

    The article id is stable across runs and is used as the Maven
    reference id.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Stable article id")
    name: str = Field(default="", description="Article title")
    description: Optional[str] = Field(default=None, description="Short description")
    slug: Optional[str] = Field(default=None, description="URL slug")
    doc: Optional[DocContent] = Field(default=None, description="Block-tree content")
    tags: List[str] = Field(default_factory=list, description="Tags in display order")
    template: Optional[str] = Field(default=None, description="Rendering template name")
    author: Optional[str] = Field(default=None, description="Author display name")
    status: Optional[str] = Field(default=None, description="Publication status")
    workspace: Optional[str] = Field(default=None, description="Workspace id")
    book: Optional[str] = Field(default=None, description="Book id")
    created: Optional[str] = Field(default=None, description="Creation timestamp (ISO 8601)")
    modified: Optional[str] = Field(default=None, description="Last update timestamp (ISO 8601)")
    order: Optional[int] = Field(default=None, description="Position within the book")
    revision: Optional[int] = Field(default=None, description="Revision counter")

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, value):
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [tag for tag in value if tag]
        return value

    @property
    def has_content(self) -> bool:
        """True when the article has at least one block."""
        return bool(self.doc and self.doc.blocks)


class DocsiePage(BaseModel):
    """Envelope of a paginated Docsie list response."""

    model_config = ConfigDict(extra="ignore")

    count: Optional[int] = None
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _null_results(cls, value):
        return [] if value is None else value


# Enable forward references for self-referencing model
ProseMirrorNode.model_rebuild()
