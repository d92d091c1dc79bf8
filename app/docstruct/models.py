"""
Pydantic models for the document structuring API.

Defines the structured content produced by extraction (sections holding
paragraphs and tables) together with the request and response bodies of
the HTTP endpoints.
"""

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Structured Content
# =============================================================================


class ParagraphItem(BaseModel):
    """A run of free text."""

    model_config = ConfigDict(extra="allow")

    type: Literal["paragraph"] = "paragraph"
    text: str


class TableItem(BaseModel):
    """
    A loose table row detected inline with the narrative flow.

    Attributes:
        data: Cell strings of the single row; there is no header.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["table"] = "table"
    data: list[str] = Field(default_factory=list)


class StructuredTableItem(BaseModel):
    """
    A multi-row table recognised by the table detector.

    Rows are expected to have as many cells as the header but this is
    not enforced.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: Literal["structured_table"] = "structured_table"
    table_index: int = Field(
        ...,
        ge=0,
        alias="tableIndex",
        description="Position of the table in detection order",
    )
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


ContentItem = Annotated[
    Union[ParagraphItem, TableItem, StructuredTableItem],
    Field(discriminator="type"),
]


class Section(BaseModel):
    """A heading followed by its content items in reading order."""

    model_config = ConfigDict(extra="allow")

    heading: str
    content: list[ContentItem] = Field(default_factory=list)


# PDF documents store a list of sections, DOCX documents a flat list of paragraphs.
StructuredBlock = Union[Section, ContentItem]


# =============================================================================
# Users
# =============================================================================


class CredentialsRequest(BaseModel):
    """Request body for signup and signin."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=1024)


class TokenResponse(BaseModel):
    """Response carrying a freshly issued session token."""

    token: str
    message: str


# =============================================================================
# Documents
# =============================================================================


class DocumentRecord(BaseModel):
    """Full document record returned after upload."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: int = Field(..., alias="userid")
    data: str = Field(default="[]", description="Structured content serialized as a JSON array")
    file_url: str = Field(..., alias="fileUrl")
    file_type: str = Field(..., alias="fileType")


class DocumentSummary(BaseModel):
    """Document projection used by the listing endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    data: str = Field(default="[]", description="Structured content serialized as a JSON array")
    file_url: str = Field(..., alias="fileUrl")


class DocumentDetails(BaseModel):
    """
    Document projection used by the editor.

    ``file_type`` is derived from the extension of the stored file.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    file_url: str = Field(..., alias="fileUrl")
    data: str = Field(default="[]", description="Structured content serialized as a JSON array")
    file_type: str = Field(..., alias="fileType")


class SaveDocumentRequest(BaseModel):
    """
    Edited structured content sent back by the editor.

    ``data`` may be the array itself or the array serialized as a JSON string.
    """

    data: list[StructuredBlock]

    @field_validator("data", mode="before")
    @classmethod
    def decode_serialized_data(cls, v: Any) -> Any:
        """Decode a JSON string payload before validating it as blocks."""
        if isinstance(v, (str, bytes)):
            try:
                return json.loads(v)
            except ValueError as e:
                raise ValueError("data must be a JSON array") from e
        return v


class SaveDocumentResponse(BaseModel):
    """Response for a successful save."""

    message: str
    data: str


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    message: str = Field(default="")
