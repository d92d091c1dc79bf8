"""
Owner-scoped persistence of documents and their structured content.

Every lookup takes the owner id together with the document id, so a
document belonging to someone else behaves exactly like a missing one.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models_db import Document, FileType
from .exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


def serialize_structured_content(blocks: list[Any]) -> str:
    """Serialize structured content for storage, using field aliases for models."""
    return json.dumps(
        [
            block.model_dump(mode="json", by_alias=True)
            if isinstance(block, BaseModel)
            else block
            for block in blocks
        ]
    )


def parse_structured_content(raw: str | None) -> list[Any]:
    """
    Load stored structured content.

    Malformed JSON, or JSON that is not an array, is treated as no content.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored structured content is not valid JSON")
        return []
    if not isinstance(data, list):
        logger.warning("Stored structured content is not an array")
        return []
    return data


def structured_content_text(raw: str | None) -> str:
    """
    Stored structured content as sent to clients: a serialized JSON array.

    Valid blobs are returned unchanged; anything else becomes ``"[]"``.
    """
    if not parse_structured_content(raw):
        return "[]"
    return raw


class DocumentStore:
    """CRUD over documents, always scoped to the owning user."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        owner_id: int,
        file_type: FileType,
        file_url: str,
        blocks: list[Any],
    ) -> Document:
        document = Document(
            owner_id=owner_id,
            file_type=file_type,
            file_url=file_url,
            data=serialize_structured_content(blocks),
        )
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        logger.info("User %d created document %d", owner_id, document.id)
        return document

    def list_for_owner(self, owner_id: int) -> list[Document]:
        return list(
            self.db.scalars(
                select(Document)
                .where(Document.owner_id == owner_id)
                .order_by(Document.id)
            )
        )

    def get(self, owner_id: int, document_id: int) -> Document:
        """
        Fetch one of the owner's documents.

        Raises:
            DocumentNotFoundError: If no such document belongs to the owner.
        """
        document = self.db.scalar(
            select(Document).where(
                Document.id == document_id,
                Document.owner_id == owner_id,
            )
        )
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    def save_content(self, owner_id: int, document_id: int, blocks: list[Any]) -> Document:
        """Replace the structured content of one of the owner's documents."""
        document = self.get(owner_id, document_id)
        document.data = serialize_structured_content(blocks)
        self.db.commit()
        self.db.refresh(document)
        logger.info("User %d saved document %d", owner_id, document_id)
        return document
