"""
SQLAlchemy database models for the document structuring application.

Defines the ORM models for users and their uploaded documents.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


class FileType(str, enum.Enum):
    """Kind of file a document was uploaded as."""

    PDF = "pdf"
    DOCX = "docx"


class User(Base):
    """An account that owns uploaded documents."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    documents: Mapped[list["Document"]] = relationship(
        "Document",
        back_populates="owner",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"


class Document(Base):
    """
    An uploaded PDF or DOCX file.

    The raw bytes live on disk under the upload directory; ``data`` holds the
    serialized structured content and is the only field edited after upload.
    """

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    file_type: Mapped[FileType] = mapped_column(
        Enum(FileType),
        nullable=False,
    )
    file_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Public URL of the stored raw file, e.g. /uploads/<name>",
    )
    data: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="[]",
        comment="Structured content as a JSON array",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    owner: Mapped[User] = relationship(
        "User",
        back_populates="documents",
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, owner_id={self.owner_id}, file_type={self.file_type.value})>"
