"""
Extraction package turning uploaded files into structured content.

This package is split into:
- readers: raw text extraction from PDF (pypdf) and DOCX (python-docx)
- structuring: line classification into sections, paragraphs and loose table rows
- tables: detection of header-plus-rows tables

The ExtractionService class ties them together per file type.
"""

import logging

from ...models import ParagraphItem, Section, StructuredBlock
from ...models_db import FileType
from ..exceptions import EmptyDocumentError, ExtractionError
from .readers import read_docx_text, read_pdf_text
from .structuring import split_lines, structure_lines
from .tables import EXTRACTED_TABLES_HEADING, build_tables_section, detect_tables

logger = logging.getLogger(__name__)

__all__ = [
    "EXTRACTED_TABLES_HEADING",
    "ExtractionError",
    "ExtractionService",
    "EmptyDocumentError",
    "detect_tables",
    "get_extraction_service",
    "structure_docx_text",
    "structure_lines",
    "structure_pdf_text",
]


def structure_pdf_text(text: str) -> list[Section]:
    """
    Build sections from PDF text.

    Runs the section pass, then appends the detected tables as a trailing
    "Extracted Tables" section. A failing table detector never affects the
    sections.
    """
    sections = structure_lines(split_lines(text))

    try:
        tables_section = build_tables_section(detect_tables(text))
    except Exception:
        logger.exception("Table extraction error")
        tables_section = None

    if tables_section is not None:
        sections.append(tables_section)
    return sections


def structure_docx_text(text: str) -> list[ParagraphItem]:
    """Build a flat list of paragraphs from DOCX text. No headings or tables are detected."""
    return [ParagraphItem(text=line.strip()) for line in split_lines(text)]


class ExtractionService:
    """Service turning raw uploaded bytes into structured content."""

    def extract(self, file_type: FileType, content: bytes) -> list[StructuredBlock]:
        """
        Extract structured content from an uploaded file.

        Args:
            file_type: Kind of the uploaded file.
            content: Raw file bytes.

        Returns:
            Sections for PDFs, a flat paragraph list for DOCX files.

        Raises:
            EmptyDocumentError: If the file holds no text.
            ExtractionError: If the file cannot be read.
        """
        if file_type == FileType.PDF:
            text = read_pdf_text(content)
            if not text.strip():
                raise EmptyDocumentError("Failed to extract data from PDF")
            blocks = structure_pdf_text(text)
        else:
            text = read_docx_text(content)
            if not text.strip():
                raise EmptyDocumentError("Failed to extract data from DOCX")
            blocks = structure_docx_text(text)

        logger.info(
            "Extracted %d block(s) from %s (%d characters)",
            len(blocks),
            file_type.value,
            len(text),
        )
        return blocks


# Singleton instance for convenience
_extraction_service: ExtractionService | None = None


def get_extraction_service() -> ExtractionService:
    """Get or create the extraction service singleton."""
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService()
    return _extraction_service
