"""
Raw text readers for uploaded files.

PDF text comes from pypdf, DOCX text from python-docx. Both return plain
text with one line per paragraph or text line.
"""

import io
import logging

from docx import Document as DocxDocument
from docx.table import Table
from pypdf import PdfReader

from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)


def read_pdf_text(content: bytes) -> str:
    """
    Extract the text of every page of a PDF.

    Args:
        content: Raw PDF bytes.

    Returns:
        Page texts joined with newlines.

    Raises:
        ExtractionError: If the PDF cannot be parsed.
    """
    if not content:
        raise ExtractionError("Empty PDF file provided")

    # Validate PDF magic bytes
    if not content[:4] == b"%PDF":
        raise ExtractionError("Invalid PDF file: does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        logger.error("Could not read PDF: %s", e)
        raise ExtractionError(f"Invalid or corrupted PDF file: {e}") from e

    logger.info("Read %d page(s) of PDF text", len(pages))
    return "\n".join(pages)


def read_docx_text(content: bytes) -> str:
    """
    Extract the raw text of a DOCX document in body order.

    Paragraphs inside tables are included cell by cell, so table text is
    kept but flattened. A merged cell contributes its text once.

    Raises:
        ExtractionError: If the document cannot be opened.
    """
    if not content:
        raise ExtractionError("Empty DOCX file provided")

    try:
        document = DocxDocument(io.BytesIO(content))
        paragraphs: list[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                # python-docx repeats a merged cell for every grid position it spans
                seen_cells = set()
                for row in block.rows:
                    for cell in row.cells:
                        if cell._tc in seen_cells:
                            continue
                        seen_cells.add(cell._tc)
                        paragraphs.extend(p.text for p in cell.paragraphs)
            else:
                paragraphs.append(block.text)
    except Exception as e:
        logger.error("Could not read DOCX: %s", e)
        raise ExtractionError(f"Invalid or corrupted DOCX file: {e}") from e

    return "\n".join(paragraphs)
