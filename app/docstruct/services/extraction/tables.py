"""
Table detector that recognises header-plus-rows blocks in extracted text.

Runs independently of the section pass, so the same lines can show up
both as loose table rows and as a structured table.
"""

import logging

from ...models import Section, StructuredTableItem
from .structuring import CELL_SEPARATOR_PATTERN, is_table_row

logger = logging.getLogger(__name__)

EXTRACTED_TABLES_HEADING = "Extracted Tables"


def _split_row(line: str) -> list[str]:
    cells = (cell.strip() for cell in CELL_SEPARATOR_PATTERN.split(line))
    return [cell for cell in cells if cell]


def detect_tables(text: str) -> list[StructuredTableItem]:
    """
    Find tables made of a header row followed by at least one data row.

    A block starts at the first table-like line (tab or whitespace run) and
    ends at the next line that is not table-like. Blocks with no data row
    are discarded.

    Args:
        text: Raw text extracted from the document.

    Returns:
        Detected tables in order of appearance; empty on any internal error.
    """
    try:
        lines = [line.strip() for line in (text or "").split("\n")]
        lines = [line for line in lines if line]

        tables: list[StructuredTableItem] = []
        in_table = False
        headers: list[str] = []
        rows: list[list[str]] = []

        def emit() -> None:
            if headers and rows:
                tables.append(
                    StructuredTableItem(
                        table_index=len(tables),
                        headers=headers,
                        rows=rows,
                    )
                )

        for line in lines:
            if is_table_row(line):
                cells = _split_row(line)
                if not in_table:
                    in_table = True
                    headers = cells
                else:
                    rows.append(cells)
            elif in_table:
                in_table = False
                emit()
                headers = []
                rows = []

        if in_table:
            emit()

        logger.debug("Detected %d structured table(s)", len(tables))
        return tables
    except Exception:
        logger.exception("Error extracting tables from text")
        return []


def build_tables_section(tables: list[StructuredTableItem]) -> Section | None:
    """Wrap detected tables in the trailing "Extracted Tables" section, if any."""
    if not tables:
        return None
    return Section(heading=EXTRACTED_TABLES_HEADING, content=list(tables))
