"""
Line classification pass that groups extracted text into sections.

Each line is classified on its own:
- numbered heading ("1. Introduction") starts a new section
- a line with a tab or a run of two or more whitespace characters is a loose table row
- anything else is a paragraph

Content found before the first heading goes into an implicit section.
"""

import logging
import re

from ...models import ParagraphItem, Section, TableItem

logger = logging.getLogger(__name__)

LINE_PATTERN = re.compile(r"[^\r\n]+")
HEADING_PATTERN = re.compile(r"^\s*[0-9]+\.\s*")
CELL_SEPARATOR_PATTERN = re.compile(r"\t|\s{2,}")
WHITESPACE_RUN_PATTERN = re.compile(r"\s{2,}")

UNTITLED_TABLE_HEADING = "Untitled Table"
UNTITLED_SECTION_HEADING = "Untitled Section"


def split_lines(text: str) -> list[str]:
    """Split text on line boundaries, dropping empty lines. Lines keep their whitespace."""
    return LINE_PATTERN.findall(text or "")


def is_heading(line: str) -> bool:
    return HEADING_PATTERN.match(line) is not None


def is_table_row(line: str) -> bool:
    return "\t" in line or WHITESPACE_RUN_PATTERN.search(line) is not None


def split_cells(line: str) -> list[str]:
    """Split a row on tabs or whitespace runs. Empty cells are kept."""
    return [cell.strip() for cell in CELL_SEPARATOR_PATTERN.split(line)]


def structure_lines(lines: list[str]) -> list[Section]:
    """
    Group lines into sections of paragraphs and loose table rows.

    Args:
        lines: Non-empty text lines in reading order.

    Returns:
        Sections in reading order. Empty when there are no lines.
    """
    sections: list[Section] = []
    current: Section | None = None

    for line in lines:
        if is_heading(line):
            current = Section(heading=line.strip())
            sections.append(current)
        elif is_table_row(line):
            if current is None:
                current = Section(heading=UNTITLED_TABLE_HEADING)
                sections.append(current)
            current.content.append(TableItem(data=split_cells(line)))
        else:
            if current is None:
                current = Section(heading=UNTITLED_SECTION_HEADING)
                sections.append(current)
            current.content.append(ParagraphItem(text=line.strip()))

    logger.debug("Structured %d line(s) into %d section(s)", len(lines), len(sections))
    return sections
