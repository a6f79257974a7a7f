"""
Text utilities for cleaning CSV headers and cells.

Exports from spreadsheet tools and CMS dumps carry BOMs, non-breaking
spaces and stray padding. Values are otherwise left untouched: case is
preserved because header names are matched exactly.
"""

from typing import Any, Optional

BOM = "\ufeff"
NBSP = "\u00a0"


def clean_header(name: Optional[str]) -> str:
    """
    Clean a header cell for exact matching.

    - "\\ufeffSlug" → "Slug"
    - "  Featured #  " → "Featured #"
    - "Firm\\u00a0URL" → "Firm URL"

    Args:
        name: Raw header text

    Returns:
        Cleaned header, or "" for empty input
    """
    if not name:
        return ""

    name = str(name).replace(BOM, "").replace(NBSP, " ")
    return name.strip()


def clean_cell(value: Any) -> str:
    """
    Clean a data cell.

    Strips surrounding whitespace only. None becomes "" so every
    cell in a parsed row is a string.
    """
    if value is None:
        return ""

    return str(value).strip()
