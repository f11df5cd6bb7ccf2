"""
Table parser - turns the outer HTML of one table into rows of cell strings
"""
import logging
import re
from typing import List, Optional

from ..core.utils import normalize_cell_markup

logger = logging.getLogger(__name__)

# Non-recursive scans: each segment ends at the first matching close tag.
ROW_PATTERN = re.compile(r'<tr\b[\s\S]*?</tr\s*>', re.IGNORECASE)
CELL_PATTERN = re.compile(r'<(td|th)\b[^>]*>([\s\S]*?)</\1\s*>', re.IGNORECASE)

def parse_row_html(row_html: str) -> List[str]:
    """Return the normalized text of every <td>/<th> in a row, empty cells included"""
    return [normalize_cell_markup(match.group(2)) for match in CELL_PATTERN.finditer(row_html)]

def parse_table_html(table_html: Optional[str]) -> List[List[str]]:
    """
    Parse a table's outer HTML into a list of rows

    Rows and cells keep document order. Rows without any cell element are
    dropped; empty cells are kept as "". Empty input gives an empty list.
    """
    if not table_html:
        return []

    rows = []
    skipped = 0

    for row_match in ROW_PATTERN.finditer(table_html):
        cells = parse_row_html(row_match.group(0))
        if cells:
            rows.append(cells)
        else:
            skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} rows without cells")

    return rows
