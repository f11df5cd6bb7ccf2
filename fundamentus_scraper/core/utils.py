"""
Utility functions for cleaning scraped markup
"""
import re
from typing import Optional

TAG_PATTERN = re.compile(r'<[^>]*>')
STRAY_BRACKET_PATTERN = re.compile(r'[<>]')
WHITESPACE_PATTERN = re.compile(r'\s+')

def normalize_cell_markup(markup: Optional[str]) -> str:
    """
    Reduce the inner markup of a table cell to plain text

    Tags are replaced by a space (attributes and semantics are dropped),
    whitespace runs collapse to a single space and the result is trimmed.
    Unbalanced '<' or '>' left over after tag removal are dropped as well.
    Character entities are left as they are.

    Examples:
    - "<b>ABCD11</b>" -> "ABCD11"
    - "<span>10,50</span>\n <small>%</small>" -> "10,50 %"
    - "A &amp; B" -> "A &amp; B"
    """
    if not markup:
        return ""

    text = TAG_PATTERN.sub(' ', markup)
    text = STRAY_BRACKET_PATTERN.sub(' ', text)
    return WHITESPACE_PATTERN.sub(' ', text).strip()

def page_excerpt(html: Optional[str], max_chars: int = 2000) -> str:
    """Return the first max_chars characters of a page for log diagnostics"""
    if not html:
        return ""
    return html[:max_chars]
