"""
Table selector - picks the target table among the candidates on a page
"""
import logging
from typing import List, Optional

from ..config.schema import TableCandidate

logger = logging.getLogger(__name__)

def candidate_matches(candidate: TableCandidate, marker: str) -> bool:
    """True if the candidate's visible text contains marker, ignoring case"""
    try:
        text = candidate.visible_text
        if not isinstance(text, str):
            return False
        return marker.lower() in text.lower()
    except Exception as e:
        logger.debug(f"Could not read candidate text: {e}")
        return False

def select_table_html(candidates: List[TableCandidate], marker: str) -> Optional[str]:
    """
    Return the outer HTML of the first candidate whose visible text contains
    marker. Falls back to the first candidate when none match, and returns
    None only when there are no candidates at all.
    """
    if not candidates:
        return None

    for index, candidate in enumerate(candidates):
        if candidate_matches(candidate, marker):
            logger.info(f"Selected table {index + 1}/{len(candidates)} containing '{marker}'")
            return candidate.outer_html

    logger.warning(
        f"No table contains '{marker}'; falling back to the first of {len(candidates)} tables. "
        "The page structure may have changed."
    )
    return candidates[0].outer_html
