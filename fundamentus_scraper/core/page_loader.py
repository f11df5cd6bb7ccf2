"""
Page Loader - static HTML source for pages that render without JavaScript
"""
import logging
from pathlib import Path
from typing import List

import requests
from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from ..config.schema import TableCandidate

logger = logging.getLogger(__name__)

def _browser_entities(text: str) -> str:
    """Escape like a browser's outerHTML: &, <, > and non-breaking spaces"""
    return EntitySubstitution.substitute_xml(text).replace('\xa0', '&nbsp;')

# bs4 decodes &nbsp; on parse; this writes it back out the way Chromium does
BROWSER_FORMATTER = HTMLFormatter(entity_substitution=_browser_entities)

class PageLoader:
    """Loads page HTML over plain HTTP or from disk"""

    def __init__(self, user_agent: str, timeout: int = 30):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def load_with_http(self, url: str) -> str:
        """Fetch url and return the response body"""
        logger.info(f"Attempting HTTP request to {url}")

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()

        logger.info(f"HTTP request successful ({len(response.text)} chars)")
        return response.text

    @staticmethod
    def load_from_file(path: str) -> str:
        """Read a previously saved page"""
        html = Path(path).read_text(encoding='utf-8', errors='replace')
        logger.info(f"Loaded {len(html)} chars from {path}")
        return html

    def close(self):
        self.session.close()

def candidates_from_html(html: str) -> List[TableCandidate]:
    """Build the candidate set from a static document, in document order"""
    if not html:
        return []

    soup = BeautifulSoup(html, 'html.parser')
    return [
        TableCandidate(
            visible_text=table.get_text(' '),
            outer_html=table.decode(formatter=BROWSER_FORMATTER)
        )
        for table in soup.find_all('table')
    ]
