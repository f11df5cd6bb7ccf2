"""
Table extractor - drives the browser until the results table can be read
"""
import logging
from pathlib import Path
from typing import List, Optional

from playwright.async_api import Page

from ..config.enums import WaitResult
from ..config.schema import ScraperConfig, TableCandidate
from ..core.browser import BrowserManager
from ..core.exceptions import TableNotFoundError, EmptyTableError
from ..core.page_loader import candidates_from_html
from ..core.utils import page_excerpt
from .table_parser import parse_table_html
from .table_selector import select_table_html

logger = logging.getLogger(__name__)

class TableExtractor:
    """Extracts the marker table from a rendered page or a static document"""

    def __init__(self, config: ScraperConfig, browser_manager: Optional[BrowserManager] = None):
        self.config = config
        self.browser_manager = browser_manager

    async def trigger_result_generation(self, page: Page) -> Optional[str]:
        """
        Click the first known result-generation button present on the page.

        Returns the label of the activated control, or None if nothing was
        clicked. Some versions of the page only render results after a click.
        """
        for label in self.config.control_labels:
            control = await self.browser_manager.find_control_by_label(page, label)
            if control is None:
                continue

            if not await self.browser_manager.activate(control):
                continue

            logger.info(f"Activated control '{label}'")
            await self.browser_manager.wait_for_network_idle(page, self.config.post_activation_timeout_ms)
            return label

        logger.debug("No result-generation control activated")
        return None

    async def locate_table_html(self, page: Page) -> Optional[str]:
        """Wait for a table to appear and select the marker table's outer HTML"""
        result = await self.browser_manager.wait_for_any_table(page, self.config.table_wait_timeout_ms)
        if result is WaitResult.TIMED_OUT:
            logger.info("Attempting table selection despite timeout")

        candidates = await self.browser_manager.get_candidate_tables(page)
        return select_table_html(candidates, self.config.marker)

    async def extract(self, page: Page) -> List[List[str]]:
        """Run the full extraction sequence against a loaded page"""
        await self.browser_manager.wait_for_network_idle(page, self.config.network_idle_timeout_ms)
        await self.trigger_result_generation(page)

        table_html = await self.locate_table_html(page)
        if table_html is None:
            html = await self.browser_manager.get_page_content(page)
            await self.save_debug_artifacts(html, page)
            raise self._not_found(html)

        return self._parse(table_html)

    def extract_from_html(self, html: str) -> List[List[str]]:
        """Select and parse the marker table from a static document"""
        candidates: List[TableCandidate] = candidates_from_html(html)
        table_html = select_table_html(candidates, self.config.marker)
        if table_html is None:
            self._write_debug_html(html)
            raise self._not_found(html)

        return self._parse(table_html)

    def _parse(self, table_html: str) -> List[List[str]]:
        rows = parse_table_html(table_html)
        if not rows:
            raise EmptyTableError(f"Table markup ({len(table_html)} chars) yielded no rows")

        logger.info(f"Rows extracted: {len(rows)}")
        return rows

    def _not_found(self, html: Optional[str]) -> TableNotFoundError:
        html = html or ""
        return TableNotFoundError(
            page_length=len(html),
            page_excerpt=page_excerpt(html, self.config.debug_excerpt_chars)
        )

    async def save_debug_artifacts(self, html: str, page: Optional[Page] = None):
        """Save debug.html and, with a live page, a screenshot"""
        self._write_debug_html(html)

        if page is not None and self.browser_manager is not None:
            debug_dir = Path(self.config.debug_dir)
            try:
                debug_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning(f"Could not create debug directory {debug_dir}: {e}")
                return
            await self.browser_manager.save_screenshot(page, debug_dir / "screenshot.png")

    def _write_debug_html(self, html: Optional[str]):
        debug_dir = Path(self.config.debug_dir)
        try:
            debug_dir.mkdir(parents=True, exist_ok=True)
            path = debug_dir / "debug.html"
            path.write_text(html or "", encoding='utf-8')
            logger.info(f"Saved page HTML for debugging: {path}")
        except OSError as e:
            logger.warning(f"Failed to save debug HTML: {e}")
