"""
Browser management using Playwright
"""
import logging
from pathlib import Path
from typing import Optional, List

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    ElementHandle,
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from ..config.enums import WaitResult
from ..config.schema import TableCandidate

logger = logging.getLogger(__name__)

# Reads every <table> in document order. innerText can throw on detached
# or exotic nodes, in which case the candidate carries no text.
CANDIDATE_TABLES_SCRIPT = """
(tables) => tables.map((table) => {
    let text = null;
    try {
        text = table.innerText;
    } catch (e) {
        text = null;
    }
    return { text: text, html: table.outerHTML };
})
"""

class BrowserManager:
    """Manage a single Playwright browser for one scraper run"""

    def __init__(self, headless: bool = True, timeout: int = 30000, user_agent: Optional[str] = None):
        self.headless = headless
        self.timeout = timeout
        self.user_agent = user_agent
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

    async def start(self):
        """Start the browser"""
        try:
            self.playwright = await async_playwright().start()

            self.browser = await self.playwright.chromium.launch(
                headless=self.headless,
                args=[
                    '--no-sandbox',
                    '--disable-setuid-sandbox',
                    '--disable-dev-shm-usage',
                ]
            )

            context_options = {'viewport': {'width': 1920, 'height': 1080}}
            if self.user_agent:
                context_options['user_agent'] = self.user_agent
            self.context = await self.browser.new_context(**context_options)

            self.context.set_default_timeout(self.timeout)

            logger.info("Browser started successfully")

        except Exception as e:
            logger.error(f"Failed to start browser: {e}")
            raise

    async def new_page(self) -> Page:
        """Create a new page"""
        if not self.context:
            await self.start()

        return await self.context.new_page()

    async def load_page(self, url: str, timeout_ms: Optional[int] = None, page: Optional[Page] = None) -> Page:
        """Navigate to url and wait for the network to go idle"""
        if page is None:
            page = await self.new_page()

        try:
            logger.info(f"Loading page: {url}")

            response = await page.goto(
                url,
                wait_until='networkidle',
                timeout=timeout_ms or self.timeout
            )

            if response and response.status >= 400:
                logger.warning(f"Page loaded with status {response.status}: {url}")

            logger.info(f"Page loaded successfully: {url}")
            return page

        except Exception as e:
            logger.error(f"Failed to load page {url}: {e}")
            raise

    async def wait_for_network_idle(self, page: Page, timeout_ms: int) -> WaitResult:
        """Wait for network idle; a timeout is reported, not raised"""
        try:
            await page.wait_for_load_state('networkidle', timeout=timeout_ms)
            return WaitResult.READY
        except PlaywrightTimeoutError:
            logger.warning(f"Network did not go idle within {timeout_ms}ms, continuing")
            return WaitResult.TIMED_OUT

    async def find_control_by_label(self, page: Page, label: str) -> Optional[ElementHandle]:
        """Find the first button whose text contains label"""
        escaped = label.replace('\\', '\\\\').replace('"', '\\"')
        try:
            return await page.query_selector(f'button:has-text("{escaped}")')
        except PlaywrightError as e:
            logger.debug(f"Control lookup failed for '{label}': {e}")
            return None

    async def activate(self, control: ElementHandle) -> bool:
        """Click a control; click errors are logged and reported as False"""
        try:
            await control.click()
            return True
        except PlaywrightError as e:
            logger.warning(f"Ignoring failed click: {e}")
            return False

    async def wait_for_any_table(self, page: Page, timeout_ms: int) -> WaitResult:
        """Wait for at least one <table>; a timeout is reported, not raised"""
        try:
            await page.wait_for_selector('table', timeout=timeout_ms)
            return WaitResult.READY
        except PlaywrightTimeoutError:
            logger.warning(f"No table appeared within {timeout_ms}ms, continuing")
            return WaitResult.TIMED_OUT

    async def get_candidate_tables(self, page: Page) -> List[TableCandidate]:
        """Return every table on the page with its rendered text and outer HTML"""
        raw = await page.eval_on_selector_all('table', CANDIDATE_TABLES_SCRIPT)
        candidates = [
            TableCandidate(visible_text=item.get('text'), outer_html=item.get('html') or '')
            for item in raw or []
        ]
        logger.debug(f"Found {len(candidates)} candidate tables")
        return candidates

    async def get_page_content(self, page: Page) -> str:
        """Return the full page markup"""
        return await page.content()

    async def save_screenshot(self, page: Page, path: Path) -> bool:
        """Save a full-page screenshot, returning False on failure"""
        try:
            await page.screenshot(path=str(path), full_page=True)
            logger.info(f"Screenshot saved: {path}")
            return True
        except PlaywrightError as e:
            logger.warning(f"Failed to save screenshot: {e}")
            return False

    async def close(self):
        """Close the browser"""
        try:
            if self.context:
                await self.context.close()
            if self.browser:
                await self.browser.close()
            if self.playwright:
                await self.playwright.stop()

            logger.info("Browser closed successfully")

        except Exception as e:
            logger.error(f"Error closing browser: {e}")

        finally:
            self.context = None
            self.browser = None
            self.playwright = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
