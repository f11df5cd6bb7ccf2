"""
Tests for the Playwright browser wrapper using fake pages and elements
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from fundamentus_scraper.config.enums import WaitResult
from fundamentus_scraper.config.schema import TableCandidate
from fundamentus_scraper.core.browser import BrowserManager, CANDIDATE_TABLES_SCRIPT


@pytest.fixture
def manager():
    return BrowserManager(headless=True, timeout=1000)


@pytest.fixture
def page():
    page = MagicMock()
    page.wait_for_load_state = AsyncMock(return_value=None)
    page.wait_for_selector = AsyncMock(return_value=MagicMock())
    page.query_selector = AsyncMock(return_value=None)
    page.eval_on_selector_all = AsyncMock(return_value=[])
    page.screenshot = AsyncMock(return_value=b"")
    return page


@pytest.mark.asyncio
async def test_network_idle_ready(manager, page):
    assert await manager.wait_for_network_idle(page, 500) is WaitResult.READY
    page.wait_for_load_state.assert_awaited_once_with('networkidle', timeout=500)


@pytest.mark.asyncio
async def test_network_idle_timeout_is_reported_not_raised(manager, page):
    page.wait_for_load_state.side_effect = PlaywrightTimeoutError("Timeout 500ms exceeded.")

    assert await manager.wait_for_network_idle(page, 500) is WaitResult.TIMED_OUT


@pytest.mark.asyncio
async def test_network_idle_other_errors_propagate(manager, page):
    page.wait_for_load_state.side_effect = PlaywrightError("Target page has been closed")

    with pytest.raises(PlaywrightError):
        await manager.wait_for_network_idle(page, 500)


@pytest.mark.asyncio
async def test_wait_for_any_table_ready(manager, page):
    assert await manager.wait_for_any_table(page, 700) is WaitResult.READY
    page.wait_for_selector.assert_awaited_once_with('table', timeout=700)


@pytest.mark.asyncio
async def test_wait_for_any_table_timeout_is_reported_not_raised(manager, page):
    page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 700ms exceeded.")

    assert await manager.wait_for_any_table(page, 700) is WaitResult.TIMED_OUT


@pytest.mark.asyncio
async def test_find_control_by_label_uses_button_text_selector(manager, page):
    button = MagicMock()
    page.query_selector.return_value = button

    assert await manager.find_control_by_label(page, 'Aplicar "filtros"') is button
    page.query_selector.assert_awaited_once_with('button:has-text("Aplicar \\"filtros\\"")')


@pytest.mark.asyncio
async def test_find_control_by_label_lookup_error_returns_none(manager, page):
    page.query_selector.side_effect = PlaywrightError("Execution context was destroyed")

    assert await manager.find_control_by_label(page, "Filtrar") is None


@pytest.mark.asyncio
async def test_activate_clicks_control(manager):
    control = MagicMock()
    control.click = AsyncMock(return_value=None)

    assert await manager.activate(control) is True
    control.click.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    PlaywrightError("Element is not attached to the DOM"),
    PlaywrightTimeoutError("Timeout 30000ms exceeded."),
])
async def test_activate_failed_click_returns_false(manager, error):
    control = MagicMock()
    control.click = AsyncMock(side_effect=error)

    assert await manager.activate(control) is False


@pytest.mark.asyncio
async def test_get_candidate_tables_builds_candidates_in_order(manager, page):
    page.eval_on_selector_all.return_value = [
        {'text': None, 'html': '<table><tr><td>Menu</td></tr></table>'},
        {'text': 'Papel\tPreço', 'html': None},
        {'text': 'Papel', 'html': '<table><tr><th>Papel</th></tr></table>'},
    ]

    candidates = await manager.get_candidate_tables(page)

    assert candidates == [
        TableCandidate(visible_text=None, outer_html='<table><tr><td>Menu</td></tr></table>'),
        TableCandidate(visible_text='Papel\tPreço', outer_html=''),
        TableCandidate(visible_text='Papel', outer_html='<table><tr><th>Papel</th></tr></table>'),
    ]
    page.eval_on_selector_all.assert_awaited_once_with('table', CANDIDATE_TABLES_SCRIPT)


@pytest.mark.asyncio
async def test_get_candidate_tables_without_tables(manager, page):
    page.eval_on_selector_all.return_value = None

    assert await manager.get_candidate_tables(page) == []


@pytest.mark.asyncio
async def test_save_screenshot_failure_returns_false(manager, page, tmp_path):
    page.screenshot.side_effect = PlaywrightError("Page crashed")

    assert await manager.save_screenshot(page, tmp_path / "screenshot.png") is False


@pytest.mark.asyncio
async def test_close_releases_everything(manager):
    manager.playwright = MagicMock(stop=AsyncMock())
    manager.browser = MagicMock(close=AsyncMock())
    manager.context = MagicMock(close=AsyncMock(side_effect=PlaywrightError("already closed")))

    await manager.close()

    assert manager.context is None
    assert manager.browser is None
    assert manager.playwright is None
