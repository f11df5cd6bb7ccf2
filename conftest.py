"""
Shared fixtures for the scraper tests
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from fundamentus_scraper.config.enums import WaitResult
from fundamentus_scraper.config.schema import ScraperConfig, TableCandidate

FII_TABLE_HTML = (
    '<table id="tabelaResultado">'
    '<thead><tr><th>Papel</th><th>Preço</th></tr></thead>'
    '<tbody><tr><td><span class="tips"><a href="detalhes.php?papel=ABCD11">ABCD11</a></span></td>'
    '<td>10,50</td></tr></tbody>'
    '</table>'
)

@pytest.fixture
def config(tmp_path):
    return ScraperConfig(
        sheet_id="test-sheet-id",
        service_account_file="service_account.json",
        debug_dir=str(tmp_path / "debug"),
        log_dir=str(tmp_path / "logs"),
    )

@pytest.fixture
def fii_candidates():
    return [
        TableCandidate(visible_text="Menu Home Contato", outer_html="<table><tr><td>Menu</td></tr></table>"),
        TableCandidate(visible_text="Papel\tPreço\nABCD11\t10,50", outer_html=FII_TABLE_HTML),
    ]

@pytest.fixture
def browser_manager(fii_candidates):
    """A BrowserManager stand-in whose page already shows the FII table"""
    manager = MagicMock()
    manager.start = AsyncMock()
    manager.close = AsyncMock()
    manager.load_page = AsyncMock(return_value=MagicMock(name="page"))
    manager.wait_for_network_idle = AsyncMock(return_value=WaitResult.READY)
    manager.find_control_by_label = AsyncMock(return_value=None)
    manager.activate = AsyncMock(return_value=True)
    manager.wait_for_any_table = AsyncMock(return_value=WaitResult.READY)
    manager.get_candidate_tables = AsyncMock(return_value=fii_candidates)
    manager.get_page_content = AsyncMock(return_value="<html><body>Sem dados</body></html>")
    manager.save_screenshot = AsyncMock(return_value=True)
    return manager
