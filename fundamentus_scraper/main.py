"""
Main execution script for the Fundamentus table scraper
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import dotenv

from .core.logger import setup_logger
from .core.browser import BrowserManager
from .core.page_loader import PageLoader
from .core.exceptions import ConfigError, TableNotFoundError, EmptyTableError
from .config.enums import ExitCode
from .config.schema import ScraperConfig, load_config
from .extractors.table_extractor import TableExtractor
from .exporters.csv_exporter import CSVExporter
from .exporters.google_sheets import GoogleSheetsExporter

logger = logging.getLogger(__name__)

SOURCES = ('browser', 'http')

class FundamentusScraper:
    """Main scraper orchestrator"""

    def __init__(self, config: ScraperConfig, source: str = 'browser', html_file: Optional[str] = None,
                 dry_run: bool = False, browser_manager: Optional[BrowserManager] = None,
                 exporter: Optional[GoogleSheetsExporter] = None):
        self.config = config
        self.source = source
        self.html_file = html_file
        self.dry_run = dry_run
        self.browser_manager = browser_manager
        self.exporter = exporter
        self.rows: List[List[str]] = []

    async def extract_rows(self) -> List[List[str]]:
        """Produce the table from the configured page source"""
        extractor = TableExtractor(self.config)

        if self.html_file:
            return extractor.extract_from_html(PageLoader.load_from_file(self.html_file))

        if self.source == 'http':
            loader = PageLoader(self.config.user_agent, timeout=self.config.http_timeout_s)
            try:
                html = loader.load_with_http(self.config.url)
            finally:
                loader.close()
            return extractor.extract_from_html(html)

        browser_manager = self.browser_manager or BrowserManager(
            headless=self.config.headless,
            timeout=self.config.navigation_timeout_ms,
            user_agent=self.config.user_agent
        )
        extractor.browser_manager = browser_manager

        logger.info("Starting Playwright...")
        try:
            await browser_manager.start()
            page = await browser_manager.load_page(self.config.url, self.config.navigation_timeout_ms)
            return await extractor.extract(page)
        finally:
            await browser_manager.close()

    def export_results(self, rows: List[List[str]]) -> Optional[str]:
        """Write the CSV backup (if configured) and overwrite the sheet tab"""
        if self.config.csv_backup_dir:
            CSVExporter(self.config.csv_backup_dir).export_to_csv(rows)

        if self.dry_run:
            logger.info(f"Dry run: skipping Google Sheets export of {len(rows)} rows")
            for row in rows[:5]:
                logger.info(f"  {row}")
            return None

        exporter = self.exporter or GoogleSheetsExporter(
            sheet_id=self.config.sheet_id,
            service_account_json=self.config.service_account_json,
            service_account_file=self.config.service_account_file
        )

        sheet_url = exporter.overwrite_range(
            self.config.sheet_tab,
            self.config.start_cell,
            rows,
            clear_first=self.config.clear_before_write
        )
        logger.info(f"Data written to sheet {self.config.sheet_id}, tab {self.config.sheet_tab}")
        return sheet_url

    async def run(self) -> ExitCode:
        """Main execution method; maps every outcome to an exit code"""
        logger.info("=== FUNDAMENTUS SCRAPER STARTED ===")

        try:
            self.rows = await self.extract_rows()
            self.export_results(self.rows)

        except TableNotFoundError as e:
            logger.error(f"Table not found: {e}")
            logger.error(f"HTML_LENGTH:{e.page_length}")
            logger.error(e.page_excerpt)
            return ExitCode.TABLE_NOT_FOUND

        except EmptyTableError as e:
            logger.error(f"Failed to parse table: {e}")
            return ExitCode.EMPTY_TABLE

        except ConfigError as e:
            logger.error(f"Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        except Exception as e:
            logger.exception(f"Scraper failed: {e}")
            return ExitCode.UNHANDLED_ERROR

        logger.info("=== SCRAPING COMPLETED SUCCESSFULLY ===")
        return ExitCode.SUCCESS

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract the Fundamentus FII table and publish it to Google Sheets"
    )
    parser.add_argument("--config", help="YAML file overriding the packaged settings")
    parser.add_argument(
        "--source",
        choices=SOURCES,
        default='browser',
        help="Render the page with Playwright (default) or fetch it over plain HTTP"
    )
    parser.add_argument("--html-file", help="Parse a saved HTML page instead of fetching one")
    parser.add_argument("--dry-run", action="store_true", help="Extract only; do not write to Google Sheets")
    parser.add_argument("--csv", dest="csv_dir", help="Also write the table to a CSV file in this directory")
    parser.add_argument("--log-level", help="Console log level (DEBUG, INFO, WARNING, ...)")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    """Entry point"""
    args = build_arg_parser().parse_args(argv)
    dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

    try:
        config = load_config(args.config)
    except ConfigError as e:
        setup_logger(log_level=args.log_level or "INFO")
        logger.error(f"Configuration error: {e}")
        return int(ExitCode.CONFIG_ERROR)

    if args.log_level:
        config.log_level = args.log_level
    if args.csv_dir:
        config.csv_backup_dir = args.csv_dir

    setup_logger(log_level=config.log_level, log_dir=config.log_dir)

    try:
        config.validate(require_publish=not args.dry_run)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return int(ExitCode.CONFIG_ERROR)

    scraper = FundamentusScraper(
        config,
        source=args.source,
        html_file=args.html_file,
        dry_run=args.dry_run
    )
    return int(asyncio.run(scraper.run()))

def cli():
    sys.exit(main())

if __name__ == "__main__":
    cli()
