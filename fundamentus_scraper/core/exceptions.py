"""
Exceptions raised by the extraction pipeline and configuration loader
"""

class ScraperError(Exception):
    """Base class for scraper failures"""

class ConfigError(ScraperError):
    """Required configuration is missing or invalid"""

class TableNotFoundError(ScraperError):
    """The rendered page had no table-like element to select"""

    def __init__(self, page_length: int, page_excerpt: str):
        self.page_length = page_length
        self.page_excerpt = page_excerpt
        super().__init__(f"No table found on page ({page_length} chars)")

class EmptyTableError(ScraperError):
    """A table was selected but no rows could be parsed from it"""
