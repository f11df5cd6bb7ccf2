"""
Fundamentus Table Scraper

A Playwright-based scraper that extracts the FII results table from
Fundamentus and publishes it to Google Sheets.
"""

__version__ = "1.0.0"
__author__ = "Fundamentus Scraper Team"
