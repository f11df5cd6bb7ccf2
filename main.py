"""
Fundamentus Table Scraper - Main Entry Point
Renders the FII results page, extracts the table and overwrites the sheet tab
"""
import sys
from pathlib import Path

# Add current directory to path
sys.path.insert(0, str(Path(__file__).parent))

from fundamentus_scraper.main import cli

if __name__ == "__main__":
    cli()
