"""
CSV exporter for extracted tables (local backup of what gets published)
"""
import csv
import logging
from typing import List, Optional
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

class CSVExporter:
    """Write extracted rows to a CSV file"""

    def __init__(self, output_dir: str = "data"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_to_csv(self, rows: List[List[str]], filename: Optional[str] = None) -> str:
        """
        Export rows to a CSV file

        Args:
            rows: Table rows, header row first
            filename: Optional custom filename

        Returns:
            Path to the created CSV file
        """
        if not filename:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f"fundamentus_{timestamp}.csv"

        filepath = self.output_dir / filename

        try:
            with open(filepath, 'w', newline='', encoding='utf-8') as f:
                writer = csv.writer(f)
                writer.writerows(rows)

            logger.info(f"Exported {len(rows)} rows to CSV: {filepath}")
            return str(filepath)

        except OSError as e:
            logger.error(f"Failed to export to CSV: {e}")
            raise
