"""
Google Sheets exporter for extracted tables
"""
import json
import logging
from typing import List, Optional

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']

def a1_range(tab_name: str, cell: Optional[str] = None) -> str:
    """Build an A1 range, quoting the tab name"""
    quoted = "'" + tab_name.replace("'", "''") + "'"
    return f"{quoted}!{cell}" if cell else quoted

class GoogleSheetsExporter:
    """Overwrite a tab of a Google Sheet with rows of strings"""

    def __init__(self, sheet_id: str, service_account_json: Optional[str] = None,
                 service_account_file: Optional[str] = None, service=None):
        self.sheet_id = sheet_id
        self.service_account_json = service_account_json
        self.service_account_file = service_account_file
        self.service = service
        if self.service is None:
            self._authenticate()

    def _authenticate(self):
        """Authenticate with Google Sheets API using a service account"""
        try:
            if self.service_account_json:
                try:
                    info = json.loads(self.service_account_json)
                except json.JSONDecodeError as e:
                    raise ConfigError(f"SERVICE_ACCOUNT_JSON is not valid JSON: {e}")
                credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
            elif self.service_account_file:
                credentials = Credentials.from_service_account_file(
                    self.service_account_file,
                    scopes=SCOPES
                )
            else:
                raise ConfigError("No service account credentials configured")

            self.service = build('sheets', 'v4', credentials=credentials, cache_discovery=False)
            logger.info("Successfully authenticated with Google Sheets API")

        except Exception as e:
            logger.error(f"Failed to authenticate with Google Sheets API: {e}")
            raise

    def get_tab_titles(self) -> List[str]:
        """List the titles of every tab in the spreadsheet"""
        metadata = self.service.spreadsheets().get(spreadsheetId=self.sheet_id).execute()
        return [
            sheet.get('properties', {}).get('title')
            for sheet in metadata.get('sheets', [])
        ]

    def ensure_tab(self, tab_name: str) -> bool:
        """Create tab_name if it does not exist; returns True when created"""
        try:
            if tab_name in self.get_tab_titles():
                return False

            self.service.spreadsheets().batchUpdate(
                spreadsheetId=self.sheet_id,
                body={'requests': [{'addSheet': {'properties': {'title': tab_name}}}]}
            ).execute()

            logger.info(f"Created sheet tab: {tab_name}")
            return True

        except HttpError as e:
            logger.error(f"Failed to ensure sheet tab {tab_name}: {e}")
            raise

    def clear_tab(self, tab_name: str):
        """Clear all values from the tab"""
        try:
            self.service.spreadsheets().values().clear(
                spreadsheetId=self.sheet_id,
                range=a1_range(tab_name),
                body={}
            ).execute()

            logger.info(f"Cleared sheet tab: {tab_name}")

        except HttpError as e:
            logger.error(f"Failed to clear sheet tab: {e}")
            raise

    def overwrite_range(self, tab_name: str, top_left_cell: str, rows: List[List[str]],
                        clear_first: bool = True) -> str:
        """
        Replace the tab's contents with rows, anchored at top_left_cell

        Returns the spreadsheet URL.
        """
        try:
            logger.info(f"Starting Google Sheets export to tab {tab_name}...")

            self.ensure_tab(tab_name)
            if clear_first:
                self.clear_tab(tab_name)

            self.service.spreadsheets().values().update(
                spreadsheetId=self.sheet_id,
                range=a1_range(tab_name, top_left_cell),
                valueInputOption='RAW',
                body={'values': rows}
            ).execute()

            logger.info(f"Written {len(rows)} rows to sheet {self.sheet_id} tab {tab_name}")
            return self.sheet_url

        except HttpError as e:
            logger.error(f"Failed to write data: {e}")
            raise

    @property
    def sheet_url(self) -> str:
        return f"https://docs.google.com/spreadsheets/d/{self.sheet_id}/edit"
