"""Google Sheets audit log - one appended row per generation run"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Mapping, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from .errors import AuditLogError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Column order of the audit sheet, after timestamp, keywordName and url
CONTENT_COLUMNS = (
    "keywordList",
    "pageTitle",
    "metaTitle",
    "metaDescription",
    "article",
    "urlWiki",
    "wordpressPostId",
)

PROBE_ROW = ["Test", "Google", "Sheets", "API"]


def build_audit_row(
    keyword_name: str,
    url: str,
    generated_content: Mapping[str, str],
    timestamp: Optional[datetime] = None,
) -> List[str]:
    """Flatten one generation run into a sheet row; missing fields become ''."""
    timestamp = timestamp or datetime.now(timezone.utc)
    row = [timestamp.isoformat(), keyword_name, url]
    row.extend(str(generated_content.get(column) or "") for column in CONTENT_COLUMNS)
    return row


class AuditLogWriter:
    """Appends rows to a Google Sheet with a service account"""

    def __init__(
        self,
        spreadsheet_id: Optional[str],
        credentials_path: Optional[str],
        sheet_range: str = "Sheet1!A1",
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_path = credentials_path
        self.sheet_range = sheet_range
        self._service = None
        # One worker: the discovery service shares a single httplib2.Http
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="audit-log")

    @property
    def enabled(self) -> bool:
        return bool(self.spreadsheet_id and self.credentials_path)

    def _get_service(self):
        if self._service is None:
            credentials = service_account.Credentials.from_service_account_file(
                self.credentials_path,
                scopes=SCOPES,
            )
            self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return self._service

    def append_row(self, row: List[str]) -> None:
        """Append a single row synchronously

        Raises:
            AuditLogError: Credentials could not be loaded or the append failed
        """
        if not self.enabled:
            logger.warning("Audit log not configured, skipping row")
            return

        try:
            self._get_service().spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=self.sheet_range,
                valueInputOption="RAW",
                body={"values": [row]},
            ).execute()
        except FileNotFoundError as e:
            raise AuditLogError(f"Credentials file not found: {self.credentials_path}") from e
        except Exception as e:
            raise AuditLogError(f"Google Sheets API error: {e}") from e

        logger.info(f"Audit row written to sheet {self.spreadsheet_id}")

    def submit(self, row: List[str]) -> Future:
        """Append a row in the background. Failures are logged, never raised."""
        future = self._executor.submit(self.append_row, row)
        future.add_done_callback(self._log_failure)
        return future

    @staticmethod
    def _log_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(f"Failed to write audit row: {error}")

    def check_connection(self) -> None:
        """Write a probe row to confirm sheet access."""
        if not self.enabled:
            raise AuditLogError("GOOGLE_SHEET_ID and GOOGLE_SERVICE_ACCOUNT_PATH are required")
        self.append_row(PROBE_ROW)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
