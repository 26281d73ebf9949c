"""Thin wrapper around the Google Sheets v4 API."""

from __future__ import annotations

import json
import logging
from threading import Lock
from typing import Any, Sequence

import google.auth
import google.auth.exceptions
from google.oauth2 import service_account
from googleapiclient.discovery import build

from trivia_quiz.constants.sheet_constants import SHEETS_SCOPES
from trivia_quiz.core.settings import Settings

logger = logging.getLogger(__name__)


class SheetsConfigurationError(RuntimeError):
    """Raised when the Sheets API client cannot be created."""


class SheetsClient:
    """Reads question rows from, and appends audit rows to, one spreadsheet."""

    def __init__(self, spreadsheet_id: str, question_range: str, credentials: Any) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._question_range = question_range
        self._credentials = credentials
        self._service: Any = None
        self._lock = Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsClient":
        if not settings.spreadsheet_id:
            raise SheetsConfigurationError("GOOGLE_SPREADSHEET_ID is not set.")
        credentials = _load_credentials(settings)
        return cls(settings.spreadsheet_id, settings.sheets_range, credentials)

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    def fetch_rows(self) -> list[list[str]]:
        """Return the raw cell values of the question range."""
        # httplib2 connections are not thread-safe; requests run one at a time.
        with self._lock:
            response = (
                self._values()
                .get(spreadsheetId=self._spreadsheet_id, range=self._question_range)
                .execute()
            )
        rows = response.get("values", [])
        logger.debug("Fetched %d raw rows from range %s", len(rows), self._question_range)
        return rows

    def append_row(self, target_range: str, values: Sequence[object]) -> None:
        with self._lock:
            self._values().append(
                spreadsheetId=self._spreadsheet_id,
                range=target_range,
                valueInputOption="RAW",
                body={"values": [list(values)]},
            ).execute()

    def _values(self) -> Any:
        if self._service is None:
            self._service = build("sheets", "v4", credentials=self._credentials, cache_discovery=False)
        return self._service.spreadsheets().values()


def _load_credentials(settings: Settings) -> Any:
    scopes = list(SHEETS_SCOPES)
    try:
        if settings.service_account_json:
            info = json.loads(settings.service_account_json)
            return service_account.Credentials.from_service_account_info(info, scopes=scopes)
        if settings.credentials_path:
            if settings.credentials_path.lstrip().startswith("{"):
                info = json.loads(settings.credentials_path)
                return service_account.Credentials.from_service_account_info(info, scopes=scopes)
            return service_account.Credentials.from_service_account_file(
                settings.credentials_path, scopes=scopes
            )
        credentials, _project = google.auth.default(scopes=scopes)
        return credentials
    except (ValueError, OSError, google.auth.exceptions.GoogleAuthError) as exc:
        raise SheetsConfigurationError(f"Unable to load Google credentials: {exc}") from exc
