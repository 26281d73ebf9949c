"""Google Sheets layout and source labels."""

DEFAULT_QUESTION_RANGE: str = "Sheet1!A:G"
DEFAULT_USER_DATA_RANGE: str = "UserData!A:E"
PLACEHOLDER_SPREADSHEET_ID: str = "your_spreadsheet_id_here"
SHEETS_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/spreadsheets",)

MIN_ROW_CELLS: int = 6
OPTION_COLUMNS: tuple[int, ...] = (1, 2, 3, 4)
CORRECT_ANSWER_COLUMN: int = 5
WEIGHTAGE_COLUMN: int = 6

SOURCE_SHEETS: str = "google-sheets"
SOURCE_FALLBACK: str = "fallback"
SOURCE_FALLBACK_ERROR: str = "fallback-error"
SOURCE_CACHED_FALLBACK: str = "cached-fallback"
