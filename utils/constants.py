APP_NAME = "Finance Manager"
APP_WIDTH = 1000
APP_HEIGHT = 700

DATE_FORMAT = "%Y-%m-%d"

API_PREFIX = "/api/v1/finance"
DEFAULT_API_BASE_URL = "http://localhost:8080"
API_URL_ENV_VAR = "FINANCE_API_URL"

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"
INFO_COLOR = "#2196F3"

LOADING_TEXT = "Loading..."
EMPTY_INCOME_TEXT = "No income transactions found."
EMPTY_EXPENSE_TEXT = "No expense transactions found."
EMPTY_BALANCE_TEXT = "No transactions found."

CREATE_FAILED_TEXT = "Failed to add transaction. Please try again."
EXPORT_FAILED_TEXT = "Failed to download CSV. Please try again."


def csv_filename(date_from: str, date_to: str) -> str:
    return f"transactions_{date_from}_{date_to}.csv"
