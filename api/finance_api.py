"""HTTP client for the finance REST API (``/api/v1/finance``).

Every failure mode (transport error, non-2xx status, unusable body) is
raised as ``ApiError`` so callers only ever catch one exception type.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import requests

from models.category import Category, TransactionKind
from models.transaction import CategorySummary, Transaction
from utils.constants import API_PREFIX, DEFAULT_API_BASE_URL
from utils.logging_utils import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ConnectionStatus:
    ok: bool
    error: Optional[str] = None


def _json_number(amount: Decimal) -> int | float:
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, float):
        value = repr(value)
    return Decimal(value)


class FinanceApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self._base = base_url.rstrip("/") + API_PREFIX
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base

    # ── Transport ────────────────────────────────────────────────────────────
    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self._base}{path}"
        if self._timeout is not None:
            kwargs.setdefault("timeout", self._timeout)
        logger.debug("%s %s params=%s", method, url, kwargs.get("params"))
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"Could not reach {url}: {e}") from e
        if not 200 <= response.status_code < 300:
            raise ApiError(
                f"{method} {path} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _json(self, response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Response body is not valid JSON", response.status_code) from e

    # ── Parsing ──────────────────────────────────────────────────────────────
    def _to_category(self, raw: dict) -> Category:
        return Category(
            id=int(raw["idCategory"]),
            description=raw["description"],
            type=TransactionKind(raw["type"]),
        )

    def _to_transaction(self, raw: dict) -> Transaction:
        return Transaction(
            id=int(raw["idTransaction"]),
            amount=_to_decimal(raw["amount"]),
            date=raw["transactionDate"],
            comment=raw.get("comment"),
        )

    def _to_summary(self, raw: dict) -> CategorySummary:
        total = raw.get("categoryTotal")
        return CategorySummary(
            category=self._to_category(raw["category"]),
            category_total=_to_decimal(total) if total is not None else None,
            transactions=tuple(
                self._to_transaction(t) for t in raw.get("transactions") or []
            ),
        )

    # ── Endpoints ────────────────────────────────────────────────────────────
    def check_connection(self) -> ConnectionStatus:
        try:
            self._request("GET", "/categories", params={"type": TransactionKind.EXPENSES.value})
        except ApiError as e:
            return ConnectionStatus(ok=False, error=str(e))
        return ConnectionStatus(ok=True)

    def get_categories(self, kind: TransactionKind) -> list[Category]:
        data = self._json(self._request("GET", "/categories", params={"type": kind.value}))
        if not isinstance(data, list):
            raise ApiError("Expected a list of categories")
        try:
            return [self._to_category(c) for c in data]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Malformed category in response: {e}") from e

    def get_transactions(
        self, kind: TransactionKind, date_from: str, date_to: str
    ) -> list[CategorySummary]:
        data = self._json(self._request(
            "GET", "/transactions",
            params={"type": kind.value, "dateFrom": date_from, "dateTo": date_to},
        ))
        if not isinstance(data, dict):
            raise ApiError("Expected an object with categorySummaries")
        try:
            return [self._to_summary(s) for s in data.get("categorySummaries") or []]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise ApiError(f"Malformed category summary in response: {e}") from e

    def create_transaction(
        self,
        amount: Decimal,
        transaction_date: str,
        category_id: int,
        comment: str = "",
    ) -> dict:
        payload = {
            "amount": _json_number(amount),
            "transactionDate": transaction_date,
            "categoryId": category_id,
            "comment": comment,
        }
        response = self._request("POST", "/transactions", json=payload)
        if not response.content:
            return {}
        # The row is already stored once the server answers 2xx
        try:
            body = response.json()
        except ValueError:
            logger.warning("Transaction created but response body was not JSON")
            return {}
        return body if isinstance(body, dict) else {}

    def export_csv(self, date_from: str, date_to: str) -> str:
        response = self._request(
            "GET", "/transactions/export",
            params={"dateFrom": date_from, "dateTo": date_to},
        )
        return response.text
