"""Shared fakes: a task runner resolved by hand and an in-memory API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from api.finance_api import ApiError, ConnectionStatus
from models.category import Category, TransactionKind
from models.transaction import CategorySummary, Transaction
from services import state_reducer
from services.view_state_service import ViewStateController

TODAY = date(2026, 2, 20)


class ManualRunner:
    """Queues submitted work so tests decide when, and in which order, it completes."""

    def __init__(self) -> None:
        self.pending: list = []

    def submit(self, work, on_success, on_error) -> None:
        self.pending.append((work, on_success, on_error))

    def run(self, index: int = 0) -> None:
        work, on_success, on_error = self.pending.pop(index)
        try:
            result = work()
        except Exception as error:
            on_error(error)
            return
        on_success(result)

    def run_all(self) -> None:
        while self.pending:
            self.run(0)


class FakeApi:
    base_url = "http://test/api/v1/finance"

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.fail_kinds: set[TransactionKind] = set()
        self.categories = {
            TransactionKind.INCOMES: [Category(1, "Salary", TransactionKind.INCOMES)],
            TransactionKind.EXPENSES: [Category(2, "Food & Groceries", TransactionKind.EXPENSES)],
        }
        self.summaries = {TransactionKind.INCOMES: [], TransactionKind.EXPENSES: []}
        self.csv_text = "Transaction ID,Transaction Date,Amount\n1,2026-02-15,5000\n"

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail:
            raise ApiError(f"{name} failed with HTTP 500", status_code=500)

    def check_connection(self) -> ConnectionStatus:
        self.calls.append(("check_connection",))
        if "check_connection" in self.fail:
            return ConnectionStatus(ok=False, error="Connection refused")
        return ConnectionStatus(ok=True)

    def get_categories(self, kind):
        self.calls.append(("get_categories", kind))
        if kind in self.fail_kinds:
            raise ApiError(f"categories {kind.value} failed", status_code=503)
        self._maybe_fail("get_categories")
        return list(self.categories[kind])

    def get_transactions(self, kind, date_from, date_to):
        self.calls.append(("get_transactions", kind, date_from, date_to))
        self._maybe_fail("get_transactions")
        return list(self.summaries[kind])

    def create_transaction(self, amount, transaction_date, category_id, comment=""):
        self.calls.append(("create_transaction", {
            "amount": amount,
            "transactionDate": transaction_date,
            "categoryId": category_id,
            "comment": comment,
        }))
        self._maybe_fail("create_transaction")
        return {"idTransaction": 99}

    def export_csv(self, date_from, date_to):
        self.calls.append(("export_csv", date_from, date_to))
        self._maybe_fail("export_csv")
        return self.csv_text

    def calls_named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


def make_summary(
    description: str,
    total,
    transactions=(),
    kind: TransactionKind = TransactionKind.INCOMES,
    category_id: int = 1,
) -> CategorySummary:
    return CategorySummary(
        category=Category(category_id, description, kind),
        category_total=None if total is None else Decimal(str(total)),
        transactions=tuple(
            Transaction(id=i, amount=Decimal(str(amount)), date=day, comment=comment)
            for i, (amount, day, comment) in enumerate(transactions, start=1)
        ),
    )


@pytest.fixture
def runner() -> ManualRunner:
    return ManualRunner()


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def alerts() -> list:
    return []


@pytest.fixture
def saved_csv() -> list:
    return []


@pytest.fixture
def controller(api, runner, alerts, saved_csv) -> ViewStateController:
    return ViewStateController(
        api,
        runner,
        alert=lambda title, message: alerts.append((title, message)),
        save_csv=lambda filename, text: saved_csv.append((filename, text)),
        state=state_reducer.initial_state(TODAY),
    )
