"""Tests for the display rows and labels computed from tab results."""

from __future__ import annotations

from models.category import TransactionKind
from models.view_state import BalanceView, LoadStatus, Tab, TabResult
from ui.view_models import balance_tab_view, category_tab_view, expense_breakdown
from utils.constants import EMPTY_BALANCE_TEXT, EMPTY_EXPENSE_TEXT, LOADING_TEXT

from conftest import make_summary


def _loaded(*summaries, kind=TransactionKind.INCOMES) -> TabResult:
    return TabResult(status=LoadStatus.LOADED, kind=kind, summaries=tuple(summaries))


def test_income_view_single_salary_row() -> None:
    result = _loaded(make_summary("Salary", 5000, [(5000, "2026-02-15", None)]))

    view = category_tab_view(Tab.INCOME, result)

    assert view.message is None
    assert view.row_count == 1
    (table,) = view.tables
    assert table.title == "Salary"
    assert table.total_text == "$5000.00"
    assert table.rows == [("2026-02-15", "-", "$5000.00")]
    assert view.total_text == "$5000.00"


def test_income_view_honours_display_date_format() -> None:
    result = _loaded(make_summary("Salary", 10, [(10, "2026-02-15", "Tip")]))

    view = category_tab_view(Tab.INCOME, result, date_format="DD/MM/YYYY")

    assert view.tables[0].rows == [("15/02/2026", "Tip", "$10.00")]


def test_missing_category_total_renders_zero() -> None:
    view = category_tab_view(Tab.INCOME, _loaded(make_summary("Gift", None, [(20, "2026-02-02", "x")])))

    assert view.tables[0].total_text == "$0.00"
    assert view.total_text == "$0.00"


def test_loading_and_empty_messages() -> None:
    assert category_tab_view(Tab.EXPENSE, TabResult(status=LoadStatus.LOADING)).message == LOADING_TEXT
    assert category_tab_view(Tab.EXPENSE, _loaded()).message == EMPTY_EXPENSE_TEXT
    assert balance_tab_view(BalanceView.INCOMES, _loaded()).message == EMPTY_BALANCE_TEXT


def test_balance_incomes_lists_individual_transactions() -> None:
    result = _loaded(
        make_summary("Salary", 5000, [(5000, "2026-02-15", "Monthly salary")]),
        make_summary("Freelance", 450.5, [(200, "2026-02-10", None), (250.5, "2026-02-20", None)], category_id=8),
    )

    view = balance_tab_view(BalanceView.INCOMES, result)

    assert view.headers == ("Amount", "Date")
    assert view.rows == [
        ("$5000.00", "2026-02-15"),
        ("$200.00", "2026-02-10"),
        ("$250.50", "2026-02-20"),
    ]
    assert view.total_text == "$5450.50"


def test_balance_expenses_lists_category_totals() -> None:
    kind = TransactionKind.EXPENSES
    result = _loaded(
        make_summary("Food & Groceries", 750.5, kind=kind, category_id=2),
        make_summary("Transportation", 215, kind=kind, category_id=3),
        kind=kind,
    )

    view = balance_tab_view(BalanceView.EXPENSES, result)

    assert view.headers == ("Category", "Amount")
    assert view.rows == [("Food & Groceries", "$750.50"), ("Transportation", "$215.00")]
    assert view.total_text == "$965.50"


def test_balance_layout_follows_loaded_kind() -> None:
    # toggled to expenses but the income response is still on screen
    result = _loaded(make_summary("Salary", 100, [(100, "2026-02-01", None)]))

    view = balance_tab_view(BalanceView.EXPENSES, result)

    assert view.headers == ("Amount", "Date")


def test_expense_breakdown_skips_empty_totals() -> None:
    kind = TransactionKind.EXPENSES
    result = _loaded(
        make_summary("Food", 100, kind=kind, category_id=2),
        make_summary("Nothing", 0, kind=kind, category_id=3),
        make_summary("Unknown", None, kind=kind, category_id=4),
        kind=kind,
    )

    assert expense_breakdown(result) == [("Food", 100.0)]
