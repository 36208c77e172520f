"""Display-ready rows and labels derived from ``ViewState``.

Kept free of widget imports so rendering decisions can be tested without a
display.
"""
from dataclasses import dataclass, field
from typing import Optional

from models.category import TransactionKind
from models.transaction import CategorySummary
from models.view_state import BalanceView, LoadStatus, Tab, TabResult
from services.state_reducer import compute_total
from utils.constants import (
    EMPTY_BALANCE_TEXT, EMPTY_EXPENSE_TEXT, EMPTY_INCOME_TEXT, LOADING_TEXT,
)
from utils.currency import format_currency
from utils.date_helpers import format_display_date

_EMPTY_TEXT = {
    Tab.INCOME: EMPTY_INCOME_TEXT,
    Tab.EXPENSE: EMPTY_EXPENSE_TEXT,
    Tab.BALANCE: EMPTY_BALANCE_TEXT,
}


@dataclass(frozen=True)
class CategoryTable:
    title: str
    total_text: str
    rows: list[tuple[str, str, str]]    # (date, comment, amount)


@dataclass(frozen=True)
class TabView:
    """Everything a tab body needs: a placeholder message or tables/rows, and the total."""

    message: Optional[str] = None
    error: Optional[str] = None
    tables: list[CategoryTable] = field(default_factory=list)
    headers: tuple[str, ...] = ()
    rows: list[tuple[str, ...]] = field(default_factory=list)
    total_text: str = format_currency(0)

    @property
    def row_count(self) -> int:
        if self.tables:
            return sum(len(t.rows) for t in self.tables)
        return len(self.rows)


def _placeholder(tab: Tab, result: TabResult) -> Optional[TabView]:
    if result.status is LoadStatus.LOADING:
        return TabView(message=LOADING_TEXT)
    if result.status is LoadStatus.FAILED:
        return TabView(
            message=_EMPTY_TEXT[tab],
            error=f"Could not load transactions: {result.error}",
        )
    if not result.summaries:
        return TabView(message=_EMPTY_TEXT[tab])
    return None


def _category_table(summary: CategorySummary, date_format: str) -> CategoryTable:
    return CategoryTable(
        title=summary.category.description,
        total_text=format_currency(summary.category_total),
        rows=[
            (
                format_display_date(t.date, date_format),
                t.comment or "-",
                format_currency(t.amount),
            )
            for t in summary.transactions
        ],
    )


def category_tab_view(tab: Tab, result: TabResult, date_format: str = "YYYY-MM-DD") -> TabView:
    """Income/Expense tab: one table per category."""
    placeholder = _placeholder(tab, result)
    if placeholder:
        return placeholder
    return TabView(
        tables=[_category_table(s, date_format) for s in result.summaries],
        total_text=format_currency(compute_total(result.summaries)),
    )


def balance_tab_view(
    view: BalanceView, result: TabResult, date_format: str = "YYYY-MM-DD"
) -> TabView:
    """Balance tab: individual income rows, or one row per expense category.

    The layout follows the kind the result was loaded for, so a toggle that
    has not been answered yet never shows incomes in the expense layout.
    """
    placeholder = _placeholder(Tab.BALANCE, result)
    if placeholder:
        return placeholder
    if result.kind is not None:
        view = BalanceView.INCOMES if result.kind is TransactionKind.INCOMES else BalanceView.EXPENSES
    total_text = format_currency(compute_total(result.summaries))
    if view is BalanceView.INCOMES:
        rows = [
            (format_currency(t.amount), format_display_date(t.date, date_format))
            for s in result.summaries
            for t in s.transactions
        ]
        return TabView(headers=("Amount", "Date"), rows=rows, total_text=total_text)
    rows = [
        (s.category.description, format_currency(s.category_total))
        for s in result.summaries
    ]
    return TabView(headers=("Category", "Amount"), rows=rows, total_text=total_text)


def expense_breakdown(result: TabResult) -> list[tuple[str, float]]:
    """(label, total) pairs with a positive total, for the balance pie chart."""
    return [
        (s.category.description, float(s.category_total))
        for s in result.summaries
        if s.category_total and s.category_total > 0
    ]
