"""Pure state transitions for the main window.

Each function takes a ``ViewState`` and returns a new one; nothing here
touches the network or the UI.
"""
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from models.category import Category, TransactionKind
from models.transaction import CategorySummary, NewTransactionDraft
from models.view_state import (
    BalanceView, DateFilter, LoadStatus, Tab, TabResult, ViewState,
)
from utils.date_helpers import first_of_month_str, format_date, today_str


def default_filter(ref: date | None = None) -> DateFilter:
    ref = ref or date.today()
    return DateFilter(date_from=first_of_month_str(ref), date_to=format_date(ref))


def initial_state(ref: date | None = None) -> ViewState:
    return ViewState(
        active_tab=Tab.INCOME,
        balance_view=BalanceView.INCOMES,
        filters={tab: default_filter(ref) for tab in Tab},
        results={tab: TabResult() for tab in Tab},
        tokens={tab: 0 for tab in Tab},
    )


def kind_for_tab(state: ViewState, tab: Tab) -> TransactionKind:
    if tab is Tab.INCOME:
        return TransactionKind.INCOMES
    if tab is Tab.EXPENSE:
        return TransactionKind.EXPENSES
    return state.balance_view.kind


def compute_total(summaries: Iterable[CategorySummary]) -> Decimal:
    total = sum(
        (s.category_total or Decimal("0") for s in summaries),
        Decimal("0"),
    )
    return total.quantize(Decimal("0.01"))


def select_tab(state: ViewState, tab: Tab) -> ViewState:
    return replace(state, active_tab=tab)


def set_filter(
    state: ViewState,
    tab: Tab,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> ViewState:
    current = state.filters[tab]
    updated = DateFilter(
        date_from=current.date_from if date_from is None else date_from,
        date_to=current.date_to if date_to is None else date_to,
    )
    return replace(state, filters={**state.filters, tab: updated})


def begin_load(state: ViewState, tab: Tab, kind: TransactionKind) -> ViewState:
    """Issue the next request token for ``tab`` and mark it loading."""
    token = state.tokens[tab] + 1
    return replace(
        state,
        tokens={**state.tokens, tab: token},
        results={**state.results, tab: TabResult(status=LoadStatus.LOADING, kind=kind)},
    )


def finish_load(
    state: ViewState,
    tab: Tab,
    token: int,
    kind: TransactionKind,
    summaries: Iterable[CategorySummary],
) -> ViewState:
    if token != state.tokens[tab]:
        return state
    result = TabResult(status=LoadStatus.LOADED, kind=kind, summaries=tuple(summaries))
    return replace(state, results={**state.results, tab: result})


def fail_load(
    state: ViewState, tab: Tab, token: int, kind: TransactionKind, reason: str
) -> ViewState:
    if token != state.tokens[tab]:
        return state
    result = TabResult(status=LoadStatus.FAILED, kind=kind, error=reason)
    return replace(state, results={**state.results, tab: result})


def switch_balance_view(state: ViewState, view: BalanceView) -> ViewState:
    return replace(state, balance_view=view)


def set_categories(state: ViewState, categories: Iterable[Category]) -> ViewState:
    return replace(state, categories={c.id: c for c in categories})


def open_modal(state: ViewState, kind: TransactionKind) -> ViewState:
    return replace(state, modal=NewTransactionDraft(kind=kind, transaction_date=today_str()))


def close_modal(state: ViewState) -> ViewState:
    return replace(state, modal=None)
