"""Tests for the pure view-state transitions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from models.category import Category, TransactionKind
from models.view_state import BalanceView, DateFilter, LoadStatus, Tab
from services import state_reducer as reducer

from conftest import TODAY, make_summary


def test_initial_state_gives_each_tab_month_to_date_filter() -> None:
    state = reducer.initial_state(TODAY)

    for tab in Tab:
        assert state.filters[tab] == DateFilter("2026-02-01", "2026-02-20")
        assert state.results[tab].status is LoadStatus.IDLE
    assert state.active_tab is Tab.INCOME
    assert state.balance_view is BalanceView.INCOMES
    assert state.modal is None
    assert not state.loading


def test_default_filter_on_first_of_month_is_single_day() -> None:
    assert reducer.default_filter(date(2026, 3, 1)) == DateFilter("2026-03-01", "2026-03-01")


def test_compute_total_empty_is_zero() -> None:
    total = reducer.compute_total([])

    assert total == Decimal("0.00")
    assert str(total) == "0.00"


def test_compute_total_sums_category_totals() -> None:
    summaries = [make_summary("Salary", 300), make_summary("Bonus", 150)]

    assert reducer.compute_total(summaries) == Decimal("450.00")


def test_compute_total_treats_missing_total_as_zero() -> None:
    summaries = [make_summary("Salary", 300.5), make_summary("Gift", None)]

    assert reducer.compute_total(summaries) == Decimal("300.50")


def test_set_filter_only_touches_one_tab() -> None:
    state = reducer.initial_state(TODAY)

    updated = reducer.set_filter(state, Tab.BALANCE, date_from="2026-01-01")

    assert updated.filters[Tab.BALANCE] == DateFilter("2026-01-01", "2026-02-20")
    assert updated.filters[Tab.INCOME] == state.filters[Tab.INCOME]
    assert updated.filters[Tab.EXPENSE] == state.filters[Tab.EXPENSE]
    # the input state is untouched
    assert state.filters[Tab.BALANCE] == DateFilter("2026-02-01", "2026-02-20")


def test_begin_load_issues_increasing_tokens_per_tab() -> None:
    state = reducer.initial_state(TODAY)

    state = reducer.begin_load(state, Tab.INCOME, TransactionKind.INCOMES)
    state = reducer.begin_load(state, Tab.INCOME, TransactionKind.INCOMES)
    state = reducer.begin_load(state, Tab.EXPENSE, TransactionKind.EXPENSES)

    assert state.tokens[Tab.INCOME] == 2
    assert state.tokens[Tab.EXPENSE] == 1
    assert state.tokens[Tab.BALANCE] == 0
    assert state.results[Tab.INCOME].status is LoadStatus.LOADING
    assert state.loading


def test_finish_load_ignores_stale_token() -> None:
    state = reducer.initial_state(TODAY)
    state = reducer.begin_load(state, Tab.INCOME, TransactionKind.INCOMES)
    state = reducer.begin_load(state, Tab.INCOME, TransactionKind.INCOMES)

    stale = reducer.finish_load(state, Tab.INCOME, 1, TransactionKind.INCOMES, [make_summary("Old", 1)])
    assert stale is state

    fresh = reducer.finish_load(state, Tab.INCOME, 2, TransactionKind.INCOMES, [make_summary("New", 2)])
    result = fresh.results[Tab.INCOME]
    assert result.status is LoadStatus.LOADED
    assert [s.category.description for s in result.summaries] == ["New"]
    assert not fresh.loading


def test_fail_load_drops_previous_data() -> None:
    state = reducer.initial_state(TODAY)
    state = reducer.begin_load(state, Tab.EXPENSE, TransactionKind.EXPENSES)
    state = reducer.finish_load(state, Tab.EXPENSE, 1, TransactionKind.EXPENSES, [make_summary("Food", 10)])
    state = reducer.begin_load(state, Tab.EXPENSE, TransactionKind.EXPENSES)

    state = reducer.fail_load(state, Tab.EXPENSE, 2, TransactionKind.EXPENSES, "HTTP 500")

    result = state.results[Tab.EXPENSE]
    assert result.failed
    assert result.summaries == ()
    assert result.error == "HTTP 500"


def test_kind_for_balance_tab_follows_balance_view() -> None:
    state = reducer.initial_state(TODAY)
    assert reducer.kind_for_tab(state, Tab.BALANCE) is TransactionKind.INCOMES

    state = reducer.switch_balance_view(state, BalanceView.EXPENSES)

    assert reducer.kind_for_tab(state, Tab.BALANCE) is TransactionKind.EXPENSES
    assert reducer.kind_for_tab(state, Tab.INCOME) is TransactionKind.INCOMES


def test_set_categories_replaces_mapping_wholesale() -> None:
    state = reducer.set_categories(
        reducer.initial_state(TODAY),
        [Category(1, "Salary", TransactionKind.INCOMES), Category(2, "Rent", TransactionKind.EXPENSES)],
    )
    state = reducer.set_categories(state, [Category(3, "Freelance", TransactionKind.INCOMES)])

    assert list(state.categories) == [3]
    assert [c.description for c in state.categories_of(TransactionKind.INCOMES)] == ["Freelance"]
    assert state.categories_of(TransactionKind.EXPENSES) == []


def test_open_and_close_modal() -> None:
    state = reducer.open_modal(reducer.initial_state(TODAY), TransactionKind.EXPENSES)

    assert state.modal is not None
    assert state.modal.kind is TransactionKind.EXPENSES
    assert state.modal.transaction_date == date.today().strftime("%Y-%m-%d")
    assert reducer.close_modal(state).modal is None
