from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from models.category import Category, TransactionKind
from models.transaction import CategorySummary, NewTransactionDraft


class Tab(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    BALANCE = "balance"


class BalanceView(str, Enum):
    INCOMES = "incomes"
    EXPENSES = "expenses"

    @property
    def kind(self) -> TransactionKind:
        if self is BalanceView.INCOMES:
            return TransactionKind.INCOMES
        return TransactionKind.EXPENSES


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class DateFilter:
    date_from: str          # 'YYYY-MM-DD'
    date_to: str            # 'YYYY-MM-DD'


@dataclass(frozen=True)
class TabResult:
    """What one tab currently shows: nothing yet, a pending load, data, or a failure."""

    status: LoadStatus = LoadStatus.IDLE
    kind: Optional[TransactionKind] = None
    summaries: tuple[CategorySummary, ...] = ()
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def failed(self) -> bool:
        return self.status is LoadStatus.FAILED


@dataclass(frozen=True)
class ViewState:
    active_tab: Tab
    balance_view: BalanceView
    filters: Mapping[Tab, DateFilter]
    results: Mapping[Tab, TabResult]
    tokens: Mapping[Tab, int]
    categories: Mapping[int, Category] = field(default_factory=dict)
    modal: Optional[NewTransactionDraft] = None

    @property
    def loading(self) -> bool:
        return any(r.is_loading for r in self.results.values())

    def filter_for(self, tab: Tab) -> DateFilter:
        return self.filters[tab]

    def result_for(self, tab: Tab) -> TabResult:
        return self.results[tab]

    def categories_of(self, kind: TransactionKind) -> list[Category]:
        return sorted(
            (c for c in self.categories.values() if c.type is kind),
            key=lambda c: c.description.lower(),
        )
