"""Coordinates network calls with the window's ``ViewState``.

All mutation goes through the pure transitions in ``state_reducer``; this
class only decides when to call the API and which transition to apply when a
call completes. Completions are delivered on the UI thread by the runner.
"""
from decimal import Decimal
from typing import Callable, Iterable, Optional

from api.finance_api import ApiError, ConnectionStatus, FinanceApiClient
from models.category import Category, TransactionKind
from models.transaction import CategorySummary, NewTransactionDraft
from models.view_state import BalanceView, Tab, ViewState
from services import state_reducer as reducer
from utils.constants import CREATE_FAILED_TEXT, EXPORT_FAILED_TEXT, csv_filename
from utils.date_helpers import parse_date
from utils.logging_utils import get_logger

logger = get_logger(__name__)


def _log_failure(what: str, error: Exception):
    if isinstance(error, ApiError):
        logger.warning("Error fetching %s: %s", what, error)
    else:
        logger.error("Unexpected error fetching %s", what, exc_info=error)


class ViewStateController:
    def __init__(
        self,
        api: FinanceApiClient,
        runner,                     # object with submit(work, on_success, on_error)
        alert: Callable[[str, str], None] | None = None,
        save_csv: Callable[[str, str], None] | None = None,
        state: ViewState | None = None,
    ):
        self._api = api
        self._runner = runner
        self._alert = alert or (lambda title, message: logger.error("%s: %s", title, message))
        self._save_csv = save_csv
        self._state = state or reducer.initial_state()
        self._listeners: list[Callable[[ViewState], None]] = []
        self._connection: ConnectionStatus | None = None
        self._category_gen = 0

    # ── State access ─────────────────────────────────────────────────────────
    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def connection(self) -> ConnectionStatus | None:
        return self._connection

    def subscribe(self, listener: Callable[[ViewState], None]):
        self._listeners.append(listener)

    def _commit(self, new_state: ViewState):
        if new_state is self._state:
            return
        self._state = new_state
        self._notify()

    def _notify(self):
        for listener in list(self._listeners):
            listener(self._state)

    @staticmethod
    def compute_total(summaries: Iterable[CategorySummary]) -> Decimal:
        return reducer.compute_total(summaries)

    # ── Startup ──────────────────────────────────────────────────────────────
    def start(self):
        self.check_connection()
        self.load_categories()
        for tab in Tab:
            self.load_transactions(tab)

    def check_connection(self):
        def on_done(status: ConnectionStatus):
            self._connection = status
            if status.ok:
                logger.info("Connected to %s", self._api.base_url)
            else:
                logger.warning("Backend unreachable: %s", status.error)
            self._notify()

        self._runner.submit(
            self._api.check_connection,
            on_done,
            lambda e: on_done(ConnectionStatus(ok=False, error=str(e))),
        )

    # ── Loading ──────────────────────────────────────────────────────────────
    def load_categories(self):
        """Fetch both category lists in parallel; replace the cache only if both succeed."""
        self._category_gen += 1
        gen = self._category_gen
        fetched: dict[TransactionKind, list[Category]] = {}
        errors: list[Exception] = []

        def settle():
            if gen != self._category_gen:
                return
            if len(fetched) + len(errors) < len(TransactionKind):
                return
            if errors:
                _log_failure("categories", errors[0])
                return
            merged = fetched[TransactionKind.INCOMES] + fetched[TransactionKind.EXPENSES]
            self._commit(reducer.set_categories(self._state, merged))

        def on_success(kind: TransactionKind, categories: list[Category]):
            fetched[kind] = categories
            settle()

        def on_error(error: Exception):
            errors.append(error)
            settle()

        for kind in TransactionKind:
            self._runner.submit(
                lambda k=kind: self._api.get_categories(k),
                lambda cats, k=kind: on_success(k, cats),
                on_error,
            )

    def load_transactions(self, tab: Tab, kind: Optional[TransactionKind] = None):
        kind = kind or reducer.kind_for_tab(self._state, tab)
        self._commit(reducer.begin_load(self._state, tab, kind))
        token = self._state.tokens[tab]
        date_filter = self._state.filters[tab]

        def on_success(summaries: list[CategorySummary]):
            if token != self._state.tokens[tab]:
                logger.debug("Discarding stale %s response (token %d)", tab.value, token)
                return
            self._commit(reducer.finish_load(self._state, tab, token, kind, summaries))

        def on_error(error: Exception):
            if token != self._state.tokens[tab]:
                logger.debug("Discarding stale %s failure (token %d)", tab.value, token)
                return
            _log_failure(f"{tab.value} transactions", error)
            self._commit(reducer.fail_load(self._state, tab, token, kind, str(error)))

        self._runner.submit(
            lambda: self._api.get_transactions(kind, date_filter.date_from, date_filter.date_to),
            on_success,
            on_error,
        )

    def apply_filter(self, tab: Tab):
        self.load_transactions(tab)

    # ── View changes ─────────────────────────────────────────────────────────
    def select_tab(self, tab: Tab):
        self._commit(reducer.select_tab(self._state, tab))

    def set_filter(self, tab: Tab, date_from: str | None = None, date_to: str | None = None):
        self._commit(reducer.set_filter(self._state, tab, date_from, date_to))

    def switch_balance_view(self, view: BalanceView):
        self._commit(reducer.switch_balance_view(self._state, view))
        self.load_transactions(Tab.BALANCE, view.kind)

    # ── Add-transaction modal ────────────────────────────────────────────────
    def open_add_modal(self, kind: TransactionKind | None = None):
        kind = kind or reducer.kind_for_tab(self._state, self._state.active_tab)
        self._commit(reducer.open_modal(self._state, kind))

    def close_modal(self):
        self._commit(reducer.close_modal(self._state))

    def create_transaction(self, draft: NewTransactionDraft):
        """Post the draft. Raises ValueError if a required field is missing."""
        if draft.category_id is None:
            raise ValueError("Please select a category.")
        if draft.amount is None:
            raise ValueError("Amount is required.")
        if not parse_date(draft.transaction_date):
            raise ValueError("Invalid date.")

        def on_success(_created):
            logger.info(
                "Created %s transaction of %s in category %s",
                draft.kind.label.lower(), draft.amount, draft.category_id,
            )
            self._commit(reducer.close_modal(self._state))
            self.load_transactions(self._state.active_tab)

        def on_error(error: Exception):
            logger.error("Error adding transaction: %s", error)
            self._alert("Add Transaction", CREATE_FAILED_TEXT)

        self._runner.submit(
            lambda: self._api.create_transaction(
                amount=draft.amount,
                transaction_date=draft.transaction_date,
                category_id=draft.category_id,
                comment=draft.comment,
            ),
            on_success,
            on_error,
        )

    # ── CSV export ───────────────────────────────────────────────────────────
    def export_csv(self):
        date_filter = self._state.filters[Tab.BALANCE]
        filename = csv_filename(date_filter.date_from, date_filter.date_to)

        def on_success(text: str):
            logger.info("Exported CSV for %s..%s", date_filter.date_from, date_filter.date_to)
            if self._save_csv:
                self._save_csv(filename, text)

        def on_error(error: Exception):
            logger.error("Error downloading CSV: %s", error)
            self._alert("Download CSV", EXPORT_FAILED_TEXT)

        self._runner.submit(
            lambda: self._api.export_csv(date_filter.date_from, date_filter.date_to),
            on_success,
            on_error,
        )
