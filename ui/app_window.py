from tkinter import filedialog, messagebox

import customtkinter as ctk

from api.finance_api import FinanceApiClient
from models.view_state import Tab, ViewState
from services.task_runner import ThreadedTaskRunner
from services.view_state_service import ViewStateController
from ui.components.alert_banner import AlertBanner
from ui.components.transaction_form import TransactionForm
from ui.tabs.balance_tab import BalanceTab
from ui.tabs.transactions_tab import TransactionsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT
from utils.logging_utils import get_logger

logger = get_logger(__name__)

_TAB_NAMES: dict[Tab, str] = {
    Tab.INCOME: "Income",
    Tab.EXPENSE: "Expense",
    Tab.BALANCE: "Balance",
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        api_client: FinanceApiClient,
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._date_format = date_format
        self._form: TransactionForm | None = None
        self._banner: AlertBanner | None = None
        self._banner_status = None

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self._controller = ViewStateController(
            api_client,
            ThreadedTaskRunner(lambda fn: self.after(0, fn)),
            alert=self._show_alert,
            save_csv=self._save_csv,
        )

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()

        self._controller.subscribe(self._on_state_changed)
        self._on_state_changed(self._controller.state)
        self.after(100, self._controller.start)

    @property
    def controller(self) -> ViewStateController:
        return self._controller

    # ── Layout ───────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=48)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)
        ctk.CTkLabel(
            bar, text=f"💰 {APP_NAME}", font=ctk.CTkFont(size=18, weight="bold"),
        ).pack(side="left", padx=12, pady=8)
        self._loading_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._loading_label.pack(side="right", padx=12)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self, command=self._on_tab_selected)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in _TAB_NAMES.values():
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._income_tab = TransactionsTab(
            self._tabview.tab(_TAB_NAMES[Tab.INCOME]),
            controller=self._controller,
            tab=Tab.INCOME,
            date_format=self._date_format,
        )
        self._income_tab.grid(row=0, column=0, sticky="nsew")

        self._expense_tab = TransactionsTab(
            self._tabview.tab(_TAB_NAMES[Tab.EXPENSE]),
            controller=self._controller,
            tab=Tab.EXPENSE,
            date_format=self._date_format,
        )
        self._expense_tab.grid(row=0, column=0, sticky="nsew")

        self._balance_tab = BalanceTab(
            self._tabview.tab(_TAB_NAMES[Tab.BALANCE]),
            controller=self._controller,
            date_format=self._date_format,
        )
        self._balance_tab.grid(row=0, column=0, sticky="nsew")

    def _on_tab_selected(self):
        name = self._tabview.get()
        tab = next(t for t, label in _TAB_NAMES.items() if label == name)
        self._controller.select_tab(tab)

    # ── State → widgets ──────────────────────────────────────────────────────
    def _on_state_changed(self, state: ViewState):
        self._loading_label.configure(text="Loading..." if state.loading else "")
        self._income_tab.render(state)
        self._expense_tab.render(state)
        self._balance_tab.render(state)
        self._sync_modal(state)
        self._sync_connection_banner()

    def _sync_modal(self, state: ViewState):
        form_open = self._form is not None and self._form.winfo_exists()
        if state.modal is None:
            if form_open:
                self._form.destroy()
            self._form = None
            return
        categories = state.categories_of(state.modal.kind)
        if form_open:
            self._form.set_categories(categories)
            return
        self._form = TransactionForm(
            self,
            controller=self._controller,
            draft=state.modal,
            categories=categories,
            date_format=self._date_format,
        )

    def _sync_connection_banner(self):
        status = self._controller.connection
        if status is None or status.ok:
            if self._banner is not None and self._banner.winfo_exists():
                self._banner.destroy()
            self._banner = None
            return
        if status is self._banner_status:
            return   # already shown (or dismissed) for this probe
        self._banner_status = status
        message = f"Cannot reach the finance server. {status.error}"
        if self._banner is not None and self._banner.winfo_exists():
            self._banner.set_message(message)
            return
        self._banner = AlertBanner(
            self._banner_frame,
            message=message,
            action_text="Retry",
            action_cmd=self._controller.start,
        )
        self._banner.pack(fill="x", pady=2)

    # ── Blocking dialogs ─────────────────────────────────────────────────────
    def _show_alert(self, title: str, message: str):
        if self._form is not None and self._form.winfo_exists():
            self._form.submission_failed()
            messagebox.showerror(title, message, parent=self._form)
        else:
            messagebox.showerror(title, message, parent=self)

    def _save_csv(self, filename: str, text: str):
        path = filedialog.asksaveasfilename(
            parent=self,
            title="Save CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
            initialfile=filename,
        )
        if not path:
            return
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logger.error("Could not write %s: %s", path, e)
            messagebox.showerror("Export Failed", str(e), parent=self)
            return
        logger.info("Saved CSV to %s", path)
