import customtkinter as ctk

from models.category import TransactionKind
from models.view_state import Tab, ViewState
from services.view_state_service import ViewStateController
from ui.components.date_picker import DatePickerWidget
from ui.view_models import TabView, category_tab_view
from utils.constants import EXPENSE_COLOR, INCOME_COLOR


_TAB_KIND = {Tab.INCOME: TransactionKind.INCOMES, Tab.EXPENSE: TransactionKind.EXPENSES}


class TransactionsTab(ctk.CTkFrame):
    """Income or Expense tab: own date filter, one table per category, total."""

    def __init__(
        self,
        master,
        controller: ViewStateController,
        tab: Tab,
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._controller = controller
        self._tab = tab
        self._kind = _TAB_KIND[tab]
        self._date_format = date_format
        self._color = INCOME_COLOR if tab is Tab.INCOME else EXPENSE_COLOR
        self._last_view: TabView | None = None

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_filter_bar()
        self._build_body()
        self._build_total()

    # ── Header ──────────────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            hdr, text=self._kind.label, font=ctk.CTkFont(size=18, weight="bold"),
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            hdr, text=f"+ Add {self._kind.label}", width=120,
            command=lambda: self._controller.open_add_modal(self._kind),
        ).pack(side="right", padx=4)

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        date_filter = self._controller.state.filter_for(self._tab)
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=1, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="From:").pack(side="left", padx=(12, 4), pady=8)
        self._from_picker = DatePickerWidget(
            bar, initial_date=date_filter.date_from, date_format=self._date_format,
            on_change=lambda d: self._controller.set_filter(self._tab, date_from=d),
        )
        self._from_picker.pack(side="left", padx=(0, 12))

        ctk.CTkLabel(bar, text="To:").pack(side="left", padx=(0, 4))
        self._to_picker = DatePickerWidget(
            bar, initial_date=date_filter.date_to, date_format=self._date_format,
            on_change=lambda d: self._controller.set_filter(self._tab, date_to=d),
        )
        self._to_picker.pack(side="left", padx=(0, 12))

        ctk.CTkButton(bar, text="Apply", width=80, command=self._on_apply).pack(
            side="left", padx=8
        )

    def _on_apply(self):
        # Typed-but-unfocused entries have not fired on_change yet
        self._controller.set_filter(
            self._tab,
            date_from=self._from_picker.get() if self._from_picker.is_valid() else None,
            date_to=self._to_picker.get() if self._to_picker.is_valid() else None,
        )
        self._controller.apply_filter(self._tab)

    # ── Body ────────────────────────────────────────────────────────────────
    def _build_body(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(8, 0))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _build_total(self):
        row = ctk.CTkFrame(self, fg_color=("gray85", "gray20"), corner_radius=8)
        row.grid(row=3, column=0, sticky="ew", padx=8, pady=8)
        ctk.CTkLabel(row, text="Total:", font=ctk.CTkFont(weight="bold")).pack(
            side="left", padx=12, pady=8
        )
        self._total_label = ctk.CTkLabel(
            row, text="", text_color=self._color,
            font=ctk.CTkFont(size=16, weight="bold"),
        )
        self._total_label.pack(side="right", padx=12)

    def render(self, state: ViewState):
        view = category_tab_view(self._tab, state.result_for(self._tab), self._date_format)
        if view == self._last_view:
            return
        self._last_view = view

        for w in self._scroll.winfo_children():
            w.destroy()
        self._total_label.configure(text=view.total_text)

        if view.message:
            ctk.CTkLabel(
                self._scroll, text=view.message, text_color="gray60",
            ).grid(row=0, column=0, pady=(20, 4))
            if view.error:
                ctk.CTkLabel(
                    self._scroll, text=view.error, text_color=EXPENSE_COLOR,
                    font=ctk.CTkFont(size=11), wraplength=600,
                ).grid(row=1, column=0, pady=(0, 20))
            return

        for idx, table in enumerate(view.tables):
            self._add_table(idx, table)

    def _add_table(self, idx: int, table):
        group = ctk.CTkFrame(self._scroll, fg_color=("gray92", "gray17"), corner_radius=6)
        group.grid(row=idx, column=0, sticky="ew", pady=4, padx=2)
        group.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            group, text=table.title, anchor="w", font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=0, columnspan=2, padx=8, pady=(6, 2), sticky="w")
        ctk.CTkLabel(
            group, text=table.total_text, anchor="e", text_color=self._color,
            font=ctk.CTkFont(weight="bold"),
        ).grid(row=0, column=2, padx=8, pady=(6, 2), sticky="e")

        for col, (label, anchor) in enumerate([("Date", "w"), ("Comment", "w"), ("Amount", "e")]):
            ctk.CTkLabel(
                group, text=label, anchor=anchor, font=ctk.CTkFont(weight="bold"),
            ).grid(row=1, column=col, padx=8, sticky="ew")

        for r, (date_text, comment, amount) in enumerate(table.rows, start=2):
            ctk.CTkLabel(group, text=date_text, width=100, anchor="w").grid(
                row=r, column=0, padx=8, sticky="w"
            )
            ctk.CTkLabel(group, text=comment, anchor="w").grid(
                row=r, column=1, padx=8, sticky="ew"
            )
            ctk.CTkLabel(group, text=amount, width=100, anchor="e").grid(
                row=r, column=2, padx=8, sticky="e"
            )
