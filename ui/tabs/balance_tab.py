import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from models.view_state import BalanceView, Tab, ViewState
from services.view_state_service import ViewStateController
from ui.components.date_picker import DatePickerWidget
from ui.view_models import TabView, balance_tab_view, expense_breakdown
from utils.constants import EXPENSE_COLOR, INFO_COLOR

_VIEW_LABELS = {BalanceView.INCOMES: "Incomes", BalanceView.EXPENSES: "Expenses"}


class BalanceTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        controller: ViewStateController,
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._controller = controller
        self._date_format = date_format
        self._last_view: TabView | None = None
        self._last_breakdown: list | None = None

        state = controller.state
        self._view_var = ctk.StringVar(value=_VIEW_LABELS[state.balance_view])

        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._build_table()
        self._build_chart()
        self._build_footer()

    # ── Toolbar ─────────────────────────────────────────────────────────────
    def _build_toolbar(self):
        date_filter = self._controller.state.filter_for(Tab.BALANCE)
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="From:").pack(side="left", padx=(12, 4), pady=8)
        self._from_picker = DatePickerWidget(
            bar, initial_date=date_filter.date_from, date_format=self._date_format,
            on_change=lambda d: self._controller.set_filter(Tab.BALANCE, date_from=d),
        )
        self._from_picker.pack(side="left", padx=(0, 12))

        ctk.CTkLabel(bar, text="To:").pack(side="left", padx=(0, 4))
        self._to_picker = DatePickerWidget(
            bar, initial_date=date_filter.date_to, date_format=self._date_format,
            on_change=lambda d: self._controller.set_filter(Tab.BALANCE, date_to=d),
        )
        self._to_picker.pack(side="left", padx=(0, 12))

        ctk.CTkButton(bar, text="Apply", width=80, command=self._on_apply).pack(
            side="left", padx=8
        )

        toggle = ctk.CTkFrame(self, fg_color="transparent")
        toggle.grid(row=1, column=0, columnspan=2, sticky="w", padx=8, pady=(8, 0))
        ctk.CTkSegmentedButton(
            toggle,
            values=list(_VIEW_LABELS.values()),
            variable=self._view_var,
            command=self._on_view_changed,
            width=220,
        ).pack(side="left", padx=4)

    def _sync_filter(self):
        self._controller.set_filter(
            Tab.BALANCE,
            date_from=self._from_picker.get() if self._from_picker.is_valid() else None,
            date_to=self._to_picker.get() if self._to_picker.is_valid() else None,
        )

    def _on_apply(self):
        self._sync_filter()
        self._controller.apply_filter(Tab.BALANCE)

    def _on_view_changed(self, label: str):
        view = next(v for v, text in _VIEW_LABELS.items() if text == label)
        self._sync_filter()
        self._controller.switch_balance_view(view)

    # ── Table / chart / footer ──────────────────────────────────────────────
    def _build_table(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=(8, 4), pady=(8, 0))
        self._scroll.grid_columnconfigure((0, 1), weight=1)

    def _build_chart(self):
        outer = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=2, column=1, sticky="nsew", padx=(4, 8), pady=(8, 0))
        ctk.CTkLabel(
            outer, text="Expense Breakdown", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=outer)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

    def _build_footer(self):
        row = ctk.CTkFrame(self, fg_color=("gray85", "gray20"), corner_radius=8)
        row.grid(row=3, column=0, columnspan=2, sticky="ew", padx=8, pady=8)
        ctk.CTkLabel(row, text="Total:", font=ctk.CTkFont(weight="bold")).pack(
            side="left", padx=12, pady=8
        )
        self._total_label = ctk.CTkLabel(
            row, text="", text_color=INFO_COLOR, font=ctk.CTkFont(size=16, weight="bold"),
        )
        self._total_label.pack(side="left", padx=4)
        ctk.CTkButton(
            row, text="Download CSV", width=120, command=self._on_export,
        ).pack(side="right", padx=12)

    def _on_export(self):
        self._sync_filter()
        self._controller.export_csv()

    def render(self, state: ViewState):
        self._view_var.set(_VIEW_LABELS[state.balance_view])
        result = state.result_for(Tab.BALANCE)
        view = balance_tab_view(state.balance_view, result, self._date_format)
        if view != self._last_view:
            self._last_view = view
            self._render_table(view)
        breakdown = expense_breakdown(result) if view.headers == ("Category", "Amount") else []
        if breakdown != self._last_breakdown:
            self._last_breakdown = breakdown
            self.after(50, lambda b=breakdown: self._draw_pie_chart(b))

    def _render_table(self, view: TabView):
        for w in self._scroll.winfo_children():
            w.destroy()
        self._total_label.configure(text=view.total_text)

        if view.message:
            ctk.CTkLabel(self._scroll, text=view.message, text_color="gray60").grid(
                row=0, column=0, columnspan=2, pady=(20, 4)
            )
            if view.error:
                ctk.CTkLabel(
                    self._scroll, text=view.error, text_color=EXPENSE_COLOR,
                    font=ctk.CTkFont(size=11), wraplength=400,
                ).grid(row=1, column=0, columnspan=2, pady=(0, 20))
            return

        for col, label in enumerate(view.headers):
            ctk.CTkLabel(
                self._scroll, text=label, anchor="w", font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=col, padx=8, pady=(4, 2), sticky="ew")
        for r, values in enumerate(view.rows, start=1):
            bg = ("gray92", "gray17") if r % 2 else ("gray88", "gray21")
            for col, text in enumerate(values):
                ctk.CTkLabel(
                    self._scroll, text=text, anchor="w", fg_color=bg, corner_radius=0,
                ).grid(row=r, column=col, padx=0, pady=1, sticky="ew")

    def _draw_pie_chart(self, breakdown: list[tuple[str, float]]):
        ax = self._pie_ax
        ax.clear()
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        self._pie_fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)

        if not breakdown:
            ax.text(0.5, 0.5, "No expense data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.axis("off")
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [total for _, total in breakdown],
            labels=[label for label, _ in breakdown],
            startangle=90,
            textprops={"fontsize": 8, "color": "#aaaaaa" if is_dark else "#444444"},
        )
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()
