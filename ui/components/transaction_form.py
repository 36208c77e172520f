import customtkinter as ctk

from models.category import Category
from models.transaction import NewTransactionDraft
from services.view_state_service import ViewStateController
from ui.components.date_picker import DatePickerWidget
from utils.currency import parse_amount


class TransactionForm(ctk.CTkToplevel):
    """Modal for adding an income or expense.

    The window stays open until the controller clears the modal from the
    state; the owner destroys it then.
    """

    def __init__(
        self,
        master,
        controller: ViewStateController,
        draft: NewTransactionDraft,
        categories: list[Category],
        date_format: str = "YYYY-MM-DD",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._controller = controller
        self._draft = draft
        self._cats: list[Category] = []
        self._submitting = False

        self.title(f"Add {draft.kind.label}")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)
        self.protocol("WM_DELETE_WINDOW", self._on_cancel)

        r = 0

        # Category
        self._label("Category:", r)
        self._cat_var = ctk.StringVar(value="")
        self._cat_combo = ctk.CTkComboBox(
            self, values=[], variable=self._cat_var, width=220, state="readonly",
        )
        self._cat_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        self.set_categories(categories)
        r += 1

        # Amount
        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(
            value=f"{draft.amount:.2f}" if draft.amount is not None else ""
        )
        ctk.CTkEntry(
            self, textvariable=self._amount_var, width=220, placeholder_text="0.00",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Date
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=draft.transaction_date, date_format=date_format,
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Comment
        self._label("Comment:", r)
        self._comment_box = ctk.CTkTextbox(self, width=220, height=70)
        self._comment_box.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        if draft.comment:
            self._comment_box.insert("1.0", draft.comment)
        r += 1

        self._build_footer(r)

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="ne" if text == "Comment:" else "e"
        )

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._on_cancel,
        ).pack(side="left")
        self._save_btn = ctk.CTkButton(
            btn_frame, text="Add", width=110, command=self._on_save,
        )
        self._save_btn.pack(side="right")

    def set_categories(self, categories: list[Category]):
        """Refresh the category choices, keeping the current pick when still offered."""
        self._cats = [c for c in categories if c.type is self._draft.kind]
        names = [c.description for c in self._cats]
        self._cat_combo.configure(values=names)
        if self._cat_var.get() not in names:
            self._cat_var.set("")
            self._cat_combo.set("Select a category" if names else "No categories")

    def submission_failed(self):
        self._submitting = False
        self._save_btn.configure(state="normal")

    def _on_cancel(self):
        self._controller.close_modal()

    def _on_save(self):
        if self._submitting:
            return

        cat = next((c for c in self._cats if c.description == self._cat_var.get()), None)
        if not cat:
            self._error_var.set("Please select a category.")
            return

        amount = parse_amount(self._amount_var.get())
        if amount is None:
            self._error_var.set("Invalid amount.")
            return

        if not self._date_picker.is_valid():
            self._error_var.set("Invalid date.")
            return

        draft = NewTransactionDraft(
            kind=self._draft.kind,
            transaction_date=self._date_picker.get(),
            category_id=cat.id,
            amount=amount,
            comment=self._comment_box.get("1.0", "end").strip(),
        )
        try:
            self._controller.create_transaction(draft)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")
        self._submitting = True
        self._save_btn.configure(state="disabled")

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
