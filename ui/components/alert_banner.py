import customtkinter as ctk

from utils.constants import EXPENSE_COLOR


class AlertBanner(ctk.CTkFrame):
    """A dismissible colored strip for non-blocking notices such as a lost server."""

    def __init__(self, master, message: str, color: str = EXPENSE_COLOR,
                 action_text: str | None = None, action_cmd=None, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._message_var = ctk.StringVar(value=message)
        ctk.CTkLabel(
            self, textvariable=self._message_var, text_color="white",
            anchor="w", padx=10, pady=6, wraplength=760, justify="left",
        ).grid(row=0, column=0, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=0, column=1, padx=(0, 4))

        if action_text and action_cmd:
            ctk.CTkButton(
                btn_frame, text=action_text, width=60, height=24,
                fg_color="transparent", border_width=1, border_color="white",
                text_color="white", command=action_cmd,
            ).pack(side="left", padx=2)

        ctk.CTkButton(
            btn_frame, text="✕", width=28, height=24,
            fg_color="transparent", text_color="white",
            command=self.destroy,
        ).pack(side="left")

    def set_message(self, message: str):
        self._message_var.set(message)
