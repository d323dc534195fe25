"""
Reusable GUI Components
"""
import customtkinter as ctk
from typing import Callable

from config import Theme, THEMES
from storage import Task


class TaskRow(ctk.CTkFrame):
    """One task: done checkbox, title, delete button"""

    def __init__(
        self,
        parent,
        task: Task,
        theme: Theme,
        on_toggle: Callable[[str], None],
        on_delete: Callable[[str], None],
        **kwargs
    ):
        super().__init__(parent, **kwargs)

        self.task = task
        self.theme = theme
        self.on_toggle = on_toggle
        self.on_delete = on_delete

        self.configure(
            fg_color=("gray90", "gray20"),
            corner_radius=12
        )

        self._create_widgets()

    def _create_widgets(self):
        self.done_var = ctk.BooleanVar(value=self.task.is_done)

        self.checkbox = ctk.CTkCheckBox(
            self,
            text="",
            width=24,
            variable=self.done_var,
            corner_radius=12,
            fg_color=self.theme.accent,
            hover_color=self.theme.hover,
            command=lambda: self.on_toggle(self.task.id)
        )
        self.checkbox.pack(side="left", padx=(12, 4), pady=12)

        title_font = ctk.CTkFont(size=14, overstrike=self.task.is_done)
        title_color = ("gray50", "gray60") if self.task.is_done else ("gray10", "gray90")

        self.title_label = ctk.CTkLabel(
            self,
            text=self.task.title,
            font=title_font,
            text_color=title_color,
            anchor="w"
        )
        self.title_label.pack(side="left", fill="x", expand=True, padx=5, pady=12)

        delete_btn = ctk.CTkButton(
            self,
            text="✕",
            width=30,
            height=30,
            fg_color="transparent",
            hover_color=("#FFEBEE", "#3D1F1F"),
            text_color=("#E74C3C", "#E74C3C"),
            command=lambda: self.on_delete(self.task.id)
        )
        delete_btn.pack(side="right", padx=10, pady=10)


class ThemePicker(ctk.CTkFrame):
    """Row of round accent swatches; the selected one shows a check mark"""

    SWATCH_SIZE = 34

    def __init__(self, parent, selected: Theme, on_select: Callable[[Theme], None], **kwargs):
        super().__init__(parent, **kwargs)

        self.selected = selected
        self.on_select = on_select
        self.swatches = {}
        self.configure(fg_color="transparent")

        self._create_widgets()

    def _create_widgets(self):
        for i, theme in enumerate(Theme):
            btn = ctk.CTkButton(
                self,
                text="",
                width=self.SWATCH_SIZE,
                height=self.SWATCH_SIZE,
                corner_radius=self.SWATCH_SIZE // 2,
                fg_color=theme.accent,
                hover_color=theme.hover,
                text_color="white",
                font=ctk.CTkFont(size=16, weight="bold"),
                command=lambda t=theme: self._on_click(t)
            )
            btn.grid(row=0, column=i, padx=6, pady=5)
            self.swatches[theme] = btn

        self._update_selection()

    def _on_click(self, theme: Theme):
        self.set(theme)
        self.on_select(theme)

    def _update_selection(self):
        for theme, btn in self.swatches.items():
            btn.configure(text="✓" if theme == self.selected else "")

    def get(self) -> Theme:
        return self.selected

    def set(self, theme: Theme):
        if theme in THEMES:
            self.selected = theme
            self._update_selection()
