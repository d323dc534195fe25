"""
Main Application GUI - Today list and Settings (heatmap + theme)
"""
import logging
from datetime import date
from typing import Optional

import customtkinter as ctk

from config import Theme, load_theme, save_theme
from heatmap_generator import month_stats, render_heatmap
from storage import TaskStore
from gui.components import TaskRow, ThemePicker

logger = logging.getLogger(__name__)

TAB_TODAY = "✅ Today"
TAB_SETTINGS = "⚙ Settings"

# How often to look for a date change while the window is open (ms)
DAY_CHECK_INTERVAL = 60_000


def format_header_date(day: date) -> str:
    """e.g. Saturday, June 1, 2024"""
    return f"{day:%A, %B} {day.day}, {day.year}"


class VertoApp(ctk.CTk):
    """Main window. All task state goes through the TaskStore passed in."""

    def __init__(self, store: TaskStore, theme: Optional[Theme] = None):
        super().__init__()

        self.title("Verto")
        self.geometry("520x720")
        self.minsize(420, 560)

        self.store = store
        self.theme = theme if theme is not None else load_theme()
        self.today = date.today()
        self._heatmap_img = None

        ctk.set_appearance_mode(self.theme.color_scheme or "system")

        self._create_layout()
        self._create_main_content()
        self._apply_theme()

        self._refresh_today()
        self._refresh_heatmap()
        self.after(DAY_CHECK_INTERVAL, self._check_day)

    def _create_layout(self):
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

    def _create_main_content(self):
        self.tabview = ctk.CTkTabview(self, corner_radius=10, command=self._on_tab_change)
        self.tabview.grid(row=0, column=0, sticky="nswe", padx=15, pady=(15, 5))

        self.tab_today = self.tabview.add(TAB_TODAY)
        self.tab_settings = self.tabview.add(TAB_SETTINGS)

        self._create_today_tab()
        self._create_settings_tab()

        self.status_label = ctk.CTkLabel(self, text="", font=ctk.CTkFont(size=11),
                                         text_color=("gray50", "gray60"), wraplength=480)
        self.status_label.grid(row=1, column=0, sticky="we", padx=15, pady=(0, 10))

    def _create_today_tab(self):
        self.tab_today.grid_columnconfigure(0, weight=1)
        self.tab_today.grid_rowconfigure(1, weight=1)

        self.date_label = ctk.CTkLabel(self.tab_today, text="", anchor="w",
                                       font=ctk.CTkFont(size=24, weight="bold"))
        self.date_label.grid(row=0, column=0, sticky="we", pady=(5, 15))

        self.tasks_scroll = ctk.CTkScrollableFrame(self.tab_today, fg_color="transparent")
        self.tasks_scroll.grid(row=1, column=0, sticky="nswe")
        self.tasks_scroll.grid_columnconfigure(0, weight=1)

        self.add_frame = ctk.CTkFrame(self.tab_today, fg_color="transparent")
        self.add_frame.grid_columnconfigure(0, weight=1)

        self.task_entry = ctk.CTkEntry(self.add_frame, placeholder_text="New task", height=36)
        self.task_entry.grid(row=0, column=0, sticky="we", padx=(0, 8))
        self.task_entry.bind("<Return>", lambda event: self._add_task())

        self.add_button = ctk.CTkButton(self.add_frame, text="+", width=40, height=36,
                                        font=ctk.CTkFont(size=18, weight="bold"),
                                        command=self._add_task)
        self.add_button.grid(row=0, column=1)

    def _create_settings_tab(self):
        self.tab_settings.grid_columnconfigure(0, weight=1)

        history = ctk.CTkFrame(self.tab_settings, fg_color="transparent")
        history.grid(row=0, column=0, sticky="we", pady=(5, 25))

        ctk.CTkLabel(history, text="Completion History",
                     font=ctk.CTkFont(size=15, weight="bold")).pack(anchor="w", pady=(0, 8))
        self.heatmap_label = ctk.CTkLabel(history, text="")
        self.heatmap_label.pack(anchor="w")

        theme_frame = ctk.CTkFrame(self.tab_settings, fg_color="transparent")
        theme_frame.grid(row=1, column=0, sticky="we")

        ctk.CTkLabel(theme_frame, text="Theme",
                     font=ctk.CTkFont(size=15, weight="bold")).pack(anchor="w", pady=(0, 8))
        self.theme_picker = ThemePicker(theme_frame, selected=self.theme, on_select=self._on_theme_change)
        self.theme_picker.pack(anchor="w")

    # ---- refresh ----

    def _refresh_today(self):
        self.date_label.configure(text=format_header_date(self.today))

        for widget in self.tasks_scroll.winfo_children():
            widget.destroy()

        tasks = self.store.tasks_for_day(self.today)

        if not tasks:
            ctk.CTkLabel(self.tasks_scroll, text="Nothing planned yet", font=ctk.CTkFont(size=13),
                         text_color=("gray50", "gray60")).pack(pady=30)

        for task in tasks:
            row = TaskRow(self.tasks_scroll, task=task, theme=self.theme,
                          on_toggle=self._toggle_task, on_delete=self._delete_task)
            row.pack(fill="x", pady=4)

        if self.store.can_add(self.today):
            self.add_frame.grid(row=2, column=0, sticky="we", pady=(10, 5))
        else:
            self.add_frame.grid_remove()

    def _refresh_heatmap(self):
        stats = month_stats(self.store, self.today)
        light = render_heatmap(stats, self.today, outline_color=(30, 30, 35))
        dark = render_heatmap(stats, self.today, outline_color=(235, 235, 240))

        self._heatmap_img = ctk.CTkImage(light_image=light, dark_image=dark, size=light.size)
        self.heatmap_label.configure(image=self._heatmap_img)

    def _on_tab_change(self):
        if self.tabview.get() == TAB_SETTINGS:
            self._refresh_heatmap()

    def _check_day(self):
        current = date.today()
        if current != self.today:
            logger.info("Day changed to %s", current)
            self.today = current
            self._refresh_today()
            self._refresh_heatmap()
        self.after(DAY_CHECK_INTERVAL, self._check_day)

    # ---- task actions ----

    def _add_task(self):
        text = self.task_entry.get()
        self.store.add_task(text, self.today)
        self.task_entry.delete(0, "end")
        self._after_mutation()

    def _toggle_task(self, task_id: str):
        self.store.toggle_task(task_id, self.today)
        self._after_mutation()

    def _delete_task(self, task_id: str):
        self.store.delete_task(task_id, self.today)
        self._after_mutation()

    def _after_mutation(self):
        self._refresh_today()
        if self.store.last_error is not None:
            self._update_status(f"⚠️ Could not save tasks: {self.store.last_error}")
        else:
            self._update_status("")

    # ---- theme ----

    def _on_theme_change(self, theme: Theme):
        self.theme = theme
        if not save_theme(theme):
            self._update_status("⚠️ Could not save theme")
        self._apply_theme()
        self._refresh_today()

    def _apply_theme(self):
        ctk.set_appearance_mode(self.theme.color_scheme or "system")
        self.add_button.configure(fg_color=self.theme.accent, hover_color=self.theme.hover)
        self.tabview.configure(segmented_button_selected_color=self.theme.accent,
                               segmented_button_selected_hover_color=self.theme.hover)
        self.task_entry.configure(border_color=self.theme.accent)

    def _update_status(self, msg):
        self.status_label.configure(text=msg)


def run_app(store: TaskStore):
    app = VertoApp(store)
    app.mainloop()
