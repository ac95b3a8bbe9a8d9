#!/usr/bin/env python3
"""
Calculator GUI

Dark-themed four-function keypad (Tkinter) in front of backend.accumulator.

- Equation line shows the tokens being entered, result line shows the last answer.
- Keypad tiles and the keyboard both feed InputAccumulator.press().
- History overlay mirrors the bounded history log, scrolls to the newest entry,
  and double-clicking an entry loads its expression back for editing.
- The result font shrinks so long answers stay inside the label.
"""

import logging
import tkinter as tk
from typing import Optional

from backend.accumulator import Display, InputAccumulator
from backend.config import CalculatorSettings
from backend.history import HistoryEntry
from frontend.display import KEYPAD, fit_font_size, keysym_to_label

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 340
WINDOW_HEIGHT = 500

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # button tile background
OP_BG = "#3a3f45"       # operator tiles
FG = "#E6EEF3"          # foreground text (light)
MUTED = "#8a949c"       # equation line

TITLE_FONT = ("Segoe UI", 13, "bold")
EQUATION_FONT = ("Consolas", 14)
RESULT_FONT_FAMILY = "Consolas"
HISTORY_HEIGHT = 180


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, settings: Optional[CalculatorSettings] = None):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(300, 420)
        self.configure(bg=BG)

        # Backend state machine; the GUI only renders the strings it returns
        self.calculator = InputAccumulator(settings=settings)
        self.calculator.subscribe(self._on_history_appended)

        self.history_window: Optional[tk.Toplevel] = None
        self.history_list: Optional[tk.Listbox] = None

        # Build UI sections
        self._build_header()
        self._build_display()
        self._build_keypad()
        self._render(self.calculator.display)

        # Keyboard input goes through the same path as the keypad
        self.bind("<Key>", self._on_key, add="+")

    # -------------------------
    # Header
    # -------------------------
    def _build_header(self):
        """Top header with title and history button."""
        header = tk.Frame(self, bg=PANEL_BG, height=48)
        header.pack(fill="x", side="top")

        tk.Label(header, text="Calculator", bg=PANEL_BG, fg=FG, font=TITLE_FONT).pack(side="left", padx=10, pady=6)

        # Spacer to push the History button to the right
        tk.Frame(header, bg=PANEL_BG).pack(side="left", expand=True)

        self.history_btn = tk.Button(header, text="History", bg=PANEL_BG, fg=FG, relief="flat", command=self.toggle_history)
        self.history_btn.pack(side="right", padx=8, pady=6)

    # -------------------------
    # Equation and result lines
    # -------------------------
    def _build_display(self):
        disp = tk.Frame(self, bg=PANEL_BG)
        disp.pack(fill="x", padx=8, pady=(8, 0))

        self.equation_var = tk.StringVar()
        tk.Label(disp, textvariable=self.equation_var, bg=PANEL_BG, fg=MUTED,
                 anchor="e", font=EQUATION_FONT).pack(fill="x", padx=6, pady=(6, 0))

        self.result_var = tk.StringVar()
        self.result_label = tk.Label(disp, textvariable=self.result_var, bg=PANEL_BG, fg=FG,
                                     anchor="e", font=(RESULT_FONT_FAMILY, 60))
        self.result_label.pack(fill="x", padx=6, pady=(0, 6))

    # -------------------------
    # Keypad
    # -------------------------
    def _build_keypad(self):
        """Grid of equal-sized tiles; each tile presses its own label."""
        tile_container = tk.Frame(self, bg=PANEL_BG)
        tile_container.pack(fill="both", expand=True, padx=8, pady=8)
        for r, row in enumerate(KEYPAD):
            for c, label in enumerate(row):
                if not label:
                    spacer = tk.Frame(tile_container, bg=PANEL_BG)
                    spacer.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                else:
                    bg = BTN_BG if label[0].isdigit() or label == "." else OP_BG
                    btn = tk.Button(tile_container, text=label, bg=bg, fg=FG, relief="flat",
                                    font=("Segoe UI", 14), command=lambda l=label: self.press(l))
                    btn.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                tile_container.grid_columnconfigure(c, weight=1)
            tile_container.grid_rowconfigure(r, weight=1)

    def press(self, label: str):
        self._render(self.calculator.press(label))

    def _on_key(self, event):
        label = keysym_to_label(event.keysym, event.char)
        if label:
            self.press(label)
            return "break"

    # -------------------------
    # Rendering
    # -------------------------
    def _render(self, display: Display):
        self.equation_var.set(display.equation)
        self.result_var.set(display.result)
        self._fit_result_font()

    def _fit_result_font(self):
        """Shrink the result font until the text fits the label width."""
        self.update_idletasks()
        available = self.result_label.winfo_width() - 4
        size = fit_font_size(self.result_var.get(), available)
        self.result_label.config(font=(RESULT_FONT_FAMILY, size))

    # -------------------------
    # History overlay
    # -------------------------
    def toggle_history(self):
        """Open or close the history overlay window (bottom anchored)."""
        if self.history_window and tk.Toplevel.winfo_exists(self.history_window):
            self._close_history()
            return
        win = tk.Toplevel(self)
        win.title("History")
        win.geometry(f"{self.winfo_width()}x{HISTORY_HEIGHT}+{self.winfo_rootx()}"
                     f"+{self.winfo_rooty() + self.winfo_height() - HISTORY_HEIGHT}")
        win.transient(self)
        win.protocol("WM_DELETE_WINDOW", self._close_history)
        self.history_window = win

        frm = tk.Frame(win, bg="#0e0f10")
        frm.pack(fill="both", expand=True)
        lb = tk.Listbox(frm, bg="#0e0f10", fg=FG)
        lb.pack(side="left", fill="both", expand=True, padx=6, pady=6)
        self.history_list = lb

        for entry in self.calculator.history:
            lb.insert("end", entry.text)
        lb.see("end")

        # double-click loads the expression back into the calculator
        lb.bind("<Double-Button-1>", lambda e: self._on_history_double(lb))

        scrollbar = tk.Scrollbar(frm, command=lb.yview)
        lb.config(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")

    def _close_history(self):
        """Close the history window if open."""
        if self.history_window:
            self.history_window.destroy()
            self.history_window = None
            self.history_list = None

    def _on_history_appended(self, entry: HistoryEntry):
        """Keep an open history overlay in step with the bounded log."""
        lb = self.history_list
        if lb is None:
            return
        lb.insert("end", entry.text)
        while lb.size() > self.calculator.history.capacity:
            lb.delete(0)
        lb.see("end")

    def _on_history_double(self, listbox: tk.Listbox):
        sel = listbox.curselection()
        if not sel:
            return
        # listbox rows and history entries share order and length
        entry = self.calculator.history[sel[0]]
        logger.debug(f"Replaying '{entry.expression}'")
        self._render(self.calculator.replay(entry))
        self._close_history()


# -------------------------
# Run the application
# -------------------------
def main():
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
