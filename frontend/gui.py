#!/usr/bin/env python3
"""
Calculator GUI

Single-screen Tkinter front end for the four-function calculator.

- Dark-themed window with a right-aligned display and a fixed 15-key grid.
- Every key press (mouse or keyboard) is forwarded to CalculatorEngine.handle_input;
  the engine returns the new display text and takes care of saving it.
- No calculation logic lives here.
"""

import logging
import tkinter as tk
from typing import Dict

from backend.engine import CLEAR_ALL, CLEAR_ENTRY, DIGITS, EQUALS, OPERATORS, CalculatorEngine

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 340
WINDOW_HEIGHT = 480

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # display panel background
FG = "#E6EEF3"          # light foreground text
DIGIT_BG = "#2b2d30"    # digit tiles
OPERATOR_BG = "#FFCC00" # operators and "="
CLEAR_BG = "#FF9999"    # C / CE
DARK_FG = "#111214"     # text on the bright tiles

TITLE = "Calculator"
DISPLAY_FONT = ("Consolas", 32, "bold")
BUTTON_FONT = ("Segoe UI", 16, "bold")

# Keypad rows; "=" spans the whole last row
BUTTON_ROWS = [
    ["1", "2", "3", "+"],
    ["4", "5", "6", "-"],
    ["7", "8", "9", "*"],
    [CLEAR_ENTRY, "0", CLEAR_ALL, "/"],
    [EQUALS],
]
GRID_COLUMNS = 4

# Keyboard keysyms that are not the token itself
KEY_TOKENS: Dict[str, str] = {
    "<plus>": "+",
    "<minus>": "-",
    "<asterisk>": "*",
    "<slash>": "/",
    "<KP_Add>": "+",
    "<KP_Subtract>": "-",
    "<KP_Multiply>": "*",
    "<KP_Divide>": "/",
    "<equal>": EQUALS,
    "<Return>": EQUALS,
    "<KP_Enter>": EQUALS,
    "<Escape>": CLEAR_ALL,
    "<Delete>": CLEAR_ENTRY,
    "<BackSpace>": CLEAR_ENTRY,
}


def button_colors(token: str):
    """Return (background, foreground) for a key."""
    if token in OPERATORS or token == EQUALS:
        return OPERATOR_BG, DARK_FG
    if token in (CLEAR_ALL, CLEAR_ENTRY):
        return CLEAR_BG, DARK_FG
    return DIGIT_BG, FG


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, engine: CalculatorEngine):
        super().__init__()

        # Window setup
        self.title(TITLE)
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(280, 400)
        self.configure(bg=BG)

        self.engine = engine
        self.display_var = tk.StringVar(value=engine.display)

        self._build_display()
        self._build_keypad()
        self._bind_keys()

    # -------------------------
    # Display
    # -------------------------
    def _build_display(self):
        disp = tk.Frame(self, bg=PANEL_BG, height=100)
        disp.pack(fill="x", padx=8, pady=(8, 4))
        disp.pack_propagate(False)
        tk.Label(disp, textvariable=self.display_var, bg=PANEL_BG, fg=FG,
                 anchor="e", font=DISPLAY_FONT).pack(fill="both", expand=True, padx=12)

    # -------------------------
    # Keypad (equal-sized tiles by grid weight)
    # -------------------------
    def _build_keypad(self):
        tiles = tk.Frame(self, bg=BG)
        tiles.pack(fill="both", expand=True, padx=8, pady=(4, 8))
        for r, row in enumerate(BUTTON_ROWS):
            span = GRID_COLUMNS // len(row)
            for c, token in enumerate(row):
                bg, fg = button_colors(token)
                btn = tk.Button(tiles, text=token, bg=bg, fg=fg, relief="flat", font=BUTTON_FONT,
                                activebackground=bg, command=lambda t=token: self.press(t))
                btn.grid(row=r, column=c * span, columnspan=span, sticky="nsew", padx=4, pady=4)
            tiles.grid_rowconfigure(r, weight=1)
        for c in range(GRID_COLUMNS):
            tiles.grid_columnconfigure(c, weight=1)

    def _bind_keys(self):
        for key in DIGITS:
            self.bind(key, lambda e, t=key: self.press(t))
        for sequence, token in KEY_TOKENS.items():
            self.bind(sequence, lambda e, t=token: self.press(t))

    # -------------------------
    # Input handling
    # -------------------------
    def press(self, token: str):
        """Forward a key to the engine and re-render the display."""
        self.display_var.set(self.engine.handle_input(token))


# -------------------------
# Run the application
# -------------------------
def main(engine: CalculatorEngine):
    app = CalculatorGUI(engine)
    app.mainloop()
