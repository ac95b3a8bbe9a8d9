"""Keypad layout, keyboard bindings and result-label sizing used by the GUI."""
from typing import Dict, List

# Keypad grid of tiles (rows x columns); empty strings are spacers.
KEYPAD: List[List[str]] = [
    ["AC", "±", "", "÷"],
    ["7", "8", "9", "×"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["0", ".", "", "="],
]

# Tk keysym -> keypad label. Digits and '.' are handled by character.
KEY_BINDINGS: Dict[str, str] = {
    "plus": "+",
    "KP_Add": "+",
    "minus": "-",
    "KP_Subtract": "-",
    "asterisk": "×",
    "KP_Multiply": "×",
    "slash": "÷",
    "KP_Divide": "÷",
    "period": ".",
    "KP_Decimal": ".",
    "Return": "=",
    "KP_Enter": "=",
    "equal": "=",
    "Escape": "AC",
    "F9": "±",
}

MAX_RESULT_FONT = 60
MIN_RESULT_FONT = 20
FONT_STEP = 2
CHAR_WIDTH_RATIO = 0.55   # average glyph width relative to font size


def fit_font_size(text: str, available_width: float) -> int:
    """
    Largest font size (stepping down from MAX_RESULT_FONT) at which `text` fits
    `available_width` pixels. Never goes below MIN_RESULT_FONT.
    """
    if available_width <= 0:
        return MAX_RESULT_FONT
    size = MAX_RESULT_FONT
    while size > MIN_RESULT_FONT:
        if len(text) * size * CHAR_WIDTH_RATIO <= available_width:
            break
        size -= FONT_STEP
    return size


def keysym_to_label(keysym: str, char: str = "") -> str:
    """Map a Tk key event to a keypad label, or "" if the key is not used."""
    if keysym in KEY_BINDINGS:
        return KEY_BINDINGS[keysym]
    if len(char) == 1 and char in "0123456789":
        return char
    if keysym.startswith("KP_") and keysym[3:].isdigit():
        return keysym[3:]
    return ""
