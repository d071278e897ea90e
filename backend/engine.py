import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)

MAX_DISPLAY_LENGTH = 8
FRACTION_DIGITS = 4
SIGNIFICANT_DIGITS = 6
LAST_VALUE_KEY = "lastValue"

ERROR = "ERROR"
OVERFLOW = "OVERFLOW"
SENTINELS = (ERROR, OVERFLOW)

DIGITS = tuple("0123456789")
OPERATORS = ("+", "-", "*", "/")
CLEAR_ALL = "C"
CLEAR_ENTRY = "CE"
EQUALS = "="
TOKENS = DIGITS + OPERATORS + (EQUALS, CLEAR_ALL, CLEAR_ENTRY)

_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")
FRACTION_STEP = Decimal(1).scaleb(-FRACTION_DIGITS)


def _divide(a, b):
    # exact zero divisor gives NaN, rendered as ERROR
    if b == 0.0:
        return np.float64(np.nan)
    return np.divide(a, b)


ARITHMETIC: Dict[str, Callable] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": _divide,
}


class CalculatorState:
    """
    Mutable session record for one calculator screen.

    display              text currently shown
    first_operand        operand captured when an operator key was pressed
    pending_operator     "" when no operation is pending
    awaiting_fresh_input next digit replaces the display instead of appending
    """

    def __init__(self, display: str = "0"):
        self.display = display
        self.first_operand = 0.0
        self.pending_operator = ""
        self.awaiting_fresh_input = True

    def __repr__(self):
        return (f"CalculatorState(display={self.display!r}, first_operand={self.first_operand!r}, "
                f"pending_operator={self.pending_operator!r}, "
                f"awaiting_fresh_input={self.awaiting_fresh_input!r})")

    def __eq__(self, other):
        if not isinstance(other, CalculatorState):
            return NotImplemented
        return vars(self) == vars(other)


def parse_display(text) -> float:
    """
    Read display text as a number. Anything that is not plain finite decimal
    text (sentinels, empty text, "nan", "inf", ...) reads as 0.0.
    """
    if not isinstance(text, str) or not _NUMBER_RE.fullmatch(text):
        return 0.0
    return float(text)


def raw_text(value: float) -> str:
    """Positional text used for the overflow check, e.g. 1/3 -> '0.333333', 1e6 -> '1000000'."""
    return np.format_float_positional(value, precision=SIGNIFICANT_DIGITS, unique=False,
                                      fractional=False, trim="-")


def format_result(value: float) -> str:
    """
    Turn an arithmetic result into display text.

    The length check runs on the positional text of the unrounded value
    (six significant digits, never exponent notation), before the integer /
    4-decimal formatting. Because of that ordering some values that would
    fit once rounded still overflow, and some rounded values end up longer
    than 8 characters.
    """
    value = float(value)
    if math.isnan(value):
        return ERROR
    if math.isinf(value) or len(raw_text(value)) > MAX_DISPLAY_LENGTH:
        return OVERFLOW
    if value.is_integer():
        return str(int(value))
    # ties round away from zero: 0.03125 -> 0.0313
    text = format(Decimal(value).quantize(FRACTION_STEP, rounding=ROUND_HALF_UP), "f")
    return text.rstrip("0").rstrip(".")


def evaluate(first: float, operator: str, second: float) -> float:
    fn = ARITHMETIC[operator]
    with np.errstate(all="ignore"):
        return float(fn(np.float64(first), np.float64(second)))


def _enter_digit(state: CalculatorState, digit: str):
    if state.awaiting_fresh_input or state.display in ("0",) + SENTINELS:
        state.display = digit
        state.awaiting_fresh_input = False
    elif len(state.display) < MAX_DISPLAY_LENGTH:
        state.display += digit


def _equals(state: CalculatorState):
    second = parse_display(state.display)
    result = evaluate(state.first_operand, state.pending_operator, second)
    logger.debug("evaluate %r %s %r -> %r", state.first_operand, state.pending_operator, second, result)
    state.display = format_result(result)
    state.awaiting_fresh_input = True
    state.pending_operator = ""


def apply_token(state: CalculatorState, token: str) -> bool:
    """
    Apply one button press to ``state``.

    Returns True when the resulting display should be saved. Operator keys,
    "=" with nothing pending and unknown tokens return False.
    """
    if token not in TOKENS:
        logger.warning("Ignoring unknown token: %r", token)
        return False

    if token == CLEAR_ALL:
        state.display = "0"
        state.first_operand = 0.0
        state.pending_operator = ""
        state.awaiting_fresh_input = True
        return True

    if token == CLEAR_ENTRY:
        state.display = "0"
        state.awaiting_fresh_input = True
        return True

    if token in OPERATORS:
        state.first_operand = parse_display(state.display)
        state.pending_operator = token
        state.awaiting_fresh_input = True
        return False

    if token == EQUALS:
        if not state.pending_operator:
            return False
        _equals(state)
        return True

    # digit; saved even when dropped at full length
    _enter_digit(state, token)
    return True


class CalculatorEngine:
    """
    Owns a CalculatorState and a preferences store (anything with
    ``load(key)`` and ``save(key, value)``). The store is read once on
    construction and written after every persisting transition.
    """

    def __init__(self, preferences, key: str = LAST_VALUE_KEY):
        self.preferences = preferences
        self.key = key
        self.state = CalculatorState(self._load_initial_display())

    def _load_initial_display(self) -> str:
        stored: Optional[str] = self.preferences.load(self.key)
        if not isinstance(stored, str) or not stored:
            return "0"
        logger.debug("Restored display %r", stored)
        return stored

    @property
    def display(self) -> str:
        return self.state.display

    def handle_input(self, token: str) -> str:
        """Process one button token and return the new display text."""
        if apply_token(self.state, token):
            self.preferences.save(self.key, self.state.display)
        logger.debug("%r -> %r", token, self.state)
        return self.state.display

    def reset(self) -> str:
        return self.handle_input(CLEAR_ALL)


# Quick local demo
if __name__ == "__main__":
    from backend.preferences import MemoryPreferences

    c = CalculatorEngine(MemoryPreferences())
    for t in ["1", "+", "2", "="]:
        c.handle_input(t)
    print(c.display)  # 3
    for t in ["C", "1", "/", "3", "="]:
        c.handle_input(t)
    print(c.display)  # 0.3333
    for t in ["1", "0", "/", "0", "="]:
        c.handle_input(t)
    print(c.display)  # ERROR
