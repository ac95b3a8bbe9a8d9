"""
Keypad input state machine.

InputAccumulator turns discrete key events (digits, '.', operators, sign toggle,
clear, evaluate) into a token sequence, evaluates it on '=' and keeps the
bounded history of completed calculations. Every event returns the strings the
keypad should show.

Phases:
    EMPTY      nothing entered
    ENTERING   tokens or a current entry are being built
    EVALUATED  last event was a successful '='; the next digit starts over
A failed '=' leaves the state exactly as it was. Clear returns to EMPTY from anywhere.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

from backend.config import CalculatorSettings
from backend.engine import EvaluationResult, Evaluator, format_number
from backend.errors import IncompleteExpression
from backend.history import HistoryEntry, HistoryLog
from backend.tokens import Numeral, Operator, Token, is_operator, parse_tokens, render_tokens

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
DOT = "."
TOGGLE_SIGN_KEYS = ("±", "+/-")
CLEAR_KEYS = ("AC", "C")
EVALUATE_KEYS = ("=",)


class Phase(Enum):
    EMPTY = "empty"
    ENTERING = "entering"
    EVALUATED = "evaluated"


class Display(NamedTuple):
    equation: str
    result: str


@dataclass
class CalculatorState:
    tokens: List[Token] = field(default_factory=list)
    entry: str = ""
    just_evaluated: bool = False
    result_display: str = "0"
    history: HistoryLog = field(default_factory=HistoryLog)

    def reset(self):
        """Forget the expression being entered. History survives."""
        self.tokens.clear()
        self.entry = ""
        self.just_evaluated = False


HistoryListener = Callable[[HistoryEntry], None]


class InputAccumulator:
    def __init__(self, state: Optional[CalculatorState] = None,
                 settings: Optional[CalculatorSettings] = None,
                 evaluator: Optional[Evaluator] = None):
        if settings is None:
            settings = CalculatorSettings(history_size=state.history.capacity) if state else CalculatorSettings()
        elif state is not None and state.history.capacity != settings.history_size:
            raise ValueError(
                f"State history holds {state.history.capacity} entries "
                f"but settings ask for {settings.history_size}"
            )
        self.settings = settings
        self.settings.validate()
        self.state = state or CalculatorState(history=HistoryLog(self.settings.history_size))
        self.evaluator = evaluator or Evaluator(self.settings.zero_tolerance)
        self.last_result: Optional[EvaluationResult] = None
        self._listeners: List[HistoryListener] = []

    # -------------------------
    # Read-only views
    # -------------------------
    @property
    def tokens(self) -> Tuple[Token, ...]:
        return tuple(self.state.tokens)

    @property
    def entry(self) -> str:
        return self.state.entry

    @property
    def just_evaluated(self) -> bool:
        return self.state.just_evaluated

    @property
    def history(self) -> HistoryLog:
        return self.state.history

    @property
    def phase(self) -> Phase:
        if self.state.just_evaluated:
            return Phase.EVALUATED
        if self.state.tokens or self.state.entry:
            return Phase.ENTERING
        return Phase.EMPTY

    @property
    def equation(self) -> str:
        parts = [str(t) for t in self.state.tokens]
        if self.state.entry:
            parts.append(self.state.entry)
        return " ".join(parts) or "0"

    @property
    def display(self) -> Display:
        return Display(self.equation, self.state.result_display)

    def subscribe(self, listener: HistoryListener):
        """Call `listener(entry)` after every successful evaluation."""
        self._listeners.append(listener)

    # -------------------------
    # Events
    # -------------------------
    def on_digit_or_dot(self, char: str) -> Display:
        if len(char) != 1 or char not in DIGITS + DOT:
            raise ValueError(f"Expected a digit or '.', got {char!r}")
        state = self.state
        if state.just_evaluated:
            state.reset()
        if char == DOT and DOT in state.entry:
            return self.display
        state.entry += char
        return self.display

    def on_operator(self, op) -> Display:
        op = op if isinstance(op, Operator) else Operator.from_symbol(op)
        state = self.state
        state.just_evaluated = False
        if not state.tokens and not state.entry:
            return self.display

        self._commit_entry()
        if is_operator(state.tokens[-1]):
            state.tokens[-1] = op
        else:
            state.tokens.append(op)
        return self.display

    def on_toggle_sign(self) -> Display:
        state = self.state
        if state.entry:
            state.entry = state.entry[1:] if state.entry.startswith("-") else "-" + state.entry
        elif state.tokens and not is_operator(state.tokens[-1]):
            state.tokens[-1] = state.tokens[-1].toggled()
        return self.display

    def on_clear_all(self) -> Display:
        self.state.reset()
        self.state.result_display = "0"
        return self.display

    def on_evaluate(self) -> Display:
        state = self.state
        self._commit_entry()
        if not state.tokens or is_operator(state.tokens[-1]):
            # incomplete expressions are ignored, not reported
            self.last_result = EvaluationResult.failure(IncompleteExpression("Nothing to evaluate"))
            return self.display

        expression = render_tokens(state.tokens)
        result = self.evaluator.try_evaluate(state.tokens)
        self.last_result = result
        if not result.ok:
            logger.warning(f"Could not evaluate '{expression}': {result.error}")
            state.result_display = self.settings.error_text
            return self.display

        formatted = format_number(result.value, self.settings.precision)
        state.result_display = formatted
        self._record(HistoryEntry(expression, formatted))

        state.tokens[:] = [Numeral.from_value(result.value)]
        state.entry = ""
        state.just_evaluated = True
        return self.display

    def press(self, key: str) -> Display:
        """Dispatch a keypad label or typed character to the matching event."""
        if len(key) == 1 and key in DIGITS + DOT:
            return self.on_digit_or_dot(key)
        if key in TOGGLE_SIGN_KEYS:
            return self.on_toggle_sign()
        if key in CLEAR_KEYS:
            return self.on_clear_all()
        if key in EVALUATE_KEYS:
            return self.on_evaluate()
        return self.on_operator(key)

    def replay(self, entry: HistoryEntry) -> Display:
        """
        Load a past expression back for editing or re-evaluation. The trailing
        numeral becomes the current entry, so further digits extend it.
        """
        state = self.state
        tokens = parse_tokens(entry.expression)
        state.entry = ""
        if tokens and not is_operator(tokens[-1]):
            state.entry = tokens.pop().text
        state.tokens[:] = tokens
        state.just_evaluated = False
        return self.display

    # -------------------------
    # Helpers
    # -------------------------
    def _commit_entry(self):
        if self.state.entry:
            self.state.tokens.append(Numeral(self.state.entry))
            self.state.entry = ""

    def _record(self, entry: HistoryEntry):
        self.state.history.append(entry)
        logger.debug(f"History: {entry.text}")
        for listener in self._listeners:
            listener(entry)
