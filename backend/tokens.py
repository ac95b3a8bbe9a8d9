"""
Expression tokens.

A token is either a Numeral (a committed number, kept as text exactly as it
was typed or computed) or an Operator. Tokens are immutable once committed.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union

from backend.errors import ParseFailure


class Operator(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "×"
    DIV = "÷"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        """Return the operator for a symbol, accepting '*' and '/' as aliases of × and ÷."""
        symbol = _ALIASES.get(symbol, symbol)
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unknown operator: {symbol!r}") from None

    @property
    def is_multiplicative(self) -> bool:
        return self in (Operator.MUL, Operator.DIV)

    def __str__(self):
        return self.value


_ALIASES = {"*": "×", "/": "÷"}
_SYMBOLS = {op.value for op in Operator}


@dataclass(frozen=True)
class Numeral:
    text: str

    @property
    def value(self) -> float:
        """Parse the numeral as a finite float."""
        try:
            number = float(self.text)
        except ValueError:
            raise ParseFailure(f"Not a number: {self.text!r}") from None
        if not math.isfinite(number):
            raise ParseFailure(f"Not a finite number: {self.text!r}")
        return number

    @classmethod
    def from_value(cls, value: float) -> "Numeral":
        return cls(raw_text(value))

    def toggled(self) -> "Numeral":
        if self.text.startswith("-"):
            return Numeral(self.text[1:])
        return Numeral("-" + self.text)

    def __str__(self):
        return self.text


Token = Union[Numeral, Operator]


def raw_text(value: float) -> str:
    # shortest text that round-trips; "5" rather than "5.0", never "-0"
    text = repr(float(value) + 0.0)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def is_operator(token: Token) -> bool:
    return isinstance(token, Operator)


def parse_token(text: str) -> Token:
    """Classify a single string as an Operator or a Numeral."""
    if text in _ALIASES or text in _SYMBOLS:
        return Operator.from_symbol(text)
    return Numeral(text)


def parse_tokens(expression: str) -> List[Token]:
    """Split whitespace-separated expression text ("2 + -3 × 4") into tokens."""
    return [parse_token(part) for part in expression.split()]


def render_tokens(tokens: Iterable[Token]) -> str:
    return " ".join(str(t) for t in tokens)
