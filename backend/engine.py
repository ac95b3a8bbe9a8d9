import logging
import operator
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from backend.config import DEFAULT_PRECISION, ZERO_TOLERANCE
from backend.errors import (
    DivisionByZero,
    EvalError,
    IncompleteExpression,
    MalformedExpression,
    NonFinite,
)
from backend.tokens import Numeral, Operator, Token, is_operator, render_tokens

logger = logging.getLogger(__name__)

_OPS = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: operator.truediv,
}


@dataclass(frozen=True)
class EvaluationResult:
    value: Optional[float] = None
    error: Optional[EvalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: EvalError) -> "EvaluationResult":
        return cls(error=error)


class Evaluator:
    """
    Evaluates a finalized token sequence with two precedence tiers:
    × and ÷ first, then + and -, left to right within each tier.
    Parentheses are not supported.
    """

    def __init__(self, zero_tolerance: float = ZERO_TOLERANCE):
        self.zero_tolerance = zero_tolerance

    def evaluate(self, tokens: Sequence[Token]) -> float:
        """
        Return the value of the expression or raise an EvalError subclass.
        The input sequence is never modified.
        """
        self._check_shape(tokens)
        work: List[Token] = list(tokens)

        # multiplicative pass; after a splice the next operator lands on i
        i = 0
        while i < len(work):
            op = work[i]
            if is_operator(op) and op.is_multiplicative:
                lhs = work[i - 1].value
                rhs = work[i + 1].value
                if op is Operator.DIV and self._is_zero(rhs):
                    raise DivisionByZero(f"Division by zero: {lhs} ÷ {rhs}")
                work[i - 1:i + 2] = [self._apply(op, lhs, rhs)]
                continue
            i += 1

        # additive pass
        while len(work) > 1:
            lhs = work[0].value
            rhs = work[2].value
            work[0:3] = [self._apply(work[1], lhs, rhs)]

        return work[0].value

    def try_evaluate(self, tokens: Sequence[Token]) -> EvaluationResult:
        """Like evaluate(), but report failures as a result instead of raising."""
        try:
            return EvaluationResult(value=self.evaluate(tokens))
        except EvalError as e:
            logger.debug(f"Evaluation of '{render_tokens(tokens)}' failed: {e!r}")
            return EvaluationResult.failure(e)

    def _is_zero(self, number: float) -> bool:
        return bool(np.isclose(number, 0.0, rtol=0.0, atol=self.zero_tolerance))

    @staticmethod
    def _apply(op: Operator, lhs: float, rhs: float) -> Numeral:
        result = _OPS[op](lhs, rhs)
        if not np.isfinite(result):
            raise NonFinite(f"{lhs} {op} {rhs} is not finite")
        logger.debug(f"Reduced {lhs} {op} {rhs} -> {result!r}")
        return Numeral.from_value(result)

    @staticmethod
    def _check_shape(tokens: Sequence[Token]):
        if not tokens:
            raise IncompleteExpression("Empty expression")
        if is_operator(tokens[-1]):
            raise IncompleteExpression("Expression ends with an operator")
        for position, token in enumerate(tokens):
            expects_operator = position % 2 == 1
            if is_operator(token) != expects_operator:
                raise MalformedExpression(
                    f"Unexpected {'operator' if is_operator(token) else 'numeral'} "
                    f"'{token}' at position {position}"
                )


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """
    Render a result for display using `precision` significant digits, which hides
    floating-point noise such as 0.1 + 0.2 -> 0.30000000000000004.
    """
    text = f"{value:.{precision}g}"
    if text == "-0":
        return "0"
    return text
