class EvalError(Exception):
    """Base class for expressions that cannot be evaluated."""


class IncompleteExpression(EvalError):
    """Nothing to evaluate, or the expression ends in an operator."""


class MalformedExpression(EvalError):
    """Numerals and operators do not alternate."""


class ParseFailure(EvalError):
    """A numeral is not a finite decimal number."""


class DivisionByZero(EvalError):
    """The right operand of ÷ is zero within the configured tolerance."""


class NonFinite(EvalError):
    """An intermediate or final result is NaN or infinite."""
