import math
from dataclasses import dataclass

import numpy as np

# -------------------------
# Defaults
# -------------------------
DEFAULT_HISTORY_SIZE = 30
DEFAULT_PRECISION = 15   # significant digits shown for results
ERROR_TEXT = "Error"

# Right operands of ÷ closer to zero than this count as zero.
# Smallest normal single-precision float.
ZERO_TOLERANCE = float(np.finfo(np.float32).tiny)


@dataclass
class CalculatorSettings:
    history_size: int = DEFAULT_HISTORY_SIZE
    precision: int = DEFAULT_PRECISION
    zero_tolerance: float = ZERO_TOLERANCE
    error_text: str = ERROR_TEXT

    def validate(self) -> None:
        if int(self.history_size) < 1:
            raise ValueError("history_size must be at least 1")
        if not (1 <= int(self.precision) <= 17):
            raise ValueError("precision must be 1..17")
        if not math.isfinite(self.zero_tolerance) or self.zero_tolerance < 0:
            raise ValueError("zero_tolerance must be a finite, non-negative number")
        if not self.error_text:
            raise ValueError("error_text must not be empty")
