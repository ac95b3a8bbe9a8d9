import pytest

from backend.accumulator import InputAccumulator
from backend.engine import Evaluator


@pytest.fixture
def calc():
    """A fresh calculator with default settings."""
    return InputAccumulator()


@pytest.fixture
def evaluator():
    return Evaluator()
