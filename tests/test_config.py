"""Tests for calculator settings and the command-line entry point."""

import pytest

import main
from backend.config import CalculatorSettings, ZERO_TOLERANCE


def test_defaults_are_valid():
    settings = CalculatorSettings()
    settings.validate()
    assert settings.history_size == 30
    assert settings.precision == 15
    assert settings.error_text == "Error"


def test_zero_tolerance_is_single_precision_tiny():
    assert ZERO_TOLERANCE == pytest.approx(1.1754943508222875e-38)


@pytest.mark.parametrize("kwargs", [
    {"history_size": 0},
    {"precision": 0},
    {"precision": 18},
    {"zero_tolerance": -1.0},
    {"zero_tolerance": float("inf")},
    {"error_text": ""},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        CalculatorSettings(**kwargs).validate()


def test_cli_defaults():
    args = main.parse_args([])
    assert args.history_size == 30
    assert args.precision == 15
    assert args.log_level == "WARNING"


def test_cli_options():
    args = main.parse_args(["--history-size", "5", "--precision", "8", "--log-level", "DEBUG"])
    assert args.history_size == 5
    assert args.precision == 8
    assert args.log_level == "DEBUG"
