#!/usr/bin/env python3
"""
Entry point for the Calculator application.

    python main.py
    python main.py --history-size 50 --log-level DEBUG
"""
import argparse
import logging

from backend.config import DEFAULT_HISTORY_SIZE, DEFAULT_PRECISION, CalculatorSettings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Four-function keypad calculator")
    parser.add_argument(
        "--history-size",
        type=int,
        default=DEFAULT_HISTORY_SIZE,
        help="Number of completed calculations kept in the history"
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=DEFAULT_PRECISION,
        help="Significant digits shown for results"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    settings = CalculatorSettings(history_size=args.history_size, precision=args.precision)
    settings.validate()

    # Tkinter is only needed once we actually open a window
    from frontend.gui import CalculatorGUI
    app = CalculatorGUI(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
