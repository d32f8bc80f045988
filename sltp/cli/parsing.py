"""Input parsing for CLI arguments.

Amounts may be typed as a plain number or as a running sum such as
``100+50-20``, the way they are jotted down from a broker statement.
"""

import re
from datetime import date
from typing import Optional

import click

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_AMOUNT_RE = re.compile(rf"^\s*[+-]?\s*{_NUMBER}(?:\s*[+-]\s*{_NUMBER})*\s*$")
_TERM_RE = re.compile(rf"([+-]?)\s*({_NUMBER})")


def parse_amount(text: str) -> float:
    """Parse a number or a flat sum/difference of numbers.

    Args:
        text: Input such as ``"12.5"``, ``"-40"`` or ``"100+50-20"``.

    Returns:
        The evaluated amount.

    Raises:
        ValueError: If the input is not a number or a +/- expression.
    """
    if not _AMOUNT_RE.match(text):
        raise ValueError(f"Invalid amount: {text!r}")

    total = 0.0
    for sign, number in _TERM_RE.findall(text):
        value = float(number)
        total += -value if sign == "-" else value
    return round(total, 10)


def parse_day(text: str, today: Optional[date] = None) -> date:
    """Parse ``YYYY-MM-DD`` or the word ``today``."""
    if text.strip().lower() == "today":
        return today or date.today()
    return date.fromisoformat(text.strip())


class AmountType(click.ParamType):
    """Click parameter type for amounts, including ``100+50-20`` sums."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return parse_amount(value)
        except ValueError:
            self.fail(
                f"{value!r} is not a number or a sum like 100+50-20", param, ctx
            )


class DayType(click.ParamType):
    """Click parameter type for dates (``YYYY-MM-DD`` or ``today``)."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        try:
            return parse_day(value)
        except ValueError:
            self.fail(f"Invalid date format: {value}. Use YYYY-MM-DD", param, ctx)


AMOUNT = AmountType()
DAY = DayType()
