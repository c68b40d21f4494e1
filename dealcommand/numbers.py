"""Rounding and number formatting shared by the calculators and templates."""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up (2.5 -> 3, -2.5 -> -2), unlike ``round()``."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Group thousands and keep up to three decimals: 80000.0 -> '80,000'."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text
