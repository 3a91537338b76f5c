"""
Display formatting in the Indian numbering convention.

    1,000       -> K / thousand
    1,00,000    -> L / lakhs
    1,00,00,000 -> Cr / crores

Two-decimal values round exact ties up (1.125 -> 1.13), working from the
exact binary value of the float.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from num2words import num2words

import config as cfg

_CENTS = Decimal("0.01")


def _two_decimals(num: float) -> str:
    """Format with two decimals, rounding ties away from zero."""
    if not math.isfinite(num):
        return f"{num:.2f}"
    with localcontext() as ctx:
        # wide enough for any finite float's integer digits
        ctx.prec = 400
        return format(Decimal(num).quantize(_CENTS, rounding=ROUND_HALF_UP), "f")


def format_indian_number(num: float) -> str:
    """Scale *num* to K / L / Cr with two decimals (below 1,000: as-is).

    Negative values never reach a band and print unscaled.
    """
    for threshold, suffix, _ in cfg.MAGNITUDE_BANDS:
        if num >= threshold:
            return f"{_two_decimals(num / threshold)} {suffix}"
    return _two_decimals(num)


def _round_half_up(num: float) -> int:
    return int(math.floor(num + 0.5))


def format_indian_words(num: float) -> str:
    """Spell *num* out: scaled bands in words, cardinal words below 1,000."""
    for threshold, _, word in cfg.MAGNITUDE_BANDS:
        if num >= threshold:
            return f"{_two_decimals(num / threshold)} {word}"
    return num2words(_round_half_up(num)).replace(" and ", " ")


def convert_to_words(value: str) -> str:
    """Words for raw field text; '' when the text is not a number."""
    if not value:
        return ""
    try:
        number = float(value)
    except ValueError:
        return ""
    if math.isnan(number):
        return ""
    if number == 0:
        return "zero"
    return format_indian_words(number)


def fmt(val: float) -> str:
    """Format an amount as ₹X.XX K / L / Cr."""
    return f"{cfg.CURRENCY_SYMBOL}{format_indian_number(val)}"


def tons(val: float) -> str:
    return f"{val:.2f} metric tons"
