"""Polish "amount in words" line for printed invoices.

``amount_to_words(123.45)`` gives ``"sto dwadzieścia trzy PLN czterdzieści pięć gr"``.
Only amounts below one million are spelled out; larger whole parts become
``TOO_LARGE``.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any


ZERO = "zero"
TOO_LARGE = "number too large"
INVALID_AMOUNT = "invalid amount"

CURRENCY = "PLN"
SUBUNIT = "gr"

UNITS = ("", "jeden", "dwa", "trzy", "cztery", "pięć", "sześć", "siedem", "osiem", "dziewięć")
TEENS = (
    "dziesięć",
    "jedenaście",
    "dwanaście",
    "trzynaście",
    "czternaście",
    "piętnaście",
    "szesnaście",
    "siedemnaście",
    "osiemnaście",
    "dziewiętnaście",
)
TENS = (
    "",
    "dziesięć",
    "dwadzieścia",
    "trzydzieści",
    "czterdzieści",
    "pięćdziesiąt",
    "sześćdziesiąt",
    "siedemdziesiąt",
    "osiemdziesiąt",
    "dziewięćdziesiąt",
)
HUNDREDS = (
    "",
    "sto",
    "dwieście",
    "trzysta",
    "czterysta",
    "pięćset",
    "sześćset",
    "siedemset",
    "osiemset",
    "dziewięćset",
)
THOUSAND_ONE = "tysiąc"
THOUSAND_FEW = "tysiące"
THOUSAND_MANY = "tysięcy"


def thousands_form(count: int) -> str:
    # Only 2-4 take "tysiące"; 22, 33, ... fall through to "tysięcy".
    if count == 1:
        return THOUSAND_ONE
    if 1 < count < 5:
        return THOUSAND_FEW
    return THOUSAND_MANY


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p).strip()


def integer_to_words(number: int) -> str:
    if number < 0:
        return INVALID_AMOUNT
    if number == 0:
        return ZERO
    if number < 10:
        return UNITS[number]
    if number < 20:
        return TEENS[number - 10]
    if number < 100:
        return _join(TENS[number // 10], UNITS[number % 10])
    if number < 1000:
        rest = number % 100
        return _join(HUNDREDS[number // 100], integer_to_words(rest) if rest else "")
    if number < 1_000_000:
        count, rest = divmod(number, 1000)
        return _join(
            integer_to_words(count),
            thousands_form(count),
            integer_to_words(rest) if rest else "",
        )
    return TOO_LARGE


def split_amount(amount: Any) -> tuple[int, int]:
    """Split into whole złoty and grosze (the fraction rounded half up)."""
    value = Decimal(str(amount))
    whole = value.to_integral_value(rounding=ROUND_FLOOR)
    cents = ((value - whole) * 100).to_integral_value(rounding=ROUND_HALF_UP)
    return int(whole), int(cents)


def amount_to_words(amount: Any) -> str:
    value = Decimal(str(amount if amount is not None else 0))
    if not value.is_finite() or value < 0:
        return INVALID_AMOUNT
    zloty, grosze = split_amount(value)
    return f"{integer_to_words(zloty)} {CURRENCY} {integer_to_words(grosze)} {SUBUNIT}".strip()
