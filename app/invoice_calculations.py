from __future__ import annotations

import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Iterable

from models import InvoiceTotals


_DECIMAL_PLACES = Decimal("0.01")
_HUNDRED = Decimal("100")

_LEADING_ZEROS = re.compile(r"^0+(?=\d)")
_NON_NUMERIC = re.compile(r"[^\d.,]")


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _quantize(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        # room for every integer digit plus the two cent places
        ctx.prec = max(28, value.adjusted() + 3)
        return value.quantize(_DECIMAL_PLACES, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str) -> Decimal:
    if isinstance(item, dict):
        raw = item.get(name)
    else:
        raw = getattr(item, name, None)
    return _to_decimal(raw or 0)


def round_to_2_decimals(value: Any) -> float:
    """Round a money amount to whole cents, ties away from zero.

    Non-finite input (NaN, infinity) is returned unchanged.
    """
    amount = _to_decimal(value)
    if not amount.is_finite():
        return float(amount)
    return float(_quantize(amount))


def format_number_input(value: str) -> str:
    """Sanitize raw text typed into a price or quantity field.

    The result may still not parse as a number ("1.2.3" passes through).
    """
    return _NON_NUMERIC.sub("", _LEADING_ZEROS.sub("", value or ""))


def _sum_net(items: Iterable[Any]) -> Decimal:
    return sum(
        (_field(item, "quantity") * _field(item, "net_price") for item in items),
        Decimal("0"),
    )


def _sum_vat(items: Iterable[Any]) -> Decimal:
    total = Decimal("0")
    for item in items:
        vat_rate = _field(item, "vat_rate")
        if not vat_rate:
            continue
        total += _field(item, "quantity") * _field(item, "net_price") * (vat_rate / _HUNDRED)
    return total


def _sum_gross(items: Iterable[Any]) -> Decimal:
    # stored brutto prices, not net + vat
    return sum(
        (_field(item, "quantity") * _field(item, "brutto_price") for item in items),
        Decimal("0"),
    )


def calculate_net_total(items: Iterable[Any] | None) -> float:
    return round_to_2_decimals(_sum_net(items or []))


def calculate_vat_total(items: Iterable[Any] | None) -> float:
    return round_to_2_decimals(_sum_vat(items or []))


def calculate_gross_total(items: Iterable[Any] | None) -> float:
    return round_to_2_decimals(_sum_gross(items or []))


def compute_totals(items: Iterable[Any] | None) -> InvoiceTotals:
    """Net, VAT and gross totals, each summed on its own and rounded once.

    Items may be ``InvoiceLineItem`` models or plain dicts with the same keys.
    """
    items = list(items or [])
    return InvoiceTotals(
        net_total=calculate_net_total(items),
        vat_total=calculate_vat_total(items),
        gross_total=calculate_gross_total(items),
    )


def _vat_factor(vat_rate: Any) -> Decimal:
    return Decimal("1") + _to_decimal(vat_rate or 0) / _HUNDRED


def brutto_from_net(net_price: Any, vat_rate: Any) -> float:
    return round_to_2_decimals(_to_decimal(net_price or 0) * _vat_factor(vat_rate))


def net_from_brutto(brutto_price: Any, vat_rate: Any) -> float:
    brutto = _to_decimal(brutto_price or 0)
    factor = _vat_factor(vat_rate)
    if not factor:
        # -100%: same result as a float division by zero
        if not brutto:
            return float("nan")
        return math.copysign(math.inf, brutto)
    return round_to_2_decimals(brutto / factor)
