from __future__ import annotations

import re
from typing import Any, List

from invoice_calculations import brutto_from_net, net_from_brutto
from models import InvoiceData, InvoiceLineItem


MSG_MISSING_BASICS = "Uzupełnij podstawowe dane faktury (numer, daty)"
MSG_MISSING_SELLER = "Wybierz sprzedawcę i konto bankowe"
MSG_MISSING_BUYER = "Wybierz nabywcę"
MSG_INCOMPLETE_NEW_BUYER = "Uzupełnij dane nowego nabywcy"
MSG_INCOMPLETE_ITEMS = "Uzupełnij wszystkie pozycje faktury"


def _filled(value: Any) -> bool:
    return bool(str(value or "").strip())


def _item_complete(item: InvoiceLineItem) -> bool:
    return (
        _filled(item.description)
        and item.quantity > 0
        and item.net_price > 0
        and item.brutto_price > 0
    )


def validate_invoice_data(data: InvoiceData, *, new_buyer: bool = False) -> List[str]:
    """Return the messages to show before an invoice can be issued, empty if none."""
    errors: List[str] = []
    if not (_filled(data.invoice_number) and _filled(data.date_issued) and _filled(data.date_sale)):
        errors.append(MSG_MISSING_BASICS)
    if not (_filled(data.seller.company_id) and _filled(data.seller.bank_account)):
        errors.append(MSG_MISSING_SELLER)
    if new_buyer:
        buyer = data.buyer
        if not (_filled(buyer.name) and _filled(buyer.address) and _filled(buyer.nip)):
            errors.append(MSG_INCOMPLETE_NEW_BUYER)
    elif not _filled(data.buyer.company_id):
        errors.append(MSG_MISSING_BUYER)
    if not data.items or not all(_item_complete(it) for it in data.items):
        errors.append(MSG_INCOMPLETE_ITEMS)
    return errors


def is_printable(data: InvoiceData) -> bool:
    return bool(data.items) and _filled(data.invoice_number) and _filled(data.date_issued)


# --- line item editing ---

def apply_net_price(item: InvoiceLineItem, net_price: float) -> InvoiceLineItem:
    return item.model_copy(
        update={"net_price": net_price, "brutto_price": brutto_from_net(net_price, item.vat_rate)}
    )


def apply_brutto_price(item: InvoiceLineItem, brutto_price: float) -> InvoiceLineItem:
    return item.model_copy(
        update={"brutto_price": brutto_price, "net_price": net_from_brutto(brutto_price, item.vat_rate)}
    )


def apply_vat_rate(item: InvoiceLineItem, vat_rate: float) -> InvoiceLineItem:
    return item.model_copy(
        update={"vat_rate": vat_rate, "brutto_price": brutto_from_net(item.net_price, vat_rate)}
    )


def _safe_filename(name: str) -> str:
    name = (name or "").strip() or "faktura"
    name = re.sub(r"\s+", " ", name)
    name = name.replace("/", "_").replace("\\", "_").replace(":", "_")
    return name[:120] if len(name) > 120 else name


def invoice_pdf_filename(data: InvoiceData) -> str:
    return f"Faktura_{_safe_filename(data.invoice_number)}.pdf"
