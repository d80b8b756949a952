from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


VAT_RATES = (23, 8, 5, 0)
DEFAULT_VAT_RATE = 23


class InvoiceLineItem(BaseModel):
    description: str = ""
    quantity: float = 1
    net_price: float = 0.0
    brutto_price: float = 0.0
    vat_rate: float = DEFAULT_VAT_RATE


class InvoiceTotals(BaseModel):
    net_total: float = 0.0
    vat_total: float = 0.0
    gross_total: float = 0.0


class SellerParty(BaseModel):
    company_id: str = ""
    bank_account: Optional[str] = None
    name: str = ""
    address: str = ""
    nip: str = ""


class BuyerParty(BaseModel):
    company_id: str = ""
    name: str = ""
    address: str = ""
    nip: str = ""


def new_line_item() -> InvoiceLineItem:
    return InvoiceLineItem()


class InvoiceData(BaseModel):
    invoice_number: str = ""
    date_issued: str = ""
    date_sale: str = ""
    seller: SellerParty = Field(default_factory=SellerParty)
    buyer: BuyerParty = Field(default_factory=BuyerParty)
    items: List[InvoiceLineItem] = Field(default_factory=lambda: [new_line_item()])
