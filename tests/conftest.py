from __future__ import annotations

from pathlib import Path
import sys

import pytest

# `app/` holds top-level modules (models, logic, services.*)
APP_DIR = Path(__file__).resolve().parents[1] / "app"
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

from models import BuyerParty, InvoiceData, InvoiceLineItem, SellerParty  # noqa: E402


@pytest.fixture()
def sample_invoice() -> InvoiceData:
    return InvoiceData(
        invoice_number="FV/2024/01",
        date_issued="2024-01-10",
        date_sale="2024-01-09",
        seller=SellerParty(
            company_id="5250000000",
            bank_account="PL61 1090 1014 0000 0712 1981 2874",
            name="Przykładowa Spółka z o.o.",
            address="ul. Złota 44, 00-120 Warszawa",
            nip="5250000000",
        ),
        buyer=BuyerParty(
            company_id="7740000000",
            name="Hurtownia Żółw",
            address="ul. Łąkowa 3, 87-100 Toruń",
            nip="7740000000",
        ),
        items=[
            InvoiceLineItem(
                description="Usługa programistyczna",
                quantity=2,
                net_price=100.0,
                brutto_price=123.0,
                vat_rate=23,
            )
        ],
    )
