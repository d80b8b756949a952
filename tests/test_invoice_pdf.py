import re

from models import InvoiceLineItem
from services import invoice_pdf
from services.invoice_pdf import (
    PDFInvoiceRenderer,
    payment_days,
    render_invoice_to_pdf_bytes,
    transliterate,
)


def test_render_invoice_pdf_returns_bytes(sample_invoice) -> None:
    pdf_bytes = render_invoice_to_pdf_bytes(sample_invoice)

    assert isinstance(pdf_bytes, (bytes, bytearray))
    assert pdf_bytes.startswith(b"%PDF")


def test_render_invoice_pdf_many_long_items_paginates(sample_invoice) -> None:
    sample_invoice.items = [
        InvoiceLineItem(
            description=(
                "Bardzo szczegółowy opis usługi z wieloma szczegółami, "
                f"który wymusza zawijanie wiersza w tabeli, pozycja {i}"
            ),
            quantity=i,
            net_price=10.0,
            brutto_price=12.3,
            vat_rate=23,
        )
        for i in range(1, 60)
    ]

    pdf_bytes = render_invoice_to_pdf_bytes(sample_invoice)

    assert pdf_bytes.startswith(b"%PDF")
    assert len(re.findall(rb"/Type /Page\b", pdf_bytes)) >= 2


def test_render_without_bank_account(sample_invoice) -> None:
    sample_invoice.seller.bank_account = None
    assert render_invoice_to_pdf_bytes(sample_invoice).startswith(b"%PDF")


def test_missing_font_falls_back_to_helvetica(sample_invoice, monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("FAKTURA_PDF_FONT", str(tmp_path / "missing.ttf"))
    assert invoice_pdf._resolve_fonts() == ("Helvetica", "Helvetica-Bold", False)
    assert PDFInvoiceRenderer().render(sample_invoice).startswith(b"%PDF")


def test_transliterate_polish_letters() -> None:
    assert transliterate("Łódź") == "Lodz"
    assert transliterate("zażółć gęślą jaźń") == "zazolc gesla jazn"
    assert transliterate("Słownie: sto PLN zero gr") == "Slownie: sto PLN zero gr"


def test_payment_days_from_environment(monkeypatch) -> None:
    monkeypatch.delenv("FAKTURA_PAYMENT_DAYS", raising=False)
    assert payment_days() == 14
    monkeypatch.setenv("FAKTURA_PAYMENT_DAYS", "30")
    assert payment_days() == 30
    monkeypatch.setenv("FAKTURA_PAYMENT_DAYS", "dwa tygodnie")
    assert payment_days() == 14
