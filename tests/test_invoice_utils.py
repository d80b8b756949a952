from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path

from models import InvoiceLineItem

module_path = Path(__file__).resolve().parents[1] / "app" / "pages" / "invoice_utils.py"
spec = spec_from_file_location("invoice_utils", module_path)
invoice_utils = module_from_spec(spec)
assert spec.loader is not None
spec.loader.exec_module(invoice_utils)

build_invoice_preview_html = invoice_utils.build_invoice_preview_html
format_amount = invoice_utils.format_amount


def test_format_amount() -> None:
    assert format_amount(246) == "246.00"
    assert format_amount(0.5) == "0.50"
    assert format_amount(None) == "0.00"


def test_preview_contains_header_and_parties(sample_invoice) -> None:
    html = build_invoice_preview_html(sample_invoice)
    assert "Faktura VAT FV/2024/01" in html
    assert "Data wystawienia: 2024-01-10" in html
    assert "Data sprzedaży: 2024-01-09" in html
    assert "Hurtownia Żółw" in html
    assert "NIP: 5250000000" in html


def test_preview_contains_totals_and_words(sample_invoice) -> None:
    html = build_invoice_preview_html(sample_invoice)
    assert "200.00 PLN" in html
    assert "46.00 PLN" in html
    assert "Do zapłaty: 246.00 PLN" in html
    assert "Słownie: dwieście czterdzieści sześć PLN zero gr" in html


def test_preview_escapes_user_text(sample_invoice) -> None:
    sample_invoice.items.append(
        InvoiceLineItem(description="<script>alert(1)</script>", net_price=1, brutto_price=1.23)
    )
    html = build_invoice_preview_html(sample_invoice)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
