# app/services/invoice_pdf.py
from __future__ import annotations

import logging
import os
import unicodedata
from io import BytesIO
from typing import Any

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from env import env_int
from invoice_calculations import compute_totals
from models import InvoiceData
from number_to_words import amount_to_words
from renderer_interface import InvoiceRenderer

logger = logging.getLogger(__name__)

_TTF_FONT_NAME = "FakturaSans"
_DEFAULT_PAYMENT_DAYS = 14

# Letters the core Helvetica encoding cannot show
_CORE_FONT_FALLBACK = str.maketrans({"ł": "l", "Ł": "L"})


def _safe_str(x: Any) -> str:
    return (str(x) if x is not None else "").strip()


def _resolve_fonts() -> tuple[str, str, bool]:
    """Return (regular, bold, unicode_capable)."""
    path = os.getenv("FAKTURA_PDF_FONT", "").strip()
    if path and os.path.exists(path):
        if _TTF_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(_TTF_FONT_NAME, path))
        return _TTF_FONT_NAME, _TTF_FONT_NAME, True
    if path:
        logger.warning("PDF font %s not found, falling back to Helvetica", path)
    return "Helvetica", "Helvetica-Bold", False


def transliterate(text: str) -> str:
    """Strip diacritics so core PDF fonts can draw the text."""
    decomposed = unicodedata.normalize("NFKD", text.translate(_CORE_FONT_FALLBACK))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def payment_days() -> int:
    return env_int("FAKTURA_PAYMENT_DAYS", _DEFAULT_PAYMENT_DAYS)


def _format_quantity(value: float) -> str:
    return f"{value:g}"


def _format_money(value: float) -> str:
    return f"{value:.2f}"


def _wrap_text(text: str, font: str, size: int, max_width: float) -> list[str]:
    text = _safe_str(text)
    if not text:
        return [""]
    words = text.replace("\n", " ").split()
    lines: list[str] = []
    cur = ""
    for w in words:
        cand = (cur + " " + w).strip() if cur else w
        if stringWidth(cand, font, size) <= max_width:
            cur = cand
        else:
            if cur:
                lines.append(cur)
            cur = w
    if cur:
        lines.append(cur)
    return lines or [""]


def render_invoice_to_pdf_bytes(data: InvoiceData) -> bytes:
    """Lay out a Polish VAT invoice on A4 and return the PDF bytes."""
    font, font_b, unicode_ok = _resolve_fonts()

    def clean(value: Any) -> str:
        s = _safe_str(value)
        return s if unicode_ok else transliterate(s)

    totals = compute_totals(data.items)

    buf = BytesIO()
    c = Canvas(buf, pagesize=A4)
    c.setTitle(clean(f"Faktura VAT {data.invoice_number}"))
    w, h = A4

    margin_x = 18 * mm
    top = h - 18 * mm
    bottom = 18 * mm

    def text(x, y, s, size=10, bold=False):
        c.setFont(font_b if bold else font, size)
        c.drawString(x, y, clean(s))

    def text_r(x_right, y, s, size=10, bold=False):
        c.setFont(font_b if bold else font, size)
        c.drawRightString(x_right, y, clean(s))

    # Header
    text(margin_x, top, f"Faktura VAT {_safe_str(data.invoice_number)}", size=20, bold=True)
    y = top - 22
    text(margin_x, y, f"Data wystawienia: {_safe_str(data.date_issued)}", size=10)
    y -= 13
    text(margin_x, y, f"Data sprzedaży: {_safe_str(data.date_sale)}", size=10)
    y -= 10

    c.setStrokeColorRGB(0.6, 0.6, 0.6)
    c.line(margin_x, y, w - margin_x, y)
    c.setStrokeColorRGB(0, 0, 0)
    y -= 18

    # Parties
    party_w = (w - 2 * margin_x) / 2 - 6

    def party(x: float, y0: float, title: str, name: str, address: str, nip: str) -> float:
        text(x, y0, title, size=10, bold=True)
        y0 -= 13
        lines = _wrap_text(clean(name), font, 10, party_w) + _wrap_text(clean(address), font, 10, party_w)
        lines.append(f"NIP: {_safe_str(nip)}")
        for ln in lines:
            text(x, y0, ln, size=10)
            y0 -= 12
        return y0

    seller, buyer = data.seller, data.buyer
    y_left = party(margin_x, y, "Sprzedawca:", seller.name, seller.address, seller.nip)
    y_right = party(w / 2 + 6, y, "Nabywca:", buyer.name, buyer.address, buyer.nip)
    y = min(y_left, y_right) - 14

    # Items table
    table_x = margin_x
    table_w = w - 2 * margin_x
    col_desc = table_w * 0.40
    col_qty = table_w * 0.12
    col_net = table_w * 0.18
    col_vat = table_w * 0.12
    # remaining width is the brutto column

    row_h_min = 16
    line_h = 11

    x_qty = table_x + col_desc + col_qty - 6
    x_net = table_x + col_desc + col_qty + col_net - 6
    x_vat = table_x + col_desc + col_qty + col_net + col_vat - 6
    x_brutto = table_x + table_w - 6

    def table_header(y0: float) -> float:
        c.setLineWidth(0.5)
        c.rect(table_x, y0 - 14, table_w, 14, stroke=1, fill=0)
        text(table_x + 6, y0 - 11, "Opis", size=9, bold=True)
        text_r(x_qty, y0 - 11, "Ilość", size=9, bold=True)
        text_r(x_net, y0 - 11, "Cena netto", size=9, bold=True)
        text_r(x_vat, y0 - 11, "VAT", size=9, bold=True)
        text_r(x_brutto, y0 - 11, "Wartość brutto", size=9, bold=True)
        return y0 - 16

    y = table_header(y)

    for it in data.items:
        desc_lines = _wrap_text(clean(it.description), font, 9, col_desc - 12)
        needed_h = max(row_h_min, 8 + len(desc_lines) * line_h)

        if y - needed_h < bottom + 55:
            c.showPage()
            y = table_header(top)

        c.rect(table_x, y - needed_h, table_w, needed_h, stroke=1, fill=0)

        ty = y - 12
        for ln in desc_lines:
            text(table_x + 6, ty, ln, size=9)
            ty -= line_h

        text_r(x_qty, y - 12, _format_quantity(it.quantity), size=9)
        text_r(x_net, y - 12, _format_money(it.net_price), size=9)
        text_r(x_vat, y - 12, f"{it.vat_rate:g}%", size=9)
        text_r(x_brutto, y - 12, _format_money(it.brutto_price), size=9)

        y -= needed_h

    # Summary
    y -= 16
    if y < bottom + 150:
        c.showPage()
        y = top

    right = table_x + table_w - 6
    label_x = right - 110
    for label, value in (
        ("Wartość netto:", totals.net_total),
        ("Wartość VAT:", totals.vat_total),
        ("Wartość brutto:", totals.gross_total),
    ):
        text_r(label_x, y, label, size=10, bold=True)
        text_r(right, y, f"{_format_money(value)} PLN", size=10)
        y -= 14

    y -= 14
    text(margin_x, y, f"Do zapłaty: {_format_money(totals.gross_total)} PLN", size=13, bold=True)
    y -= 16
    for ln in _wrap_text(clean(f"Słownie: {amount_to_words(totals.gross_total)}"), font, 10, table_w):
        text(margin_x, y, ln, size=10)
        y -= 12

    # Bank details
    if _safe_str(seller.bank_account):
        y -= 16
        text(margin_x, y, "Dane do przelewu:", size=10, bold=True)
        y -= 12
        text(margin_x, y, seller.bank_account, size=10)
        y -= 12
        text(margin_x, y, f"Termin płatności: {payment_days()} dni", size=10)

    c.save()
    pdf = buf.getvalue()
    logger.info("Rendered invoice %s (%d items, %d bytes)", data.invoice_number, len(data.items), len(pdf))
    return pdf


class PDFInvoiceRenderer(InvoiceRenderer):
    def render(self, invoice: InvoiceData, template_id: str | None = None) -> bytes:
        return render_invoice_to_pdf_bytes(invoice)
