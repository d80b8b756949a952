from __future__ import annotations

from html import escape

from invoice_calculations import compute_totals
from models import InvoiceData
from number_to_words import amount_to_words


def format_amount(value: float) -> str:
    return f"{float(value or 0):.2f}"


def _party_html(title: str, name: str, address: str, nip: str) -> str:
    lines = [name, address, f"NIP: {nip}" if (nip or "").strip() else ""]
    body = "<br>".join(escape(line) for line in lines if (line or "").strip())
    return (
        "<div class='flex-1'>"
        f"<div class='font-semibold'>{escape(title)}</div>"
        f"<div class='text-gray-700'>{body}</div>"
        "</div>"
    )


def build_invoice_preview_html(data: InvoiceData) -> str:
    totals = compute_totals(data.items)
    number = escape(data.invoice_number or "")
    date_issued = escape(data.date_issued or "")
    date_sale = escape(data.date_sale or "")

    rows_html = ""
    for item in data.items:
        rows_html += (
            "<tr>"
            f"<td class='text-left'>{escape(item.description or '')}</td>"
            f"<td class='text-right'>{item.quantity:g}</td>"
            f"<td class='text-right'>{format_amount(item.net_price)}</td>"
            f"<td class='text-right'>{item.vat_rate:g}%</td>"
            f"<td class='text-right'>{format_amount(item.brutto_price)}</td>"
            "</tr>"
        )

    return (
        "<div class='space-y-4 text-sm'>"
        f"<div class='font-semibold text-lg'>Faktura VAT {number}</div>"
        "<div class='flex flex-col gap-1'>"
        f"<div>Data wystawienia: {date_issued}</div>"
        f"<div>Data sprzedaży: {date_sale}</div>"
        "</div>"
        "<div class='flex gap-4'>"
        f"{_party_html('Sprzedawca:', data.seller.name, data.seller.address, data.seller.nip)}"
        f"{_party_html('Nabywca:', data.buyer.name, data.buyer.address, data.buyer.nip)}"
        "</div>"
        "<table class='w-full text-sm border-collapse'>"
        "<thead>"
        "<tr class='border-b'>"
        "<th class='text-left py-2'>Opis</th>"
        "<th class='text-right py-2'>Ilość</th>"
        "<th class='text-right py-2'>Cena netto</th>"
        "<th class='text-right py-2'>VAT</th>"
        "<th class='text-right py-2'>Wartość brutto</th>"
        "</tr>"
        "</thead>"
        "<tbody>"
        f"{rows_html}"
        "</tbody>"
        "<tfoot>"
        "<tr>"
        "<td colspan='4' class='text-right'>Wartość netto</td>"
        f"<td class='text-right'>{format_amount(totals.net_total)} PLN</td>"
        "</tr>"
        "<tr>"
        "<td colspan='4' class='text-right'>Wartość VAT</td>"
        f"<td class='text-right'>{format_amount(totals.vat_total)} PLN</td>"
        "</tr>"
        "<tr class='font-semibold'>"
        "<td colspan='4' class='text-right'>Wartość brutto</td>"
        f"<td class='text-right'>{format_amount(totals.gross_total)} PLN</td>"
        "</tr>"
        "</tfoot>"
        "</table>"
        f"<div class='font-semibold'>Do zapłaty: {format_amount(totals.gross_total)} PLN</div>"
        f"<div class='italic'>Słownie: {escape(amount_to_words(totals.gross_total))}</div>"
        "</div>"
    )
