from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable

from nicegui import ui

from invoice_calculations import format_number_input
from logic import (
    apply_net_price,
    apply_vat_rate,
    invoice_pdf_filename,
    is_printable,
    validate_invoice_data,
)
from models import VAT_RATES, InvoiceData, InvoiceLineItem, new_line_item
from services.invoice_pdf import PDFInvoiceRenderer
from .invoice_utils import build_invoice_preview_html, format_amount

logger = logging.getLogger(__name__)


def parse_number(raw: Any) -> float | None:
    """Sanitized text field value as float, None while it is not a number yet."""
    cleaned = format_number_input(str(raw or "")).replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        return None


def render_invoice_create() -> None:
    ui.label("Nowa faktura").classes("text-2xl font-semibold mb-4")

    today = date.today().isoformat()
    data = InvoiceData(date_issued=today, date_sale=today)
    renderer = PDFInvoiceRenderer()
    vat_options = {rate: f"{rate}%" for rate in VAT_RATES}
    preview = None
    # read-only brutto input of each row, rebuilt with the editor
    brutto_inputs: list = []

    def update_preview() -> None:
        if preview is not None:
            preview.content = build_invoice_preview_html(data)

    def bind(setter: Callable[[str], None]) -> Callable[[Any], None]:
        def _handler(e) -> None:
            setter(str(e.value or ""))
            update_preview()

        return _handler

    def _update_row(index: int, item: InvoiceLineItem) -> None:
        # row inputs stay mounted, only brutto is rewritten
        data.items[index] = item
        if index < len(brutto_inputs):
            brutto_inputs[index].value = format_amount(item.brutto_price)
        update_preview()

    def _add_item() -> None:
        data.items.append(new_line_item())
        items_editor.refresh()
        update_preview()

    def _remove_item(index: int) -> None:
        if len(data.items) <= 1:
            return
        del data.items[index]
        items_editor.refresh()
        update_preview()

    def _on_description(index: int, e) -> None:
        data.items[index].description = str(e.value or "")
        update_preview()

    def _on_quantity(index: int, e) -> None:
        quantity = parse_number(e.value)
        if quantity is None:
            return
        data.items[index].quantity = quantity
        update_preview()

    def _on_net_price(index: int, e) -> None:
        raw = str(e.value or "")
        sanitized = format_number_input(raw)
        if sanitized != raw:
            # triggers another change event with the clean value
            e.sender.value = sanitized
            return
        net_price = parse_number(sanitized)
        if net_price is None:
            return
        _update_row(index, apply_net_price(data.items[index], net_price))

    def _on_vat_rate(index: int, e) -> None:
        _update_row(index, apply_vat_rate(data.items[index], float(e.value)))

    @ui.refreshable
    def items_editor() -> None:
        brutto_inputs.clear()
        for index, item in enumerate(data.items):
            with ui.row().classes("w-full gap-3 items-end border-b pb-3 flex-wrap md:flex-nowrap"):
                ui.input(
                    "Opis",
                    value=item.description,
                    on_change=lambda e, i=index: _on_description(i, e),
                ).classes("flex-1 min-w-[160px]")
                ui.input(
                    "Ilość",
                    value=f"{item.quantity:g}",
                    on_change=lambda e, i=index: _on_quantity(i, e),
                ).classes("w-20")
                ui.input(
                    "Cena netto",
                    value=format_amount(item.net_price) if item.net_price else "",
                    on_change=lambda e, i=index: _on_net_price(i, e),
                ).props("debounce=400").classes("w-28")
                ui.select(
                    options=vat_options,
                    value=int(item.vat_rate) if item.vat_rate in VAT_RATES else VAT_RATES[0],
                    label="Stawka VAT",
                    on_change=lambda e, i=index: _on_vat_rate(i, e),
                ).classes("w-28")
                brutto_inputs.append(
                    ui.input("Cena brutto", value=format_amount(item.brutto_price)).props("readonly").classes("w-28")
                )
                ui.button("×", on_click=lambda i=index: _remove_item(i)).props(
                    "flat color=negative" + (" disable" if len(data.items) == 1 else "")
                )

    def _generate() -> None:
        # no company registry: the seller is identified by NIP
        data.seller.company_id = data.seller.nip.strip()
        errors = validate_invoice_data(data, new_buyer=True)
        if errors:
            for message in errors:
                ui.notify(message, color="red")
            return
        if not is_printable(data):
            return
        try:
            pdf_bytes = renderer.render(data)
        except Exception as exc:
            logger.exception("PDF generation failed for invoice %s", data.invoice_number)
            ui.notify(f"Błąd generowania PDF: {exc}", color="red")
            return
        ui.download.content(pdf_bytes, invoice_pdf_filename(data), media_type="application/pdf")
        ui.notify("Faktura została utworzona", color="positive")

    with ui.row().classes("w-full gap-6 items-start flex-col md:flex-row md:flex-nowrap"):
        with ui.column().classes("w-full md:w-[55%] gap-4"):
            with ui.card().classes("w-full p-4"):
                ui.label("Dane faktury").classes("text-lg font-semibold mb-2")
                ui.input(
                    "Numer faktury",
                    on_change=bind(lambda v: setattr(data, "invoice_number", v)),
                ).classes("w-full")
                ui.input(
                    "Data wystawienia",
                    value=today,
                    on_change=bind(lambda v: setattr(data, "date_issued", v)),
                ).props("type=date").classes("w-full")
                ui.input(
                    "Data sprzedaży",
                    value=today,
                    on_change=bind(lambda v: setattr(data, "date_sale", v)),
                ).props("type=date").classes("w-full")

            with ui.row().classes("w-full gap-4 flex-col md:flex-row md:flex-nowrap"):
                with ui.card().classes("w-full p-4"):
                    ui.label("Sprzedawca").classes("text-lg font-semibold mb-2")
                    ui.input("Nazwa", on_change=bind(lambda v: setattr(data.seller, "name", v))).classes("w-full")
                    ui.input("Adres", on_change=bind(lambda v: setattr(data.seller, "address", v))).classes("w-full")
                    ui.input("NIP", on_change=bind(lambda v: setattr(data.seller, "nip", v))).classes("w-full")
                    ui.input(
                        "Konto bankowe",
                        on_change=bind(lambda v: setattr(data.seller, "bank_account", v)),
                    ).classes("w-full")

                with ui.card().classes("w-full p-4"):
                    ui.label("Nabywca").classes("text-lg font-semibold mb-2")
                    ui.input("Nazwa", on_change=bind(lambda v: setattr(data.buyer, "name", v))).classes("w-full")
                    ui.input("Adres", on_change=bind(lambda v: setattr(data.buyer, "address", v))).classes("w-full")
                    ui.input("NIP", on_change=bind(lambda v: setattr(data.buyer, "nip", v))).classes("w-full")

            with ui.card().classes("w-full p-4"):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("Pozycje na fakturze").classes("text-lg font-semibold")
                    ui.button("Dodaj pozycję", on_click=_add_item).props("outline color=primary")
                items_editor()

            ui.button("Generuj fakturę", on_click=_generate).props("unelevated color=primary size=lg")

        with ui.column().classes("w-full md:flex-1"):
            with ui.card().classes("w-full p-4 md:sticky md:top-4"):
                ui.label("Podgląd").classes("text-lg font-semibold mb-2")
                preview = ui.html("", sanitize=False).classes("w-full")

    update_preview()
