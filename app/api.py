from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response

from logic import invoice_pdf_filename, is_printable
from models import InvoiceData, InvoiceTotals
from invoice_calculations import compute_totals
from number_to_words import amount_to_words
from services.invoice_pdf import render_invoice_to_pdf_bytes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices")


@router.post("/totals", response_model=InvoiceTotals)
def invoice_totals(data: InvoiceData) -> InvoiceTotals:
    return compute_totals(data.items)


@router.get("/amount-in-words")
def invoice_amount_in_words(amount: float) -> dict:
    return {"amount": amount, "words": amount_to_words(amount)}


@router.post("/pdf")
def invoice_pdf(data: InvoiceData) -> Response:
    if not is_printable(data):
        raise HTTPException(
            status_code=400,
            detail="Faktura wymaga numeru, daty wystawienia i co najmniej jednej pozycji",
        )
    try:
        pdf_bytes = render_invoice_to_pdf_bytes(data)
    except Exception:
        logger.exception("PDF rendering failed for invoice %s", data.invoice_number)
        raise HTTPException(status_code=500, detail="Nie udało się wygenerować PDF")

    filename = invoice_pdf_filename(data)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
