from __future__ import annotations

from .invoice_create import render_invoice_create
