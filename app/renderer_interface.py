from __future__ import annotations

from typing import Protocol

from models import InvoiceData


class InvoiceRenderer(Protocol):
    def render(self, invoice: InvoiceData, template_id: str | None = None) -> bytes:
        ...
