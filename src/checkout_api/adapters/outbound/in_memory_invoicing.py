from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
from uuid import uuid4

from returns.result import Failure, Result, Success

from checkout_api.core.domain.model.catalog import Invoice
from checkout_api.core.domain.model.customer import Customer
from checkout_api.core.domain.model.errors import InvoicingError
from checkout_api.core.domain.model.order import Order
from checkout_api.core.ports.outbound.invoicing import InvoiceService


@dataclass
class InMemoryInvoiceService(InvoiceService):
    fail: bool = False
    _issued: Dict[str, Invoice] = field(default_factory=dict)

    def produce_invoice(
        self, order: Order, customer: Customer
    ) -> Result[Invoice, InvoicingError]:
        if self.fail:
            return Failure(InvoicingError(message="invoicing is down"))
        invoice = Invoice(
            invoice_id=f"inv-{uuid4().hex[:12]}",
            order_id=order.order_id,
            customer_id=customer.customer_id,
        )
        self._issued[invoice.invoice_id] = invoice
        return Success(invoice)

    def issued(self) -> tuple[Invoice, ...]:
        return tuple(self._issued.values())
