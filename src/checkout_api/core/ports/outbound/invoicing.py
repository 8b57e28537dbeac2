from __future__ import annotations

from typing import Protocol

from returns.result import Result

from checkout_api.core.domain.model.catalog import Invoice
from checkout_api.core.domain.model.customer import Customer
from checkout_api.core.domain.model.errors import InvoicingError
from checkout_api.core.domain.model.order import Order


class InvoiceService(Protocol):
    def produce_invoice(
        self, order: Order, customer: Customer
    ) -> Result[Invoice, InvoicingError]: ...
