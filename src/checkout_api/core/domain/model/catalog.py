from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from checkout_api.core.domain.model.order import CustomerId, OrderId, ProductId


@dataclass(frozen=True)
class Product:
    product_id: ProductId
    name: str
    stored_in_warehouse: bool = True


@dataclass(frozen=True)
class CardDetails:
    reference: str
    expires_at: date

    def is_valid_on(self, day: date) -> bool:
        expires_on = self.expires_at
        if isinstance(expires_on, datetime):
            expires_on = expires_on.date()
        return expires_on > day


@dataclass(frozen=True)
class CardCharge:
    card_reference: str
    transaction_id: str


@dataclass(frozen=True)
class Invoice:
    invoice_id: str
    order_id: OrderId
    customer_id: CustomerId
