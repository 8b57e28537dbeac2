from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from checkout_api.core.domain.model.order import CustomerId


class PaymentMethod(str, Enum):
    CARD = "CARD"
    INVOICE = "INVOICE"


@dataclass(frozen=True)
class Address:
    street: str | None
    zip_code: str | None
    city: str | None

    def is_complete(self) -> bool:
        return all(
            part is not None and part != ""
            for part in (self.street, self.zip_code, self.city)
        )


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    secret: str
    shipping_address: Address | None = None
    invoice_address: Address | None = None
    # str rather than PaymentMethod: directories may hand back values we
    # do not recognise, which settle as NO_PAYMENT_METHOD_CONFIGURED
    payment_method: PaymentMethod | str | None = None

    def configured_payment_method(self) -> PaymentMethod | None:
        if self.payment_method is None:
            return None
        try:
            return PaymentMethod(self.payment_method)
        except ValueError:
            return None
