from __future__ import annotations

from typing import Protocol

from returns.result import Result

from checkout_api.core.domain.model.catalog import CardCharge, CardDetails
from checkout_api.core.domain.model.errors import PaymentDeclined


class CardPaymentGateway(Protocol):
    def charge(self, card: CardDetails) -> Result[CardCharge, PaymentDeclined]: ...
