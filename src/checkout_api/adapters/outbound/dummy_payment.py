from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from returns.result import Failure, Result, Success

from checkout_api.core.domain.model.catalog import CardCharge, CardDetails
from checkout_api.core.domain.model.errors import PaymentDeclined
from checkout_api.core.ports.outbound.payment import CardPaymentGateway


@dataclass
class DummyCardPaymentGateway(CardPaymentGateway):
    decline_references: set[str] | None = None

    def charge(self, card: CardDetails) -> Result[CardCharge, PaymentDeclined]:
        decline = self.decline_references or set()
        if card.reference in decline:
            return Failure(
                PaymentDeclined(message="card declined", reason="card_blacklisted")
            )
        return Success(
            CardCharge(card_reference=card.reference, transaction_id=str(uuid4()))
        )
