from __future__ import annotations

from typing import Callable, Protocol, Sequence

from checkout_api.core.domain.model.catalog import CardDetails
from checkout_api.core.domain.model.order import CustomerId


class CardVault(Protocol):
    def get_card_details_by_customer_id(self, customer_id: CustomerId) -> bytes: ...


# (encrypted blob, customer secret) -> cards in stored order
DecryptCardDetails = Callable[[bytes, str], Sequence[CardDetails]]
