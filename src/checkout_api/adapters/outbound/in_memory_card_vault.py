from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from checkout_api.core.domain.model.order import CustomerId
from checkout_api.core.ports.outbound.card_vault import CardVault


@dataclass
class InMemoryCardVault(CardVault):
    _blobs: Dict[str, bytes] = field(default_factory=dict)

    def store(self, customer_id: CustomerId, blob: bytes) -> None:
        self._blobs[customer_id.value] = blob

    def get_card_details_by_customer_id(self, customer_id: CustomerId) -> bytes:
        return self._blobs.get(customer_id.value, b"")
