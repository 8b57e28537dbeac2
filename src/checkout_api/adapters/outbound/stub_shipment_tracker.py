from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from checkout_api.core.domain.model.customer import Address
from checkout_api.core.ports.outbound.shipment import ShipmentTracker


@dataclass
class StubShipmentTracker(ShipmentTracker):
    blocked_zip_codes: FrozenSet[str] = field(default_factory=frozenset)

    def can_ship_to_destination(self, address: Address) -> bool:
        return (address.zip_code or "").strip() not in self.blocked_zip_codes
