from __future__ import annotations

from typing import Protocol

from checkout_api.core.domain.model.customer import Address


class ShipmentTracker(Protocol):
    def can_ship_to_destination(self, address: Address) -> bool: ...
