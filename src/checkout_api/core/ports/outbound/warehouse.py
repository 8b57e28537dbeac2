from __future__ import annotations

from typing import Protocol


class Warehouse(Protocol):
    """
    All three calls are keyed by the order line reference and must be safe
    to repeat: reserving an already reserved line or activating an already
    activated one is not an error.
    """

    def is_reserved_in_stock(self, reference: str, quantity: int) -> bool: ...

    def try_reserve_items(self, reference: str, quantity: int) -> bool: ...

    def activate_shipment(self, reference: str) -> bool: ...
