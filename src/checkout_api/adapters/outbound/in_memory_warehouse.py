from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Set

from checkout_api.core.ports.outbound.warehouse import Warehouse

logger = logging.getLogger(__name__)


@dataclass
class InMemoryWarehouse(Warehouse):
    """Single stock pool with reservations keyed by order line reference.

    Reserving a reference that is already held for the same quantity and
    activating a reference twice both succeed without changing the book.
    A lock serializes concurrent callers working on the same reference.
    """

    capacity: int
    _reserved: Dict[str, int] = field(default_factory=dict)
    _activated: Set[str] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def available(self) -> int:
        with self._lock:
            return self.capacity - sum(self._reserved.values())

    def is_reserved_in_stock(self, reference: str, quantity: int) -> bool:
        with self._lock:
            return self._reserved.get(reference) == quantity

    def try_reserve_items(self, reference: str, quantity: int) -> bool:
        with self._lock:
            held = self._reserved.get(reference)
            if held is not None:
                return held == quantity

            available = self.capacity - sum(self._reserved.values())
            if available < quantity:
                logger.info(
                    "cannot reserve %s x%d: %d available", reference, quantity, available
                )
                return False

            self._reserved[reference] = quantity
            return True

    def activate_shipment(self, reference: str) -> bool:
        with self._lock:
            if reference not in self._reserved:
                return False
            self._activated.add(reference)
            return True
