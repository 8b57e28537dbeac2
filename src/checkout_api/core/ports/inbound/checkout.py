from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from returns.result import Result

from checkout_api.core.domain.model.checkout_state import CheckoutState
from checkout_api.core.domain.model.errors import CheckoutError


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    quantity: int
    reference: str


@dataclass(frozen=True)
class CheckoutCommand:
    customer_id: str
    lines: Sequence[CheckoutLine]
    order_id: str | None = None  # UUID string; generated when absent


class CheckoutUseCase(Protocol):
    def checkout(
        self, command: CheckoutCommand
    ) -> Result[CheckoutState, CheckoutError]: ...
