from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from returns.result import Failure, Result, safe

from checkout_api.core.domain.model.checkout_state import CheckoutState, StageFailure
from checkout_api.core.domain.model.customer import Customer
from checkout_api.core.domain.model.order import Order

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CheckoutContext:
    order: Order
    customer: Customer
    state: CheckoutState


StageResult = Result[CheckoutContext, StageFailure]


def call_collaborator(
    name: str, fn: Callable[..., T], *args: Any
) -> Result[T, Exception]:
    """Run a collaborator call, turning anything it raises into a Failure."""
    result = safe(fn)(*args)
    if isinstance(result, Failure):
        exc = result.failure()
        logger.warning(
            "collaborator %s raised %s: %s",
            name,
            type(exc).__name__,
            exc,
            extra={"collaborator": name},
        )
    return result
