from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Success

from checkout_api.core.domain.model.checkout_state import (
    ShipmentFailures,
    StageFailure,
)
from checkout_api.core.domain.service.stage import (
    CheckoutContext,
    StageResult,
    call_collaborator,
)
from checkout_api.core.ports.outbound.shipment import ShipmentTracker


@dataclass(frozen=True)
class ShippingValidator:
    tracker: ShipmentTracker

    def __call__(self, ctx: CheckoutContext) -> StageResult:
        address = ctx.customer.shipping_address
        if address is None:
            return _failed(ctx, ShipmentFailures.MISSING_CUSTOMER_ADDRESS)
        if not address.is_complete():
            return _failed(ctx, ShipmentFailures.INVALID_CUSTOMER_ADDRESS)

        can_ship = call_collaborator(
            "shipment_tracker", self.tracker.can_ship_to_destination, address
        )
        if not can_ship.value_or(False):
            return _failed(ctx, ShipmentFailures.CANNOT_SHIP_TO_DESTINATION)

        ctx.state.shipment_verified()
        return Success(ctx)


def _failed(ctx: CheckoutContext, reason: ShipmentFailures) -> StageResult:
    ctx.state.shipment_failed(reason)
    return Failure(StageFailure(slot="shipment", reason=reason))
