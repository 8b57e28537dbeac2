from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Success

from checkout_api.core.domain.model.checkout_state import (
    StageFailure,
    WarehouseSendFailures,
)
from checkout_api.core.domain.service.stage import (
    CheckoutContext,
    StageResult,
    call_collaborator,
)
from checkout_api.core.ports.outbound.products import ProductCatalog
from checkout_api.core.ports.outbound.warehouse import Warehouse


@dataclass(frozen=True)
class ShipmentActivator:
    products: ProductCatalog
    warehouse: Warehouse
    # check each line is still held before releasing it to the carrier
    reverify_reservation: bool = True

    def __call__(self, ctx: CheckoutContext) -> StageResult:
        for line in ctx.order.lines:
            product = call_collaborator(
                "product_catalog", self.products.get_by_id, line.product_id
            ).value_or(None)
            if product is None:
                return _failed(ctx, WarehouseSendFailures.PRODUCT_NOT_FOUND)
            if not product.stored_in_warehouse:
                continue

            if self.reverify_reservation:
                held = call_collaborator(
                    "warehouse",
                    self.warehouse.is_reserved_in_stock,
                    line.reference,
                    line.quantity,
                ).value_or(False)
                if not held:
                    return _failed(
                        ctx, WarehouseSendFailures.RESERVATION_NO_LONGER_HELD
                    )

            activated = call_collaborator(
                "warehouse", self.warehouse.activate_shipment, line.reference
            ).value_or(False)
            if not activated:
                return _failed(ctx, WarehouseSendFailures.COULD_NOT_ACTIVATE_SHIPMENT)

        ctx.state.shipment_activated()
        return Success(ctx)


def _failed(ctx: CheckoutContext, reason: WarehouseSendFailures) -> StageResult:
    ctx.state.shipment_activation_failed(reason)
    return Failure(StageFailure(slot="activation", reason=reason))
