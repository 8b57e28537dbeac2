from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Success

from checkout_api.core.domain.model.checkout_state import (
    StageFailure,
    WarehouseReservationFailures,
)
from checkout_api.core.domain.service.stage import (
    CheckoutContext,
    StageResult,
    call_collaborator,
)
from checkout_api.core.ports.outbound.products import ProductCatalog
from checkout_api.core.ports.outbound.warehouse import Warehouse


@dataclass(frozen=True)
class InventoryReserver:
    """Reserves stock for every warehouse-stored line of the order.

    Lines already reserved under their reference are left alone, so running
    the reserver again for the same order does not reserve twice. The first
    line that cannot be reserved aborts the remaining lines.
    """

    products: ProductCatalog
    warehouse: Warehouse

    def __call__(self, ctx: CheckoutContext) -> StageResult:
        for line in ctx.order.lines:
            product = call_collaborator(
                "product_catalog", self.products.get_by_id, line.product_id
            ).value_or(None)
            if product is None:
                return _failed(ctx, WarehouseReservationFailures.PRODUCT_NOT_FOUND)
            if not product.stored_in_warehouse:
                continue

            already_reserved = call_collaborator(
                "warehouse",
                self.warehouse.is_reserved_in_stock,
                line.reference,
                line.quantity,
            ).value_or(False)
            if already_reserved:
                continue

            reserved = call_collaborator(
                "warehouse",
                self.warehouse.try_reserve_items,
                line.reference,
                line.quantity,
            ).value_or(False)
            if not reserved:
                return _failed(
                    ctx, WarehouseReservationFailures.COULD_NOT_RESERVE_ITEMS_IN_STOCK
                )

        ctx.state.warehouse_reservation_succeeded()
        return Success(ctx)


def _failed(ctx: CheckoutContext, reason: WarehouseReservationFailures) -> StageResult:
    ctx.state.warehouse_reservation_failed(reason)
    return Failure(StageFailure(slot="reservation", reason=reason))
