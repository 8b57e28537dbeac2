from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Tuple
from uuid import UUID

from returns.converters import flatten
from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, Result, Success

from checkout_api.core.domain.model.checkout_state import (
    CheckoutState,
    ShipmentFailures,
    StageFailure,
)
from checkout_api.core.domain.model.customer import Customer
from checkout_api.core.domain.model.errors import CheckoutError, ValidationError
from checkout_api.core.domain.model.order import (
    CustomerId,
    Order,
    OrderId,
    OrderLine,
    ProductId,
    now_utc,
    today_utc,
)
from checkout_api.core.domain.service.inventory_reserver import InventoryReserver
from checkout_api.core.domain.service.payment_settler import PaymentSettler
from checkout_api.core.domain.service.shipment_activator import ShipmentActivator
from checkout_api.core.domain.service.shipping_validator import ShippingValidator
from checkout_api.core.domain.service.stage import (
    CheckoutContext,
    StageResult,
    call_collaborator,
)
from checkout_api.core.ports.inbound.checkout import CheckoutCommand, CheckoutUseCase
from checkout_api.core.ports.outbound.card_vault import CardVault, DecryptCardDetails
from checkout_api.core.ports.outbound.customers import CustomerDirectory
from checkout_api.core.ports.outbound.invoicing import InvoiceService
from checkout_api.core.ports.outbound.payment import CardPaymentGateway
from checkout_api.core.ports.outbound.products import ProductCatalog
from checkout_api.core.ports.outbound.shipment import ShipmentTracker
from checkout_api.core.ports.outbound.warehouse import Warehouse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutDeps:
    customers: CustomerDirectory
    shipment_tracker: ShipmentTracker
    products: ProductCatalog
    warehouse: Warehouse
    card_vault: CardVault
    decrypt_card_details: DecryptCardDetails
    card_payments: CardPaymentGateway
    invoicing: InvoiceService
    today: Callable[[], date] = today_utc
    reverify_reservation: bool = True


@dataclass(frozen=True)
class CheckoutService(CheckoutUseCase):
    """Runs shipping check, reservation, payment and activation in order.

    Each stage records its outcome in the CheckoutState and hands the context
    on only when it succeeded, so the first failure ends the run. Nothing is
    rolled back: a reserved-but-unpaid order stays visible in the state.
    """

    deps: CheckoutDeps

    def checkout(
        self, command: CheckoutCommand
    ) -> Result[CheckoutState, CheckoutError]:
        return _validate_command(command).bind(_build_order).map(self.checkout_order)

    def checkout_order(self, order: Order) -> CheckoutState:
        state = CheckoutState(order)
        result = self._find_customer(order, state).bind(
            lambda customer: flow(
                CheckoutContext(order=order, customer=customer, state=state),
                self._validate_shipping,
                bind(self._reserve_inventory),
                bind(self._settle_payment),
                bind(self._activate_shipment),
            )
        )

        if isinstance(result, Failure):
            failure: StageFailure = result.failure()
            logger.info(
                "checkout %s aborted at %s: %s",
                order.order_id.value,
                failure.slot,
                failure.reason.value,
                extra={"order_id": str(order.order_id.value)},
            )
        else:
            logger.info(
                "checkout %s shipped",
                order.order_id.value,
                extra={"order_id": str(order.order_id.value)},
            )
        return state

    # ---- stages ------------------------------------------------------------

    def _find_customer(
        self, order: Order, state: CheckoutState
    ) -> Result[Customer, StageFailure]:
        found = flatten(
            call_collaborator(
                "customer_directory", self.deps.customers.get, order.customer_id
            )
        )
        if isinstance(found, Success):
            return found

        logger.info(
            "customer %s not resolved: %s", order.customer_id.value, found.failure()
        )
        state.shipment_failed(ShipmentFailures.CUSTOMER_NOT_FOUND)
        return Failure(
            StageFailure(slot="shipment", reason=ShipmentFailures.CUSTOMER_NOT_FOUND)
        )

    def _validate_shipping(self, ctx: CheckoutContext) -> StageResult:
        return _logged(ShippingValidator(self.deps.shipment_tracker)(ctx))

    def _reserve_inventory(self, ctx: CheckoutContext) -> StageResult:
        return _logged(InventoryReserver(self.deps.products, self.deps.warehouse)(ctx))

    def _settle_payment(self, ctx: CheckoutContext) -> StageResult:
        settle = PaymentSettler(
            card_vault=self.deps.card_vault,
            decrypt_card_details=self.deps.decrypt_card_details,
            card_payments=self.deps.card_payments,
            invoicing=self.deps.invoicing,
            today=self.deps.today,
        )
        return _logged(settle(ctx))

    def _activate_shipment(self, ctx: CheckoutContext) -> StageResult:
        activate = ShipmentActivator(
            self.deps.products,
            self.deps.warehouse,
            reverify_reservation=self.deps.reverify_reservation,
        )
        return _logged(activate(ctx))


# ---- pure helpers ----------------------------------------------------------


def _logged(result: StageResult) -> StageResult:
    if isinstance(result, Success):
        ctx = result.unwrap()
        logger.debug(
            "checkout %s -> %s", ctx.order.order_id.value, ctx.state.stage.value
        )
    return result


def _validate_command(
    cmd: CheckoutCommand,
) -> Result[CheckoutCommand, CheckoutError]:
    if not cmd.customer_id.strip():
        return Failure(ValidationError("customer_id is required"))
    if not cmd.lines:
        return Failure(ValidationError("at least one order line is required"))
    if cmd.order_id is not None:
        try:
            UUID(cmd.order_id)
        except ValueError:
            return Failure(ValidationError("order_id must be a valid UUID"))

    seen: set[str] = set()
    for i, ln in enumerate(cmd.lines):
        if not ln.product_id.strip():
            return Failure(ValidationError(f"lines[{i}].product_id is required"))
        if ln.quantity <= 0:
            return Failure(ValidationError(f"lines[{i}].quantity must be > 0"))
        if not ln.reference.strip():
            return Failure(ValidationError(f"lines[{i}].reference is required"))
        if ln.reference in seen:
            return Failure(
                ValidationError(f"lines[{i}].reference duplicates an earlier line")
            )
        seen.add(ln.reference)

    return Success(cmd)


def _build_order(cmd: CheckoutCommand) -> Result[Order, CheckoutError]:
    lines: Tuple[OrderLine, ...] = tuple(
        OrderLine(
            product_id=ProductId(ln.product_id),
            quantity=ln.quantity,
            reference=ln.reference,
        )
        for ln in cmd.lines
    )
    order_id = OrderId(UUID(cmd.order_id)) if cmd.order_id else OrderId.new()
    return Success(
        Order(
            order_id=order_id,
            customer_id=CustomerId(cmd.customer_id),
            lines=lines,
            created_at=now_utc(),
        )
    )
