"""Checkout outcomes and the write-once state that accumulates them.

Every stage of the checkout owns exactly one outcome slot. A slot starts
empty ("not yet evaluated") and is filled at most once with either a success
variant or a failure variant carrying a tagged reason. Recording a second
outcome for the same slot raises ``StageAlreadyRecorded``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from checkout_api.core.domain.model.errors import StageAlreadyRecorded
from checkout_api.core.domain.model.order import Order


# ---- failure reasons -------------------------------------------------------


class ShipmentFailures(str, Enum):
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    MISSING_CUSTOMER_ADDRESS = "MISSING_CUSTOMER_ADDRESS"
    INVALID_CUSTOMER_ADDRESS = "INVALID_CUSTOMER_ADDRESS"
    CANNOT_SHIP_TO_DESTINATION = "CANNOT_SHIP_TO_DESTINATION"


class WarehouseReservationFailures(str, Enum):
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    COULD_NOT_RESERVE_ITEMS_IN_STOCK = "COULD_NOT_RESERVE_ITEMS_IN_STOCK"


class PaymentFailures(str, Enum):
    NO_VALID_CREDIT_CARDS = "NO_VALID_CREDIT_CARDS"
    COULD_NOT_COMPLETE_CARD_PAYMENT = "COULD_NOT_COMPLETE_CARD_PAYMENT"
    MISSING_INVOICE_ADDRESS = "MISSING_INVOICE_ADDRESS"
    INVALID_INVOICE_ADDRESS = "INVALID_INVOICE_ADDRESS"
    COULD_NOT_PRODUCE_INVOICE = "COULD_NOT_PRODUCE_INVOICE"
    NO_PAYMENT_METHOD_CONFIGURED = "NO_PAYMENT_METHOD_CONFIGURED"


class WarehouseSendFailures(str, Enum):
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    RESERVATION_NO_LONGER_HELD = "RESERVATION_NO_LONGER_HELD"
    COULD_NOT_ACTIVATE_SHIPMENT = "COULD_NOT_ACTIVATE_SHIPMENT"


FailureReason = Union[
    ShipmentFailures,
    WarehouseReservationFailures,
    PaymentFailures,
    WarehouseSendFailures,
]


# ---- outcome variants ------------------------------------------------------


@dataclass(frozen=True)
class ShipmentVerified:
    pass


@dataclass(frozen=True)
class ShipmentFailed:
    reason: ShipmentFailures


@dataclass(frozen=True)
class ReservationSucceeded:
    pass


@dataclass(frozen=True)
class ReservationFailed:
    reason: WarehouseReservationFailures


@dataclass(frozen=True)
class PaidByCard:
    card_reference: str


@dataclass(frozen=True)
class Invoiced:
    invoice_id: str


@dataclass(frozen=True)
class PaymentFailed:
    reason: PaymentFailures


@dataclass(frozen=True)
class ShipmentActivated:
    pass


@dataclass(frozen=True)
class ActivationFailed:
    reason: WarehouseSendFailures


ShipmentOutcome = Union[ShipmentVerified, ShipmentFailed]
ReservationOutcome = Union[ReservationSucceeded, ReservationFailed]
PaymentOutcome = Union[PaidByCard, Invoiced, PaymentFailed]
ActivationOutcome = Union[ShipmentActivated, ActivationFailed]

_FAILED = (ShipmentFailed, ReservationFailed, PaymentFailed, ActivationFailed)


# ---- stages ----------------------------------------------------------------


class CheckoutStage(str, Enum):
    STARTED = "STARTED"
    SHIPPING_CHECKED = "SHIPPING_CHECKED"
    INVENTORY_CHECKED = "INVENTORY_CHECKED"
    PAYMENT_SETTLED = "PAYMENT_SETTLED"
    SHIPPED = "SHIPPED"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class StageFailure:
    """Failure value carried through the stage pipeline."""

    slot: str
    reason: FailureReason


# ---- state -----------------------------------------------------------------


class CheckoutState:
    """Mutable aggregate for one checkout run.

    Slots are filled in pipeline order: shipment, reservation, payment,
    activation. Read access goes through the properties and ``is_*`` queries.
    """

    SLOTS = ("shipment", "reservation", "payment", "activation")

    def __init__(self, order: Order) -> None:
        self._order = order
        self._outcomes: dict[str, object] = {}

    def __repr__(self) -> str:
        filled = ", ".join(f"{k}={v!r}" for k, v in self._outcomes.items())
        return f"CheckoutState(order={self._order.order_id.value}, {filled})"

    @property
    def order(self) -> Order:
        return self._order

    # ---- recording ---------------------------------------------------------

    def shipment_verified(self) -> None:
        self._record("shipment", ShipmentVerified())

    def shipment_failed(self, reason: ShipmentFailures) -> None:
        self._record("shipment", ShipmentFailed(ShipmentFailures(reason)))

    def warehouse_reservation_succeeded(self) -> None:
        self._record("reservation", ReservationSucceeded())

    def warehouse_reservation_failed(
        self, reason: WarehouseReservationFailures
    ) -> None:
        self._record(
            "reservation", ReservationFailed(WarehouseReservationFailures(reason))
        )

    def card_payment_completed_using(self, card_reference: str) -> None:
        self._record("payment", PaidByCard(card_reference))

    def invoice_sent_successfully(self, invoice_id: str) -> None:
        self._record("payment", Invoiced(invoice_id))

    def payment_failed(self, reason: PaymentFailures) -> None:
        self._record("payment", PaymentFailed(PaymentFailures(reason)))

    def shipment_activated(self) -> None:
        self._record("activation", ShipmentActivated())

    def shipment_activation_failed(self, reason: WarehouseSendFailures) -> None:
        self._record("activation", ActivationFailed(WarehouseSendFailures(reason)))

    def _record(self, slot: str, outcome: object) -> None:
        if slot in self._outcomes:
            raise StageAlreadyRecorded(
                message=f"{slot} already recorded as {self._outcomes[slot]!r}",
                stage=slot,
            )
        self._outcomes[slot] = outcome

    # ---- queries -----------------------------------------------------------

    @property
    def shipment(self) -> ShipmentOutcome | None:
        return self._outcomes.get("shipment")  # type: ignore[return-value]

    @property
    def reservation(self) -> ReservationOutcome | None:
        return self._outcomes.get("reservation")  # type: ignore[return-value]

    @property
    def payment(self) -> PaymentOutcome | None:
        return self._outcomes.get("payment")  # type: ignore[return-value]

    @property
    def activation(self) -> ActivationOutcome | None:
        return self._outcomes.get("activation")  # type: ignore[return-value]

    def is_shipment_verified(self) -> bool:
        return isinstance(self.shipment, ShipmentVerified)

    def is_reserved(self) -> bool:
        return isinstance(self.reservation, ReservationSucceeded)

    def is_paid(self) -> bool:
        return isinstance(self.payment, (PaidByCard, Invoiced))

    def is_shipped(self) -> bool:
        return isinstance(self.activation, ShipmentActivated)

    def failure(self) -> StageFailure | None:
        for slot in self.SLOTS:
            outcome = self._outcomes.get(slot)
            if isinstance(outcome, _FAILED):
                return StageFailure(slot=slot, reason=outcome.reason)
        return None

    @property
    def stage(self) -> CheckoutStage:
        if self.failure() is not None:
            return CheckoutStage.ABORTED
        if self.is_shipped():
            return CheckoutStage.SHIPPED
        if self.is_paid():
            return CheckoutStage.PAYMENT_SETTLED
        if self.is_reserved():
            return CheckoutStage.INVENTORY_CHECKED
        if self.is_shipment_verified():
            return CheckoutStage.SHIPPING_CHECKED
        return CheckoutStage.STARTED
