"""Shared stub collaborators for the checkout tests.

Each stub records the calls it receives so tests can assert not only on the
resulting CheckoutState but also on which collaborators were (not) touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID

import pytest
from returns.result import Failure, Success

from checkout_api.core.domain.model.catalog import (
    CardCharge,
    CardDetails,
    Invoice,
    Product,
)
from checkout_api.core.domain.model.checkout_state import CheckoutState
from checkout_api.core.domain.model.customer import Address, Customer, PaymentMethod
from checkout_api.core.domain.model.errors import (
    CustomerNotFound,
    InvoicingError,
    PaymentDeclined,
)
from checkout_api.core.domain.model.order import (
    CustomerId,
    Order,
    OrderId,
    OrderLine,
    ProductId,
)
from checkout_api.core.domain.service.checkout_service import (
    CheckoutDeps,
    CheckoutService,
)
from checkout_api.core.domain.service.stage import CheckoutContext

TODAY = date(2026, 10, 19)
NEXT_YEAR = date(2027, 10, 19)
LAST_YEAR = date(2025, 10, 19)

HOME = Address(street="1 Harbour St", zip_code="1000", city="Oslo")


class StubCustomers:
    def __init__(self, *customers: Customer, error: Exception | None = None):
        self._by_id = {c.customer_id.value: c for c in customers}
        self.error = error

    def get(self, customer_id):
        if self.error is not None:
            raise self.error
        customer = self._by_id.get(customer_id.value)
        if customer is None:
            return Failure(
                CustomerNotFound(message="not found", customer_id=customer_id.value)
            )
        return Success(customer)


class StubTracker:
    def __init__(self, can_ship: bool = True, error: Exception | None = None):
        self.can_ship = can_ship
        self.error = error
        self.calls: list[Address] = []

    def can_ship_to_destination(self, address):
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return self.can_ship


class StubCatalog:
    def __init__(self, *products: Product):
        self._by_id = {p.product_id.value: p for p in products}
        self.calls: list[ProductId] = []

    def get_by_id(self, product_id):
        self.calls.append(product_id)
        return self._by_id.get(product_id.value)

    def remove(self, product_id: str) -> None:
        self._by_id.pop(product_id, None)


class SpyWarehouse:
    """Warehouse double that remembers reservations and every call made."""

    def __init__(
        self,
        reserve_ok: bool = True,
        activate_ok: bool = True,
        already_reserved: dict[str, int] | None = None,
        error: Exception | None = None,
    ):
        self.reserve_ok = reserve_ok
        self.activate_ok = activate_ok
        self.error = error
        self.reserved: dict[str, int] = dict(already_reserved or {})
        self.check_calls: list[tuple[str, int]] = []
        self.reserve_calls: list[tuple[str, int]] = []
        self.activate_calls: list[str] = []

    def is_reserved_in_stock(self, reference, quantity):
        self.check_calls.append((reference, quantity))
        if self.error is not None:
            raise self.error
        return self.reserved.get(reference) == quantity

    def try_reserve_items(self, reference, quantity):
        self.reserve_calls.append((reference, quantity))
        if self.error is not None:
            raise self.error
        if self.reserve_ok:
            self.reserved[reference] = quantity
        return self.reserve_ok

    def activate_shipment(self, reference):
        self.activate_calls.append(reference)
        if self.error is not None:
            raise self.error
        return self.activate_ok

    def touched(self) -> bool:
        return bool(self.check_calls or self.reserve_calls or self.activate_calls)


class StubVault:
    def __init__(self):
        self.calls: list[CustomerId] = []

    def get_card_details_by_customer_id(self, customer_id):
        self.calls.append(customer_id)
        return f"blob:{customer_id.value}".encode()


class FakeDecryptor:
    def __init__(self, *cards: CardDetails, error: Exception | None = None):
        self.cards = cards
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    def __call__(self, blob, secret):
        self.calls.append((blob, secret))
        if self.error is not None:
            raise self.error
        return self.cards


class SpyGateway:
    def __init__(self, decline: bool = False):
        self.decline = decline
        self.charged: list[CardDetails] = []

    def charge(self, card):
        self.charged.append(card)
        if self.decline:
            return Failure(PaymentDeclined(message="declined", reason="test"))
        return Success(CardCharge(card_reference=card.reference, transaction_id="tx-1"))


class SpyInvoicing:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.produced: list[tuple[Order, Customer]] = []

    def produce_invoice(self, order, customer):
        self.produced.append((order, customer))
        if self.fail:
            return Failure(InvoicingError(message="invoicing down"))
        return Success(
            Invoice(
                invoice_id="inv-1",
                order_id=order.order_id,
                customer_id=customer.customer_id,
            )
        )


# ---- builders --------------------------------------------------------------


def make_order(*lines: OrderLine, customer_id: str = "c-1") -> Order:
    return Order(
        order_id=OrderId(UUID("00000000-0000-0000-0000-000000000001")),
        customer_id=CustomerId(customer_id),
        lines=tuple(lines),
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )


def line(product_id: str = "SKU-1", quantity: int = 2, reference: str = "L1"):
    return OrderLine(ProductId(product_id), quantity, reference)


def make_customer(
    customer_id: str = "c-1",
    shipping_address: Address | None = HOME,
    invoice_address: Address | None = None,
    payment_method: PaymentMethod | str | None = PaymentMethod.CARD,
) -> Customer:
    return Customer(
        customer_id=CustomerId(customer_id),
        secret="secret-1",
        shipping_address=shipping_address,
        invoice_address=invoice_address,
        payment_method=payment_method,
    )


def make_ctx(order: Order, customer: Customer) -> CheckoutContext:
    return CheckoutContext(order=order, customer=customer, state=CheckoutState(order))


@dataclass
class Collaborators:
    customers: StubCustomers = field(default_factory=StubCustomers)
    tracker: StubTracker = field(default_factory=StubTracker)
    catalog: StubCatalog = field(
        default_factory=lambda: StubCatalog(
            Product(ProductId("SKU-1"), "Lamp"),
            Product(ProductId("SKU-2"), "Chair"),
            Product(ProductId("GIFT-1"), "Gift card", stored_in_warehouse=False),
        )
    )
    warehouse: SpyWarehouse = field(default_factory=SpyWarehouse)
    vault: StubVault = field(default_factory=StubVault)
    decryptor: FakeDecryptor = field(
        default_factory=lambda: FakeDecryptor(CardDetails("card-1", NEXT_YEAR))
    )
    gateway: SpyGateway = field(default_factory=SpyGateway)
    invoicing: SpyInvoicing = field(default_factory=SpyInvoicing)
    reverify_reservation: bool = True

    def service(self) -> CheckoutService:
        return CheckoutService(
            CheckoutDeps(
                customers=self.customers,
                shipment_tracker=self.tracker,
                products=self.catalog,
                warehouse=self.warehouse,
                card_vault=self.vault,
                decrypt_card_details=self.decryptor,
                card_payments=self.gateway,
                invoicing=self.invoicing,
                today=lambda: TODAY,
                reverify_reservation=self.reverify_reservation,
            )
        )


@pytest.fixture
def collaborators() -> Collaborators:
    return Collaborators(customers=StubCustomers(make_customer()))
