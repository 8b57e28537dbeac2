from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from checkout_api.adapters.outbound.dummy_payment import DummyCardPaymentGateway
from checkout_api.adapters.outbound.in_memory_card_vault import InMemoryCardVault
from checkout_api.adapters.outbound.in_memory_catalog import InMemoryProductCatalog
from checkout_api.adapters.outbound.in_memory_customers import (
    InMemoryCustomerDirectory,
)
from checkout_api.adapters.outbound.in_memory_invoicing import InMemoryInvoiceService
from checkout_api.adapters.outbound.in_memory_warehouse import InMemoryWarehouse
from checkout_api.adapters.outbound.sealed_cards import (
    open_sealed_card_details,
    seal_card_details,
)
from checkout_api.adapters.outbound.stub_shipment_tracker import StubShipmentTracker
from checkout_api.config import Settings, load_settings
from checkout_api.core.domain.model.catalog import CardDetails, Product
from checkout_api.core.domain.model.customer import Address, Customer, PaymentMethod
from checkout_api.core.domain.model.order import CustomerId, ProductId, today_utc
from checkout_api.core.domain.service.checkout_service import (
    CheckoutDeps,
    CheckoutService,
)


@dataclass(frozen=True)
class UseCases:
    checkout: CheckoutService


def build_usecases(settings: Settings | None = None) -> UseCases:
    settings = settings or load_settings()

    customers = InMemoryCustomerDirectory()
    products = InMemoryProductCatalog()
    vault = InMemoryCardVault()
    _seed(customers, products, vault)

    checkout = CheckoutService(
        CheckoutDeps(
            customers=customers,
            shipment_tracker=StubShipmentTracker(blocked_zip_codes=frozenset({"00000"})),
            products=products,
            warehouse=InMemoryWarehouse(capacity=settings.warehouse_capacity),
            card_vault=vault,
            decrypt_card_details=open_sealed_card_details,
            card_payments=DummyCardPaymentGateway(decline_references={"card-declined"}),
            invoicing=InMemoryInvoiceService(),
            reverify_reservation=settings.reverify_reservation,
        )
    )
    return UseCases(checkout=checkout)


def _seed(
    customers: InMemoryCustomerDirectory,
    products: InMemoryProductCatalog,
    vault: InMemoryCardVault,
) -> None:
    home = Address(street="1 Harbour St", zip_code="1000", city="Oslo")
    next_year = today_utc() + timedelta(days=365)

    card_customer = Customer(
        customer_id=CustomerId("c-card"),
        secret="s3cret-card",
        shipping_address=home,
        payment_method=PaymentMethod.CARD,
    )
    invoice_customer = Customer(
        customer_id=CustomerId("c-invoice"),
        secret="s3cret-invoice",
        shipping_address=home,
        invoice_address=home,
        payment_method=PaymentMethod.INVOICE,
    )
    customers.add(card_customer)
    customers.add(invoice_customer)
    vault.store(
        card_customer.customer_id,
        seal_card_details(
            [CardDetails(reference="card-1", expires_at=next_year)],
            card_customer.secret,
        ),
    )

    products.add(Product(ProductId("SKU-1"), "Desk lamp"))
    products.add(Product(ProductId("SKU-2"), "Office chair"))
    products.add(Product(ProductId("GIFT-1"), "Gift card", stored_in_warehouse=False))
