from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Sequence

from returns.converters import flatten
from returns.result import Failure, Success

from checkout_api.core.domain.model.catalog import CardDetails
from checkout_api.core.domain.model.checkout_state import PaymentFailures, StageFailure
from checkout_api.core.domain.model.customer import Customer, PaymentMethod
from checkout_api.core.domain.model.order import today_utc
from checkout_api.core.domain.service.stage import (
    CheckoutContext,
    StageResult,
    call_collaborator,
)
from checkout_api.core.ports.outbound.card_vault import CardVault, DecryptCardDetails
from checkout_api.core.ports.outbound.invoicing import InvoiceService
from checkout_api.core.ports.outbound.payment import CardPaymentGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentSettler:
    """Settles the order by card charge or by invoice, never both.

    The branch is chosen by the customer's configured payment method. A
    customer with no method, or one this service does not know, fails with
    NO_PAYMENT_METHOD_CONFIGURED. A state that already carries a settled
    payment is passed through untouched.
    """

    card_vault: CardVault
    decrypt_card_details: DecryptCardDetails
    card_payments: CardPaymentGateway
    invoicing: InvoiceService
    today: Callable[[], date] = today_utc

    def __call__(self, ctx: CheckoutContext) -> StageResult:
        if ctx.state.is_paid():
            return Success(ctx)

        method = ctx.customer.configured_payment_method()
        if method is PaymentMethod.CARD:
            return self._pay_by_card(ctx)
        if method is PaymentMethod.INVOICE:
            return self._send_invoice(ctx)

        logger.info(
            "customer %s has no usable payment method (%r)",
            ctx.customer.customer_id.value,
            ctx.customer.payment_method,
        )
        return _failed(ctx, PaymentFailures.NO_PAYMENT_METHOD_CONFIGURED)

    # ---- card --------------------------------------------------------------

    def _pay_by_card(self, ctx: CheckoutContext) -> StageResult:
        today = self.today()
        card = call_collaborator(
            "card_vault", self._pick_card, ctx.customer, today
        ).value_or(None)
        if card is None:
            return _failed(ctx, PaymentFailures.NO_VALID_CREDIT_CARDS)

        charged = flatten(
            call_collaborator("card_payment_gateway", self.card_payments.charge, card)
        )
        if isinstance(charged, Failure):
            logger.info(
                "card %s declined for order %s: %s",
                card.reference,
                ctx.order.order_id.value,
                charged.failure(),
            )
            return _failed(ctx, PaymentFailures.COULD_NOT_COMPLETE_CARD_PAYMENT)

        ctx.state.card_payment_completed_using(card.reference)
        return Success(ctx)

    def _pick_card(self, customer: Customer, today: date) -> CardDetails | None:
        blob = self.card_vault.get_card_details_by_customer_id(customer.customer_id)
        cards = tuple(self.decrypt_card_details(blob, customer.secret))
        return first_valid_card(cards, today)

    # ---- invoice -----------------------------------------------------------

    def _send_invoice(self, ctx: CheckoutContext) -> StageResult:
        address = ctx.customer.invoice_address
        if address is None:
            return _failed(ctx, PaymentFailures.MISSING_INVOICE_ADDRESS)
        if not address.is_complete():
            return _failed(ctx, PaymentFailures.INVALID_INVOICE_ADDRESS)

        invoice = flatten(
            call_collaborator(
                "invoice_service",
                self.invoicing.produce_invoice,
                ctx.order,
                ctx.customer,
            )
        )
        if isinstance(invoice, Failure):
            logger.warning(
                "invoice for order %s not produced: %s",
                ctx.order.order_id.value,
                invoice.failure(),
            )
            return _failed(ctx, PaymentFailures.COULD_NOT_PRODUCE_INVOICE)

        ctx.state.invoice_sent_successfully(invoice.unwrap().invoice_id)
        return Success(ctx)


def first_valid_card(cards: Sequence[CardDetails], today: date) -> CardDetails | None:
    """First card, in stored order, that expires strictly after ``today``."""
    for card in cards:
        if card.is_valid_on(today):
            return card
    return None


def _failed(ctx: CheckoutContext, reason: PaymentFailures) -> StageResult:
    ctx.state.payment_failed(reason)
    return Failure(StageFailure(slot="payment", reason=reason))
