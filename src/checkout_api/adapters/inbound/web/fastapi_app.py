from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Success

from checkout_api.core.domain.model.checkout_state import (
    ActivationFailed,
    CheckoutState,
    Invoiced,
    PaidByCard,
    PaymentFailed,
    ReservationFailed,
    ShipmentFailed,
)
from checkout_api.core.domain.model.errors import CheckoutError, ValidationError
from checkout_api.core.ports.inbound.checkout import (
    CheckoutCommand,
    CheckoutLine,
    CheckoutUseCase,
)

logger = logging.getLogger(__name__)

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class CheckoutLineIn(BaseModel):
    product_id: str = Field(min_length=1, examples=["SKU-1"])
    quantity: int = Field(gt=0, examples=[2])
    reference: str = Field(min_length=1, examples=["L1"])


class CheckoutRequest(BaseModel):
    order_id: str | None = Field(default=None, examples=[None])
    customer_id: str = Field(min_length=1, examples=["c-card"])
    lines: list[CheckoutLineIn] = Field(min_length=1)


class OutcomeOut(BaseModel):
    status: str
    reason: str | None = None
    card_reference: str | None = None
    invoice_id: str | None = None


class FailureOut(BaseModel):
    slot: str
    reason: str


class CheckoutResponse(BaseModel):
    order_id: str
    customer_id: str
    stage: str
    shipment: OutcomeOut | None
    reservation: OutcomeOut | None
    payment: OutcomeOut | None
    activation: OutcomeOut | None
    failure: FailureOut | None


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


# ---- Mapping helpers -------------------------------------------------------


def _to_command(req: CheckoutRequest) -> CheckoutCommand:
    return CheckoutCommand(
        order_id=req.order_id,
        customer_id=req.customer_id,
        lines=tuple(
            CheckoutLine(
                product_id=ln.product_id, quantity=ln.quantity, reference=ln.reference
            )
            for ln in req.lines
        ),
    )


def _outcome_out(outcome: object | None) -> OutcomeOut | None:
    if outcome is None:
        return None
    if isinstance(
        outcome, (ShipmentFailed, ReservationFailed, PaymentFailed, ActivationFailed)
    ):
        return OutcomeOut(status="FAILED", reason=outcome.reason.value)
    if isinstance(outcome, PaidByCard):
        return OutcomeOut(status="PAID_BY_CARD", card_reference=outcome.card_reference)
    if isinstance(outcome, Invoiced):
        return OutcomeOut(status="INVOICED", invoice_id=outcome.invoice_id)
    return OutcomeOut(status="SUCCEEDED")


def _to_response(state: CheckoutState) -> CheckoutResponse:
    failure = state.failure()
    return CheckoutResponse(
        order_id=str(state.order.order_id.value),
        customer_id=state.order.customer_id.value,
        stage=state.stage.value,
        shipment=_outcome_out(state.shipment),
        reservation=_outcome_out(state.reservation),
        payment=_outcome_out(state.payment),
        activation=_outcome_out(state.activation),
        failure=(
            FailureOut(slot=failure.slot, reason=failure.reason.value)
            if failure is not None
            else None
        ),
    )


def _map_error_to_http(err: CheckoutError) -> tuple[int, ErrorResponse]:
    if isinstance(err, ValidationError):
        return 400, ErrorResponse(type=type(err).__name__, message=str(err))
    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


# ---- App factory -----------------------------------------------------------


def create_app(checkout_uc: CheckoutUseCase) -> FastAPI:
    app = FastAPI(title="checkout_api")

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
                for e in exc.errors()
            ],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected error", exc_info=exc)
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/checkouts",
        response_model=CheckoutResponse,
        responses={
            400: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    def checkout(req: CheckoutRequest) -> Any:
        result = checkout_uc.checkout(_to_command(req))
        if isinstance(result, Success):
            return _to_response(result.unwrap())
        err: CheckoutError = result.failure()
        status, body = _map_error_to_http(err)
        if status >= 500:
            logger.error("checkout error: %s", err)
        return JSONResponse(status_code=status, content=body.model_dump())

    return app
