"""Unit tests for the shipping address check."""

import pytest
from returns.result import Failure, Success

from checkout_api.core.domain.model.checkout_state import (
    ShipmentFailed,
    ShipmentFailures,
    ShipmentVerified,
)
from checkout_api.core.domain.model.customer import Address
from checkout_api.core.domain.service.shipping_validator import ShippingValidator

from conftest import HOME, StubTracker, line, make_ctx, make_customer, make_order


def test_verified_when_address_complete_and_shippable():
    tracker = StubTracker(can_ship=True)
    ctx = make_ctx(make_order(line()), make_customer())

    result = ShippingValidator(tracker)(ctx)

    assert isinstance(result, Success)
    assert ctx.state.shipment == ShipmentVerified()
    assert tracker.calls == [HOME]


def test_missing_address_stops_before_tracker():
    tracker = StubTracker()
    ctx = make_ctx(make_order(line()), make_customer(shipping_address=None))

    result = ShippingValidator(tracker)(ctx)

    assert isinstance(result, Failure)
    assert ctx.state.shipment == ShipmentFailed(
        ShipmentFailures.MISSING_CUSTOMER_ADDRESS
    )
    assert tracker.calls == []
    assert ctx.state.reservation is None
    assert ctx.state.payment is None
    assert ctx.state.activation is None


@pytest.mark.parametrize(
    "address",
    [
        Address(street=None, zip_code="1000", city="Oslo"),
        Address(street="1 Harbour St", zip_code="", city="Oslo"),
        Address(street="1 Harbour St", zip_code="1000", city=None),
    ],
)
def test_incomplete_address_is_invalid(address):
    tracker = StubTracker()
    ctx = make_ctx(make_order(line()), make_customer(shipping_address=address))

    result = ShippingValidator(tracker)(ctx)

    assert isinstance(result, Failure)
    assert ctx.state.shipment == ShipmentFailed(
        ShipmentFailures.INVALID_CUSTOMER_ADDRESS
    )
    assert tracker.calls == []


def test_whitespace_address_fields_count_as_present():
    address = Address(street="   ", zip_code="1000", city="Oslo")
    tracker = StubTracker()
    ctx = make_ctx(make_order(line()), make_customer(shipping_address=address))

    result = ShippingValidator(tracker)(ctx)

    assert isinstance(result, Success)
    assert ctx.state.shipment == ShipmentVerified()
    assert tracker.calls == [address]


def test_tracker_refusal_cannot_ship():
    ctx = make_ctx(make_order(line()), make_customer())

    result = ShippingValidator(StubTracker(can_ship=False))(ctx)

    assert result.failure().reason == ShipmentFailures.CANNOT_SHIP_TO_DESTINATION
    assert ctx.state.shipment == ShipmentFailed(
        ShipmentFailures.CANNOT_SHIP_TO_DESTINATION
    )


def test_tracker_error_is_treated_as_cannot_ship():
    ctx = make_ctx(make_order(line()), make_customer())

    result = ShippingValidator(StubTracker(error=TimeoutError("carrier down")))(ctx)

    assert isinstance(result, Failure)
    assert ctx.state.shipment == ShipmentFailed(
        ShipmentFailures.CANNOT_SHIP_TO_DESTINATION
    )
