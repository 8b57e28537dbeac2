"""HTTP tests for the FastAPI adapter wired with the development bootstrap."""

import pytest
from fastapi.testclient import TestClient

from checkout_api.adapters.inbound.web.fastapi_app import create_app
from checkout_api.bootstrap import build_usecases
from checkout_api.config import Settings


@pytest.fixture
def client():
    usecases = build_usecases(Settings(warehouse_capacity=5))
    return TestClient(create_app(usecases.checkout))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_card_checkout_ships(client):
    resp = client.post(
        "/checkouts",
        json={
            "customer_id": "c-card",
            "lines": [{"product_id": "SKU-1", "quantity": 2, "reference": "L1"}],
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["stage"] == "SHIPPED"
    assert body["customer_id"] == "c-card"
    assert body["shipment"] == {
        "status": "SUCCEEDED",
        "reason": None,
        "card_reference": None,
        "invoice_id": None,
    }
    assert body["payment"]["status"] == "PAID_BY_CARD"
    assert body["payment"]["card_reference"] == "card-1"
    assert body["activation"]["status"] == "SUCCEEDED"
    assert body["failure"] is None


def test_invoice_checkout_reports_invoice_id(client):
    resp = client.post(
        "/checkouts",
        json={
            "customer_id": "c-invoice",
            "lines": [{"product_id": "GIFT-1", "quantity": 1, "reference": "G1"}],
        },
    )

    body = resp.json()
    assert body["payment"]["status"] == "INVOICED"
    assert body["payment"]["invoice_id"].startswith("inv-")


def test_aborted_checkout_is_still_a_200(client):
    resp = client.post(
        "/checkouts",
        json={
            "customer_id": "c-card",
            "lines": [{"product_id": "SKU-1", "quantity": 50, "reference": "L9"}],
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["stage"] == "ABORTED"
    assert body["reservation"]["reason"] == "COULD_NOT_RESERVE_ITEMS_IN_STOCK"
    assert body["payment"] is None
    assert body["activation"] is None
    assert body["failure"] == {
        "slot": "reservation",
        "reason": "COULD_NOT_RESERVE_ITEMS_IN_STOCK",
    }


def test_unknown_customer(client):
    resp = client.post(
        "/checkouts",
        json={
            "customer_id": "c-ghost",
            "lines": [{"product_id": "SKU-1", "quantity": 1, "reference": "L1"}],
        },
    )

    assert resp.json()["failure"]["reason"] == "CUSTOMER_NOT_FOUND"


def test_malformed_body_is_400(client):
    resp = client.post("/checkouts", json={"customer_id": "c-card", "lines": []})

    assert resp.status_code == 400
    assert resp.json()["type"] == "RequestValidationError"


def test_domain_validation_error_is_400(client):
    resp = client.post(
        "/checkouts",
        json={
            "customer_id": "c-card",
            "lines": [
                {"product_id": "SKU-1", "quantity": 1, "reference": "L1"},
                {"product_id": "SKU-2", "quantity": 1, "reference": "L1"},
            ],
        },
    )

    assert resp.status_code == 400
    assert resp.json()["type"] == "ValidationError"
    assert "duplicates" in resp.json()["message"]
