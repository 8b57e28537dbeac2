from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Tuple
from uuid import UUID, uuid4


@dataclass(frozen=True)
class OrderId:
    value: UUID

    @staticmethod
    def new() -> "OrderId":
        return OrderId(uuid4())


@dataclass(frozen=True)
class CustomerId:
    value: str


@dataclass(frozen=True)
class ProductId:
    value: str


@dataclass(frozen=True)
class OrderLine:
    product_id: ProductId
    quantity: int
    # idempotency key for warehouse reservation / activation
    reference: str


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    customer_id: CustomerId
    lines: Tuple[OrderLine, ...]
    created_at: datetime


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def today_utc() -> date:
    return now_utc().date()
