from __future__ import annotations

from typing import Protocol

from returns.result import Result

from checkout_api.core.domain.model.customer import Customer
from checkout_api.core.domain.model.errors import CustomerNotFound
from checkout_api.core.domain.model.order import CustomerId


class CustomerDirectory(Protocol):
    def get(self, customer_id: CustomerId) -> Result[Customer, CustomerNotFound]: ...
