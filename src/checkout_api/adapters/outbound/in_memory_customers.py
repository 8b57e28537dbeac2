from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from returns.result import Failure, Result, Success

from checkout_api.core.domain.model.customer import Customer
from checkout_api.core.domain.model.errors import CustomerNotFound
from checkout_api.core.domain.model.order import CustomerId
from checkout_api.core.ports.outbound.customers import CustomerDirectory


@dataclass
class InMemoryCustomerDirectory(CustomerDirectory):
    _store: Dict[str, Customer] = field(default_factory=dict)

    def add(self, customer: Customer) -> None:
        self._store[customer.customer_id.value] = customer

    def get(self, customer_id: CustomerId) -> Result[Customer, CustomerNotFound]:
        customer = self._store.get(customer_id.value)
        if customer is None:
            return Failure(
                CustomerNotFound(
                    message="customer not found", customer_id=customer_id.value
                )
            )
        return Success(customer)
