from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from checkout_api.core.domain.model.catalog import Product
from checkout_api.core.domain.model.order import ProductId
from checkout_api.core.ports.outbound.products import ProductCatalog


@dataclass
class InMemoryProductCatalog(ProductCatalog):
    _store: Dict[str, Product] = field(default_factory=dict)

    def add(self, product: Product) -> None:
        self._store[product.product_id.value] = product

    def get_by_id(self, product_id: ProductId) -> Product | None:
        return self._store.get(product_id.value)
