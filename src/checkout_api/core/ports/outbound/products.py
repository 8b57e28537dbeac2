from __future__ import annotations

from typing import Protocol

from checkout_api.core.domain.model.catalog import Product
from checkout_api.core.domain.model.order import ProductId


class ProductCatalog(Protocol):
    def get_by_id(self, product_id: ProductId) -> Product | None: ...
