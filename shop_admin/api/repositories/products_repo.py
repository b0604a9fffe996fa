# shop_admin/api/repositories/products_repo.py
from __future__ import annotations

from ..client import ApiClient
from ..schemas import Product, parse_list


class ProductsRepo:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_products(self) -> list[Product]:
        return parse_list(
            self.api.get("/products", fallback="Failed to load products"),
            Product.from_api,
        )

    def create(self, name: str, quantity: float, cost_price: float, selling_price: float) -> None:
        self.api.post(
            "/products",
            {
                "name": name.strip(),
                "quantity": quantity,
                "costPrice": cost_price,
                "sellingPrice": selling_price,
            },
            fallback="Failed to add product",
        )
