# shop_admin/api/repositories/replenishment_repo.py
from __future__ import annotations

from datetime import date
from typing import Optional

from ..client import ApiClient
from ..schemas import ReplenishmentBatch, parse_list


class ReplenishmentRepo:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_batches(self) -> list[ReplenishmentBatch]:
        return parse_list(
            self.api.get("/replenish", fallback="Failed to load replenishment batches"),
            ReplenishmentBatch.from_api,
        )

    def create(
        self,
        product_id: str,
        quantity: int,
        cost_price: float,
        selling_price: float,
        expiry_date: Optional[date] = None,
    ) -> None:
        self.api.post(
            "/replenish",
            {
                "productId": product_id,
                "quantity": quantity,
                "costPrice": cost_price,
                "sellingPrice": selling_price,
                "expiryDate": expiry_date.isoformat() if expiry_date else "",
            },
            fallback="Failed to add batch",
        )
