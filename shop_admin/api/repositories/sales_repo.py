# shop_admin/api/repositories/sales_repo.py
from __future__ import annotations

from typing import Optional

from ..client import ApiClient
from ..schemas import as_mapping


class SalesRepo:
    def __init__(self, api: ApiClient):
        self.api = api

    def record_sale(
        self,
        product_id: str,
        quantity: int,
        customer_id: Optional[str] = None,
        credit_amount: Optional[float] = None,
    ) -> Optional[str]:
        """
        POST /sales. The customer fields are only sent when a customer is
        attached to the sale. Returns the server's message, if any.
        """
        body: dict = {"productId": product_id, "quantity": quantity}
        if customer_id:
            body["customerId"] = customer_id
            if credit_amount is not None:
                body["creditAmount"] = credit_amount
        data = self.api.post("/sales", body, fallback="Failed to complete sale. Please try again.")
        msg = as_mapping(data).get("message")
        return str(msg) if msg else None
