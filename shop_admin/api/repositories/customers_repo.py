# shop_admin/api/repositories/customers_repo.py
from __future__ import annotations

from urllib.parse import quote

from ..client import ApiClient
from ..schemas import Customer, DebtorHistory, as_mapping, parse_list


class CustomersRepo:
    """
    Customers and the debt ledger.

    The backend owns balances: credit_sale() creates a debtor, pay_debt()
    lowers a balance and borrow() raises it again.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    # ---------------------------- reads ----------------------------

    def list_customers(self) -> list[Customer]:
        return parse_list(
            self.api.get("/customers", fallback="Failed to load customers"),
            Customer.from_api,
        )

    def list_debtors(self) -> list[Customer]:
        return parse_list(
            self.api.get("/customers/debtors", fallback="Failed to load debtors"),
            Customer.from_api,
        )

    def history(self, customer_id: str) -> DebtorHistory:
        data = self.api.get(
            f"/customers/{quote(customer_id, safe='')}/history",
            fallback="Failed to fetch debtor details",
        )
        return DebtorHistory.from_api(as_mapping(data))

    # ---------------------------- writes ----------------------------

    def credit_sale(self, name: str, product_id: str, quantity: int, amount_paid: float) -> None:
        self.api.post(
            "/customers/credit-sale",
            {
                "name": name.strip(),
                "productId": product_id,
                "quantity": quantity,
                "amountPaid": amount_paid,
            },
            fallback="Failed to add debtor",
        )

    def pay_debt(self, customer_id: str, amount: float) -> None:
        self.api.post(
            "/customers/pay-debt",
            {"customerId": customer_id, "amount": amount},
            fallback="Payment failed",
        )

    def borrow(self, customer_id: str, product_id: str, quantity: int) -> None:
        self.api.post(
            "/customers/borrow",
            {"customerId": customer_id, "productId": product_id, "quantity": quantity},
            fallback="Borrow failed",
        )
