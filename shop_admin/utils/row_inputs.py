# utils/row_inputs.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional


@dataclass(frozen=True)
class DebtorRowInput:
    """Inline inputs on one debtor row: payment amount and borrow-again fields."""
    payment: Optional[float] = None
    borrow_product_id: Optional[str] = None
    borrow_quantity: Optional[int] = None


class RowInputs:
    """
    Inline inputs for list rows, keyed by entity id.

    Rows that were never touched read as the default record. `update()` is the
    only way to change a row and `reset()` the only way to clear one, so the
    controller never threads per-row state through widgets.
    """

    def __init__(self, default: DebtorRowInput | None = None) -> None:
        self._default = default or DebtorRowInput()
        self._rows: Dict[str, DebtorRowInput] = {}

    def get(self, row_id: str) -> DebtorRowInput:
        return self._rows.get(row_id, self._default)

    def update(self, row_id: str, **fields) -> DebtorRowInput:
        row = replace(self.get(row_id), **fields)
        self._rows[row_id] = row
        return row

    def reset(self, row_id: str) -> None:
        self._rows.pop(row_id, None)

    def retain(self, row_ids: Iterable[str]) -> None:
        """Drop inputs for rows that are no longer listed (after a re-fetch)."""
        keep = set(row_ids)
        for rid in list(self._rows):
            if rid not in keep:
                del self._rows[rid]
