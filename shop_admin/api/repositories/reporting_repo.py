# shop_admin/api/repositories/reporting_repo.py
from __future__ import annotations

from ..client import ApiClient
from ..schemas import ReportLine, parse_list


class ReportingRepo:
    def __init__(self, api: ApiClient):
        self.api = api

    def product_report(self) -> list[ReportLine]:
        return parse_list(
            self.api.get("/reports/products", fallback="Failed to load report"),
            ReportLine.from_api,
        )

    def export_excel(self) -> bytes:
        return self.api.download("/reports/export/excel", fallback="Failed to download Excel report")

    def export_pdf(self) -> bytes:
        return self.api.download("/reports/export/pdf", fallback="Failed to download PDF report")
