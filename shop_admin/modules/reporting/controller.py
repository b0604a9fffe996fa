# shop_admin/modules/reporting/controller.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..base_module import PageController, PageState, error_message
from .model import ProductReportTableModel
from .view import ReportingView
from ...api.repositories.reporting_repo import ReportingRepo
from ...api.schemas import ReportLine
from ...constants import EXPORT_EXCEL_FILE, EXPORT_PDF_FILE
from ...utils.calculations import report_totals
from ...utils.helpers import fmt_mk, fmt_qty
from ...utils.tasks import TaskResult, TaskRunner
from ...utils.ui_helpers import ask_save_path

_log = logging.getLogger(__name__)

EXPORTS = {
    "excel": ("Excel workbook (*.xlsx)", EXPORT_EXCEL_FILE, "Failed to download {}"),
    "pdf": ("PDF document (*.pdf)", EXPORT_PDF_FILE, "Failed to download {}"),
}


class ReportingController(PageController):
    """
    Product performance report with Excel/PDF downloads.

    Downloads run on the task runner and write the returned bytes to the
    path picked in the save dialog. They leave the page state untouched.
    """

    load_failure_message = "Failed to load report"

    def __init__(self, repo: ReportingRepo, runner: TaskRunner | None = None) -> None:
        super().__init__(runner)
        self.repo = repo
        self.lines: list[ReportLine] = []
        self.attach_view(ReportingView())
        self.model = ProductReportTableModel([])
        self.view.table.setModel(self.model)
        self.view.btn_excel.clicked.connect(lambda: self._export("excel"))
        self.view.btn_pdf.clicked.connect(lambda: self._export("pdf"))

    # ---------------------------- data ----------------------------

    def reference_fetchers(self):
        return {"report": self.repo.product_report}

    def apply_reference_data(self, data):
        self.lines = data["report"]
        self.model.set_rows(self.lines)
        self.view.table.resizeColumnsToContents()

        t = report_totals(self.lines)
        v = self.view
        v.lbl_total_revenue.setText(fmt_mk(t.total_revenue))
        v.lbl_actual_profit.setText(fmt_mk(t.total_actual_profit))
        v.lbl_expected_profit.setText(fmt_mk(t.total_expected_profit))
        v.lbl_potential_profit.setText(fmt_mk(t.total_potential_profit))
        v.lbl_total_sold.setText(f"{fmt_qty(t.total_sold)} units")
        v.lbl_total_remaining.setText(f"{fmt_qty(t.total_remaining)} units")
        v.lbl_total_cost.setText(fmt_mk(t.total_cost))
        v.lbl_profit_margin.setText(f"{t.profit_margin_percent:.1f}%")

    # ---------------------------- exports ----------------------------

    def _export(self, kind: str) -> None:
        file_filter, suggested, _ = EXPORTS[kind]
        path = ask_save_path(self.view, "Save report", suggested, file_filter)
        if path:
            self.export(kind, path)

    def export(self, kind: str, path: str | Path) -> bool:
        if self.state is not PageState.READY:
            return False
        _, filename, failure = EXPORTS[kind]
        fetch = self.repo.export_excel if kind == "excel" else self.repo.export_pdf
        target = Path(path)

        def work() -> Path:
            target.write_bytes(fetch())
            return target

        gen = self._generation
        self.clear_message()
        self.view.set_submitting(True)
        self.runner.submit(work, lambda res: self._on_exported(gen, res, failure.format(filename)))
        return True

    def _on_exported(self, gen: int, res: TaskResult, failure: str) -> None:
        if self._is_stale(gen):
            return
        self.view.set_submitting(False)
        if not res.ok:
            _log.warning("Report export failed", exc_info=res.error)
            self.show_error(error_message(res.error, failure))
            self._check_auth(res.error)
            return
        _log.info("Report saved to %s", res.value)
        self.show_notice(f"Report saved to {res.value}")
