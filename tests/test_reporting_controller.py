# tests/test_reporting_controller.py
import pytest

from shop_admin.api.schemas import ReportLine
from shop_admin.modules.base_module import PageState
from shop_admin.modules.reporting.controller import ReportingController


@pytest.fixture()
def lines():
    return [
        ReportLine(product="Coca Cola 500ml", sold_qty=30, remaining_qty=20, revenue=24000,
                   cost=18000, actual_profit=6000, expected_profit=4000, total_potential_profit=10000),
        ReportLine(product="Bread", sold_qty=10, remaining_qty=3, revenue=13000,
                   cost=10000, actual_profit=3000, expected_profit=900, total_potential_profit=3900),
    ]


@pytest.fixture()
def ctl(reporting_repo, lines, runner):
    reporting_repo.lines = lines
    c = ReportingController(reporting_repo, runner)
    c.activate()
    return c


def test_totals(ctl):
    v = ctl.view
    assert ctl.state is PageState.READY
    assert ctl.model.rowCount() == 2
    assert v.lbl_total_revenue.text() == "MK 37,000.00"
    assert v.lbl_actual_profit.text() == "MK 9,000.00"
    assert v.lbl_expected_profit.text() == "MK 4,900.00"
    assert v.lbl_potential_profit.text() == "MK 13,900.00"
    assert v.lbl_total_sold.text() == "40 units"
    assert v.lbl_total_remaining.text() == "23 units"
    assert v.lbl_total_cost.text() == "MK 28,000.00"
    # 9000 / 37000
    assert v.lbl_profit_margin.text() == "24.3%"


def test_empty_report_margin_is_zero(reporting_repo, runner):
    ctl = ReportingController(reporting_repo, runner)
    ctl.activate()
    assert ctl.view.lbl_profit_margin.text() == "0.0%"


@pytest.mark.parametrize(
    "kind, name, payload", [("excel", "report.xlsx", b"PK\x03\x04xlsx"), ("pdf", "report.pdf", b"%PDF-1.4")]
)
def test_export_writes_file(ctl, tmp_path, kind, name, payload):
    target = tmp_path / name
    assert ctl.export(kind, target) is True
    assert target.read_bytes() == payload
    assert ctl.view.banner.text() == f"Report saved to {target}"
    assert ctl.view.btn_excel.isEnabled()


def test_export_failure_names_the_file(ctl, reporting_repo, tmp_path):
    reporting_repo.fail["export_pdf"] = RuntimeError("socket closed")
    ctl.export("pdf", tmp_path / "r.pdf")
    assert ctl.view.banner.text() == "Failed to download GOWELO_SHOP_Report.pdf"
    assert not (tmp_path / "r.pdf").exists()


def test_export_server_message(ctl, reporting_repo, tmp_path, api_error):
    reporting_repo.fail["export_excel"] = api_error("Report generation failed", status=500)
    ctl.export("excel", tmp_path / "r.xlsx")
    assert ctl.view.banner.text() == "Report generation failed"


def test_export_needs_loaded_page(reporting_repo, runner, tmp_path):
    ctl = ReportingController(reporting_repo, runner)
    assert ctl.export("excel", tmp_path / "r.xlsx") is False
    assert reporting_repo.called("export_excel") == []
