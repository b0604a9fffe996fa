from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QPushButton

from ...widgets.page_view import PageView
from ...widgets.table_view import TableView


class ReportingView(PageView):
    def __init__(self, parent=None):
        super().__init__("Reports", "GOWELO SHOP product performance", parent)

        self.btn_excel = self.add_submit_button(QPushButton("Download Excel"))
        self.btn_pdf = self.add_submit_button(QPushButton("Download PDF"))
        self.header.addWidget(self.btn_excel)
        self.header.addWidget(self.btn_pdf)

        # KPI row
        kpis = QGroupBox("Overview")
        grid = QGridLayout(kpis)
        self.lbl_total_revenue = QLabel("—")
        self.lbl_actual_profit = QLabel("—")
        self.lbl_expected_profit = QLabel("—")
        self.lbl_potential_profit = QLabel("—")
        for col, (caption, lbl) in enumerate(
            [
                ("Total Revenue", self.lbl_total_revenue),
                ("Actual Profit", self.lbl_actual_profit),
                ("Expected Profit", self.lbl_expected_profit),
                ("Total Potential", self.lbl_potential_profit),
            ]
        ):
            grid.addWidget(QLabel(caption), 0, col)
            lbl.setStyleSheet("font-size:16px; font-weight:600;")
            grid.addWidget(lbl, 1, col)
        self.body.addWidget(kpis)

        self.table = TableView()
        self.body.addWidget(self.table, 1)

        # Footer
        footer = QGroupBox("Totals")
        fgrid = QGridLayout(footer)
        self.lbl_total_sold = QLabel("—")
        self.lbl_total_remaining = QLabel("—")
        self.lbl_total_cost = QLabel("—")
        self.lbl_profit_margin = QLabel("—")
        for col, (caption, lbl) in enumerate(
            [
                ("Total Products Sold", self.lbl_total_sold),
                ("Total Remaining", self.lbl_total_remaining),
                ("Total Cost", self.lbl_total_cost),
                ("Profit Margin", self.lbl_profit_margin),
            ]
        ):
            fgrid.addWidget(QLabel(caption), 0, col)
            fgrid.addWidget(lbl, 1, col)
        self.body.addWidget(footer)
