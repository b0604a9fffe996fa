from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QPushButton

from ...widgets.page_view import PageView
from ...widgets.table_view import TableView


class ReplenishmentView(PageView):
    def __init__(self, parent=None):
        super().__init__("Stock Replenishment", "Manage product batches and expiry dates", parent)

        self.btn_add = QPushButton("Add Batch")
        self.header.addWidget(self.btn_add)

        self.table = TableView()
        self.body.addWidget(self.table, 1)

        box = QGroupBox("Summary")
        grid = QGridLayout(box)
        self.lbl_batches = QLabel("—")
        self.lbl_units = QLabel("—")
        self.lbl_value = QLabel("—")
        self.lbl_avg_margin = QLabel("—")
        for col, (caption, lbl) in enumerate(
            [
                ("Total Batches", self.lbl_batches),
                ("Total Units", self.lbl_units),
                ("Total Value", self.lbl_value),
                ("Avg. Margin", self.lbl_avg_margin),
            ]
        ):
            grid.addWidget(QLabel(caption), 0, col)
            lbl.setStyleSheet("font-size:16px; font-weight:600;")
            grid.addWidget(lbl, 1, col)
        self.body.addWidget(box)
