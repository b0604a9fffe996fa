from PySide6.QtWidgets import QTableView


class TableView(QTableView):
    def __init__(self, parent=None, **kwargs):
        super().__init__(parent, **kwargs)
        self.setSortingEnabled(True)
        self.setAlternatingRowColors(True)
        self.setSelectionBehavior(QTableView.SelectRows)
        self.setSelectionMode(QTableView.SingleSelection)
        self.setEditTriggers(QTableView.NoEditTriggers)
        self.horizontalHeader().setStretchLastSection(True)
