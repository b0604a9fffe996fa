from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton


class LoadStatePanel(QWidget):
    """
    Loading / failed strip shown above a page's content.

    - set_loading(): "Loading…" text, no retry
    - set_failed(msg): error text + Retry button
    - set_ready(): hidden
    """

    retry_requested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        self.lbl = QLabel()
        self.lbl.setWordWrap(True)
        self.btn_retry = QPushButton("Retry")
        self.btn_retry.clicked.connect(self.retry_requested.emit)
        lay.addWidget(self.lbl, 1)
        lay.addWidget(self.btn_retry, 0, Qt.AlignRight)
        self.set_ready()

    def set_loading(self, text: str = "Loading…") -> None:
        self.lbl.setStyleSheet("color:#555;")
        self.lbl.setText(text)
        self.btn_retry.setVisible(False)
        self.setVisible(True)

    def set_failed(self, msg: str) -> None:
        self.lbl.setStyleSheet("color:#b10000;")
        self.lbl.setText(msg)
        self.btn_retry.setVisible(True)
        self.setVisible(True)

    def set_ready(self) -> None:
        self.lbl.clear()
        self.btn_retry.setVisible(False)
        self.setVisible(False)
