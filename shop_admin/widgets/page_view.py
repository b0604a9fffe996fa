from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton

from .load_state import LoadStatePanel
from .status_banner import StatusBanner


class PageView(QWidget):
    """
    Common frame for every page: header row, load-state strip, message
    banner, then the page body (`self.body`).

    Buttons registered through `add_submit_button()` are disabled while a
    mutation is in flight.
    """

    def __init__(self, title: str, subtitle: str = "", parent: QWidget | None = None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        self.header = QHBoxLayout()
        titles = QVBoxLayout()
        self.lbl_title = QLabel(title)
        self.lbl_title.setStyleSheet("font-size:20px; font-weight:600;")
        titles.addWidget(self.lbl_title)
        if subtitle:
            lbl_sub = QLabel(subtitle)
            lbl_sub.setStyleSheet("color:#666;")
            titles.addWidget(lbl_sub)
        self.header.addLayout(titles)
        self.header.addStretch(1)
        root.addLayout(self.header)

        self.load_state = LoadStatePanel()
        root.addWidget(self.load_state)
        self.banner = StatusBanner()
        root.addWidget(self.banner)

        self.body = QVBoxLayout()
        root.addLayout(self.body, 1)

        self._submit_buttons: list[QPushButton] = []

    def add_submit_button(self, btn: QPushButton) -> QPushButton:
        self._submit_buttons.append(btn)
        return btn

    def set_submitting(self, busy: bool) -> None:
        for btn in self._submit_buttons:
            btn.setEnabled(not busy)
