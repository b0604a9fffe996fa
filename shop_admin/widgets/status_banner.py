from __future__ import annotations

from PySide6.QtWidgets import QLabel, QWidget

_ERROR_QSS = (
    "QLabel {background:#fcebea; color:#b10000; border:1px solid #f5c6cb;"
    " border-radius:6px; padding:6px;}"
)
_INFO_QSS = (
    "QLabel {background:#eaf7ee; color:#1d6b34; border:1px solid #b7e1c1;"
    " border-radius:6px; padding:6px;}"
)


class StatusBanner(QLabel):
    """
    Inline message strip for validation reasons and server replies.
    Hidden while empty.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWordWrap(True)
        self.setVisible(False)
        self._kind: str | None = None

    @property
    def kind(self) -> str | None:
        return self._kind

    def show_error(self, msg: str | None) -> None:
        self._show(msg, "error", _ERROR_QSS)

    def show_info(self, msg: str | None) -> None:
        self._show(msg, "info", _INFO_QSS)

    def clear_message(self) -> None:
        self._kind = None
        self.clear()
        self.setVisible(False)

    def _show(self, msg: str | None, kind: str, qss: str) -> None:
        if not msg:
            self.clear_message()
            return
        self._kind = kind
        self.setStyleSheet(qss)
        self.setText(msg)
        self.setVisible(True)
