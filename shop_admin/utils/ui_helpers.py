from PySide6.QtWidgets import QWidget, QVBoxLayout, QMessageBox, QFileDialog
from PySide6.QtCore import Qt


def wrap_center(w: QWidget) -> QWidget:
    host = QWidget()
    lay = QVBoxLayout(host)
    lay.addStretch(1)
    lay.addWidget(w, 0, Qt.AlignCenter)
    lay.addStretch(1)
    return host


def confirm(parent: QWidget, title: str, text: str) -> bool:
    resp = QMessageBox.question(parent, title, text, QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
    return resp == QMessageBox.Yes


def ask_save_path(parent: QWidget, title: str, suggested: str, file_filter: str) -> str | None:
    path, _ = QFileDialog.getSaveFileName(parent, title, suggested, file_filter)
    return path or None
