# shop_admin/modules/login/view.py
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from ...constants import ORG_NAME
from ...widgets.load_state import LoadStatePanel
from ...widgets.status_banner import StatusBanner


class LoginDialog(QDialog):
    """
    Sign-in dialog with two secondary panels: register and forgot password.

    UI-only; the controller reads the fields and drives the banners.
    """

    SIGN_IN, REGISTER, FORGOT = range(3)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Sign in")
        self.setModal(True)
        self.setMinimumWidth(360)

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(8)

        title = QLabel(f"<h2>{ORG_NAME}</h2>")
        title.setAlignment(Qt.AlignCenter)
        root.addWidget(title)

        self.load_state = LoadStatePanel()
        root.addWidget(self.load_state)
        self.banner = StatusBanner()
        root.addWidget(self.banner)

        self.pages = QStackedWidget()
        self.pages.addWidget(self._build_sign_in())
        self.pages.addWidget(self._build_register())
        self.pages.addWidget(self._build_forgot())
        root.addWidget(self.pages)

        self._busy_widgets = [
            self.btn_sign_in,
            self.btn_register,
            self.btn_send_reset,
        ]
        self.email.setFocus()

    # ---------- panels ----------

    def _build_sign_in(self) -> QWidget:
        page = QWidget()
        lay = QVBoxLayout(page)
        form = QFormLayout()
        self.email = QLineEdit()
        self.email.setPlaceholderText("Email")
        self.password = QLineEdit()
        self.password.setEchoMode(QLineEdit.Password)
        self.password.setPlaceholderText("Password")
        form.addRow("Email", self.email)
        form.addRow("Password", self.password)
        lay.addLayout(form)

        extras = QHBoxLayout()
        self.chk_show = QCheckBox("Show password")
        self.chk_show.toggled.connect(self._toggle_password_visibility)
        self.chk_remember = QCheckBox("Remember me")
        self.chk_remember.setChecked(True)
        extras.addWidget(self.chk_show)
        extras.addWidget(self.chk_remember)
        extras.addStretch(1)
        lay.addLayout(extras)

        self.btn_sign_in = QPushButton("Login")
        self.btn_sign_in.setDefault(True)
        lay.addWidget(self.btn_sign_in)

        links = QHBoxLayout()
        self.btn_to_register = self._link("Create an account")
        self.btn_to_forgot = self._link("Forgot password?")
        links.addWidget(self.btn_to_register)
        links.addStretch(1)
        links.addWidget(self.btn_to_forgot)
        lay.addLayout(links)
        return page

    def _build_register(self) -> QWidget:
        page = QWidget()
        lay = QVBoxLayout(page)
        form = QFormLayout()
        self.reg_name = QLineEdit()
        self.reg_email = QLineEdit()
        self.reg_password = QLineEdit()
        self.reg_password.setEchoMode(QLineEdit.Password)
        form.addRow("Name", self.reg_name)
        form.addRow("Email", self.reg_email)
        form.addRow("Password", self.reg_password)
        lay.addLayout(form)
        self.btn_register = QPushButton("Register")
        lay.addWidget(self.btn_register)
        self.btn_register_back = self._link("Back to login")
        lay.addWidget(self.btn_register_back, 0, Qt.AlignLeft)
        return page

    def _build_forgot(self) -> QWidget:
        page = QWidget()
        lay = QVBoxLayout(page)
        form = QFormLayout()
        self.forgot_email = QLineEdit()
        self.forgot_email.setPlaceholderText("Enter your email")
        form.addRow("Email", self.forgot_email)
        lay.addLayout(form)
        self.btn_send_reset = QPushButton("Send Reset Link")
        lay.addWidget(self.btn_send_reset)
        self.btn_forgot_back = self._link("Back to login")
        lay.addWidget(self.btn_forgot_back, 0, Qt.AlignLeft)
        return page

    @staticmethod
    def _link(text: str) -> QPushButton:
        btn = QPushButton(text)
        btn.setFlat(True)
        btn.setCursor(Qt.PointingHandCursor)
        return btn

    # ---------- public API ----------

    def show_panel(self, index: int) -> None:
        self.banner.clear_message()
        self.pages.setCurrentIndex(index)

    def current_panel(self) -> int:
        return self.pages.currentIndex()

    def set_submitting(self, busy: bool) -> None:
        for w in self._busy_widgets:
            w.setEnabled(not busy)

    # ---------- internals ----------

    def _toggle_password_visibility(self, checked: bool) -> None:
        self.password.setEchoMode(QLineEdit.Normal if checked else QLineEdit.Password)
