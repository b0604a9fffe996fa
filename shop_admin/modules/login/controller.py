# shop_admin/modules/login/controller.py
from __future__ import annotations

import logging
from typing import Optional

from ..base_module import PageController
from .view import LoginDialog
from ...api.client import ApiError
from ...api.repositories.auth_repo import AuthRepo
from ...api.schemas import AuthResult
from ...api.session import SessionContext
from ...database.repositories.session_repo import SessionRepo
from ...utils.form_rules import validate_forgot_password, validate_register, validate_sign_in
from ...utils.tasks import TaskRunner

_log = logging.getLogger(__name__)

LAST_EMAIL_KEY = "last_email"


class LoginController(PageController):
    """
    Sign-in, registration and password reset.

    A successful sign-in begins the session and accepts the dialog; the
    credential is persisted only when "Remember me" is ticked.
    """

    def __init__(
        self,
        auth: AuthRepo,
        session: SessionContext,
        settings: Optional[SessionRepo] = None,
        runner: TaskRunner | None = None,
        parent=None,
    ) -> None:
        super().__init__(runner)
        self.auth = auth
        self.session = session
        self.settings = settings
        self.attach_view(LoginDialog(parent))
        self._connect_signals()
        if settings is not None:
            self.view.email.setText(settings.get_setting(LAST_EMAIL_KEY) or "")
        # no reference data: this settles straight to READY
        self.activate()

    def _connect_signals(self) -> None:
        v = self.view
        v.btn_sign_in.clicked.connect(self.sign_in)
        v.password.returnPressed.connect(self.sign_in)
        v.btn_register.clicked.connect(self.register)
        v.btn_send_reset.clicked.connect(self.forgot_password)
        v.btn_to_register.clicked.connect(lambda: v.show_panel(v.REGISTER))
        v.btn_to_forgot.clicked.connect(self._open_forgot)
        v.btn_register_back.clicked.connect(lambda: v.show_panel(v.SIGN_IN))
        v.btn_forgot_back.clicked.connect(lambda: v.show_panel(v.SIGN_IN))

    def _open_forgot(self) -> None:
        v = self.view
        if not v.forgot_email.text():
            v.forgot_email.setText(v.email.text().strip())
        v.show_panel(v.FORGOT)

    # ----------------------------- Public API -----------------------------

    def prompt(self) -> bool:
        """Show the dialog modally. True once a session has begun."""
        self.view.exec()
        return self.session.is_authenticated

    def sign_in(self) -> bool:
        v = self.view
        email = v.email.text().strip()
        password = v.password.text()
        remember = v.chk_remember.isChecked()
        return self.submit(
            validate_sign_in(email=email, password=password),
            lambda: self._login(email, password),
            failure="Login failed",
            on_success=lambda res: self._on_signed_in(email, res, remember),
            refresh=False,
        )

    def _login(self, email: str, password: str) -> AuthResult:
        res = self.auth.login(email, password)
        if not res.token:
            raise ApiError("Login failed")
        return res

    def _on_signed_in(self, email: str, res: AuthResult, remember: bool) -> None:
        self.session.begin(res.token, res.user or {"email": email}, persist=remember)
        if self.settings is not None:
            self.settings.set_setting(LAST_EMAIL_KEY, email)
        self.view.password.clear()
        self.view.accept()

    def register(self) -> bool:
        v = self.view
        name = v.reg_name.text().strip()
        email = v.reg_email.text().strip()
        password = v.reg_password.text()
        return self.submit(
            validate_register(name=name, email=email, password=password),
            lambda: self.auth.register(name, email, password),
            success="Registration successful. Please sign in.",
            failure="Registration failed",
            on_success=lambda _: self._on_registered(email),
            refresh=False,
        )

    def _on_registered(self, email: str) -> None:
        v = self.view
        v.reg_name.clear()
        v.reg_email.clear()
        v.reg_password.clear()
        v.show_panel(v.SIGN_IN)
        v.email.setText(email)
        v.password.clear()

    def forgot_password(self) -> bool:
        email = self.view.forgot_email.text().strip()
        return self.submit(
            validate_forgot_password(email=email),
            lambda: self.auth.forgot_password(email),
            success=lambda msg: msg,
            failure="Failed to send reset email",
            refresh=False,
        )
