# shop_admin/main.py
from __future__ import annotations

import logging
import sys
from importlib import import_module
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from .api.client import ApiClient
from .api.repositories import (
    AuthRepo,
    CustomersRepo,
    DashboardRepo,
    ProductsRepo,
    ReplenishmentRepo,
    ReportingRepo,
    SalesRepo,
)
from .api.session import SessionContext
from .config import API_BASE_URL, HTTP_TIMEOUT
from .constants import APP_NAME, ORG_NAME
from .database import get_connection
from .database.repositories.session_repo import SessionRepo
from .modules.base_module import BaseModule
from .utils.loggers import get_logger
from .utils.ui_helpers import confirm, wrap_center

_log = logging.getLogger(__name__)


def _lazy_get(name: str, attr: str):
    """Import a module by name and fetch an attribute from it, with a clear error if missing."""
    try:
        mod = import_module(name)
    except Exception as e:
        raise ImportError(f"Failed to import module '{name}': {e}") from e
    try:
        return getattr(mod, attr)
    except AttributeError as e:
        raise ImportError(f"'{attr}' not found in module '{name}'.") from e


class MainWindow(QMainWindow):
    """
    Left navigation + stacked pages. Pages are constructed on first visit;
    the page being left is deactivated and the page being shown activated.

    Emits `signed_out` once the session ends (logout or rejected credential)
    and `closed` when the user closes the window.
    """

    signed_out = Signal()
    closed = Signal()

    def __init__(self, api: ApiClient, session: SessionContext):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} - {ORG_NAME}")
        self.setWindowFlag(Qt.WindowMinimizeButtonHint, True)
        self.setWindowFlag(Qt.WindowMaximizeButtonHint, True)
        self.setMinimumSize(960, 600)

        self.api = api
        self.session = session
        self.session.add_listener(self._on_session_changed)

        # ---- Central layout: top bar + left nav + stacked pages ----
        central = QWidget(self)
        layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        top = QHBoxLayout()
        top.addWidget(QLabel(f"<b>{ORG_NAME}</b>"))
        top.addStretch(1)
        self.lbl_user = QLabel(f"{session.display_name} ({session.display_email})")
        self.btn_logout = QPushButton("Logout")
        self.btn_logout.clicked.connect(self._logout)
        top.addWidget(self.lbl_user)
        top.addWidget(self.btn_logout)
        layout.addLayout(top)

        self.nav = QListWidget()
        self.nav.setFixedWidth(140)
        self.nav.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        self.stack = QStackedWidget()
        row = QWidget()
        row_lay = QHBoxLayout(row)
        row_lay.addWidget(self.nav)
        row_lay.addWidget(self.stack, 1)
        layout.addWidget(row, 1)

        # Module info for lazy loading, and loaded controllers by nav index
        self.module_info: list[dict] = []
        self.modules: dict[int, BaseModule] = {}
        self._current: Optional[int] = None
        self._signing_out = False

        self.nav.currentRowChanged.connect(self._on_nav_item_changed)

        products = ProductsRepo(api)
        customers = CustomersRepo(api)

        self._add_module_deferred(
            "Dashboard", "shop_admin.modules.dashboard.controller", "DashboardController",
            DashboardRepo(api),
        )
        self._add_module_deferred(
            "Products", "shop_admin.modules.product.controller", "ProductController",
            products,
        )
        self._add_module_deferred(
            "Sales", "shop_admin.modules.sales.controller", "SalesController",
            products, customers, SalesRepo(api),
        )
        self._add_module_deferred(
            "Debtors", "shop_admin.modules.debtors.controller", "DebtorsController",
            customers, products,
        )
        self._add_module_deferred(
            "Replenishment", "shop_admin.modules.replenishment.controller", "ReplenishmentController",
            ReplenishmentRepo(api), products,
        )
        self._add_module_deferred(
            "Reports", "shop_admin.modules.reporting.controller", "ReportingController",
            ReportingRepo(api),
        )

        if self.nav.count():
            self.nav.setCurrentRow(0)

    # ---------- module loading ----------

    def _add_module_deferred(self, title: str, module_path: str, class_name: str, *args, **kwargs):
        """Add module info for deferred loading."""
        self.module_info.append(
            {
                "title": title,
                "module_path": module_path,
                "class_name": class_name,
                "args": args,
                "kwargs": kwargs,
            }
        )
        self.nav.addItem(QListWidgetItem(title))
        self.stack.addWidget(wrap_center(QLabel(f"Loading {title}...")))

    def _on_nav_item_changed(self, index: int):
        if index < 0 or index >= len(self.module_info):
            return
        if self._current is not None and self._current in self.modules:
            self.modules[self._current].deactivate()
        self._current = index
        ctrl = self.modules.get(index) or self._load_module(index)
        self.stack.setCurrentIndex(index)
        if ctrl is not None:
            ctrl.activate()

    def _load_module(self, index: int) -> Optional[BaseModule]:
        info = self.module_info[index]
        QApplication.setOverrideCursor(Qt.WaitCursor)
        try:
            Controller = _lazy_get(info["module_path"], info["class_name"])
            controller = Controller(*info["args"], **info["kwargs"])
        except Exception:
            _log.exception("Failed to load module %s", info["title"])
            self._replace_stack_widget(index, wrap_center(QLabel(f"{info['title']}\n\nLoading failed")))
            return None
        finally:
            QApplication.restoreOverrideCursor()

        if hasattr(controller, "auth_expired"):
            controller.auth_expired.connect(self._on_auth_expired)
        self._replace_stack_widget(index, controller.get_widget())
        self.modules[index] = controller
        return controller

    def _replace_stack_widget(self, index: int, widget: QWidget):
        current = self.stack.widget(index)
        self.stack.removeWidget(current)
        current.deleteLater()
        self.stack.insertWidget(index, widget)

    # ---------- session ----------

    def _logout(self):
        if confirm(self, "Logout", "Sign out of GOWELO SHOP?"):
            self.session.end()

    def _on_auth_expired(self):
        _log.warning("Credential rejected by the server; signing out")
        self.session.end()

    def _on_session_changed(self, session: SessionContext):
        if session.is_authenticated:
            self.lbl_user.setText(f"{session.display_name} ({session.display_email})")
            return
        for ctrl in self.modules.values():
            ctrl.deactivate()
        self.session.remove_listener(self._on_session_changed)
        self._signing_out = True
        self.signed_out.emit()

    def closeEvent(self, event):  # type: ignore[override]
        if not self._signing_out:
            self.closed.emit()
        super().closeEvent(event)


def main() -> int:
    get_logger()

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(ORG_NAME)
    app.setQuitOnLastWindowClosed(False)

    conn = get_connection()
    store = SessionRepo(conn)
    session = SessionContext(store)
    api = ApiClient(API_BASE_URL, session, timeout=HTTP_TIMEOUT)
    auth = AuthRepo(api)

    def sign_in() -> bool:
        from .modules.login.controller import LoginController
        return LoginController(auth, session, settings=store).prompt()

    windows: list[MainWindow] = []

    def open_main():
        win = MainWindow(api, session)
        win.signed_out.connect(lambda: on_signed_out(win))
        win.closed.connect(app.quit)
        win.resize(1100, 680)
        win.show()
        windows.append(win)

    def on_signed_out(win: MainWindow):
        win.close()
        windows.remove(win)
        win.deleteLater()
        if sign_in():
            open_main()
        else:
            app.quit()

    if not session.restore() and not sign_in():
        return 0
    open_main()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
