# tests/test_main_window.py
import pytest
import requests

from shop_admin.api.client import ApiClient
from shop_admin.api.session import SessionContext
from shop_admin.main import MainWindow
from shop_admin.modules.base_module import PageState


class OfflineHttp:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("offline")


@pytest.fixture()
def session():
    s = SessionContext()
    s.begin("t0k", {"name": "Grace", "email": "grace@shop.mw"})
    return s


@pytest.fixture()
def win(session, qtbot):
    api = ApiClient("http://shop.test/api", session, http=OfflineHttp())
    w = MainWindow(api, session)
    qtbot.addWidget(w)
    qtbot.waitUntil(lambda: w.modules[0].state is PageState.FAILED, timeout=5000)
    return w


def test_first_page_loads_on_open(win, qtbot):
    assert win.nav.count() == 6
    assert win.lbl_user.text() == "Grace (grace@shop.mw)"
    assert win.modules[0].last_error == "Failed to load dashboard summary"


def test_switching_pages_deactivates_the_old_one(win, qtbot):
    dashboard = win.modules[0]
    win.nav.setCurrentRow(1)
    assert not dashboard.is_active
    products = win.modules[1]
    assert products.is_active
    assert win.stack.currentWidget() is products.get_widget()
    qtbot.waitUntil(lambda: products.state is PageState.FAILED, timeout=5000)


def test_rejected_credential_signs_out(win, session, qtbot):
    with qtbot.waitSignal(win.signed_out, timeout=1000):
        win.modules[0].auth_expired.emit()
    assert not session.is_authenticated


def test_closing_by_hand_reports_closed(win, qtbot):
    win.show()
    with qtbot.waitSignal(win.closed, timeout=1000):
        win.close()


def test_signing_out_does_not_report_closed(win, session):
    seen = []
    win.closed.connect(lambda: seen.append(True))
    session.end()
    win.close()
    assert seen == []
