# tests/test_base_module.py
import pytest

from shop_admin.api.client import ApiError, AuthExpiredError
from shop_admin.modules.base_module import PageController, PageState, error_message
from shop_admin.utils.form_rules import ValidationResult
from shop_admin.utils.tasks import TaskResult
from shop_admin.widgets.page_view import PageView
from PySide6.QtWidgets import QPushButton


class Deferred:
    """Runner that holds work until the test releases it."""

    def __init__(self):
        self.pending = []

    def submit(self, work, on_done):
        self.pending.append((work, on_done))

    def submit_all(self, works, on_done):
        results = {}
        for key, work in works.items():
            try:
                results[key] = TaskResult(value=work())
            except Exception as exc:
                results[key] = TaskResult(error=exc)
        self.pending.append((lambda: results, lambda res: on_done(res.value)))

    def release(self):
        work, on_done = self.pending.pop(0)
        on_done(TaskResult(value=work()))


class DemoController(PageController):
    load_failure_message = "Failed to load demo"

    def __init__(self, runner, fetchers=None):
        super().__init__(runner)
        self.fetchers = fetchers if fetchers is not None else {"items": lambda: [1, 2]}
        self.applied = []
        self.attach_view(PageView("Demo"))
        self.btn = self.view.add_submit_button(QPushButton("Save"))

    def reference_fetchers(self):
        return dict(self.fetchers)

    def apply_reference_data(self, data):
        self.applied.append(data)


def test_error_message_prefers_api_message():
    assert error_message(ApiError("Out of stock"), "fallback") == "Out of stock"
    assert error_message(RuntimeError("internal"), "fallback") == "fallback"
    assert error_message(None, "fallback") == "fallback"


def test_activate_loads_and_becomes_ready(runner):
    ctl = DemoController(runner)
    states = []
    ctl.state_changed.connect(states.append)
    assert ctl.state is PageState.IDLE
    ctl.activate()
    assert states == ["loading", "ready"]
    assert ctl.applied == [{"items": [1, 2]}]
    assert ctl.view.load_state.isHidden()


def test_page_without_fetchers_is_ready_immediately(runner):
    ctl = DemoController(runner, fetchers={})
    ctl.activate()
    assert ctl.state is PageState.READY
    assert ctl.applied == [{}]


def test_any_failed_fetch_fails_the_page(runner):
    def boom():
        raise ApiError("Failed to load customers")

    ctl = DemoController(runner, fetchers={"items": lambda: [1], "customers": boom})
    ctl.activate()
    assert ctl.state is PageState.FAILED
    assert ctl.applied == []
    assert ctl.last_error == "Failed to load customers"
    assert ctl.view.load_state.lbl.text() == "Failed to load customers"
    assert not ctl.view.load_state.btn_retry.isHidden()


def test_first_failure_in_fetch_order_is_reported(runner):
    def fail(msg):
        def _f():
            raise ApiError(msg)
        return _f

    ctl = DemoController(runner, fetchers={"a": fail("first"), "b": fail("second")})
    ctl.activate()
    assert ctl.last_error == "first"


def test_unexpected_error_uses_page_failure_message(runner):
    ctl = DemoController(runner, fetchers={"items": lambda: 1 / 0})
    ctl.activate()
    assert ctl.last_error == "Failed to load demo"


def test_retry_only_from_failed(runner):
    calls = {"n": 0}

    def flaky():
        calls["n"] += 1
        if calls["n"] == 1:
            raise ApiError("down")
        return ["ok"]

    ctl = DemoController(runner, fetchers={"items": flaky})
    ctl.activate()
    assert ctl.state is PageState.FAILED
    ctl.view.load_state.btn_retry.click()
    assert ctl.state is PageState.READY
    ctl.retry()
    assert calls["n"] == 2


def test_results_after_deactivate_are_dropped():
    runner = Deferred()
    ctl = DemoController(runner)
    ctl.activate()
    assert ctl.state is PageState.LOADING
    ctl.deactivate()
    assert ctl.state is PageState.IDLE
    runner.release()
    assert ctl.applied == []
    assert ctl.state is PageState.IDLE


def test_reactivation_ignores_older_generation():
    runner = Deferred()
    ctl = DemoController(runner)
    ctl.activate()
    ctl.deactivate()
    ctl.activate()
    runner.release()  # stale
    assert ctl.state is PageState.LOADING
    runner.release()
    assert ctl.state is PageState.READY
    assert len(ctl.applied) == 1


def test_rejected_rule_sends_nothing(runner):
    ctl = DemoController(runner)
    ctl.activate()
    sent = []
    ok = ctl.submit(ValidationResult.reject("Invalid amount"), lambda: sent.append(1))
    assert ok is False
    assert sent == []
    assert ctl.view.banner.kind == "error"
    assert ctl.view.banner.text() == "Invalid amount"
    assert ctl.state is PageState.READY


def test_submit_ignored_unless_ready(runner):
    ctl = DemoController(runner)
    assert ctl.submit(ValidationResult.accept(), lambda: None) is False


def test_submit_success_notifies_and_refreshes(runner):
    ctl = DemoController(runner)
    ctl.activate()
    reset = []
    ok = ctl.submit(
        ValidationResult.accept(),
        lambda: "Saved on server",
        success=lambda value: value,
        on_success=reset.append,
    )
    assert ok is True
    assert reset == ["Saved on server"]
    assert ctl.view.banner.kind == "info"
    assert ctl.view.banner.text() == "Saved on server"
    assert len(ctl.applied) == 2
    assert ctl.state is PageState.READY


def test_submit_without_refresh(runner):
    ctl = DemoController(runner)
    ctl.activate()
    ctl.submit(ValidationResult.accept(), lambda: None, success="Done", refresh=False)
    assert len(ctl.applied) == 1
    assert ctl.state is PageState.READY


def test_submitting_disables_buttons_until_reply():
    runner = Deferred()
    ctl = DemoController(runner)
    ctl.activate()
    runner.release()
    ctl.submit(ValidationResult.accept(), lambda: None, success="Done", refresh=False)
    assert ctl.state is PageState.SUBMITTING
    assert not ctl.btn.isEnabled()
    runner.release()
    assert ctl.state is PageState.READY
    assert ctl.btn.isEnabled()


def test_submit_failure_keeps_form_and_shows_server_message(runner):
    ctl = DemoController(runner)
    ctl.activate()
    reset = []

    def call():
        raise ApiError("Insufficient stock")

    ctl.submit(ValidationResult.accept(), call, failure="Failed to sell", on_success=reset.append)
    assert reset == []
    assert ctl.view.banner.text() == "Insufficient stock"
    assert ctl.state is PageState.READY
    assert len(ctl.applied) == 1


def test_expired_credential_is_reported(runner, qtbot):
    ctl = DemoController(runner)
    ctl.activate()

    def call():
        raise AuthExpiredError("Session expired", status=401)

    with qtbot.waitSignal(ctl.auth_expired, timeout=1000):
        ctl.submit(ValidationResult.accept(), call)


def test_expired_credential_during_load(runner, qtbot):
    def call():
        raise AuthExpiredError("Session expired", status=401)

    ctl = DemoController(runner, fetchers={"items": call})
    with qtbot.waitSignal(ctl.auth_expired, timeout=1000):
        ctl.activate()
    assert ctl.state is PageState.FAILED
