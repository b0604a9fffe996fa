# shop_admin/modules/base_module.py
"""
Shared page lifecycle.

Every page fetches its reference lists when it becomes active, shows a
loading strip while they are in flight, then either renders them (READY)
or shows a failure with a Retry button (FAILED). Submitting a form moves
the page to SUBMITTING until the backend answers.

    IDLE --activate--> LOADING --all ok--> READY --submit--> SUBMITTING
                          |                  ^                  |
                          +--any failed--> FAILED <--refresh----+
                                             |
                                           retry --> LOADING

Results that arrive after deactivate() belong to an older generation and
are dropped without touching the view.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QWidget

from ..api.client import ApiError, AuthExpiredError
from ..utils.form_rules import ValidationResult
from ..utils.tasks import TaskResult, TaskRunner

_log = logging.getLogger(__name__)

Fetcher = Callable[[], Any]
Notice = Union[str, Callable[[Any], Optional[str]], None]


class BaseModule(QObject):
    def get_widget(self) -> QWidget:
        raise NotImplementedError

    def activate(self) -> None:
        """Called when the page is shown."""

    def deactivate(self) -> None:
        """Called when the page is navigated away from."""


class PageState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    SUBMITTING = "submitting"


def error_message(exc: BaseException | None, fallback: str) -> str:
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    return fallback


class PageController(BaseModule):
    """
    Subclasses attach a PageView with attach_view() and override:
      - reference_fetchers(): {key: zero-arg callable} fetched concurrently
      - apply_reference_data(data): render the fetched values
    """

    state_changed = Signal(str)
    auth_expired = Signal()

    load_failure_message = "Failed to load data"

    def __init__(self, runner: TaskRunner | None = None) -> None:
        super().__init__()
        self.runner = runner or TaskRunner(self)
        self.view = None  # set by subclasses
        self._state = PageState.IDLE
        self._generation = 0
        self._active = False
        self.last_error: Optional[str] = None

    # ---------------------------- hooks ----------------------------

    def reference_fetchers(self) -> Dict[str, Fetcher]:
        return {}

    def apply_reference_data(self, data: Dict[str, Any]) -> None:
        pass

    def get_widget(self) -> QWidget:
        return self.view

    def attach_view(self, view) -> None:
        self.view = view
        view.load_state.retry_requested.connect(self.retry)

    # ---------------------------- state ----------------------------

    @property
    def state(self) -> PageState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._active

    def _set_state(self, state: PageState, message: str | None = None) -> None:
        self._state = state
        if state is PageState.FAILED:
            self.last_error = message
        self._render_state(state, message)
        self.state_changed.emit(state.value)

    def _render_state(self, state: PageState, message: str | None) -> None:
        view = self.view
        if view is None:
            return
        if state is PageState.LOADING:
            view.load_state.set_loading()
        elif state is PageState.FAILED:
            view.load_state.set_failed(message or self.load_failure_message)
        else:
            view.load_state.set_ready()
        view.set_submitting(state is PageState.SUBMITTING)

    # ---------------------------- messages ----------------------------

    def show_error(self, msg: str | None) -> None:
        if self.view is not None:
            self.view.banner.show_error(msg)

    def show_notice(self, msg: str | None) -> None:
        if self.view is not None:
            self.view.banner.show_info(msg)

    def clear_message(self) -> None:
        if self.view is not None:
            self.view.banner.clear_message()

    # ---------------------------- lifecycle ----------------------------

    def activate(self) -> None:
        self._active = True
        self.load()

    def deactivate(self) -> None:
        self._active = False
        self._generation += 1
        if self._state in (PageState.LOADING, PageState.SUBMITTING):
            self._set_state(PageState.IDLE)

    def retry(self) -> None:
        if self._state is PageState.FAILED:
            self.load()

    def load(self) -> None:
        gen = self._generation
        fetchers = self.reference_fetchers()
        order = list(fetchers)
        self._set_state(PageState.LOADING)
        self.runner.submit_all(fetchers, lambda results: self._on_loaded(gen, order, results))

    def _check_auth(self, exc: BaseException | None) -> None:
        if isinstance(exc, AuthExpiredError):
            self.auth_expired.emit()

    def _is_stale(self, gen: int) -> bool:
        if gen != self._generation:
            _log.debug("%s: dropping result from generation %s", type(self).__name__, gen)
            return True
        return False

    def _on_loaded(self, gen: int, order: list, results: Dict[str, TaskResult]) -> None:
        if self._is_stale(gen):
            return
        for key in order:
            res = results[key]
            if not res.ok:
                _log.warning(
                    "%s: loading %s failed", type(self).__name__, key, exc_info=res.error
                )
                self._set_state(
                    PageState.FAILED, error_message(res.error, self.load_failure_message)
                )
                self._check_auth(res.error)
                return
        self.apply_reference_data({k: r.value for k, r in results.items()})
        self._set_state(PageState.READY)

    # ---------------------------- mutations ----------------------------

    def submit(
        self,
        result: ValidationResult,
        call: Callable[[], Any],
        *,
        success: Notice = None,
        failure: str = "Request failed",
        on_success: Callable[[Any], None] | None = None,
        on_failure: Callable[[str], None] | None = None,
        refresh: bool = True,
    ) -> bool:
        """
        Run a mutation after its rule accepted the input.

        A rejected rule shows its reason and nothing is sent. On success
        `on_success(value)` resets the form, the notice is shown and the
        reference lists are fetched again; on failure the server message
        (or `failure`) is shown and the form is left as it was. A dialog that
        shows its own errors passes `on_failure` to receive the message.
        """
        report = on_failure or self.show_error
        if not result:
            report(result.reason)
            return False
        if self._state is not PageState.READY:
            _log.debug("%s: submit ignored in state %s", type(self).__name__, self._state.value)
            return False
        gen = self._generation
        self.clear_message()
        self._set_state(PageState.SUBMITTING)
        self.runner.submit(
            call,
            lambda res: self._on_submitted(gen, res, success, failure, on_success, report, refresh),
        )
        return True

    def _on_submitted(
        self,
        gen: int,
        res: TaskResult,
        success: Notice,
        failure: str,
        on_success: Callable[[Any], None] | None,
        report: Callable[[str], None],
        refresh: bool,
    ) -> None:
        if self._is_stale(gen):
            return
        if not res.ok:
            _log.warning("%s: submit failed", type(self).__name__, exc_info=res.error)
            self._set_state(PageState.READY)
            report(error_message(res.error, failure))
            self._check_auth(res.error)
            return
        if on_success is not None:
            on_success(res.value)
        notice = success(res.value) if callable(success) else success
        self.show_notice(notice)
        if refresh:
            self.load()
        else:
            self._set_state(PageState.READY)
