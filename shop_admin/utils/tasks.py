"""
utils/tasks.py

Run blocking API calls off the UI thread and hand the outcome back on the
thread that submitted them.

Public interface
----------------
- TaskRunner.submit(work, on_done)            -> None
- TaskRunner.submit_all({key: work}, on_done) -> None

`work` is a zero-argument callable. `on_done` receives a TaskResult (or a
dict of them for submit_all) on the GUI thread. Exceptions raised by `work`
are captured into TaskResult.error, never re-raised in the worker.

An inline runner (inline=True) executes work immediately on the calling
thread; the page tests use it to get deterministic ordering.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

_log = logging.getLogger(__name__)


@dataclass
class TaskResult:
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _execute(work: Callable[[], Any]) -> TaskResult:
    try:
        return TaskResult(value=work())
    except Exception as exc:
        _log.debug("Task failed: %s", exc, exc_info=True)
        return TaskResult(error=exc)


class _Relay(QObject):
    """
    Lives on the submitting thread; the worker emits `done` and Qt queues
    the delivery back to this object's thread.
    """
    done = Signal(object)

    def __init__(self, callback: Callable[[TaskResult], None]) -> None:
        super().__init__()
        self._callback = callback
        self.done.connect(self._deliver)

    @Slot(object)
    def _deliver(self, result: TaskResult) -> None:
        self._callback(result)


class _JobRunnable(QRunnable):
    def __init__(self, work: Callable[[], Any], relay: _Relay) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._work = work
        self._relay = relay

    @Slot()
    def run(self) -> None:  # type: ignore[override]
        self._relay.done.emit(_execute(self._work))


class TaskRunner(QObject):
    def __init__(
        self,
        parent: QObject | None = None,
        *,
        pool: QThreadPool | None = None,
        inline: bool = False,
    ) -> None:
        super().__init__(parent)
        self._inline = inline
        self._pool = pool or QThreadPool.globalInstance()
        self._relays: set[_Relay] = set()

    @property
    def pending(self) -> int:
        return len(self._relays)

    def submit(self, work: Callable[[], Any], on_done: Callable[[TaskResult], None]) -> None:
        if self._inline:
            on_done(_execute(work))
            return

        relay: _Relay

        def deliver(result: TaskResult) -> None:
            self._relays.discard(relay)
            relay.deleteLater()
            on_done(result)

        relay = _Relay(deliver)
        self._relays.add(relay)
        self._pool.start(_JobRunnable(work, relay))

    def submit_all(
        self,
        works: Mapping[str, Callable[[], Any]],
        on_done: Callable[[Dict[str, TaskResult]], None],
    ) -> None:
        """Start every call at once; `on_done` runs once all of them have settled."""
        if not works:
            on_done({})
            return
        results: Dict[str, TaskResult] = {}
        expected = len(works)

        def collect(key: str) -> Callable[[TaskResult], None]:
            def _cb(result: TaskResult) -> None:
                results[key] = result
                if len(results) == expected:
                    on_done(dict(results))
            return _cb

        for key, work in works.items():
            self.submit(work, collect(key))
